from fastapi import FastAPI, UploadFile, File, HTTPException
from .config import get_settings
from .engine import is_keyword
from .log import setup_logging
from .models import FrameResponse, HealthResponse, KeywordResponse
from .normalize import frame_program_bytes

settings = get_settings()
setup_logging(settings.log_level, json_output=settings.log_json)

app = FastAPI(
    title="lwframe",
    description="Deterministic identifier framing for constructed-language sample programs",
    version="0.1.0",
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/frame", response_model=FrameResponse)
async def frame_program(file: UploadFile = File(...)):
    suffix = settings.corpus_suffix
    if not (file.filename or "").lower().endswith(suffix):
        raise HTTPException(status_code=422, detail=f"Only {suffix} programs are supported")

    raw = await file.read()
    return frame_program_bytes(raw)

@app.get("/keywords/{word}", response_model=KeywordResponse)
def keyword(word: str):
    return {"word": word, "keyword": is_keyword(word)}
