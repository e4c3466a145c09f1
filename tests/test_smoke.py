import base64

from fastapi.testclient import TestClient
from lwframe.main import app

client = TestClient(app)

def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}

def test_frame_program_upload():
    raw = b'SIMPLE PLACED AS 100.\nTELL "HELLO WORLD".\n'

    files = {"file": ("core-assignment.lw", raw, "text/plain")}
    r = client.post("/frame", files=files)
    assert r.status_code == 200

    data = r.json()
    assert data["framed_program"]["encoding"] == "utf-8"

    out_text = base64.b64decode(data["framed_program"]["content_b64"]).decode("utf-8")
    assert out_text == '|SIMPLE| PLACED AS 100.\nTELL "HELLO WORLD".\n'

    summary = data["report"]["summary"]
    assert summary["identifiers_framed"] == 1
    assert summary["changed"] is True
    assert set(data["report"]["corrections"]) == {"assignment_target", "keyword_operand", "material_quality"}

def test_frame_program_strips_bom():
    raw = b"\xef\xbb\xbfSHOW RESULT.\n"

    r = client.post("/frame", files={"file": ("show.lw", raw, "text/plain")})
    assert r.status_code == 200

    data = r.json()
    out_bytes = base64.b64decode(data["framed_program"]["content_b64"])
    assert out_bytes == b"SHOW |RESULT|.\n"
    assert data["report"]["encoding"]["decode_used"] == "utf-8-sig"

def test_frame_rejects_other_suffix():
    r = client.post("/frame", files={"file": ("notes.txt", b"SHOW X.", "text/plain")})
    assert r.status_code == 422

def test_keyword_lookup():
    r = client.get("/keywords/placed")
    assert r.status_code == 200
    assert r.json() == {"word": "placed", "keyword": True}

    r = client.get("/keywords/RESULT")
    assert r.json()["keyword"] is False

def test_frame_keeps_utf8_quoted_text():
    raw = 'TELL "€5 Montréal".\nSHOW Y.\n'.encode("utf-8")

    r = client.post("/frame", files={"file": ("prices.lw", raw, "text/plain")})
    assert r.status_code == 200

    data = r.json()
    out_text = base64.b64decode(data["framed_program"]["content_b64"]).decode("utf-8")
    assert out_text == 'TELL "€5 Montréal".\nSHOW |Y|.\n'
    assert data["report"]["encoding"]["decode_used"] == "utf-8"
    assert data["report"]["encoding"]["decode_fallback"] is False

def test_requests_do_not_print_debug_events(capsys):
    r = client.post("/frame", files={"file": ("show.lw", b"SHOW Y.\n", "text/plain")})
    assert r.status_code == 200

    captured = capsys.readouterr()
    assert "scan_complete" not in captured.out
    assert "program_framed" not in captured.out
