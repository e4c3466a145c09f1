from __future__ import annotations

from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class FramedProgram(BaseModel):
    sha256: str
    encoding: str = Field(default="utf-8")
    content_b64: str


class FrameSummary(BaseModel):
    lines: int = 0
    identifiers_framed: int = 0
    corrections_applied: int = 0
    changed: bool = False
    deterministic: bool = True


class EncodingReport(BaseModel):
    detected: Optional[str] = None
    decode_used: str
    decode_fallback: bool = False
    output: str = "utf-8"


class FrameReport(BaseModel):
    summary: FrameSummary
    encoding: EncodingReport
    corrections: Dict[str, int] = Field(default_factory=dict)


class FrameResponse(BaseModel):
    framed_program: FramedProgram
    report: FrameReport


class KeywordResponse(BaseModel):
    word: str
    keyword: bool


class HealthResponse(BaseModel):
    ok: bool = True


class FileOutcome(BaseModel):
    name: str
    category: str
    subcategory: Optional[str] = None
    encoding: Optional[str] = None
    status: str = Field(examples=["fixed", "unchanged", "failed"])
    identifiers_framed: int = 0
    corrections: Dict[str, int] = Field(default_factory=dict)
    error: Optional[str] = None


class BatchReport(BaseModel):
    directory: str
    suffix: str
    written: bool = True
    files: List[FileOutcome] = Field(default_factory=list)

    @property
    def fixed(self) -> int:
        return sum(1 for f in self.files if f.status == "fixed")

    @property
    def unchanged(self) -> int:
        return sum(1 for f in self.files if f.status == "unchanged")

    @property
    def failed(self) -> int:
        return sum(1 for f in self.files if f.status == "failed")

    def fixed_by_category(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for f in self.files:
            if f.status == "fixed":
                counts[f.category] = counts.get(f.category, 0) + 1
        return dict(sorted(counts.items()))

    def corrections_by_rule(self) -> Dict[str, int]:
        totals: Dict[str, int] = {}
        for f in self.files:
            for rule, count in f.corrections.items():
                totals[rule] = totals.get(rule, 0) + count
        return totals

    def summary(self) -> Dict[str, object]:
        return {
            "files": len(self.files),
            "fixed": self.fixed,
            "unchanged": self.unchanged,
            "failed": self.failed,
            "identifiers_framed": sum(f.identifiers_framed for f in self.files),
            "corrections": self.corrections_by_rule(),
            "fixed_by_category": self.fixed_by_category(),
        }
