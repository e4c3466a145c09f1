"""
Batch driver: frame every corpus file in a directory.

Files are rewritten only when framing changes them. Read and write failures
are recorded per file and never stop the batch; only a missing corpus
directory raises.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import structlog

from .engine import Framer, default_framer
from .errors import CorpusIOError
from .models import BatchReport, FileOutcome
from .normalize import decode_program_bytes
from .rules import CORPUS_SUFFIX

logger = structlog.get_logger(__name__)


def categorize(path: Path, suffix: str = CORPUS_SUFFIX) -> Tuple[str, Optional[str]]:
    """``loops-nested-two.lw`` -> ``("loops", "nested-two")``."""
    name = path.name[: -len(suffix)] if path.name.endswith(suffix) else path.stem
    category, _, subcategory = name.partition("-")
    return category or "uncategorized", subcategory or None


def discover_corpus(directory: Path, suffix: str = CORPUS_SUFFIX) -> List[Path]:
    if not directory.is_dir():
        raise CorpusIOError("corpus_not_found", f"{directory} is not a directory", str(directory))
    return sorted(
        (p for p in directory.iterdir() if p.name.endswith(suffix) and p.is_file()),
        key=lambda p: p.name,
    )


def _read_program(path: Path) -> Tuple[str, Dict[str, Any]]:
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise CorpusIOError("read_failed", f"cannot read {path.name}: {e.strerror or e}", str(path)) from e
    return decode_program_bytes(raw)


def _write_program(path: Path, text: str, encoding: str) -> None:
    try:
        path.write_bytes(text.encode(encoding))
    except UnicodeEncodeError as e:
        raise CorpusIOError("write_failed", f"cannot encode {path.name} as {encoding}: {e.reason}", str(path)) from e
    except OSError as e:
        raise CorpusIOError("write_failed", f"cannot write {path.name}: {e.strerror or e}", str(path)) from e


def frame_file(
    path: Path,
    framer: Optional[Framer] = None,
    write: bool = True,
    suffix: str = CORPUS_SUFFIX,
) -> FileOutcome:
    """
    Frame one corpus file. A changed file is written back in the encoding it
    was read with, BOM included. A file that only decoded with replacement
    characters is never written.
    """
    framer = framer or default_framer()
    category, subcategory = categorize(path, suffix)
    outcome = FileOutcome(name=path.name, category=category, subcategory=subcategory, status="unchanged")

    try:
        text, enc_report = _read_program(path)
        outcome.encoding = enc_report["decode_used"]
        result = framer.frame(text)
        outcome.identifiers_framed = result.identifiers_framed
        outcome.corrections = {k: v for k, v in result.corrections.items() if v}
        if result.changed:
            if enc_report["decode_fallback"]:
                raise CorpusIOError(
                    "undecodable",
                    f"{path.name} is not valid text in any detected encoding; left untouched",
                    str(path),
                )
            if write:
                _write_program(path, result.text, outcome.encoding)
            outcome.status = "fixed"
    except CorpusIOError as e:
        outcome.status = "failed"
        outcome.error = str(e)
        logger.warning("corpus_file_failed", file=path.name, code=e.code, error=e.message)
        return outcome

    logger.info(
        "corpus_file_fixed" if outcome.status == "fixed" else "corpus_file_unchanged",
        file=path.name,
        identifiers_framed=outcome.identifiers_framed,
        written=write and outcome.status == "fixed",
    )
    return outcome


def frame_corpus(
    directory: Path,
    framer: Optional[Framer] = None,
    suffix: str = CORPUS_SUFFIX,
    write: bool = True,
) -> BatchReport:
    framer = framer or default_framer()
    files = discover_corpus(directory, suffix)
    logger.info("corpus_discovered", directory=str(directory), files=len(files), suffix=suffix)

    report = BatchReport(directory=str(directory), suffix=suffix, written=write)
    for path in files:
        report.files.append(frame_file(path, framer, write=write, suffix=suffix))

    logger.info("corpus_framed", **{k: v for k, v in report.summary().items() if k != "fixed_by_category"})
    return report
