"""
Command-line batch framing of a corpus directory.

    lwframe [DIRECTORY] [--suffix .lw] [--check] [--strict] [--json]

Exit codes: 0 by default whatever happened to individual files; 1 with
--strict when a file failed, or with --check when a file would change;
2 when the corpus directory does not exist.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from .config import get_settings
from .driver import frame_corpus
from .engine import Framer
from .errors import CorpusIOError
from .log import setup_logging
from .models import BatchReport

logger = structlog.get_logger(__name__)


def build_parser(settings) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="lwframe", description="Frame bare identifiers in corpus programs.")
    ap.add_argument("directory", nargs="?", default=settings.corpus_dir, help="corpus directory")
    ap.add_argument("--suffix", default=settings.corpus_suffix, help="corpus file suffix")
    ap.add_argument("--check", action="store_true", help="report files that would change, write nothing")
    ap.add_argument("--strict", action="store_true", help="exit 1 if any file could not be read or written")
    ap.add_argument("--json", action="store_true", help="print the batch report as JSON")
    ap.add_argument("--log-level", default=settings.log_level, help="debug, info, warning, error")
    return ap


def _print_text(report: BatchReport) -> None:
    for f in report.files:
        if f.status == "fixed":
            print(f"✓ {f.name}")
        elif f.status == "failed":
            print(f"✗ {f.name}: {f.error}")
        else:
            print(f"- {f.name} (no changes)")

    verb = "Would fix" if not report.written else "Fixed"
    print()
    print(f"{verb} {report.fixed} files")
    if report.failed:
        print(f"Errors: {report.failed} files")


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)
    setup_logging(args.log_level, json_output=settings.log_json)

    try:
        report = frame_corpus(
            Path(args.directory),
            Framer.from_settings(settings),
            suffix=args.suffix,
            write=not args.check,
        )
    except CorpusIOError as e:
        logger.error("corpus_unavailable", code=e.code, path=e.path)
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    if args.json:
        payload = report.model_dump()
        payload["summary"] = report.summary()
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        _print_text(report)

    if args.check and report.fixed:
        return 1
    if args.strict and report.failed:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
