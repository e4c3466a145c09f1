"""
Byte-level entry point used by the HTTP service and the batch driver.

Responsibilities:
- encoding detection + decoding of program bytes
- framing the decoded text
- building the response envelope (hash, base64 content, report)

Newlines are left exactly as they are: framing works per line and must not
rewrite anything it does not frame.
"""

from __future__ import annotations

import base64
import hashlib
from typing import Any, Dict, Optional, Tuple

from charset_normalizer import from_bytes

from .engine import Framer, default_framer
from .rules import OUTPUT_ENCODING


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def decode_program_bytes(raw: bytes) -> Tuple[str, Dict[str, Any]]:
    """
    Decode program bytes to text.

    Rules:
    - Valid UTF-8 is always decoded as UTF-8; detection guesses badly on
      short programs.
    - A UTF-8 BOM is consumed so it is not framed or duplicated, and reported
      as ``utf-8-sig`` so it can be written back.
    - Otherwise detect the encoding best-effort via charset-normalizer.
    - Last resort: UTF-8 with replacement characters, reported as a fallback.
    """
    detected = None
    decode_fallback = False
    decode_used = "utf-8-sig" if raw.startswith(b"\xef\xbb\xbf") else "utf-8"

    try:
        text = raw.decode(decode_used)
    except UnicodeDecodeError:
        match = from_bytes(raw).best()
        if match is not None:
            detected = match.encoding
        try:
            text = raw.decode(detected or "utf-8")
            decode_used = detected or "utf-8"
        except (UnicodeDecodeError, LookupError):
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"
            decode_fallback = True

    report = {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
        "output": OUTPUT_ENCODING,
    }
    return text, report


def frame_program_bytes(raw: bytes, framer: Optional[Framer] = None) -> Dict[str, Any]:
    """
    Decode, frame and re-encode one program.
    Returns a dict matching the API's response envelope.
    """
    framer = framer or default_framer()
    text, enc_report = decode_program_bytes(raw)
    outcome = framer.frame(text)

    framed_bytes = outcome.text.encode(OUTPUT_ENCODING)
    b64 = base64.b64encode(framed_bytes).decode("ascii")
    return {
        "framed_program": {
            "sha256": _sha256_hex(framed_bytes),
            "encoding": OUTPUT_ENCODING,
            "content_b64": b64,
        },
        "report": {
            "summary": {
                "lines": len(outcome.text.split("\n")) if outcome.text else 0,
                "identifiers_framed": outcome.identifiers_framed,
                "corrections_applied": outcome.corrections_applied,
                "changed": outcome.changed,
                "deterministic": True,
            },
            "encoding": enc_report,
            "corrections": outcome.corrections,
        },
    }
