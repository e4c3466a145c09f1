"""
Identifier framing engine: scanner followed by the correction pipeline.

``transform`` is total over any text and idempotent:
``transform(transform(t)) == transform(t)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Optional, Sequence

import structlog

from .config import get_settings
from .corrections import CorrectionPipeline, CorrectionRule, default_rules
from .keywords import DEFAULT_KEYWORDS, KeywordSet
from .scanner import Scanner

logger = structlog.get_logger(__name__)


@dataclass
class FrameOutcome:
    text: str
    changed: bool
    identifiers_framed: int = 0
    corrections: Dict[str, int] = field(default_factory=dict)

    @property
    def corrections_applied(self) -> int:
        return sum(self.corrections.values())


class Framer:
    def __init__(
        self,
        keywords: KeywordSet = DEFAULT_KEYWORDS,
        rules: Optional[Sequence[CorrectionRule]] = None,
    ):
        self.keywords = keywords
        self.scanner = Scanner(keywords)
        self.pipeline = CorrectionPipeline(default_rules() if rules is None else rules)

    @classmethod
    def from_settings(cls, settings) -> Framer:
        # configured materials are identifiers everywhere but after the preposition
        keywords = DEFAULT_KEYWORDS.without(settings.material_qualities)
        if settings.extra_keywords:
            keywords = keywords.extended(settings.extra_keywords)
        return cls(keywords, default_rules(settings))

    def is_keyword(self, word: str) -> bool:
        return self.keywords.is_keyword(word)

    def frame(self, text: str) -> FrameOutcome:
        scanned, framed = self.scanner.frame(text)
        corrected, corrections = self.pipeline.apply(scanned)
        outcome = FrameOutcome(
            text=corrected,
            changed=corrected != text,
            identifiers_framed=framed,
            corrections=corrections,
        )
        logger.debug(
            "program_framed",
            changed=outcome.changed,
            identifiers_framed=framed,
            corrections=outcome.corrections_applied,
        )
        return outcome

    def transform(self, text: str) -> str:
        return self.frame(text).text


@lru_cache(maxsize=1)
def default_framer() -> Framer:
    return Framer.from_settings(get_settings())


def is_keyword(word: str) -> bool:
    return default_framer().is_keyword(word)


def transform(text: str) -> str:
    return default_framer().transform(text)
