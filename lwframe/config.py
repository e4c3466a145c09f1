"""Runtime configuration, loaded from ``LWFRAME_*`` environment variables."""
from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings

from .rules import CORPUS_SUFFIX, MATERIAL_PREPOSITION, MATERIAL_QUALITIES
from .scanner import is_word_char


def _canonical_words(values: List[str]) -> List[str]:
    words: List[str] = []
    for value in values:
        word = value.strip().upper()
        if not word or not all(is_word_char(ch) for ch in word):
            raise ValueError(f"'{value}' is not a single word")
        if word not in words:
            words.append(word)
    return words


class Settings(BaseSettings):
    """Framing configuration. Word lists are upper-cased on load."""

    corpus_dir: str = "tests/artifacts"
    corpus_suffix: str = CORPUS_SUFFIX

    material_preposition: str = MATERIAL_PREPOSITION
    material_qualities: List[str] = list(MATERIAL_QUALITIES)
    extra_keywords: List[str] = []

    log_level: str = "info"
    log_json: bool = False

    model_config = {"env_prefix": "LWFRAME_", "env_file": ".env", "extra": "ignore"}

    @field_validator("material_qualities", "extra_keywords")
    @classmethod
    def _words(cls, v: List[str]) -> List[str]:
        return _canonical_words(v)

    @field_validator("material_preposition")
    @classmethod
    def _preposition(cls, v: str) -> str:
        return _canonical_words([v])[0]

    @field_validator("corpus_suffix")
    @classmethod
    def _suffix(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("corpus_suffix must not be empty")
        return v if v.startswith(".") else f".{v}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
