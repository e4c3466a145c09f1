from __future__ import annotations

from typing import FrozenSet, Iterable, Iterator

from .rules import RESERVED_WORDS


class KeywordSet:
    """
    Immutable, case-insensitive membership test over the reserved vocabulary.

    Words are stored in canonical uppercase form. Derived vocabularies are
    built with ``extended`` / ``without``; an existing set is never mutated,
    so one instance can be shared by every scan in the process.
    """

    __slots__ = ("_words",)

    def __init__(self, words: Iterable[str]):
        object.__setattr__(self, "_words", frozenset(w.upper() for w in words))

    def __setattr__(self, name, value):
        raise AttributeError("KeywordSet is immutable")

    @property
    def words(self) -> FrozenSet[str]:
        return self._words

    def is_keyword(self, word: str) -> bool:
        return word.upper() in self._words

    def extended(self, extra: Iterable[str]) -> KeywordSet:
        return KeywordSet(self._words.union(w.upper() for w in extra))

    def without(self, removed: Iterable[str]) -> KeywordSet:
        return KeywordSet(self._words.difference(w.upper() for w in removed))

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_keyword(word)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._words))

    def __len__(self) -> int:
        return len(self._words)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeywordSet):
            return NotImplemented
        return self._words == other._words

    def __hash__(self) -> int:
        return hash(self._words)

    def __repr__(self) -> str:
        return f"KeywordSet({len(self._words)} words)"


DEFAULT_KEYWORDS = KeywordSet(RESERVED_WORDS)
