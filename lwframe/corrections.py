"""
Contextual corrections applied after scanning.

The scanner only sees one word at a time, so it cannot know that a reserved
word is being used as a name, or that a name is being used as a qualifier.
Each rule here matches one small grammar shape over a line's tokens:

    statement         ::= target PLACED AS expr
    expr              ::= operand PUT TOGETHER operand
    qualifier-phrase  ::= OF MATERIAL

Rules only ever look at WORD, DELIMITED_IDENTIFIER and whitespace tokens,
so quoted text and commentary lines are out of their reach. Every rule is
idempotent and a no-op on the output of the others.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import structlog

from .rules import (
    ASSIGNMENT_MARKER,
    MATERIAL_PREPOSITION,
    MATERIAL_QUALITIES,
    OPERAND_EXCEPTIONS,
)
from .scanner import Token, TokenKind, frame, is_bare_name, render, tokenize_line

logger = structlog.get_logger(__name__)


def _is_word(tok: Optional[Token], value: str) -> bool:
    return tok is not None and tok.kind is TokenKind.WORD and tok.text.upper() == value


def _at(tokens: List[Token], i: int) -> Optional[Token]:
    return tokens[i] if 0 <= i < len(tokens) else None


def _matches_phrase(tokens: List[Token], start: int, phrase: Sequence[str]) -> bool:
    """True if ``phrase`` words begin at ``start``, separated by whitespace tokens."""
    i = start
    for n, word in enumerate(phrase):
        if n:
            sep = _at(tokens, i)
            if sep is None or not sep.is_blank:
                return False
            i += 1
        if not _is_word(_at(tokens, i), word):
            return False
        i += 1
    return True


class CorrectionRule:
    """A named, idempotent rewrite of whole-file text."""

    name = "correction"

    def apply(self, text: str) -> Tuple[str, int]:
        lines = text.split("\n")
        total = 0
        for i, line in enumerate(lines):
            tokens = tokenize_line(line)
            count = self.rewrite(tokens)
            if count:
                lines[i] = render(tokens)
                total += count
        return "\n".join(lines), total

    def rewrite(self, tokens: List[Token]) -> int:
        """Rewrite ``tokens`` in place. Returns the number of corrections made."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class AssignmentTargetRule(CorrectionRule):
    """Frame the word a line assigns to, even when it is a reserved word."""

    name = "assignment_target"

    def __init__(self, marker: Sequence[str] = ASSIGNMENT_MARKER):
        self.marker = tuple(w.upper() for w in marker)

    def rewrite(self, tokens: List[Token]) -> int:
        i = 1 if tokens and tokens[0].is_blank else 0
        target = _at(tokens, i)
        if target is None or target.kind is not TokenKind.WORD or not is_bare_name(target.text):
            return 0
        sep = _at(tokens, i + 1)
        if sep is None or not sep.is_blank or not _matches_phrase(tokens, i + 2, self.marker):
            return 0
        tokens[i] = Token(TokenKind.DELIMITED_IDENTIFIER, frame(target.text))
        return 1


class KeywordOperandRule(CorrectionRule):
    """
    Frame a reserved word that ends a statement as the right operand of an
    operator phrase, e.g. ``PUT TOGETHER ANOTHER.``
    """

    name = "keyword_operand"

    def __init__(self, exceptions: Optional[Dict[Tuple[str, ...], Iterable[str]]] = None):
        if exceptions is None:
            exceptions = OPERAND_EXCEPTIONS
        self.exceptions = {
            tuple(w.upper() for w in phrase): frozenset(w.upper() for w in words)
            for phrase, words in exceptions.items()
        }

    @staticmethod
    def _ends_statement(tokens: List[Token], i: int) -> bool:
        nxt = _at(tokens, i)
        if nxt is None:
            return True
        if nxt.kind is not TokenKind.OTHER:
            return False
        return nxt.text.startswith(".") or (nxt.text.strip() == "" and i == len(tokens) - 1)

    def rewrite(self, tokens: List[Token]) -> int:
        count = 0
        for phrase, words in self.exceptions.items():
            # phrase words and their separators, then one more separator
            width = 2 * len(phrase)
            for start in range(len(tokens)):
                if not _matches_phrase(tokens, start, phrase):
                    continue
                sep = _at(tokens, start + width - 1)
                operand = _at(tokens, start + width)
                if sep is None or not sep.is_blank or operand is None:
                    continue
                if operand.kind is not TokenKind.WORD or operand.text.upper() not in words:
                    continue
                if not is_bare_name(operand.text) or not self._ends_statement(tokens, start + width + 1):
                    continue
                tokens[start + width] = Token(TokenKind.DELIMITED_IDENTIFIER, frame(operand.text))
                count += 1
        return count


class MaterialQualityExceptionRule(CorrectionRule):
    """Strip delimiters from a material quality directly after the preposition."""

    name = "material_quality"

    def __init__(self, materials: Iterable[str] = MATERIAL_QUALITIES, preposition: str = MATERIAL_PREPOSITION):
        self.materials = frozenset(m.upper() for m in materials)
        self.preposition = preposition.upper()

    def rewrite(self, tokens: List[Token]) -> int:
        count = 0
        for i in range(2, len(tokens)):
            tok = tokens[i]
            if tok.kind is not TokenKind.DELIMITED_IDENTIFIER or not tok.terminated:
                continue
            if tok.inner not in self.materials:
                continue
            if not tokens[i - 1].is_blank or not _is_word(tokens[i - 2], self.preposition):
                continue
            # the bare word must not run into a following word
            nxt = _at(tokens, i + 1)
            if nxt is not None and nxt.kind in (TokenKind.WORD, TokenKind.NUMBER):
                continue
            tokens[i] = Token(TokenKind.WORD, tok.inner)
            count += 1
        return count


class CorrectionPipeline:
    """Explicit, ordered list of correction rules."""

    def __init__(self, rules: Sequence[CorrectionRule]):
        names = [r.name for r in rules]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate correction rule names: {names}")
        self.rules: Tuple[CorrectionRule, ...] = tuple(rules)

    @property
    def names(self) -> List[str]:
        return [r.name for r in self.rules]

    def apply(self, text: str) -> Tuple[str, Dict[str, int]]:
        counts: Dict[str, int] = {}
        for rule in self.rules:
            text, count = rule.apply(text)
            counts[rule.name] = count
            if count:
                logger.debug("correction_applied", rule=rule.name, count=count)
        return text, counts


def default_rules(settings=None) -> List[CorrectionRule]:
    """The declared rule order. ``settings`` supplies the material vocabulary."""
    if settings is None:
        materials, preposition = MATERIAL_QUALITIES, MATERIAL_PREPOSITION
    else:
        materials, preposition = settings.material_qualities, settings.material_preposition

    return [
        AssignmentTargetRule(),
        KeywordOperandRule(),
        MaterialQualityExceptionRule(materials, preposition),
    ]
