"""
Identifier framing scanner.

Responsibilities:
- split a line into tokens: quoted text, delimited names, digit runs,
  words, and everything else
- leave reserved words, digit runs, quoted text and already-delimited
  names untouched
- wrap every remaining bare uppercase word in DELIMITER

Lines are scanned independently; no state carries from one line to the
next. Unterminated quotes or delimiters run to the end of the line and are
copied as-is.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import structlog

from .keywords import DEFAULT_KEYWORDS, KeywordSet
from .rules import COMMENT_PREFIX, DELIMITER, QUOTE

logger = structlog.get_logger(__name__)


class TokenKind(str, Enum):
    STRING_LITERAL = "string_literal"
    DELIMITED_IDENTIFIER = "delimited_identifier"
    NUMBER = "number"
    WORD = "word"
    OTHER = "other"


class ScanState(Enum):
    NORMAL = "normal"
    IN_STRING = "in_string"
    IN_DELIMITED = "in_delimited"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str

    @property
    def terminated(self) -> bool:
        """True when a quoted or delimited span has its closing character."""
        if self.kind is TokenKind.STRING_LITERAL:
            return len(self.text) > 1 and self.text.endswith(QUOTE)
        if self.kind is TokenKind.DELIMITED_IDENTIFIER:
            return len(self.text) > 1 and self.text.endswith(DELIMITER)
        return True

    @property
    def inner(self) -> str:
        """Content between the boundary characters of a delimited name."""
        if self.kind is not TokenKind.DELIMITED_IDENTIFIER:
            return self.text
        end = -1 if self.terminated else len(self.text)
        return self.text[1:end]

    @property
    def is_blank(self) -> bool:
        return self.kind is TokenKind.OTHER and self.text != "" and self.text.strip() == ""


def is_word_char(ch: str) -> bool:
    return ch.isalpha() or ch.isdecimal() or ch == "_"


def is_passthrough_line(line: str, comment_prefix: str = COMMENT_PREFIX) -> bool:
    stripped = line.strip()
    return stripped == "" or stripped.startswith(comment_prefix)


def is_bare_name(word: str) -> bool:
    """
    A word that could be framed at all: a run of word characters that is
    neither a digit run nor written with lowercase letters.
    """
    if not word or not all(is_word_char(ch) for ch in word):
        return False
    if word.isdecimal():
        return False
    return not any(ch.islower() for ch in word)


def frame(word: str) -> str:
    return f"{DELIMITER}{word}{DELIMITER}"


def tokenize_line(line: str, comment_prefix: str = COMMENT_PREFIX) -> List[Token]:
    """
    Split one line into tokens. Joining the token texts gives back the line.

    Commentary and blank lines come back as a single OTHER token.
    """
    if is_passthrough_line(line, comment_prefix):
        return [Token(TokenKind.OTHER, line)] if line else []

    tokens: List[Token] = []
    run: List[str] = []
    run_kind: Optional[TokenKind] = None
    state = ScanState.NORMAL

    def emit() -> None:
        nonlocal run, run_kind
        if run:
            text = "".join(run)
            kind = run_kind
            if kind is TokenKind.WORD and text.isdecimal():
                kind = TokenKind.NUMBER
            tokens.append(Token(kind, text))
        run = []
        run_kind = None

    for ch in line:
        if state is ScanState.IN_STRING:
            run.append(ch)
            if ch == QUOTE:
                emit()
                state = ScanState.NORMAL
            continue

        if state is ScanState.IN_DELIMITED:
            run.append(ch)
            if ch == DELIMITER:
                emit()
                state = ScanState.NORMAL
            continue

        if ch == QUOTE or ch == DELIMITER:
            emit()
            if ch == QUOTE:
                run_kind, state = TokenKind.STRING_LITERAL, ScanState.IN_STRING
            else:
                run_kind, state = TokenKind.DELIMITED_IDENTIFIER, ScanState.IN_DELIMITED
            run.append(ch)
            continue

        kind = TokenKind.WORD if is_word_char(ch) else TokenKind.OTHER
        if kind is not run_kind:
            emit()
            run_kind = kind
        run.append(ch)

    # end of line: flush the pending word, or an unterminated span verbatim
    emit()
    return tokens


def render(tokens: List[Token]) -> str:
    return "".join(t.text for t in tokens)


class Scanner:
    """Frames bare identifiers line by line against an injected vocabulary."""

    def __init__(self, keywords: KeywordSet = DEFAULT_KEYWORDS, comment_prefix: str = COMMENT_PREFIX):
        self.keywords = keywords
        self.comment_prefix = comment_prefix

    def is_identifier(self, word: str) -> bool:
        return is_bare_name(word) and not self.keywords.is_keyword(word)

    def frame_tokens(self, tokens: List[Token]) -> Tuple[List[Token], int]:
        out: List[Token] = []
        framed = 0
        for tok in tokens:
            if tok.kind is TokenKind.WORD and self.is_identifier(tok.text):
                out.append(Token(TokenKind.DELIMITED_IDENTIFIER, frame(tok.text)))
                framed += 1
            else:
                out.append(tok)
        return out, framed

    def frame_line(self, line: str) -> str:
        tokens, _ = self.frame_tokens(tokenize_line(line, self.comment_prefix))
        return render(tokens)

    def frame(self, text: str) -> Tuple[str, int]:
        """Frame every line of ``text``. Returns the new text and the number of words framed."""
        lines = text.split("\n")
        total = 0
        for i, line in enumerate(lines):
            if is_passthrough_line(line, self.comment_prefix):
                continue
            tokens, framed = self.frame_tokens(tokenize_line(line, self.comment_prefix))
            if framed:
                lines[i] = render(tokens)
                total += framed
        logger.debug("scan_complete", lines=len(lines), framed=total)
        return "\n".join(lines), total
