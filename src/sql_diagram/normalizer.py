"""Comment stripping and whitespace normalization."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List

from sqlglot.errors import TokenError
from sqlglot.tokens import Tokenizer, TokenType

logger = logging.getLogger(__name__)

_LINE_COMMENT = re.compile(r"--[^\n]*")
_BLOCK_COMMENT = re.compile(r"/\*.*?(?:\*/|\Z)", re.DOTALL)
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class NormalizedQuery:
    """Single-line query text with comments removed."""

    text: str
    diagnostics: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.text)


def _join_tokens(sql: str) -> str:
    """Rebuild the query from token spans, dropping comments and extra whitespace.

    An adjacent `/` `*` token pair can only be a block comment the tokenizer
    left unterminated, so everything from there on is dropped.
    """

    pieces: List[str] = []
    previous_end = None
    tokens = Tokenizer().tokenize(sql)
    for index, token in enumerate(tokens):
        following = tokens[index + 1] if index + 1 < len(tokens) else None
        if (
            token.token_type == TokenType.SLASH
            and following is not None
            and following.token_type == TokenType.STAR
            and following.start == token.end + 1
        ):
            logger.debug("Dropping unterminated comment at offset %d", token.start)
            break
        if previous_end is not None and token.start > previous_end + 1:
            pieces.append(" ")
        pieces.append(sql[token.start : token.end + 1])
        previous_end = token.end
    return "".join(pieces)


def strip_comments(sql: str) -> str:
    """Remove `--` and `/* */` comments by pattern, ignoring quoting."""

    without_blocks = _BLOCK_COMMENT.sub(" ", sql)
    return _LINE_COMMENT.sub("", without_blocks)


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to a single space and trim."""

    return _WHITESPACE.sub(" ", text).strip()


def normalize_sql(sql: str) -> NormalizedQuery:
    """Normalize raw SQL text for clause extraction.

    The sqlglot tokenizer is used so that comment markers inside string
    literals survive. Text the tokenizer rejects (for example an unterminated
    quote) is normalized by pattern instead and the failure is reported as a
    diagnostic.
    """

    if not sql or not sql.strip():
        return NormalizedQuery(text="")
    try:
        text = _join_tokens(sql)
    except TokenError as exc:
        logger.warning("Tokenizer rejected query, using pattern normalization: %s", exc)
        return NormalizedQuery(
            text=collapse_whitespace(strip_comments(sql)),
            diagnostics=[f"Tokenizer error: {exc}"],
        )
    return NormalizedQuery(text=collapse_whitespace(text))
