"""Nesting- and quote-aware scanning helpers.

Every scan walks the text once, tracking parenthesis depth (floored at zero so
unbalanced input never fails) and whether the cursor sits inside a single,
double or backtick quoted run. Backslash-escaped quotes do not toggle state.
"""

from __future__ import annotations

import re
from typing import List, Optional

_QUOTES = ("'", '"', "`")


def top_level_mask(text: str) -> List[bool]:
    """Return, per character, whether it sits outside parentheses and quotes.

    Opening quote characters count as quoted; a parenthesis is top level only
    when it opens or closes a depth-zero group.
    """

    mask: List[bool] = []
    depth = 0
    quote: Optional[str] = None
    previous = ""
    for char in text:
        if char in _QUOTES and previous != "\\" and quote in (None, char):
            quote = None if quote == char else char
            mask.append(False)
        elif quote is not None:
            mask.append(False)
        elif char == "(":
            mask.append(depth == 0)
            depth += 1
        elif char == ")":
            depth = max(0, depth - 1)
            mask.append(depth == 0)
        else:
            mask.append(depth == 0)
        previous = char
    return mask


def split_top_level(text: str, separator: str = ",") -> List[str]:
    """Split text on a single-character separator outside parentheses and quotes.

    Parts are trimmed and empty parts are dropped.
    """

    parts: List[str] = []
    current: List[str] = []
    for char, top_level in zip(text, top_level_mask(text)):
        if char == separator and top_level:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]


def find_top_level(
    text: str, pattern: re.Pattern, start: int = 0, mask: Optional[List[bool]] = None
) -> Optional[re.Match]:
    """Return the first match of `pattern` that begins at top level."""

    mask = mask if mask is not None else top_level_mask(text)
    for match in pattern.finditer(text, start):
        if match.start() >= len(mask) or mask[match.start()]:
            return match
    return None


def finditer_top_level(
    text: str, pattern: re.Pattern, start: int = 0, mask: Optional[List[bool]] = None
) -> List[re.Match]:
    """Return every match of `pattern` that begins at top level."""

    mask = mask if mask is not None else top_level_mask(text)
    return [
        match
        for match in pattern.finditer(text, start)
        if match.start() >= len(mask) or mask[match.start()]
    ]


def split_on_keywords(text: str, pattern: re.Pattern) -> List[str]:
    """Split text on top-level keyword matches, trimming and dropping empty parts."""

    parts: List[str] = []
    position = 0
    for match in finditer_top_level(text, pattern):
        parts.append(text[position : match.start()])
        position = match.end()
    parts.append(text[position:])
    return [part.strip() for part in parts if part.strip()]


def matching_paren(text: str, open_index: int) -> Optional[int]:
    """Return the index of the `)` closing the `(` at `open_index`, if any."""

    depth = 0
    quote: Optional[str] = None
    previous = ""
    for index in range(open_index, len(text)):
        char = text[index]
        if char in _QUOTES and previous != "\\" and quote in (None, char):
            quote = None if quote == char else char
        elif quote is None:
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth == 0:
                    return index
        previous = char
    return None


def strip_outer_parens(text: str) -> str:
    """Remove parentheses that wrap the whole text, repeatedly."""

    stripped = text.strip()
    while stripped.startswith("(") and matching_paren(stripped, 0) == len(stripped) - 1:
        stripped = stripped[1:-1].strip()
    return stripped
