#!/usr/bin/env python3
"""
Cursor context scanning for Go struct literals.

Currently provides:
- count_top_level_commas(span) -> number of commas outside nested brackets/strings
- locate_enclosing_literal(text, offset) -> StructLiteralContext or None

Both are pure functions of their input and run in linear time. Malformed
source never raises: unbalanced brackets simply drive the depth counters
negative and the scan carries on.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import re
from typing import Optional, Tuple

from constants import BACKTICK, IDENTIFIER_CHARS

_LOGGER = logging.getLogger(__name__)

# Optional `Qualifier.` then an exported-looking name, anchored at the brace.
_TYPE_NAME_RE = re.compile(r"(?:[A-Z_][A-Za-z0-9_]*\.)?([A-Z_][A-Za-z0-9_]*)$")


class ScanMode(Enum):
    NORMAL = "normal"
    DOUBLE_QUOTE = "double_quote"
    RAW_STRING = "raw_string"


@dataclass(frozen=True)
class StructLiteralContext:
    type_name: str
    type_name_offset: int
    active_field_index: int


def count_top_level_commas(span: str) -> int:
    """Count commas that separate the literal's own elements.

    Commas inside nested braces, parentheses, brackets, interpreted strings
    and raw strings are ignored. A quote preceded by an unescaped backslash
    does not open or close an interpreted string.
    """
    count = 0
    brace_depth = 0
    paren_depth = 0
    bracket_depth = 0
    mode = ScanMode.NORMAL
    escaped = False

    for ch in span:
        if mode is ScanMode.RAW_STRING:
            if ch == BACKTICK:
                mode = ScanMode.NORMAL
            continue
        if escaped:
            escaped = False
            continue
        if ch == "\\":
            escaped = True
            continue
        if mode is ScanMode.DOUBLE_QUOTE:
            if ch == '"':
                mode = ScanMode.NORMAL
            continue

        if ch == '"':
            mode = ScanMode.DOUBLE_QUOTE
        elif ch == BACKTICK:
            mode = ScanMode.RAW_STRING
        elif ch == "{":
            brace_depth += 1
        elif ch == "}":
            brace_depth -= 1
        elif ch == "(":
            paren_depth += 1
        elif ch == ")":
            paren_depth -= 1
        elif ch == "[":
            bracket_depth += 1
        elif ch == "]":
            bracket_depth -= 1
        elif ch == "," and brace_depth == 0 and paren_depth == 0 and bracket_depth == 0:
            count += 1
    return count


def _find_open_brace(text: str, offset: int) -> int:
    depth = 0
    for i in range(offset - 1, -1, -1):
        ch = text[i]
        if ch == "}":
            depth += 1
        elif ch == "{":
            if depth == 0:
                return i
            depth -= 1
    return -1


def _match_type_name(text: str, brace: int) -> Optional[Tuple[str, int]]:
    """Return (name, offset) of the type identifier right before `brace`."""
    end = brace
    while end > 0 and text[end - 1].isspace():
        end -= 1
    # Only the trailing run of identifier characters and dots can take part
    # in the match; bounding the search keeps it proportional to that run.
    start = end
    while start > 0 and (text[start - 1] in IDENTIFIER_CHARS or text[start - 1] == "."):
        start -= 1
    m = _TYPE_NAME_RE.search(text, start, end)
    if not m:
        return None
    return m.group(1), m.start(1)


def locate_enclosing_literal(text: str, offset: int) -> Optional[StructLiteralContext]:
    """Find the innermost struct literal that contains `offset`.

    The package qualifier of `pkg.Type{` is dropped: only `Type` is
    reported, at the offset where `Type` starts.
    """
    offset = max(0, min(offset, len(text)))
    brace = _find_open_brace(text, offset)
    if brace < 0:
        return None
    match = _match_type_name(text, brace)
    if match is None:
        _LOGGER.debug("Brace at %d is not preceded by a type name", brace)
        return None
    type_name, type_offset = match
    return StructLiteralContext(
        type_name=type_name,
        type_name_offset=type_offset,
        active_field_index=count_top_level_commas(text[brace + 1 : offset]),
    )


class ContextFinder:
    """Stateless entry point for hosts that want an object to hold on to."""

    def locate(self, text: str, offset: int) -> Optional[StructLiteralContext]:
        return locate_enclosing_literal(text, offset)

    def count_commas(self, span: str) -> int:
        return count_top_level_commas(span)
