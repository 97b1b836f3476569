#!/usr/bin/env python3
"""
Struct description parser for hover-style descriptive text.

Currently provides:
- parse_struct_description(text) -> StructDescriptor or None
- find_struct_body(text) -> (name, body) of the first struct definition

Parsing is intentionally shallow:
- If the text holds a ```go fenced block, only its interior is searched and
  the prose before the fence becomes the struct documentation.
- `type <Name> struct { ... }` is preferred; a bare `<Name> struct { ... }`
  summary is accepted as a fallback.
- Only the outermost body is captured. Inline struct types inside a field
  stay as part of that field's type expression.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import re
from typing import List, Optional, Pattern, Tuple

import config
from constants import BACKTICK, COMMENT_MARKER, FENCE_MARKER
from fields import FieldDescriptor, parse_fields

_LOGGER = logging.getLogger(__name__)

_TYPE_DEF_RE = re.compile(r"\btype\s+(\w+)\s+struct\s*\{")
_INLINE_RE = re.compile(r"(\w+)\s+struct\s*\{")


@dataclass(frozen=True)
class StructDescriptor:
    name: str
    fields: List[FieldDescriptor] = field(default_factory=list)
    documentation: Optional[str] = None


def _fence_pattern(language: str) -> Pattern[str]:
    fence = re.escape(FENCE_MARKER)
    return re.compile(
        rf"{fence}{re.escape(language)}[ \t]*\r?\n(.*?)\r?\n[ \t]*{fence}",
        re.DOTALL,
    )


def find_closing_brace(text: str, open_at: int) -> int:
    """Index of the `}` balancing the `{` at `open_at`, or -1.

    Braces inside raw strings, interpreted strings and line comments do not
    count.
    """
    depth = 0
    i = open_at
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == BACKTICK:
            close = text.find(BACKTICK, i + 1)
            if close < 0:
                return -1
            i = close
        elif ch == '"':
            j = i + 1
            while j < n and text[j] not in '"\n':
                j += 2 if text[j] == "\\" else 1
            i = j
        elif text.startswith(COMMENT_MARKER, i):
            newline = text.find("\n", i)
            if newline < 0:
                return -1
            i = newline
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def _search_struct(pattern: Pattern[str], text: str) -> Optional[Tuple[str, str]]:
    for m in pattern.finditer(text):
        open_at = m.end() - 1
        close_at = find_closing_brace(text, open_at)
        if close_at >= 0:
            return m.group(1), text[open_at + 1 : close_at]
    return None


def find_struct_body(text: str) -> Optional[Tuple[str, str]]:
    found = _search_struct(_TYPE_DEF_RE, text)
    if found is None:
        found = _search_struct(_INLINE_RE, text)
    return found


class StructDescriptionParser:
    """Extract a StructDescriptor from descriptive text such as hover markdown."""

    def __init__(self, fence_language: str = config.FENCE_LANGUAGE) -> None:
        self.fence_language = fence_language
        self._fence_re = _fence_pattern(fence_language)

    def parse(self, text: str) -> Optional[StructDescriptor]:
        if not text:
            return None
        documentation: Optional[str] = None
        code = text
        fence = self._fence_re.search(text)
        if fence:
            code = fence.group(1)
            documentation = text[: fence.start()].strip() or None

        found = find_struct_body(code)
        if found is None:
            _LOGGER.debug("No struct definition in %d chars of description", len(text))
            return None
        name, body = found
        return StructDescriptor(
            name=name,
            fields=parse_fields(body),
            documentation=documentation,
        )


_DEFAULT_PARSER = StructDescriptionParser()


def parse_struct_description(text: str) -> Optional[StructDescriptor]:
    return _DEFAULT_PARSER.parse(text)
