#!/usr/bin/env python3
"""
Field line parsing for Go struct bodies.

Each declaration line has the shape

    Name TypeExpr `tag` // trailing comment

where the tag and the comment are optional. The type expression is kept as
raw text; nothing inside it is interpreted. Lines that do not have this shape
(embedded fields, grouped names such as `X, Y int`) are reported as skipped
rather than raised.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import re
from typing import List, Optional, Union

from constants import BACKTICK, COMMENT_MARKER

_LOGGER = logging.getLogger(__name__)

_NAME_RE = re.compile(r"(\w+)\s+(.*)", re.DOTALL)
_EMBEDDED_RE = re.compile(r"\*?(?:\w+\.)?\w+(?:\[[^\]]*\])?")


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    type_expression: str
    tag: Optional[str] = None
    documentation: Optional[str] = None


class SkipReason(Enum):
    COMMENT = "comment"
    EMBEDDED = "embedded"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class MatchedField:
    field: FieldDescriptor


@dataclass(frozen=True)
class SkippedLine:
    text: str
    reason: SkipReason


FieldLineOutcome = Union[MatchedField, SkippedLine]


def _flatten_nested(piece: str) -> str:
    """Fold a multi-line piece (inline struct/interface type) onto one line.

    Comments on inner lines are dropped; a comment on the closing line stays
    as the field's own trailing comment.
    """
    lines = piece.splitlines()
    parts: List[str] = []
    for idx, line in enumerate(lines):
        if idx < len(lines) - 1:
            line = line.split(COMMENT_MARKER, 1)[0]
        line = line.strip()
        if line:
            parts.append(line)
    if not parts:
        return ""
    folded = parts[0]
    for prev, cur in zip(parts, parts[1:]):
        sep = " " if prev.endswith("{") or cur.startswith("}") else "; "
        folded += sep + cur
    return folded


def split_field_lines(body: str) -> List[str]:
    """Split a struct body into stripped, non-empty declaration pieces.

    Separators are `;` and newline. They do not split inside a field's own
    braces, inside a backtick tag or inside a trailing `//` comment. A
    newline ends both a comment and an unclosed tag.
    """
    pieces: List[str] = []
    depth = 0
    in_tag = False
    in_comment = False
    start = 0
    i = 0
    n = len(body)
    while i < n:
        ch = body[i]
        if in_comment or in_tag:
            if ch == "\n":
                in_comment = in_tag = False
                if depth <= 0:
                    pieces.append(body[start:i])
                    start = i + 1
            elif in_tag and ch == BACKTICK:
                in_tag = False
        elif ch == BACKTICK:
            in_tag = True
        elif body.startswith(COMMENT_MARKER, i):
            in_comment = True
            i += 1
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        elif ch in ";\n" and depth <= 0:
            pieces.append(body[start:i])
            start = i + 1
        i += 1
    pieces.append(body[start:])

    result: List[str] = []
    for piece in pieces:
        piece = _flatten_nested(piece) if "\n" in piece.strip() else piece.strip()
        if piece:
            result.append(piece)
    return result


def _classify_skip(line: str) -> SkipReason:
    head = line
    for marker in (BACKTICK, COMMENT_MARKER):
        head = head.split(marker, 1)[0]
    if _EMBEDDED_RE.fullmatch(head.strip()):
        return SkipReason.EMBEDDED
    return SkipReason.UNRECOGNIZED


def _extract_field(line: str) -> Optional[FieldDescriptor]:
    m = _NAME_RE.fullmatch(line)
    if not m:
        return None
    name, rest = m.group(1), m.group(2)

    type_end = len(rest)
    for marker in (BACKTICK, COMMENT_MARKER):
        pos = rest.find(marker)
        if 0 <= pos < type_end:
            type_end = pos
    type_expression = rest[:type_end].strip()
    if not type_expression:
        return None

    remainder = rest[type_end:]
    tag: Optional[str] = None
    if remainder.startswith(BACKTICK):
        close = remainder.find(BACKTICK, 1)
        if close < 0:
            return None
        tag = remainder[1:close]
        remainder = remainder[close + 1 :].lstrip()

    documentation: Optional[str] = None
    if remainder:
        if not remainder.startswith(COMMENT_MARKER):
            return None
        documentation = remainder[len(COMMENT_MARKER) :].strip() or None

    return FieldDescriptor(
        name=name,
        type_expression=type_expression,
        tag=tag,
        documentation=documentation,
    )


def parse_field_line(line: str) -> FieldLineOutcome:
    """Parse one stripped declaration piece into a tagged outcome."""
    if line.startswith(COMMENT_MARKER):
        return SkippedLine(line, SkipReason.COMMENT)
    field = _extract_field(line)
    if field is not None:
        return MatchedField(field)
    reason = _classify_skip(line)
    _LOGGER.debug("Skipping %s field line %r", reason.value, line)
    return SkippedLine(line, reason)


def parse_field_lines(body: str) -> List[FieldLineOutcome]:
    return [parse_field_line(line) for line in split_field_lines(body)]


def parse_fields(body: str) -> List[FieldDescriptor]:
    """Return the named fields of a struct body in declaration order."""
    return [
        outcome.field
        for outcome in parse_field_lines(body)
        if isinstance(outcome, MatchedField)
    ]


class FieldLineParser:
    def parse_lines(self, body: str) -> List[FieldLineOutcome]:
        return parse_field_lines(body)

    def parse(self, body: str) -> List[FieldDescriptor]:
        return parse_fields(body)
