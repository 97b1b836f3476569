#!/usr/bin/env python3
"""Conversions between flat character offsets and zero-based (line, character) positions."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    line: int
    character: int


def offset_at(text: str, position: Position) -> int:
    # Past the last line -> end of text; past the line end -> line end.
    line = max(0, position.line)
    character = max(0, position.character)
    start = 0
    for _ in range(line):
        newline = text.find("\n", start)
        if newline < 0:
            return len(text)
        start = newline + 1
    end = text.find("\n", start)
    if end < 0:
        end = len(text)
    return min(start + character, end)


def position_at(text: str, offset: int) -> Position:
    offset = max(0, min(offset, len(text)))
    line = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return Position(line=line, character=offset - line_start)
