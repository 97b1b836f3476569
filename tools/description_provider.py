#!/usr/bin/env python3
from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional, Protocol, Tuple
import json
import logging
import re

from constants import COMMENT_MARKER, DEFAULT_FENCE_LANGUAGE, FENCE_MARKER
from hover import extract_hover_text
from literals import StructLiteralContext
from records import find_closing_brace

_LOGGER = logging.getLogger(__name__)


class DescriptionProvider(Protocol):
    def describe(self, document: str, context: StructLiteralContext) -> Optional[str]:
        ...


class SourceDescriptionProvider:
    """
    Offline provider that looks the struct up in the document being edited.

    Finds `type <Name> struct { ... }` declarations, and `<Name> struct { ... }`
    members of grouped `type ( ... )` blocks, together with the `//` comment
    block directly above them. The match is rendered as hover-style markdown.
    Types declared in other files or packages are not found.
    """

    _decl_re = re.compile(r"^[ \t]*type[ \t]+(\w+)[ \t]+struct[ \t]*\{", re.MULTILINE)
    _group_re = re.compile(r"^[ \t]*type[ \t]*\([ \t]*$", re.MULTILINE)
    _member_re = re.compile(r"[ \t]*(\w+)[ \t]+struct[ \t]*\{")

    def __init__(self, fence_language: str = DEFAULT_FENCE_LANGUAGE) -> None:
        self.fence_language = fence_language

    @staticmethod
    def _leading_comment(document: str, decl_start: int) -> Optional[str]:
        lines = document[:decl_start].splitlines()
        doc_lines: List[str] = []
        for line in reversed(lines):
            stripped = line.strip()
            if not stripped.startswith(COMMENT_MARKER):
                break
            doc_lines.append(stripped[len(COMMENT_MARKER):].strip())
        if not doc_lines:
            return None
        return "\n".join(reversed(doc_lines)).strip() or None

    def _grouped_members(self, document: str, pos: int) -> Iterator[Tuple[str, int, str]]:
        """Struct members of a `type (` block whose first line starts at `pos`."""
        n = len(document)
        while pos < n:
            eol = document.find("\n", pos)
            if eol < 0:
                eol = n
            code = document[pos:eol].split(COMMENT_MARKER, 1)[0]
            if code.strip().startswith(")"):
                return
            m = self._member_re.match(document, pos, eol)
            if m:
                close_at = find_closing_brace(document, m.end() - 1)
                if close_at < 0:
                    return
                yield m.group(1), pos, "type " + document[m.start(1):close_at + 1]
                pos = close_at + 1
                continue
            # interface or other braced member
            brace = code.find("{")
            if brace >= 0:
                close_at = find_closing_brace(document, pos + brace)
                if close_at < 0:
                    return
                pos = close_at + 1
                continue
            pos = eol + 1

    def _declarations(self, document: str) -> Iterator[Tuple[str, int, str]]:
        for m in self._decl_re.finditer(document):
            close_at = find_closing_brace(document, m.end() - 1)
            if close_at >= 0:
                yield m.group(1), m.start(), document[m.start():close_at + 1].strip()
        for group in self._group_re.finditer(document):
            yield from self._grouped_members(document, group.end() + 1)

    def find_declaration(self, document: str, type_name: str) -> Optional[str]:
        for name, start, decl in self._declarations(document):
            if name == type_name:
                return self._render(decl, self._leading_comment(document, start))
        return None

    def _render(self, decl: str, documentation: Optional[str]) -> str:
        block = f"{FENCE_MARKER}{self.fence_language}\n{decl}\n{FENCE_MARKER}"
        if documentation:
            return f"{documentation}\n\n{block}"
        return block

    def describe(self, document: str, context: StructLiteralContext) -> Optional[str]:
        described = self.find_declaration(document, context.type_name)
        if described is None:
            _LOGGER.debug("No declaration of %s in the current document", context.type_name)
        return described


class HoverFileDescriptionProvider:
    """
    Provider backed by a saved hover response.

    The file holds either the JSON a language server returned for a hover
    request (any shape accepted by `extract_hover_text`) or the raw markdown.
    Text that only looks like JSON (markdown opening with a `[link](...)`) is
    used as markdown. The cursor context is not consulted: the file is assumed
    to describe the type under the cursor.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def describe(self, document: str, context: StructLiteralContext) -> Optional[str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            _LOGGER.warning("Could not read hover file %s: %s", self.path, exc)
            return None
        stripped = raw.strip()
        if not stripped:
            return None
        if stripped[0] in "{[":
            try:
                payload = json.loads(stripped)
            except ValueError as exc:
                _LOGGER.debug("Reading hover file %s as markdown: %s", self.path, exc)
                return raw
            return extract_hover_text(payload)
        return raw
