#!/usr/bin/env python3
"""Fixed Go syntax markers shared by the scanners and parsers."""
from __future__ import annotations

import string

COMMENT_MARKER = "//"
BACKTICK = "`"
FENCE_MARKER = "```"
DEFAULT_FENCE_LANGUAGE = "go"

IDENTIFIER_CHARS = frozenset(string.ascii_letters + string.digits + "_")
