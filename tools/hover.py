#!/usr/bin/env python3
"""
Flatten language-server hover payloads into plain descriptive text.

Accepted shapes (anything decoded from LSP JSON):
- a JSON-RPC response envelope: {"result": <Hover>}
- a Hover: {"contents": ..., "range": ...}
- MarkupContent: {"kind": "markdown", "value": "..."}
- MarkedString: "..." or {"language": "go", "value": "..."}
- a list of any of the above

The first non-empty text wins, matching how editors show the first hover.
"""
from __future__ import annotations

from typing import Any, Optional

from constants import FENCE_MARKER


def _marked_string(language: str, value: str) -> str:
    return f"{FENCE_MARKER}{language}\n{value}\n{FENCE_MARKER}"


def extract_hover_text(hover: Any) -> Optional[str]:
    if hover is None:
        return None
    if isinstance(hover, str):
        return hover if hover.strip() else None
    if isinstance(hover, (list, tuple)):
        for item in hover:
            text = extract_hover_text(item)
            if text:
                return text
        return None
    if not isinstance(hover, dict):
        return None

    if "result" in hover:
        return extract_hover_text(hover["result"])
    if "contents" in hover:
        return extract_hover_text(hover["contents"])

    value = hover.get("value")
    if not isinstance(value, str) or not value.strip():
        return None
    language = hover.get("language")
    if isinstance(language, str) and language:
        return _marked_string(language, value)
    return value
