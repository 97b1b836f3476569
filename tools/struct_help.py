#!/usr/bin/env python3
"""
Show struct field help for a cursor position inside a Go source file.

Examples:
    python tools/struct_help.py main.go --offset 412
    python tools/struct_help.py main.go --line 30 --character 18 --json
    python tools/struct_help.py main.go --offset 412 --hover hover.json

Without --hover the struct is looked up in the same file.

Exit status: 0 on success, 1 when there is no struct literal at the cursor or
no description for it, 2 on usage or input errors.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import config
from description_provider import DescriptionProvider, HoverFileDescriptionProvider, SourceDescriptionProvider
from literals import StructLiteralContext, locate_enclosing_literal
from positions import Position, offset_at, position_at
from records import StructDescriptor, parse_struct_description
from signature_help import build_signature_help, field_label

_LOGGER = logging.getLogger("struct_help")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show the fields of the struct literal under the cursor."
    )
    parser.add_argument("source", type=Path, help="Go source file")
    cursor = parser.add_mutually_exclusive_group(required=True)
    cursor.add_argument("--offset", type=int, help="zero-based character offset of the cursor")
    cursor.add_argument("--line", type=int, help="zero-based cursor line (use with --character)")
    parser.add_argument("--character", type=int, help="zero-based cursor column, only with --line (default: 0)")
    parser.add_argument(
        "--hover",
        type=Path,
        help="saved hover response (LSP JSON or markdown) describing the type",
    )
    parser.add_argument("--json", action="store_true", help="print LSP-shaped JSON")
    parser.add_argument(
        "--log-level",
        default=config.LOG_LEVEL,
        type=str.upper,
        choices=config.LOG_LEVELS,
        help=f"logging level (default: {config.LOG_LEVEL}, env STRUCT_HELP_LOG_LEVEL)",
    )
    return parser


def render_text(struct: StructDescriptor, context: StructLiteralContext) -> str:
    help_ = build_signature_help(struct, context.active_field_index)
    lines: List[str] = []
    if struct.documentation:
        lines.append(struct.documentation)
    lines.append(help_.signatures[0].label)
    for idx, field in enumerate(struct.fields):
        marker = "> " if idx == help_.active_parameter else "  "
        line = f"{marker}{field_label(field)}"
        if field.tag:
            line += f" `{field.tag}`"
        if field.documentation:
            line += f" // {field.documentation}"
        lines.append(line)
    return "\n".join(lines)


def render_json(text: str, struct: StructDescriptor, context: StructLiteralContext) -> str:
    type_position = position_at(text, context.type_name_offset)
    payload = {
        "context": {
            "typeName": context.type_name,
            "typeNameOffset": context.type_name_offset,
            "typePosition": {"line": type_position.line, "character": type_position.character},
            "activeFieldIndex": context.active_field_index,
        },
        "signatureHelp": build_signature_help(struct, context.active_field_index).to_lsp(),
    }
    return json.dumps(payload, indent=2)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.character is not None and args.line is None:
        parser.error("--character requires --line")
    logging.basicConfig(level=args.log_level, format="%(levelname)s: %(message)s")

    try:
        text = args.source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {args.source}: {exc}", file=sys.stderr)
        return 2

    if args.offset is not None:
        offset = args.offset
    else:
        offset = offset_at(text, Position(args.line, args.character or 0))
    if offset < 0 or offset > len(text):
        print(f"error: offset {offset} is outside {args.source} (0..{len(text)})", file=sys.stderr)
        return 2

    context = locate_enclosing_literal(text, offset)
    if context is None:
        print("no struct literal at cursor", file=sys.stderr)
        return 1
    _LOGGER.debug(
        "Cursor %d is in a %s literal, field %d",
        offset,
        context.type_name,
        context.active_field_index,
    )

    provider: DescriptionProvider
    if args.hover is not None:
        provider = HoverFileDescriptionProvider(args.hover)
    else:
        provider = SourceDescriptionProvider(config.FENCE_LANGUAGE)
    description = provider.describe(text, context)
    struct = parse_struct_description(description) if description else None
    if struct is None:
        print(f"no description for {context.type_name}", file=sys.stderr)
        return 1

    if args.json:
        print(render_json(text, struct, context))
    else:
        print(render_text(struct, context))
    return 0


if __name__ == "__main__":
    sys.exit(main())
