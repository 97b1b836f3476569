#!/usr/bin/env python3
"""
Signature help assembly for struct literals.

Turns a StructDescriptor plus the active field index into the label/parameter
structure editors display, e.g.

    Person{Name string, Age int}
           ^^^^^^^^^^^  ^^^^^^^

Each parameter label is a [start, end) offset pair into the signature label.
StructSignatureHelper wires the whole flow together: cursor context, then
description lookup through a provider, then parsing, then assembly.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Dict, List, Optional, Tuple

from description_provider import DescriptionProvider
from fields import FieldDescriptor
from literals import locate_enclosing_literal
from records import StructDescriptor, parse_struct_description

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParameterInformation:
    label: Tuple[int, int]
    documentation: Optional[str] = None


@dataclass(frozen=True)
class SignatureInformation:
    label: str
    documentation: Optional[str] = None
    parameters: Tuple[ParameterInformation, ...] = ()


@dataclass(frozen=True)
class SignatureHelp:
    signatures: Tuple[SignatureInformation, ...]
    active_signature: int = 0
    active_parameter: Optional[int] = None

    def to_lsp(self) -> Dict[str, Any]:
        """Return the LSP `SignatureHelp` JSON shape."""
        signatures: List[Dict[str, Any]] = []
        for sig in self.signatures:
            entry: Dict[str, Any] = {
                "label": sig.label,
                "parameters": [_parameter_to_lsp(p) for p in sig.parameters],
            }
            if sig.documentation:
                entry["documentation"] = _markdown(sig.documentation)
            signatures.append(entry)
        result: Dict[str, Any] = {
            "signatures": signatures,
            "activeSignature": self.active_signature,
        }
        if self.active_parameter is not None:
            result["activeParameter"] = self.active_parameter
        return result


def _markdown(value: str) -> Dict[str, str]:
    return {"kind": "markdown", "value": value}


def _parameter_to_lsp(param: ParameterInformation) -> Dict[str, Any]:
    entry: Dict[str, Any] = {"label": list(param.label)}
    if param.documentation:
        entry["documentation"] = _markdown(param.documentation)
    return entry


def field_label(field: FieldDescriptor) -> str:
    return f"{field.name} {field.type_expression}"


def build_signature_help(struct: StructDescriptor, active_field_index: int) -> SignatureHelp:
    labels = [field_label(f) for f in struct.fields]
    signature_label = f"{struct.name}{{{', '.join(labels)}}}"

    parameters: List[ParameterInformation] = []
    start = len(struct.name) + 1
    for field, label in zip(struct.fields, labels):
        parameters.append(ParameterInformation((start, start + len(label)), field.documentation))
        start += len(label) + 2

    active_parameter: Optional[int] = None
    if struct.fields:
        active_parameter = max(0, min(active_field_index, len(struct.fields) - 1))

    signature = SignatureInformation(
        label=signature_label,
        documentation=struct.documentation,
        parameters=tuple(parameters),
    )
    return SignatureHelp(signatures=(signature,), active_signature=0, active_parameter=active_parameter)


class StructSignatureHelper:
    def __init__(self, provider: DescriptionProvider) -> None:
        self.provider = provider

    def signature_help(self, text: str, offset: int) -> Optional[SignatureHelp]:
        context = locate_enclosing_literal(text, offset)
        if context is None:
            return None
        description = self.provider.describe(text, context)
        if not description:
            _LOGGER.debug("No description available for %s", context.type_name)
            return None
        struct = parse_struct_description(description)
        if struct is None:
            return None
        return build_signature_help(struct, context.active_field_index)
