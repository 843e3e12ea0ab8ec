"""Format sniffer — pick a decoder from a parsed document's top-level shape."""

from __future__ import annotations

import enum
from typing import Any

from defectlink.parser.base import FormatError, TreeDecoder, first_child
from defectlink.parser.formats.compiler import CompilerDecoder
from defectlink.parser.formats.issues import IssueDecoder
from defectlink.parser.formats.native import NativeDecoder
from defectlink.parser.formats.sarif import SarifDecoder
from defectlink.parser.formats.shell import ShellDecoder
from defectlink.parser.postproc import PostProcessor


class UnrecognizedFormat(FormatError):
    """The document carries none of the known format markers."""


class DecoderKind(enum.Enum):
    """The closed set of supported JSON report formats."""

    NATIVE = "native"
    ISSUE_TRACKER = "issue-tracker"
    SARIF = "sarif"
    SHELL_LINTER = "shell-linter"
    COMPILER = "compiler"


# Checked in this order; several formats share field names
_ROOT_MARKERS: tuple[tuple[str, DecoderKind], ...] = (
    ("defects", DecoderKind.NATIVE),
    ("issues", DecoderKind.ISSUE_TRACKER),
    ("runs", DecoderKind.SARIF),
    ("comments", DecoderKind.SHELL_LINTER),
)

_COMPILER_MARKER = "kind"


def is_empty(root: Any) -> bool:
    """An empty top-level array or object holds zero defects."""
    return isinstance(root, (list, dict)) and not root


def sniff(root: Any) -> DecoderKind:
    """Return the decoder kind for ``root`` or raise :class:`UnrecognizedFormat`."""
    if isinstance(root, dict):
        for marker, kind in _ROOT_MARKERS:
            if marker in root:
                return kind

    first = first_child(root)
    if isinstance(first, dict) and _COMPILER_MARKER in first:
        return DecoderKind.COMPILER

    raise UnrecognizedFormat("unknown JSON format")


def create_decoder(
    kind: DecoderKind,
    root: Any,
    post_processor: PostProcessor | None = None,
) -> TreeDecoder:
    if kind is DecoderKind.NATIVE:
        return NativeDecoder(root)
    if kind is DecoderKind.ISSUE_TRACKER:
        return IssueDecoder(root)
    if kind is DecoderKind.SARIF:
        return SarifDecoder(root)
    if kind is DecoderKind.SHELL_LINTER:
        return ShellDecoder(root, post_processor)
    return CompilerDecoder(root, post_processor)
