"""Helpers shared by the CLI commands."""

from __future__ import annotations

import sys

from rich.console import Console
from rich.markup import escape

from defectlink.config import DefectLinkConfig
from defectlink.defects.models import DefEvent
from defectlink.parser.json_parser import JsonParser
from defectlink.source import InputDocument, InputFileError

console = Console(stderr=True, soft_wrap=True)


def open_parser(path: str, config: DefectLinkConfig) -> JsonParser:
    """Read and parse a document, exiting on open or format failure."""
    try:
        document = InputDocument.from_path(path, silent=config.silent)
    except InputFileError as e:
        console.print(f"[red]{escape(e.file_name)}: failed to open input file[/red]")
        sys.exit(1)

    parser = JsonParser(document)
    if parser.fatal_error is not None:
        console.print(
            f"[red]{escape(path)}: failed to parse: {escape(parser.fatal_error)}[/red]"
        )
        sys.exit(1)
    return parser


def format_event(evt: DefEvent) -> str:
    location = f"{evt.file_name}:{evt.line}:"
    if evt.column > 0:
        location += f"{evt.column}:"
    return f"{location} {evt.event}: {evt.msg}"
