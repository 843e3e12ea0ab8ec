"""CLI command: defectlink link <document> — attach external IDs to defects."""

from __future__ import annotations

import sys

import click
from rich.console import Console
from rich.markup import escape

from defectlink.cli.common import console, format_event, open_parser
from defectlink.correlate.linker import DefectLinker, LinkReport
from defectlink.correlate.query import QueryParser

out = Console(highlight=False, soft_wrap=True)


@click.command()
@click.argument("document", type=click.Path())
@click.option(
    "--queries",
    "-q",
    type=click.File("r"),
    default="-",
    help="File with '<id>,<checker>,<file>' lines (default: stdin).",
)
@click.option("--defect-url", default="", help="URL prefix for defect IDs.")
@click.option("--checker-url", default="", help="URL prefix for checker docs.")
@click.pass_context
def link(
    ctx: click.Context,
    document: str,
    queries,
    defect_url: str,
    checker_url: str,
) -> None:
    """Match '<id>,<checker>,<file>' queries against the defects of DOCUMENT."""
    config = ctx.obj["config"]
    parser = open_parser(document, config)

    query_parser = QueryParser(queries, name=queries.name)
    report = DefectLinker(ctx.obj["normalize"]).run(parser, query_parser)

    for item in report.matched:
        _print_header(item.defect.def_class, item.query.identifier, defect_url, checker_url)
        for evt in item.defect.events:
            out.print(escape(format_event(evt)))
        out.print()

    if report.unmatched:
        out.rule("Defects available only by ID")
        for query in report.unmatched:
            _print_header(query.def_class, query.identifier, defect_url, checker_url)
            if query.file_name:
                out.print(f"{escape(query.file_name)}: [italic]no more details available[/italic]")
            out.print()

    if report.unclaimed:
        out.rule("Defects without an ID")
        for defect in report.unclaimed:
            out.print(f"Error: [bold]{escape(defect.def_class)}[/bold]")
            for evt in defect.events:
                out.print(escape(format_event(evt)))
            out.print()

    _print_summary(report)
    if not report.clean:
        sys.exit(1)


def _print_header(def_class: str, identifier: int, defect_url: str, checker_url: str) -> None:
    line = f"Error: [bold]{escape(def_class)}[/bold] (id {identifier})"
    if defect_url:
        line += f" {escape(defect_url)}{identifier}"
    if checker_url:
        line += f" {escape(checker_url)}{escape(def_class)}"
    out.print(line)


def _print_summary(report: LinkReport) -> None:
    console.print(
        f"Linked {len(report.matched)} defect(s), "
        f"{len(report.unmatched)} unmatched ID(s), "
        f"{len(report.unclaimed)} unclaimed defect(s)"
    )
