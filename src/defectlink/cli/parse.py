"""CLI command: defectlink parse <document> — decode and list defects."""

from __future__ import annotations

import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from defectlink.cli.common import console, open_parser

out = Console()


@click.command()
@click.argument("document", type=click.Path())
@click.pass_context
def parse(ctx: click.Context, document: str) -> None:
    """Decode a defect report and list its defects."""
    config = ctx.obj["config"]
    parser = open_parser(document, config)

    kind = parser.kind.value if parser.kind else "empty"
    console.print(
        f"[bold]defectlink[/bold] reading [cyan]{escape(document)}[/cyan] "
        f"as [cyan]{kind}[/cyan]"
    )

    for key, value in parser.scan_props.items():
        console.print(f"  [dim]{escape(key)}:[/dim] {escape(value)}")

    table = Table(title="Defects", show_lines=False)
    table.add_column("Class", style="bold")
    table.add_column("File", style="cyan")
    table.add_column("Line", justify="right")
    table.add_column("Event")
    table.add_column("Message", max_width=60)
    table.add_column("CWE", justify="right")

    for defect in parser:
        evt = defect.key_event
        table.add_row(
            escape(defect.def_class),
            escape(evt.file_name),
            str(evt.line),
            escape(evt.event),
            escape(evt.msg),
            str(defect.cwe) if defect.cwe else "",
        )

    if table.row_count:
        out.print(table)
    else:
        console.print("[green]No defects.[/green]")

    console.print(f"\nTotal defects: {parser.defect_count}")
    if parser.has_error():
        console.print("[red]Some records could not be decoded[/red]")
        sys.exit(1)
