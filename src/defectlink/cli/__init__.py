"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from defectlink import __version__
from defectlink.config import DefectLinkConfig
from defectlink.paths import load_path_filter


@click.group()
@click.version_option(version=__version__, prog_name="defectlink")
@click.option(
    "--path-filters",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML file with extra path normalization rules.",
)
@click.option("--silent", "-s", is_flag=True, help="Do not report malformed records.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(
    ctx: click.Context,
    path_filters: str | None,
    silent: bool,
    verbose: bool,
) -> None:
    """defectlink — decode static-analysis reports and link defects to IDs."""
    config = DefectLinkConfig.load()
    if path_filters:
        config.path_filter_file = Path(path_filters)
    config.silent = config.silent or silent
    config.verbose = verbose

    ctx.ensure_object(dict)
    ctx.obj["config"] = config

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        ctx.obj["normalize"] = load_path_filter(config.path_filter_file)
    except (OSError, ValueError) as e:
        raise click.BadParameter(str(e), param_hint="--path-filters") from e


def _register_commands() -> None:
    from defectlink.cli.link import link  # noqa: F811
    from defectlink.cli.parse import parse  # noqa: F811

    main.add_command(parse)
    main.add_command(link)


_register_commands()
