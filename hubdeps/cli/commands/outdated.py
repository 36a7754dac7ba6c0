"""``dependencies outdated`` — list outdated packages in the hub image.

Purely informational: nothing is written and the exit code is zero
whether or not anything is outdated.  Whether a newer release is allowed
by requirements.in is left to pip-compile; this only lists raw pairs.
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console

from hubdeps.cli.state import CliState
from hubdeps.core.freezer import OutdatedParseError, OutdatedReport
from hubdeps.core.runner import CommandFailedError
from hubdeps.models.options import OutdatedOptions

console = Console()
logger = logging.getLogger(__name__)


def print_report(report: OutdatedReport, out: Console | None = None) -> None:
    out = out or console
    for package in report.packages:
        out.print(
            f"{package.name}: {package.version} -> {package.latest_version}",
            highlight=False,
        )

    if report.has_outdated:
        out.print()
        out.print(
            f"[bold yellow]Found {len(report.packages)} outdated dependencies.[/bold yellow]"
        )
        out.print(
            "Some may still be held back by the pins in requirements.in.",
            highlight=False,
        )
        out.print("To upgrade everything:", highlight=False)
        out.print("    ./dependencies freeze --upgrade", highlight=False)
        out.print("To upgrade specific packages:", highlight=False)
        out.print("    ./dependencies freeze --upgrade-package NAME", highlight=False)
    else:
        out.print("[bold green]All dependencies are up-to-date![/bold green]")


def outdated_cmd(
    ctx: typer.Context,
    build: bool = typer.Option(
        True,
        "--build/--no-build",
        help="Build the dependencies image before checking.",
    ),
) -> None:
    """List outdated packages in the hub dependencies image."""
    state: CliState = ctx.obj
    try:
        report = state.freezer.outdated(OutdatedOptions(build=build))
    except CommandFailedError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=exc.exit_status)
    except OutdatedParseError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1)

    print_report(report)
