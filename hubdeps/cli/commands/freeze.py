"""``dependencies freeze`` — refreeze requirements.txt with pip-compile.

Builds the hub dependencies image (unless --no-build), then runs
pip-compile inside it with images/hub mounted, so requirements.txt is
rewritten from requirements.in on the host.
"""

from __future__ import annotations

import logging

import typer
from pydantic import ValidationError
from rich.console import Console

from hubdeps.cli.state import CliState
from hubdeps.core.runner import CommandFailedError
from hubdeps.models.options import FreezeOptions

console = Console()
logger = logging.getLogger(__name__)


def freeze_cmd(
    ctx: typer.Context,
    build: bool = typer.Option(
        True,
        "--build/--no-build",
        help="Build the dependencies image before freezing.",
    ),
    upgrade: bool = typer.Option(
        False,
        "--upgrade/--no-upgrade",
        help="Upgrade every package to the latest allowed version.",
    ),
    upgrade_package: list[str] = typer.Option(
        None,
        "--upgrade-package",
        help="Upgrade only this package. Repeat for several packages.",
    ),
) -> None:
    """Freeze images/hub/requirements.txt from images/hub/requirements.in."""
    state: CliState = ctx.obj
    try:
        options = FreezeOptions(
            build=build,
            upgrade=upgrade,
            upgrade_packages=upgrade_package or (),
        )
    except ValidationError as exc:
        console.print(f"[bold red]Invalid options:[/bold red] {exc.errors()[0]['msg']}")
        raise typer.Exit(code=2)

    try:
        state.freezer.freeze(options)
    except CommandFailedError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=exc.exit_status)

    console.print(
        f"[bold green]Froze[/bold green] {state.settings.requirements_txt_file}"
    )
