"""``dependencies watch-package`` — follow the latest jupyterhub release.

Compares the ``jupyterhub==`` pin in images/hub/requirements.in with
PyPI.  On a new release the pin is bumped in requirements.in, the
singleuser sample image and Chart.yaml's appVersion, and
requirements.txt is refrozen with ``--upgrade``.
"""

from __future__ import annotations

import logging

import requests
import typer
from rich.console import Console

from hubdeps.cli.commands._formatting import print_proposal
from hubdeps.cli.state import CliState
from hubdeps.core.runner import CommandFailedError
from hubdeps.watch.outputs import write_github_output
from hubdeps.watch.package import PackageWatcher
from hubdeps.watch.pins import PinNotFoundError

console = Console()
logger = logging.getLogger(__name__)


def watch_package_cmd(
    ctx: typer.Context,
    build: bool = typer.Option(
        True,
        "--build/--no-build",
        help="Build the dependencies image before refreezing.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Report a new release without editing or refreezing.",
    ),
) -> None:
    """Bump the jupyterhub pin to the latest PyPI release and refreeze."""
    state: CliState = ctx.obj
    watcher = PackageWatcher(state.settings, state.freezer, session=state.session)

    try:
        proposal = watcher.run(build=build, dry_run=dry_run)
    except CommandFailedError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=exc.exit_status)
    except PinNotFoundError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1)
    except requests.RequestException as exc:
        logger.error("PyPI lookup for %s failed: %s", watcher.package, exc)
        raise typer.Exit(code=1)

    if proposal is None:
        console.print(
            f"[bold green]{watcher.package} is already at the latest release.[/bold green]"
        )
        return

    print_proposal(console, proposal, applied=not dry_run)
    if state.settings.github_output is not None:
        write_github_output(state.settings.github_output, proposal, proposal.subject)
