"""Main Typer application — registers all CLI commands.

Entry point: ``dependencies`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

from pathlib import Path

import typer

from hubdeps.cli.commands.freeze import freeze_cmd
from hubdeps.cli.commands.outdated import outdated_cmd
from hubdeps.cli.commands.watch_images import watch_images_cmd
from hubdeps.cli.commands.watch_package import watch_package_cmd
from hubdeps.cli.state import CliState
from hubdeps.config import Settings
from hubdeps.log import configure_logging

app = typer.Typer(
    name="dependencies",
    help="Manage the JupyterHub chart's pinned dependencies.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    repo_root: Path = typer.Option(
        None,
        "--repo-root",
        "-C",
        help="Chart repository checkout (default: HUBDEPS_REPO_ROOT or cwd).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug output, including every command run.",
    ),
) -> None:
    """Load settings and set up logging once per invocation."""
    if ctx.obj is None:
        settings = Settings(repo_root=repo_root) if repo_root else Settings()
        ctx.obj = CliState(settings)
    state: CliState = ctx.obj
    configure_logging("DEBUG" if verbose else state.settings.log_level)


# Register subcommands
app.command(name="freeze", help="Refreeze images/hub/requirements.txt.")(freeze_cmd)
app.command(name="outdated", help="List outdated packages in the hub image.")(outdated_cmd)
app.command(name="watch-images", help="Bump image tags pinned in values.yaml.")(watch_images_cmd)
app.command(name="watch-package", help="Bump the jupyterhub pin from PyPI.")(watch_package_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
