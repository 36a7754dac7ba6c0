"""``dependencies watch-images`` — bump image tags pinned in values.yaml.

For each watched image, lists the registry's tags with skopeo, picks the
highest version tag that passes the image's filter, and rewrites the
pinned tag in values.yaml when it differs.
"""

from __future__ import annotations

import typer
from rich.console import Console

from hubdeps.cli.commands._formatting import print_proposal
from hubdeps.cli.state import CliState
from hubdeps.models.pins import DEFAULT_WATCHED_IMAGES, WatchedImage
from hubdeps.watch.images import ImageWatcher
from hubdeps.watch.outputs import write_github_output

console = Console()


def _select_images(names: list[str] | None) -> list[WatchedImage]:
    if not names:
        return list(DEFAULT_WATCHED_IMAGES)
    by_name = {image.name: image for image in DEFAULT_WATCHED_IMAGES}
    unknown = [name for name in names if name not in by_name]
    if unknown:
        console.print(
            f"[bold red]Unknown image(s):[/bold red] {', '.join(unknown)} "
            f"(known: {', '.join(by_name)})"
        )
        raise typer.Exit(code=2)
    return [by_name[name] for name in names]


def watch_images_cmd(
    ctx: typer.Context,
    image: list[str] = typer.Option(
        None,
        "--image",
        "-i",
        help="Only check this image. Repeat for several images.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Report newer tags without editing values.yaml.",
    ),
) -> None:
    """Update image tags pinned in jupyterhub/values.yaml."""
    state: CliState = ctx.obj
    images = _select_images(image)
    watcher = ImageWatcher(state.settings, state.runner)

    result = watcher.run(images, dry_run=dry_run)

    for proposal in result.proposals:
        print_proposal(console, proposal, applied=not dry_run)
        if state.settings.github_output is not None:
            write_github_output(state.settings.github_output, proposal, proposal.subject)

    if result.failures:
        for failure in result.failures:
            console.print(
                f"[bold red]{failure.image}:[/bold red] {failure.message}",
                highlight=False,
            )
        raise typer.Exit(code=result.exit_status)

    if not result.proposals:
        console.print("[bold green]All image tags are up-to-date![/bold green]")
