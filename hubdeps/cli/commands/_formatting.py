"""Shared Rich formatting for command output."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel

from hubdeps.models.pins import UpdateProposal


def print_proposal(console: Console, proposal: UpdateProposal, *, applied: bool) -> None:
    status = (
        "[bold green]Pins updated.[/bold green]"
        if applied
        else "[bold yellow]Dry run, no files changed.[/bold yellow]"
    )
    console.print(
        Panel(
            "\n".join([
                f"[bold]{proposal.title}[/bold]",
                "",
                f"[bold]Branch:[/bold] {proposal.branch}",
                f"[bold]Labels:[/bold] {', '.join(proposal.labels)}",
                "",
                status,
            ]),
            title=f"[bold]{proposal.subject}[/bold]",
            border_style="green" if applied else "yellow",
            padding=(1, 2),
        )
    )
