"""Per-invocation objects shared by the CLI commands."""

from __future__ import annotations

from typing import Any

from hubdeps.config import Settings
from hubdeps.core.build_args import BuildArgsLoader
from hubdeps.core.freezer import DependencyFreezer
from hubdeps.core.runner import CommandRunner, SubprocessRunner


class CliState:
    """Settings plus the collaborators built from them, created once.

    Stored on the Typer context as ``ctx.obj``.  Tests pass their own
    instance (with a fake runner and HTTP session) through
    ``CliRunner.invoke(..., obj=state)``.
    """

    def __init__(
        self,
        settings: Settings,
        runner: CommandRunner | None = None,
        session: Any = None,
    ) -> None:
        self.settings = settings
        self.runner = runner or SubprocessRunner()
        self.session = session
        self.build_args = BuildArgsLoader(settings.chartpress_file)
        self.freezer = DependencyFreezer(settings, self.runner, self.build_args)
