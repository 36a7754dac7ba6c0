"""External command models — typed inputs and outputs of a shell-out."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class CommandSpec(BaseModel):
    """A single external command invocation.

    ``env`` holds extra variables layered over the calling process
    environment; it does not replace it.
    """

    model_config = ConfigDict(frozen=True)

    argv: tuple[str, ...]
    cwd: Path | None = None
    env: dict[str, str] = Field(default_factory=dict)

    def display(self) -> str:
        """Return the argv joined for log output."""
        return " ".join(self.argv)


class CommandResult(BaseModel):
    """Outcome of a completed command.

    ``stdout`` is only populated when the caller asked for capture.
    """

    model_config = ConfigDict(frozen=True)

    argv: tuple[str, ...]
    returncode: int = 0
    stdout: str | None = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0
