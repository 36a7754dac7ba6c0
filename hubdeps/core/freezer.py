"""Dependency freezer — build, freeze and outdated for the hub image.

All three operations run against the hub image's build context.  The
build produces a local ``hub-dependencies`` image; ``freeze`` runs
pip-compile inside it with the context mounted at ``/io`` so that the
resolver rewrites requirements.txt on the host; ``outdated`` runs
``pip list --outdated`` inside it and reports the result.
"""

from __future__ import annotations

import json
import logging

from pydantic import BaseModel, ConfigDict, ValidationError

from hubdeps.config import Settings
from hubdeps.core.build_args import BuildArgsLoader
from hubdeps.core.runner import CommandRunner
from hubdeps.models.commands import CommandSpec
from hubdeps.models.options import FreezeOptions, OutdatedOptions
from hubdeps.models.pins import OutdatedPackage

logger = logging.getLogger(__name__)

# Packaging tools pip always reports; upgrading them is not our business.
IGNORED_PACKAGES: frozenset[str] = frozenset({"pip", "setuptools", "wheel"})

# Shown in the header of the generated requirements.txt.
CUSTOM_COMPILE_COMMAND = "./dependencies freeze --upgrade"

CONTAINER_WORKDIR = "/io"


class OutdatedParseError(ValueError):
    """Raised when ``pip list --outdated`` output cannot be parsed."""


class OutdatedReport(BaseModel):
    """Outdated packages left after filtering, plus what was filtered."""

    model_config = ConfigDict(frozen=True)

    packages: list[OutdatedPackage] = []
    ignored: list[OutdatedPackage] = []

    @property
    def has_outdated(self) -> bool:
        return bool(self.packages)


def parse_outdated(output: str) -> list[OutdatedPackage]:
    """Parse the JSON printed by ``pip list --format=json --outdated``."""
    try:
        data = json.loads(output or "[]")
    except json.JSONDecodeError as exc:
        raise OutdatedParseError(f"pip list output is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise OutdatedParseError("pip list output is not a JSON list")
    try:
        return [OutdatedPackage.model_validate(entry) for entry in data]
    except ValidationError as exc:
        raise OutdatedParseError(f"Unexpected pip list entry: {exc}") from exc


def filter_outdated(packages: list[OutdatedPackage]) -> OutdatedReport:
    """Split *packages* into reportable and ignored packaging tools."""
    return OutdatedReport(
        packages=[p for p in packages if p.name.lower() not in IGNORED_PACKAGES],
        ignored=[p for p in packages if p.name.lower() in IGNORED_PACKAGES],
    )


class DependencyFreezer:
    """Runs the build / freeze / outdated operations.

    Parameters
    ----------
    settings:
        Paths and constants for this run.
    runner:
        Executes the docker commands.
    build_args:
        Loader for the hub image's build arguments.
    """

    def __init__(
        self,
        settings: Settings,
        runner: CommandRunner,
        build_args: BuildArgsLoader,
    ) -> None:
        self._settings = settings
        self._runner = runner
        self._build_args = build_args

    # ------------------------------------------------------------------
    # Command construction
    # ------------------------------------------------------------------

    def build_command(self) -> CommandSpec:
        s = self._settings
        build_args = {
            **self._build_args.get(s.image_name),
            "PIP_TOOLS_VERSION": s.pip_tools_version,
        }
        argv = [s.docker_executable, "build", "--tag", s.dependencies_tag]
        for key, value in build_args.items():
            argv.extend(["--build-arg", f"{key}={value}"])
        argv.append(str(s.image_context))
        return CommandSpec(argv=tuple(argv))

    def freeze_command(self, options: FreezeOptions) -> CommandSpec:
        s = self._settings
        argv = [
            s.docker_executable,
            "run",
            "--rm",
            f"--env=CUSTOM_COMPILE_COMMAND={CUSTOM_COMPILE_COMMAND}",
            "--user=root",
            f"--volume={s.image_context.resolve()}:{CONTAINER_WORKDIR}",
            f"--workdir={CONTAINER_WORKDIR}",
            s.dependencies_tag,
            "pip-compile",
            *options.pip_compile_args(),
        ]
        return CommandSpec(argv=tuple(argv))

    def outdated_command(self) -> CommandSpec:
        s = self._settings
        argv = [
            s.docker_executable,
            "run",
            "--rm",
            s.dependencies_tag,
            "pip",
            "list",
            "--format=json",
            "--outdated",
        ]
        return CommandSpec(argv=tuple(argv))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def build_image(self) -> None:
        """Build the dependencies image."""
        logger.info("Building %s image", self._settings.dependencies_tag)
        self._runner.run(self.build_command())

    def freeze(self, options: FreezeOptions) -> None:
        """Rewrite requirements.txt from requirements.in with pip-compile."""
        if options.build:
            self.build_image()
        logger.info(
            "Freezing dependencies with pip-compile into %s",
            self._settings.requirements_txt_file,
        )
        self._runner.run(self.freeze_command(options))

    def outdated(self, options: OutdatedOptions) -> OutdatedReport:
        """Return the outdated packages installed in the dependencies image."""
        if options.build:
            self.build_image()
        logger.info("Listing outdated packages with pip list")
        result = self._runner.run(self.outdated_command(), capture_output=True)
        report = filter_outdated(parse_outdated(result.stdout or ""))
        if report.ignored:
            logger.debug(
                "Ignoring outdated packaging tools: %s",
                ", ".join(p.name for p in report.ignored),
            )
        return report
