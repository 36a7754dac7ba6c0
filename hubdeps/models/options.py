"""Validated option sets for the ``freeze`` and ``outdated`` operations.

CLI flags are parsed into these models before dispatch so that the
freezer only ever sees normalized values.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

logger = logging.getLogger(__name__)


class OutdatedOptions(BaseModel):
    """Options for ``dependencies outdated``.

    build:
        Build the dependencies image first (default ``True``).
    """

    model_config = ConfigDict(frozen=True)

    build: bool = True


class FreezeOptions(BaseModel):
    """Options for ``dependencies freeze``.

    build:
        Build the dependencies image first (default ``True``).
    upgrade:
        Pass ``--upgrade`` to pip-compile (default ``False``).
    upgrade_packages:
        Names passed as repeated ``--upgrade-package`` flags, in the given
        order and without deduplication (default empty).
    """

    model_config = ConfigDict(frozen=True)

    build: bool = True
    upgrade: bool = False
    upgrade_packages: tuple[str, ...] = ()

    @field_validator("upgrade_packages", mode="before")
    @classmethod
    def _normalize_packages(cls, value: object) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            value = (value,)
        names = tuple(str(name).strip() for name in value)  # type: ignore[union-attr]
        if any(not name for name in names):
            raise ValueError("upgrade package names must not be empty")
        return names

    @model_validator(mode="after")
    def _warn_on_combined_upgrade(self) -> FreezeOptions:
        if self.upgrade and self.upgrade_packages:
            logger.warning(
                "--upgrade already upgrades every package; "
                "--upgrade-package %s is passed through as well",
                " ".join(self.upgrade_packages),
            )
        return self

    def pip_compile_args(self) -> list[str]:
        """Return the upgrade flags for pip-compile."""
        args: list[str] = []
        if self.upgrade:
            args.append("--upgrade")
        for name in self.upgrade_packages:
            args.extend(["--upgrade-package", name])
        return args
