"""Watch the jupyterhub pin in the hub image against PyPI.

A new release is rolled out by rewriting the pin in requirements.in, in
the singleuser sample image, and the chart's ``appVersion``, then
refreezing requirements.txt.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import requests

from hubdeps.config import Settings
from hubdeps.core.freezer import DependencyFreezer
from hubdeps.models.options import FreezeOptions
from hubdeps.models.pins import PinnedRequirement, UpdateProposal
from hubdeps.watch.pins import PinNotFoundError, replace_in_file

logger = logging.getLogger(__name__)


class IndexResponseError(requests.RequestException):
    """Raised when the package index answers without a usable version."""


def read_pinned_requirement(requirements_file: Path, package: str) -> PinnedRequirement:
    """Return the first ``<package>==<version>`` pin in *requirements_file*."""
    prefix = f"{package}=="
    for line in requirements_file.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped.startswith(prefix):
            continue
        version = stripped[len(prefix):].split("#", 1)[0].split(";", 1)[0].strip()
        if version:
            return PinnedRequirement(name=package, version=version)
    raise PinNotFoundError(f"No {prefix} pin in {requirements_file}")


def fetch_latest_version(
    package: str,
    *,
    session: Any = None,
    index_url: str = "https://pypi.org/pypi",
    timeout: float = 30.0,
) -> str:
    """Return ``info.version`` from the PyPI JSON API for *package*."""
    http = session or requests
    response = http.get(f"{index_url.rstrip('/')}/{package}/json", timeout=timeout)
    response.raise_for_status()
    try:
        version = response.json()["info"]["version"]
    except (ValueError, KeyError, TypeError) as exc:
        raise IndexResponseError(
            f"No info.version in the index response for {package}"
        ) from exc
    if not version:
        raise IndexResponseError(f"Empty info.version for {package}")
    return str(version)


def package_proposal(package: str, local: str, latest: str) -> UpdateProposal:
    return UpdateProposal(
        subject=package,
        local=local,
        latest=latest,
        branch=f"update-{package}",
        title=f"Update {package} from {local} to {latest}",
        body=f"A new {package} version has been detected, version `{latest}`.",
    )


class PackageWatcher:
    """Keeps the watched package pin in step with its latest release.

    Parameters
    ----------
    settings:
        Repository paths, watched package name and PyPI location.
    freezer:
        Used to refreeze requirements.txt after a bump.
    session:
        Object with a ``requests``-style ``get``; defaults to a new
        ``requests.Session``.
    """

    def __init__(
        self,
        settings: Settings,
        freezer: DependencyFreezer,
        session: Any = None,
    ) -> None:
        self._settings = settings
        self._freezer = freezer
        self._session = session or requests.Session()

    @property
    def package(self) -> str:
        return self._settings.watched_package

    def check(self) -> UpdateProposal | None:
        """Return a proposal if PyPI has a different version, else ``None``."""
        s = self._settings
        local = read_pinned_requirement(s.requirements_in_file, self.package).version
        latest = fetch_latest_version(
            self.package,
            session=self._session,
            index_url=s.pypi_url,
            timeout=s.http_timeout_seconds,
        )
        if latest == local:
            logger.info("%s %s is the latest release", self.package, local)
            return None
        logger.info("%s: %s -> %s", self.package, local, latest)
        return package_proposal(self.package, local, latest)

    def bump_pins(self, proposal: UpdateProposal) -> None:
        """Rewrite the pin in requirements.in, the singleuser sample and Chart.yaml."""
        s = self._settings
        old_pin = f"{self.package}=={proposal.local}"
        new_pin = f"{self.package}=={proposal.latest}"
        replace_in_file(s.requirements_in_file, old_pin, new_pin)
        replace_in_file(s.singleuser_requirements_file, old_pin, new_pin)
        replace_in_file(
            s.chart_file,
            f'appVersion: "{proposal.local}"',
            f'appVersion: "{proposal.latest}"',
        )

    def run(self, *, build: bool = True, dry_run: bool = False) -> UpdateProposal | None:
        """Check PyPI and, on a new release, bump the pins and refreeze."""
        proposal = self.check()
        if proposal is None or dry_run:
            return proposal
        self.bump_pins(proposal)
        self._freezer.freeze(FreezeOptions(build=build, upgrade=True))
        return proposal
