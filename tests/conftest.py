"""Shared test fixtures for hubdeps."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import requests

from hubdeps.cli.state import CliState
from hubdeps.config import Settings
from hubdeps.core.build_args import BuildArgsLoader
from hubdeps.core.freezer import DependencyFreezer
from hubdeps.core.runner import CommandFailedError
from hubdeps.models.commands import CommandResult, CommandSpec

CHARTPRESS_YAML = """\
charts:
  - name: jupyterhub
    imagePrefix: jupyterhub/k8s-
    images:
      hub:
        contextPath: images/hub
        buildArgs:
          JUPYTERHUB_VERSION: "3.0.0"
          PIP_OVERRIDES: "--no-cache-dir"
      secret-sync:
        valuesPath: proxy.secretSync.image
"""

VALUES_YAML = """\
# Default values for the jupyterhub chart.
proxy:
  chp:
    image:
      name: jupyterhub/configurable-http-proxy
      tag: "4.5.3"
  traefik:
    image:
      name: traefik
      tag: "v2.8.4"
scheduling:
  userScheduler:
    image:
      # bump the minor version manually
      name: k8s.gcr.io/kube-scheduler
      tag: "v1.23.10"
  userPlaceholder:
    image:
      name: k8s.gcr.io/pause
      tag: "3.8"
"""

CHART_YAML = """\
apiVersion: v2
name: jupyterhub
version: 0.0.1-set.by.chartpress
appVersion: "3.0.0"
"""

REQUIREMENTS_IN = """\
# Loose constraints for the hub image; refreeze with ./dependencies freeze
jupyterhub==3.0.0
oauthenticator
kubernetes_asyncio
"""

SINGLEUSER_REQUIREMENTS = """\
jupyterhub==3.0.0
jupyterlab==3.5.0
"""


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CI and developer environment variables out of Settings."""
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
    for name in list(os.environ):
        if name.startswith("HUBDEPS_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def chart_repo(tmp_path: Path) -> Path:
    """Provide a minimal chart repository checkout."""
    (tmp_path / "jupyterhub").mkdir()
    (tmp_path / "images" / "hub").mkdir(parents=True)
    (tmp_path / "images" / "singleuser-sample").mkdir(parents=True)
    (tmp_path / "chartpress.yaml").write_text(CHARTPRESS_YAML)
    (tmp_path / "jupyterhub" / "values.yaml").write_text(VALUES_YAML)
    (tmp_path / "jupyterhub" / "Chart.yaml").write_text(CHART_YAML)
    (tmp_path / "images" / "hub" / "requirements.in").write_text(REQUIREMENTS_IN)
    (tmp_path / "images" / "hub" / "requirements.txt").write_text("jupyterhub==3.0.0\n")
    (tmp_path / "images" / "singleuser-sample" / "requirements.txt").write_text(
        SINGLEUSER_REQUIREMENTS
    )
    return tmp_path


@pytest.fixture
def settings(chart_repo: Path) -> Settings:
    """Provide Settings rooted at the temporary chart repository."""
    return Settings(repo_root=chart_repo)


# ---------------------------------------------------------------------------
# Fakes for external collaborators
# ---------------------------------------------------------------------------


class FakeRunner:
    """Records every command and answers with canned stdout.

    ``respond(fragment, stdout)`` and ``fail(fragment, code)`` match on a
    substring of the space-joined argv.
    """

    def __init__(self) -> None:
        self.calls: list[CommandSpec] = []
        self._outputs: list[tuple[str, str]] = []
        self._failures: list[tuple[str, int]] = []

    def respond(self, fragment: str, stdout: str) -> None:
        self._outputs.append((fragment, stdout))

    def fail(self, fragment: str, returncode: int) -> None:
        self._failures.append((fragment, returncode))

    def run(self, spec: CommandSpec, *, capture_output: bool = False) -> CommandResult:
        self.calls.append(spec)
        joined = " ".join(spec.argv)
        for fragment, code in self._failures:
            if fragment in joined:
                raise CommandFailedError(spec.argv, code)
        stdout = None
        if capture_output:
            stdout = next((out for frag, out in self._outputs if frag in joined), "")
        return CommandResult(argv=spec.argv, stdout=stdout)

    def calls_to(self, subcommand: str) -> list[CommandSpec]:
        """Return recorded docker calls whose first argument is *subcommand*."""
        return [spec for spec in self.calls if spec.argv[1:2] == (subcommand,)]


class FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=None)

    def json(self) -> Any:
        return self._payload


class FakeSession:
    """A ``requests.Session`` stand-in serving PyPI JSON documents.

    *payload*, when given, is served verbatim for every request.
    """

    def __init__(
        self,
        versions: dict[str, str] | None = None,
        status_code: int = 200,
        payload: Any = None,
    ) -> None:
        self.versions = versions or {}
        self.status_code = status_code
        self.payload = payload
        self.requested: list[str] = []

    def get(self, url: str, timeout: float | None = None) -> FakeResponse:
        self.requested.append(url)
        package = url.rstrip("/").split("/")[-2]
        if self.payload is not None:
            return FakeResponse(self.payload, status_code=self.status_code)
        return FakeResponse(
            {"info": {"name": package, "version": self.versions.get(package, "0")}},
            status_code=self.status_code,
        )


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def make_session() -> Callable[..., FakeSession]:
    """Factory fixture: build a FakeSession for the given versions."""
    return FakeSession


@pytest.fixture
def freezer(settings: Settings, fake_runner: FakeRunner) -> DependencyFreezer:
    """Provide a DependencyFreezer wired to the fake runner."""
    return DependencyFreezer(
        settings, fake_runner, BuildArgsLoader(settings.chartpress_file)
    )


@pytest.fixture
def make_state(
    settings: Settings, fake_runner: FakeRunner
) -> Callable[..., CliState]:
    """Factory fixture: a CliState for CliRunner.invoke(obj=...)."""

    def _factory(session: Any = None, **overrides: Any) -> CliState:
        state_settings = settings.model_copy(update=overrides) if overrides else settings
        return CliState(state_settings, runner=fake_runner, session=session)

    return _factory
