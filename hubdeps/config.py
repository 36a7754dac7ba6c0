"""Runtime configuration — env-driven, one instance per process.

Every path is relative to ``repo_root`` (the chart repository checkout)
unless given as an absolute path.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration with environment variable overrides.

    All settings can be overridden via HUBDEPS_* environment variables
    or a .env file in the working directory.

    Examples
    --------
    Override via environment::

        export HUBDEPS_REPO_ROOT=/src/zero-to-jupyterhub-k8s
        export HUBDEPS_PIP_TOOLS_VERSION=6.8.0
        export HUBDEPS_LOG_LEVEL=DEBUG

    ``github_output`` also honours the ``GITHUB_OUTPUT`` variable that
    GitHub Actions sets for every step.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="HUBDEPS_",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    log_level: str = "INFO"

    # Repository layout
    repo_root: Path = Path(".")
    chartpress_path: Path = Path("chartpress.yaml")
    values_path: Path = Path("jupyterhub/values.yaml")
    chart_path: Path = Path("jupyterhub/Chart.yaml")
    image_dir: Path = Path("images/hub")
    requirements_in_name: str = "requirements.in"
    requirements_txt_name: str = "requirements.txt"
    singleuser_requirements_path: Path = Path("images/singleuser-sample/requirements.txt")

    # Dependencies image
    image_name: str = "hub"
    dependencies_tag: str = "hub-dependencies"
    pip_tools_version: str = "6.6.2"
    docker_executable: str = "docker"

    # Upstream lookups
    watched_package: str = "jupyterhub"
    pypi_url: str = "https://pypi.org/pypi"
    http_timeout_seconds: float = 30.0
    skopeo_image: str = "quay.io/skopeo/stable"

    # GitHub Actions step outputs
    github_output: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("HUBDEPS_GITHUB_OUTPUT", "GITHUB_OUTPUT", "github_output"),
    )

    def resolve(self, path: Path) -> Path:
        """Resolve *path* against ``repo_root``."""
        return path if path.is_absolute() else self.repo_root / path

    @property
    def chartpress_file(self) -> Path:
        return self.resolve(self.chartpress_path)

    @property
    def values_file(self) -> Path:
        return self.resolve(self.values_path)

    @property
    def chart_file(self) -> Path:
        return self.resolve(self.chart_path)

    @property
    def image_context(self) -> Path:
        """Build context of the hub image; also mounted for pip-compile."""
        return self.resolve(self.image_dir)

    @property
    def requirements_in_file(self) -> Path:
        return self.image_context / self.requirements_in_name

    @property
    def requirements_txt_file(self) -> Path:
        return self.image_context / self.requirements_txt_name

    @property
    def singleuser_requirements_file(self) -> Path:
        return self.resolve(self.singleuser_requirements_path)
