"""Pinned versions, watched images, and update proposals."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

UPDATE_LABELS: tuple[str, ...] = ("maintenance", "dependencies")


class PinnedTag(BaseModel):
    """An image tag pinned in values.yaml."""

    model_config = ConfigDict(frozen=True)

    image: str
    values_path: str  # dotted path, e.g. "proxy.chp.image.tag"
    tag: str


class PinnedRequirement(BaseModel):
    """A ``package==version`` constraint from a requirements file."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str

    def __str__(self) -> str:
        return f"{self.name}=={self.version}"


class OutdatedPackage(BaseModel):
    """One entry of ``pip list --outdated --format=json``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    version: str
    latest_version: str


class WatchedImage(BaseModel):
    """A container image whose pinned tag is kept current.

    ``version_patch_regexp_group_suffix`` is appended to the patch group of
    the tag pattern: ``""`` requires ``x.y.z``, ``"?"`` also accepts ``x.y``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    registry: str
    repository: str
    values_path: str
    version_startswith: str = ""
    version_patch_regexp_group_suffix: str = ""

    @property
    def reference(self) -> str:
        return f"docker://{self.registry}/{self.repository}"


class UpdateProposal(BaseModel):
    """Everything a PR-creation step needs to open an update PR."""

    model_config = ConfigDict(frozen=True)

    subject: str
    local: str
    latest: str
    branch: str
    title: str
    body: str
    labels: tuple[str, ...] = UPDATE_LABELS


# Images pinned in jupyterhub/values.yaml.
# traefik publishes x.y tags before x.y.0 exists, so the patch group stays
# mandatory for it; pause only publishes x.y tags.
DEFAULT_WATCHED_IMAGES: list[WatchedImage] = [
    WatchedImage(
        name="chp",
        registry="registry.hub.docker.com",
        repository="jupyterhub/configurable-http-proxy",
        values_path="proxy.chp.image.tag",
    ),
    WatchedImage(
        name="traefik",
        registry="registry.hub.docker.com",
        repository="library/traefik",
        values_path="proxy.traefik.image.tag",
    ),
    # Bumping kube-scheduler across minor versions needs manual work.
    WatchedImage(
        name="kube-scheduler",
        registry="k8s.gcr.io",
        repository="kube-scheduler",
        values_path="scheduling.userScheduler.image.tag",
        version_startswith="v1.23",
    ),
    WatchedImage(
        name="pause",
        registry="k8s.gcr.io",
        repository="pause",
        values_path="scheduling.userPlaceholder.image.tag",
        version_patch_regexp_group_suffix="?",
    ),
]
