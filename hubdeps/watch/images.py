"""Watch image tags pinned in values.yaml against their registries."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from hubdeps.config import Settings
from hubdeps.core.runner import CommandFailedError, CommandRunner
from hubdeps.models.pins import UpdateProposal, WatchedImage
from hubdeps.watch.pins import PinNotFoundError
from hubdeps.watch.tags import (
    TagListError,
    list_remote_tags,
    patch_pinned_tag,
    read_pinned_tag,
    select_latest_tag,
)

logger = logging.getLogger(__name__)


class ImageFailure(BaseModel):
    """An image whose check or patch failed."""

    model_config = ConfigDict(frozen=True)

    image: str
    message: str
    exit_status: int = 1


class ImageWatchResult(BaseModel):
    """Outcome of one pass over the watched images.

    Each image is independent: a failure never hides the proposals of
    images that were already checked and patched.
    """

    model_config = ConfigDict(frozen=True)

    proposals: list[UpdateProposal] = []
    failures: list[ImageFailure] = []

    @property
    def exit_status(self) -> int:
        """Exit status of the first failure, or 0."""
        return self.failures[0].exit_status if self.failures else 0


def image_proposal(image: WatchedImage, local: str, latest: str) -> UpdateProposal:
    return UpdateProposal(
        subject=image.name,
        local=local,
        latest=latest,
        branch=f"update-image-{image.name}",
        title=f"Update {image.repository} version from {local} to {latest}",
        body=(
            f"A new {image.repository} image version has been detected, "
            f"version `{latest}`."
        ),
    )


class ImageWatcher:
    """Compares pinned image tags with the latest published tags.

    Usage
    -----
    >>> watcher = ImageWatcher(settings, SubprocessRunner())
    >>> proposal = watcher.check(image)
    >>> if proposal:
    ...     watcher.apply(proposal)
    """

    def __init__(self, settings: Settings, runner: CommandRunner) -> None:
        self._settings = settings
        self._runner = runner

    def latest_tag(self, image: WatchedImage) -> str | None:
        tags = list_remote_tags(
            self._runner,
            image,
            docker=self._settings.docker_executable,
            skopeo_image=self._settings.skopeo_image,
        )
        return select_latest_tag(
            tags,
            startswith=image.version_startswith,
            patch_suffix=image.version_patch_regexp_group_suffix,
        )

    def check(self, image: WatchedImage) -> UpdateProposal | None:
        """Return a proposal if *image* has a newer tag, else ``None``."""
        local = read_pinned_tag(self._settings.values_file, image).tag
        latest = self.latest_tag(image)
        if latest is None:
            logger.warning("%s: no tag matches the version filter", image.reference)
            return None
        if latest == local:
            logger.info("%s: %s is up to date", image.name, local)
            return None
        logger.info("%s: %s -> %s", image.name, local, latest)
        return image_proposal(image, local, latest)

    def apply(self, proposal: UpdateProposal) -> int:
        """Patch values.yaml for *proposal*; returns the replacement count.

        Raises ``PinNotFoundError`` if the pinned tag text is not found,
        since nothing was actually updated.
        """
        count = patch_pinned_tag(
            self._settings.values_file, proposal.local, proposal.latest
        )
        if not count:
            raise PinNotFoundError(
                f"Pinned tag {proposal.local!r} not found in {self._settings.values_file}"
            )
        return count

    def run(
        self,
        images: Iterable[WatchedImage],
        *,
        dry_run: bool = False,
    ) -> ImageWatchResult:
        """Check every image, patching values.yaml unless *dry_run*.

        A failing image is logged and recorded; the remaining images are
        still checked.
        """
        proposals: list[UpdateProposal] = []
        failures: list[ImageFailure] = []
        for image in images:
            try:
                proposal = self.check(image)
                if proposal is not None and not dry_run:
                    self.apply(proposal)
            except CommandFailedError as exc:
                logger.error("%s: %s", image.name, exc)
                failures.append(
                    ImageFailure(image=image.name, message=str(exc), exit_status=exc.exit_status)
                )
                continue
            except (PinNotFoundError, TagListError) as exc:
                logger.error("%s: %s", image.name, exc)
                failures.append(ImageFailure(image=image.name, message=str(exc)))
                continue
            if proposal is not None:
                proposals.append(proposal)
        return ImageWatchResult(proposals=proposals, failures=failures)
