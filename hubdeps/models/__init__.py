"""hubdeps data models — all Pydantic v2, all frozen (immutable)."""

from hubdeps.models.commands import CommandResult, CommandSpec
from hubdeps.models.options import FreezeOptions, OutdatedOptions
from hubdeps.models.pins import (
    DEFAULT_WATCHED_IMAGES,
    UPDATE_LABELS,
    OutdatedPackage,
    PinnedRequirement,
    PinnedTag,
    UpdateProposal,
    WatchedImage,
)

__all__ = [
    # commands
    "CommandSpec",
    "CommandResult",
    # options
    "FreezeOptions",
    "OutdatedOptions",
    # pins
    "PinnedTag",
    "PinnedRequirement",
    "OutdatedPackage",
    "WatchedImage",
    "UpdateProposal",
    "UPDATE_LABELS",
    "DEFAULT_WATCHED_IMAGES",
]
