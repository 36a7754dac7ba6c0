"""Upstream watchers for pinned image tags and the jupyterhub pin."""

from hubdeps.watch.images import ImageWatchResult, ImageWatcher
from hubdeps.watch.package import PackageWatcher
from hubdeps.watch.pins import PinNotFoundError
from hubdeps.watch.tags import TagListError, select_latest_tag

__all__ = [
    "ImageWatchResult",
    "ImageWatcher",
    "PackageWatcher",
    "PinNotFoundError",
    "TagListError",
    "select_latest_tag",
]
