"""Build-argument lookup for images defined in chartpress.yaml.

chartpress.yaml lists the chart's images under ``charts[0].images``; each
image may carry a ``buildArgs`` mapping that is passed verbatim to
``docker build``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


class UnknownImageError(KeyError):
    """Raised when an image name is not defined in chartpress.yaml."""


class BuildArgsLoader:
    """Reads image build arguments, parsing the file at most once.

    One loader is created per CLI invocation and handed to whatever needs
    build arguments.  The parsed file and each image's mapping are cached
    for the loader's lifetime and never invalidated, so the file is
    assumed not to change during a run.  Callers must treat the returned
    mappings as read-only.
    """

    def __init__(self, chartpress_file: Path) -> None:
        self._path = chartpress_file
        self._config: dict[str, Any] | None = None
        self._cache: dict[str, dict[str, str]] = {}

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if self._config is None:
            logger.debug("Parsing %s", self._path)
            with self._path.open(encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
        return self._config

    def get(self, image_name: str) -> dict[str, str]:
        """Return the ``buildArgs`` of *image_name* (empty if it has none)."""
        if image_name in self._cache:
            return self._cache[image_name]

        config = self._load()
        try:
            images = config["charts"][0]["images"]
            image = images[image_name]
        except (KeyError, IndexError, TypeError) as exc:
            raise UnknownImageError(
                f"Image {image_name!r} not found in {self._path}"
            ) from exc

        raw = (image or {}).get("buildArgs") or {}
        build_args = {str(key): str(value) for key, value in raw.items()}
        self._cache[image_name] = build_args
        return build_args
