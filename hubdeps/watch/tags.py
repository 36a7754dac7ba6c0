"""Image tag discovery, selection and patching.

Tags are listed with skopeo (run from its container image so that every
registry is queried the same way), filtered down to plain ``x.y.z`` /
``vx.y.z`` versions, and ordered numerically.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from hubdeps.core.runner import CommandRunner
from hubdeps.models.commands import CommandSpec
from hubdeps.models.pins import PinnedTag, WatchedImage
from hubdeps.watch.pins import PinNotFoundError, substitute_in_file

logger = logging.getLogger(__name__)


class TagListError(ValueError):
    """Raised when skopeo output has no usable ``Tags`` list."""


def tag_pattern(patch_suffix: str = "") -> re.Pattern[str]:
    """Return the pattern for acceptable version tags.

    *patch_suffix* is appended to the patch group; ``"?"`` makes the
    patch component optional.
    """
    return re.compile(rf"v?[0-9]+\.[0-9]+(\.[0-9]+){patch_suffix}")


def version_key(tag: str) -> tuple[int, ...]:
    """Sort key: the numeric value of each dot-separated component.

    A component that is not a number on its own (``v1``) is read without
    its first character.
    """
    key = []
    for part in tag.split("."):
        try:
            key.append(int(part))
        except ValueError:
            key.append(int(part[1:]))
    return tuple(key)


def select_latest_tag(
    tags: Iterable[str],
    *,
    startswith: str = "",
    patch_suffix: str = "",
) -> str | None:
    """Return the highest version tag, or ``None`` if no tag qualifies."""
    pattern = tag_pattern(patch_suffix)
    candidates = [
        tag for tag in tags
        if pattern.fullmatch(tag) and tag.startswith(startswith)
    ]
    if not candidates:
        return None
    return sorted(candidates, key=version_key)[-1]


def list_tags_command(image: WatchedImage, *, docker: str, skopeo_image: str) -> CommandSpec:
    return CommandSpec(
        argv=(docker, "run", "--rm", skopeo_image, "list-tags", image.reference)
    )


def parse_tag_list(output: str) -> list[str]:
    """Read the ``Tags`` array from ``skopeo list-tags`` JSON output."""
    try:
        data = json.loads(output)
    except json.JSONDecodeError as exc:
        raise TagListError(f"skopeo output is not valid JSON: {exc}") from exc
    tags = data.get("Tags") if isinstance(data, dict) else None
    if not isinstance(tags, list):
        raise TagListError("skopeo output has no Tags list")
    return [str(tag) for tag in tags]


def list_remote_tags(
    runner: CommandRunner,
    image: WatchedImage,
    *,
    docker: str = "docker",
    skopeo_image: str = "quay.io/skopeo/stable",
) -> list[str]:
    """List every tag published for *image*."""
    spec = list_tags_command(image, docker=docker, skopeo_image=skopeo_image)
    result = runner.run(spec, capture_output=True)
    tags = parse_tag_list(result.stdout or "")
    logger.debug("%s: %d tags listed", image.reference, len(tags))
    return tags


def lookup_dotted(data: Any, dotted_path: str) -> Any:
    node = data
    for key in dotted_path.split("."):
        if not isinstance(node, dict) or key not in node:
            raise PinNotFoundError(f"{dotted_path!r} not found")
        node = node[key]
    return node


def read_pinned_tag(values_file: Path, image: WatchedImage) -> PinnedTag:
    """Read the tag pinned for *image* in values.yaml.

    Scalars are kept as written (``3.10`` stays ``"3.10"``, not ``3.1``).
    """
    with values_file.open(encoding="utf-8") as f:
        values = yaml.load(f, Loader=yaml.BaseLoader) or {}
    try:
        tag = lookup_dotted(values, image.values_path)
    except PinNotFoundError as exc:
        raise PinNotFoundError(f"{exc} in {values_file}") from exc
    if not isinstance(tag, str) or not tag:
        raise PinNotFoundError(f"{image.values_path!r} is empty in {values_file}")
    return PinnedTag(image=image.name, values_path=image.values_path, tag=tag)


def pinned_tag_pattern(tag: str) -> re.Pattern[str]:
    """Match ``tag: <tag>`` with double, single or no quotes."""
    return re.compile(
        rf"""(\btag:[ \t]*)(["']?){re.escape(tag)}\2(?=[ \t]*(?:#.*)?$|[ \t]*[,}}])""",
        re.MULTILINE,
    )


def patch_pinned_tag(values_file: Path, local: str, latest: str) -> int:
    """Replace every ``tag: <local>`` with ``tag: <latest>``.

    The substitution is textual so comments, formatting and each pin's
    quoting style survive.  Returns the number of replacements made.
    """
    return substitute_in_file(
        values_file,
        pinned_tag_pattern(local),
        lambda match: f"{match.group(1)}{match.group(2)}{latest}{match.group(2)}",
    )
