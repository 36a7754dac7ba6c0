"""In-place text edits of pinned versions.

Pins are rewritten textually rather than by re-dumping YAML so that
comments, key order and quoting survive.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)


class PinNotFoundError(LookupError):
    """Raised when a pinned tag or requirement is missing from its file."""


def replace_in_file(path: Path, old: str, new: str) -> int:
    """Replace all occurrences of *old* in *path*, returning the count."""
    text = path.read_text(encoding="utf-8")
    count = text.count(old)
    if count:
        path.write_text(text.replace(old, new), encoding="utf-8")
        logger.info("%s: replaced %r with %r (%d)", path, old, new, count)
    else:
        logger.warning("%s: %r not found, nothing replaced", path, old)
    return count


def substitute_in_file(
    path: Path,
    pattern: re.Pattern[str],
    replacement: str | Callable[[re.Match[str]], str],
) -> int:
    """Apply ``pattern.subn(replacement, ...)`` to *path*, returning the count."""
    text = path.read_text(encoding="utf-8")
    new_text, count = pattern.subn(replacement, text)
    if count:
        path.write_text(new_text, encoding="utf-8")
        logger.info("%s: %d substitution(s) of %r", path, count, pattern.pattern)
    else:
        logger.warning("%s: %r not found, nothing replaced", path, pattern.pattern)
    return count
