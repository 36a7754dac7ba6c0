"""GitHub Actions step outputs for update proposals."""

from __future__ import annotations

import logging
from pathlib import Path

from hubdeps.models.pins import UpdateProposal

logger = logging.getLogger(__name__)


def proposal_outputs(proposal: UpdateProposal, prefix: str) -> dict[str, str]:
    return {
        f"{prefix}-local": proposal.local,
        f"{prefix}-latest": proposal.latest,
        f"{prefix}-branch": proposal.branch,
        f"{prefix}-title": proposal.title,
        f"{prefix}-body": proposal.body,
        f"{prefix}-labels": ",".join(proposal.labels),
    }


def write_github_output(path: Path, proposal: UpdateProposal, prefix: str) -> None:
    """Append ``key=value`` lines for *proposal* to the step output file."""
    lines = [f"{key}={value}" for key, value in proposal_outputs(proposal, prefix).items()]
    with path.open("a", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    logger.debug("Wrote %d outputs to %s", len(lines), path)
