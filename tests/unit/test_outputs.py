"""Tests for GitHub Actions step outputs."""

from __future__ import annotations

from hubdeps.models.pins import UpdateProposal
from hubdeps.watch.outputs import write_github_output


def _proposal() -> UpdateProposal:
    return UpdateProposal(
        subject="pause",
        local="3.7",
        latest="3.8",
        branch="update-image-pause",
        title="Update pause version from 3.7 to 3.8",
        body="A new pause image version has been detected, version `3.8`.",
    )


class TestWriteGithubOutput:
    def test_appends_key_value_lines(self, tmp_path):
        path = tmp_path / "output"
        path.write_text("earlier=1\n")
        write_github_output(path, _proposal(), "pause")
        lines = path.read_text().splitlines()
        assert lines[0] == "earlier=1"
        assert "pause-local=3.7" in lines
        assert "pause-latest=3.8" in lines
        assert "pause-branch=update-image-pause" in lines
        assert "pause-labels=maintenance,dependencies" in lines
