"""Tests for BuildArgsLoader — chartpress.yaml lookup and caching."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from hubdeps.core import build_args as build_args_module
from hubdeps.core.build_args import BuildArgsLoader, UnknownImageError


class TestBuildArgsLoader:
    def test_reads_build_args_for_image(self, settings):
        loader = BuildArgsLoader(settings.chartpress_file)
        assert loader.get("hub") == {
            "JUPYTERHUB_VERSION": "3.0.0",
            "PIP_OVERRIDES": "--no-cache-dir",
        }

    def test_image_without_build_args_is_empty(self, settings):
        loader = BuildArgsLoader(settings.chartpress_file)
        assert loader.get("secret-sync") == {}

    def test_unknown_image_raises(self, settings):
        loader = BuildArgsLoader(settings.chartpress_file)
        with pytest.raises(UnknownImageError):
            loader.get("singleuser")

    def test_unknown_image_is_a_key_error(self, settings):
        loader = BuildArgsLoader(settings.chartpress_file)
        with pytest.raises(KeyError):
            loader.get("nope")

    def test_values_are_stringified(self, tmp_path: Path):
        path = tmp_path / "chartpress.yaml"
        path.write_text(
            "charts:\n  - images:\n      hub:\n        buildArgs:\n          RETRIES: 3\n"
        )
        assert BuildArgsLoader(path).get("hub") == {"RETRIES": "3"}


class TestBuildArgsMemoization:
    """Repeated lookups must not re-read chartpress.yaml."""

    def test_same_object_returned(self, settings):
        loader = BuildArgsLoader(settings.chartpress_file)
        first = loader.get("hub")
        second = loader.get("hub")
        assert first is second

    def test_file_parsed_once(self, settings, monkeypatch):
        calls: list[object] = []
        real_safe_load = yaml.safe_load

        def counting_safe_load(stream):
            calls.append(stream)
            return real_safe_load(stream)

        monkeypatch.setattr(build_args_module.yaml, "safe_load", counting_safe_load)
        loader = BuildArgsLoader(settings.chartpress_file)
        loader.get("hub")
        loader.get("hub")
        loader.get("secret-sync")
        assert len(calls) == 1

    def test_edits_after_first_lookup_are_not_seen(self, settings):
        loader = BuildArgsLoader(settings.chartpress_file)
        before = loader.get("hub")
        settings.chartpress_file.write_text("charts: []\n")
        assert loader.get("hub") == before

    def test_separate_loaders_do_not_share_cache(self, settings):
        first = BuildArgsLoader(settings.chartpress_file).get("hub")
        second = BuildArgsLoader(settings.chartpress_file).get("hub")
        assert first == second
        assert first is not second
