"""Tests for FreezeOptions / OutdatedOptions validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from hubdeps.models.options import FreezeOptions, OutdatedOptions


class TestFreezeOptions:
    def test_defaults(self):
        options = FreezeOptions()
        assert options.build is True
        assert options.upgrade is False
        assert options.upgrade_packages == ()

    def test_no_upgrade_flags_by_default(self):
        assert FreezeOptions().pip_compile_args() == []

    def test_upgrade_flag(self):
        assert FreezeOptions(upgrade=True).pip_compile_args() == ["--upgrade"]

    def test_upgrade_packages_keep_order_and_duplicates(self):
        options = FreezeOptions(upgrade_packages=["foo", "bar", "foo"])
        assert options.pip_compile_args() == [
            "--upgrade-package", "foo",
            "--upgrade-package", "bar",
            "--upgrade-package", "foo",
        ]

    def test_upgrade_and_packages_are_unioned(self):
        options = FreezeOptions(upgrade=True, upgrade_packages=["foo"])
        assert options.pip_compile_args() == ["--upgrade", "--upgrade-package", "foo"]

    def test_package_names_are_stripped(self):
        assert FreezeOptions(upgrade_packages=[" tornado "]).upgrade_packages == ("tornado",)

    def test_empty_package_name_rejected(self):
        with pytest.raises(ValidationError):
            FreezeOptions(upgrade_packages=["foo", "  "])

    def test_none_means_no_packages(self):
        assert FreezeOptions(upgrade_packages=None).upgrade_packages == ()

    def test_frozen(self):
        options = FreezeOptions()
        with pytest.raises(ValidationError):
            options.upgrade = True  # type: ignore[misc]


class TestOutdatedOptions:
    def test_defaults(self):
        assert OutdatedOptions().build is True
