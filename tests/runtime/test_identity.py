"""Tests for host identity providers."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from boxrun.runtime.identity import fixed_identity, no_identity, posix_identity


class TestPosixIdentity:
    @pytest.mark.skipif(not hasattr(os, "geteuid"), reason="POSIX identity only")
    def test_effective_ids(self) -> None:
        assert posix_identity() == f"{os.geteuid()}:{os.getegid()}"

    def test_absent_without_posix_ids(self) -> None:
        with patch("boxrun.runtime.identity.os") as mock_os:
            del mock_os.geteuid
            del mock_os.getegid
            assert posix_identity() is None


def test_no_identity() -> None:
    assert no_identity() is None


def test_fixed_identity() -> None:
    provider = fixed_identity(501, 20)
    assert provider() == "501:20"
