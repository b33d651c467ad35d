"""Shared pytest fixtures for atdata tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

# A CID seen on the atproto firehose (dag-cbor, sha2-256).
TEST_CID = "bafyreibfd77vb2setujncomtz3j6xswrmiuxlykora6nogxbr4arhqu2ye"
TEST_CID_HEX = "01711220251fff50ea449d12d13993ced3ebcad1622975e14e883cd71ae18f0113c29ac1"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def test_cid_bytes() -> bytes:
    return bytes.fromhex(TEST_CID_HEX)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty temp directory with no atdata config in reach.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")``.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ATDATA_CONFIG", raising=False)
    for var in ("ATDATA_CODEC__TAG_LINKS", "ATDATA_DISPLAY__BINARY", "ATDATA_DISPLAY__PAYLOAD"):
        monkeypatch.delenv(var, raising=False)
