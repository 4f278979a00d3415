"""Tests for the twofa command line."""

from __future__ import annotations

import json
import re

import pytest
from click.testing import CliRunner

from twofa.cli import main
from twofa.totp import generate_totp

RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


@pytest.fixture
def runner():
    return CliRunner()


def test_secret(runner):
    result = runner.invoke(main, ["secret"])
    assert result.exit_code == 0
    assert re.fullmatch(r"[A-Z2-7]{32}", result.output.strip())


def test_code_at_timestamp(runner):
    result = runner.invoke(main, ["code", RFC_SECRET, "--at", "59"])
    assert result.exit_code == 0
    assert result.output.strip() == "287082"


def test_uri(runner):
    result = runner.invoke(main, ["uri", RFC_SECRET, "alice@example.com", "--issuer", "Acme"])
    assert result.exit_code == 0
    assert result.output.strip() == (
        f"otpauth://totp/Acme:alice%40example.com?secret={RFC_SECRET}"
        "&issuer=Acme&algorithm=SHA1&digits=6&period=30"
    )


def test_verify_valid(runner):
    result = runner.invoke(main, ["verify", RFC_SECRET, generate_totp(RFC_SECRET)])
    assert result.exit_code == 0
    assert result.output.strip() == "valid"


def test_verify_invalid(runner):
    result = runner.invoke(main, ["verify", RFC_SECRET, "not-a-code"])
    assert result.exit_code == 1
    assert result.output.strip() == "invalid"


def test_recovery_codes(runner):
    result = runner.invoke(main, ["recovery-codes", "-n", "3"])
    assert result.exit_code == 0
    lines = result.output.split()
    assert len(lines) == 3
    assert all(re.fullmatch(r"[0-9A-F]{5}-[0-9A-F]{5}", line) for line in lines)


def test_enroll(runner):
    result = runner.invoke(main, ["enroll", "alice@example.com"])
    assert result.exit_code == 0
    bundle = json.loads(result.output)
    assert set(bundle) == {"secret", "otpauth_uri", "recovery_codes"}
    assert len(bundle["recovery_codes"]) == 10


def test_config(runner):
    result = runner.invoke(main, ["config"])
    assert result.exit_code == 0
    assert "Issuer" in result.output
