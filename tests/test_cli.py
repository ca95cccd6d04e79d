"""Tests for the seq-client command line."""

import json

import pytest
from typer.testing import CliRunner

from seq_client.cli import main
from seq_client.data.loader import ENV_OVERRIDES
from seq_client.rpc import RPCRemoteError, RPCTransportError

runner = CliRunner()

SEQ_ASSET = {
    "symbol": "U0VR",
    "decimals": 6,
    "metadata": "bmF0aXZl",
    "supply": 10_000_000_000,
    "owner": "seq1owner",
    "warp": False,
}


@pytest.fixture(autouse=True)
def cli_client(monkeypatch, client):
    """Route every command to the fake-backed client with a clean environment."""
    for var in ENV_OVERRIDES:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(main, "_build_client", lambda config: client)
    return client


def test_tx_found(requester):
    """Test showing a known transaction."""
    requester.add("tx", {"timestamp": 1_700_000_000_000, "success": True, "fee": 42})

    result = runner.invoke(main.app, ["tx", "deadbeef"])

    assert result.exit_code == 0
    assert "1700000000000" in result.output
    assert "42" in result.output


def test_tx_not_found(requester):
    """Test showing an unknown transaction."""
    requester.add("tx", RPCRemoteError("tx not found"))

    result = runner.invoke(main.app, ["tx", "deadbeef"])

    assert result.exit_code == 0
    assert "deadbeef not found" in result.output


def test_tx_json(requester):
    """Test JSON output."""
    requester.add("tx", RPCRemoteError("tx not found"))

    result = runner.invoke(main.app, ["tx", "deadbeef", "--format", "json"])

    assert result.exit_code == 0
    assert json.loads(result.output) == {"found": False, "success": False, "timestamp": -1, "fee": 0}


def test_asset_table(requester):
    """Test showing asset metadata."""
    requester.add("asset", SEQ_ASSET)

    result = runner.invoke(main.app, ["asset", "A1"])

    assert result.exit_code == 0
    assert "SEQ" in result.output
    assert "10000.000000" in result.output
    assert "seq1owner" in result.output


def test_asset_missing(requester):
    """Test showing an unknown asset."""
    requester.add("asset", RPCRemoteError("asset not found"))

    result = runner.invoke(main.app, ["asset", "A9"])

    assert result.exit_code == 0
    assert "A9 does not exist" in result.output


def test_balance(requester):
    """Test showing a formatted balance."""
    requester.add("asset", SEQ_ASSET)
    requester.add("balance", {"amount": 4_000_000})

    result = runner.invoke(main.app, ["balance", "addr1", "A1"])

    assert result.exit_code == 0
    assert "4.000000 SEQ" in result.output


def test_window(requester):
    """Test showing the accepted block window."""
    requester.add("getAcceptedBlockWindow", 128)

    result = runner.invoke(main.app, ["window"])

    assert result.exit_code == 0
    assert "128" in result.output


def test_headers(requester):
    """Test listing block headers."""
    requester.add(
        "getblockheadersbyheight",
        {"blocks": [{"id": "b1", "timestamp": 1_000, "l1_head": 18, "height": 5}]},
    )

    result = runner.invoke(main.app, ["headers", "5"])

    assert result.exit_code == 0
    assert "b1" in result.output
    assert requester.calls[0][1] == {"height": 5, "end": -1}


def test_wait_balance(requester):
    """Test waiting for a balance given in whole units."""
    requester.add("asset", SEQ_ASSET)
    requester.add("balance", {"amount": 0}, {"amount": 5_000_000})

    result = runner.invoke(main.app, ["wait-balance", "addr1", "A1", "5"])

    assert result.exit_code == 0
    assert "holds 5 SEQ" in result.output
    assert requester.count("balance") == 2


def test_wait_balance_bad_amount(requester):
    """Test rejecting an amount with too many decimal places."""
    requester.add("asset", SEQ_ASSET)

    result = runner.invoke(main.app, ["wait-balance", "addr1", "A1", "0.0000001"])

    assert result.exit_code == 1
    assert requester.count("balance") == 0


def test_wait_tx_failed(requester):
    """Test that a failed transaction exits with status 2."""
    requester.add("tx", RPCRemoteError("tx not found"), {"timestamp": 5, "success": False, "fee": 3})

    result = runner.invoke(main.app, ["wait-tx", "deadbeef"])

    assert result.exit_code == 2
    assert "failed" in result.output


def test_wait_tx_succeeded(requester):
    """Test waiting for a successful transaction."""
    requester.add("tx", {"timestamp": 5, "success": True, "fee": 3})

    result = runner.invoke(main.app, ["wait-tx", "deadbeef"])

    assert result.exit_code == 0
    assert "succeeded" in result.output


def test_request_error_exits(requester):
    """Test that request failures exit with status 1."""
    requester.add("tx", RPCTransportError("connection refused"))

    result = runner.invoke(main.app, ["tx", "deadbeef"])

    assert result.exit_code == 1
    assert "connection refused" in result.output


def test_invalid_config_exits(monkeypatch):
    """Test that invalid settings exit with status 1."""
    monkeypatch.setenv("SEQ_NETWORK_ID", "not-a-number")

    result = runner.invoke(main.app, ["window"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_malformed_reply_exits(requester):
    """Test that a malformed node reply is reported as an error."""
    requester.add("tx", "garbage")

    result = runner.invoke(main.app, ["tx", "deadbeef"])

    assert result.exit_code == 1
    assert "Malformed reply to tx" in result.output
    assert isinstance(result.exception, SystemExit)


def test_malformed_genesis_exits(requester):
    """Test that a genesis reply that is not an object is reported as an error."""
    requester.add("genesis", ["unexpected"])

    result = runner.invoke(main.app, ["genesis"])

    assert result.exit_code == 1
    assert "Malformed reply to genesis" in result.output
