"""Tests for the HTTP request channel."""

import json

import httpx
import pytest

from seq_client.rpc import (
    EndpointRequester,
    JSONRPCClient,
    RPCRemoteError,
    RPCTimeoutError,
    RPCTransportError,
    WaitConfig,
)


def make_requester(handler, uri="http://127.0.0.1:9650/ext/bc/seq/"):
    """Build a requester whose HTTP exchanges are answered by ``handler``."""
    return EndpointRequester(uri, transport=httpx.MockTransport(handler))


def reply(request: httpx.Request, result) -> httpx.Response:
    body = json.loads(request.content)
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})


def test_request_shape():
    """Test the URL, method prefix, and params of a request."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return reply(request, {"timestamp": 1, "success": True, "fee": 2})

    with make_requester(handler) as requester:
        result = requester.send("tx", {"txId": "deadbeef"})

    assert result == {"timestamp": 1, "success": True, "fee": 2}
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "http://127.0.0.1:9650/ext/bc/seq/seqapi"
    body = json.loads(request.content)
    assert body["jsonrpc"] == "2.0"
    assert body["method"] == "seq.tx"
    assert body["params"] == {"txId": "deadbeef"}


def test_missing_params_sent_as_object():
    """Test that methods without arguments still send a params object."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return reply(request, 64)

    with make_requester(handler) as requester:
        assert requester.send("getAcceptedBlockWindow", None) == 64

    assert seen[0]["params"] == {}


def test_request_ids_increase():
    """Test that each request carries a fresh id."""
    ids = []

    def handler(request: httpx.Request) -> httpx.Response:
        ids.append(json.loads(request.content)["id"])
        return reply(request, None)

    with make_requester(handler) as requester:
        requester.send("genesis", None)
        requester.send("genesis", None)

    assert ids == [1, 2]


def test_remote_error():
    """Test that an error object becomes RPCRemoteError."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "tx not found"}},
        )

    with make_requester(handler) as requester:
        with pytest.raises(RPCRemoteError) as exc_info:
            requester.send("tx", {"txId": "deadbeef"})

    assert exc_info.value.code == -32000
    assert "tx not found" in str(exc_info.value)


def test_remote_error_on_http_error_status():
    """Test that an error object is surfaced even with a failing HTTP status."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"jsonrpc": "2.0", "id": 1, "error": {"message": "asset not found"}})

    with make_requester(handler) as requester:
        with pytest.raises(RPCRemoteError, match="asset not found"):
            requester.send("asset", {"asset": "A1"})


def test_http_error_status():
    """Test that a failing HTTP status without a JSON body is a transport error."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="bad gateway")

    with make_requester(handler) as requester:
        with pytest.raises(RPCTransportError, match="502"):
            requester.send("tx", {"txId": "deadbeef"})


def test_malformed_reply():
    """Test that a non-object body is rejected."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="not json")

    with make_requester(handler) as requester:
        with pytest.raises(RPCTransportError, match="Malformed"):
            requester.send("tx", {"txId": "deadbeef"})


def test_timeout():
    """Test that a timed out request raises RPCTimeoutError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with make_requester(handler) as requester:
        with pytest.raises(RPCTimeoutError):
            requester.send("tx", {"txId": "deadbeef"})


def test_connection_error():
    """Test that connection failures raise RPCTransportError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with make_requester(handler) as requester:
        with pytest.raises(RPCTransportError) as exc_info:
            requester.send("tx", {"txId": "deadbeef"})

    assert not isinstance(exc_info.value, RPCTimeoutError)


def test_client_over_http():
    """Test the client end to end over a mocked HTTP node."""

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if body["method"] == "seq.tx":
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": body["id"], "error": {"code": -32000, "message": "tx not found"}},
            )
        return reply(request, {"amount": 7})

    uri = "http://127.0.0.1:9650/ext/bc/seq"
    client = JSONRPCClient(uri, 1337, "chain", make_requester(handler, uri), wait_config=WaitConfig(interval=0))

    with client:
        status = client.tx("deadbeef")
        amount = client.balance("addr1", "A1")

    assert status.found is False
    assert status.timestamp == -1
    assert amount == 7
