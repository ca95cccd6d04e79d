"""JSON-RPC request channel to a sequencer node."""

import itertools
import logging
import threading
from typing import Any, Protocol

import httpx

from seq_client.rpc.errors import RPCRemoteError, RPCTimeoutError, RPCTransportError

logger = logging.getLogger(__name__)

JSONRPC_ENDPOINT = "/seqapi"
DEFAULT_NAME = "seq"


class Requester(Protocol):
    """
    Interface of the channel that carries requests to the node.

    Methods
    -------
    send(method, params, timeout)
        Issue one request and return its result

    """

    def send(self, method: str, params: dict[str, Any] | None, timeout: float | None = None) -> Any:
        """
        Issue one request and return its result.

        Parameters
        ----------
        method : str
            RPC method name, without the service prefix
        params : dict[str, Any] | None
            Method arguments
        timeout : float | None
            Seconds to wait for the reply. Uses the channel default if None.

        Returns
        -------
        Any
            Decoded ``result`` member of the reply

        Raises
        ------
        RPCError
            If the request fails or the node returns an error

        """
        ...


class EndpointRequester:
    """
    JSON-RPC 2.0 over HTTP POST against a fixed node endpoint.

    Parameters
    ----------
    uri : str
        Base URI of the node (e.g., 'http://127.0.0.1:9650/ext/bc/<chain>')
    name : str
        Service prefix added to every method name
    timeout : float
        Default request timeout in seconds
    transport : httpx.BaseTransport | None
        Custom httpx transport (e.g., ``httpx.MockTransport`` in tests)

    """

    def __init__(
        self,
        uri: str,
        name: str = DEFAULT_NAME,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = uri.rstrip("/") + JSONRPC_ENDPOINT
        self.name = name
        self.timeout = timeout
        self.client = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )
        self._ids = itertools.count(1)
        self._ids_lock = threading.Lock()

    def _next_id(self) -> int:
        with self._ids_lock:
            return next(self._ids)

    def send(self, method: str, params: dict[str, Any] | None, timeout: float | None = None) -> Any:
        """
        Issue one request and return its result.

        Parameters
        ----------
        method : str
            RPC method name, without the service prefix
        params : dict[str, Any] | None
            Method arguments
        timeout : float | None
            Seconds to wait for the reply. Uses the default if None.

        Returns
        -------
        Any
            Decoded ``result`` member of the reply

        Raises
        ------
        RPCTimeoutError
            If the node does not answer in time
        RPCTransportError
            If the HTTP exchange fails or the reply is not JSON-RPC
        RPCRemoteError
            If the node returns an error object

        """
        request_id = self._next_id()
        payload = {
            "jsonrpc": "2.0",
            "id": request_id,
            "method": f"{self.name}.{method}",
            "params": params or {},
        }
        logger.debug("RPC request %s (id=%d) to %s", payload["method"], request_id, self.url)

        try:
            response = self.client.post(
                self.url,
                json=payload,
                timeout=self.timeout if timeout is None else timeout,
            )
        except httpx.TimeoutException as e:
            msg = f"Request timeout: {e}"
            raise RPCTimeoutError(msg) from e
        except httpx.HTTPError as e:
            msg = f"HTTP request failed: {e}"
            raise RPCTransportError(msg) from e

        result = _decode_reply(response, payload["method"])
        logger.debug("RPC reply to %s (id=%d)", payload["method"], request_id)
        return result

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.client.close()

    def __enter__(self) -> "EndpointRequester":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Context manager exit."""
        self.close()


def _decode_reply(response: httpx.Response, method: str) -> Any:
    """
    Extract the result of a JSON-RPC reply.

    An error object in the body wins over a non-2xx HTTP status.

    Parameters
    ----------
    response : httpx.Response
        HTTP response from the node
    method : str
        Fully qualified method name, for error messages

    Returns
    -------
    Any
        The ``result`` member

    """
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict) and data.get("error") is not None:
        error = data["error"]
        if isinstance(error, dict):
            raise RPCRemoteError(
                str(error.get("message", "unknown error")),
                code=error.get("code"),
                data=error.get("data"),
            )
        raise RPCRemoteError(str(error))

    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        msg = f"HTTP error {e.response.status_code}: {e}"
        raise RPCTransportError(msg) from e

    if not isinstance(data, dict):
        msg = f"Malformed reply to {method}: expected a JSON object"
        raise RPCTransportError(msg)
    return data.get("result")
