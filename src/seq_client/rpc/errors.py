"""Client exceptions and classification of node errors into not-found results."""

from enum import StrEnum
from typing import Any

# Rendered by the node when a lookup misses. The JSON-RPC transport only
# carries the error message, so these strings are the whole contract and
# must match the server byte for byte.
ERR_TX_NOT_FOUND = "tx not found"
ERR_ASSET_NOT_FOUND = "asset not found"


class SeqClientError(Exception):
    """Base exception for all client errors."""


class ConfigError(SeqClientError):
    """Exception raised for invalid client configuration."""


class RPCError(SeqClientError):
    """Exception raised when a request to the node fails."""


class RPCTransportError(RPCError):
    """Exception raised when the HTTP exchange itself fails."""


class RPCTimeoutError(RPCTransportError):
    """Exception raised when the node does not answer in time."""


class RPCRemoteError(RPCError):
    """
    Error object returned by the node.

    Parameters
    ----------
    message : str
        Error message rendered by the node
    code : int | None
        JSON-RPC error code
    data : Any
        Optional error payload

    """

    def __init__(self, message: str, code: int | None = None, data: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data


class AssetNotFoundError(SeqClientError):
    """Exception raised when an operation requires an asset the node does not know."""

    def __init__(self, asset_id: str) -> None:
        super().__init__(f"{asset_id} does not exist")
        self.asset_id = asset_id


class RequestCancelledError(SeqClientError):
    """Exception raised when the caller cancels a wait."""


class DeadlineExceededError(RequestCancelledError):
    """Exception raised when a wait runs past its deadline."""


class Outcome(StrEnum):
    """Classification of a single request's error."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    PROPAGATE = "propagate"


def classify(err: Exception | None, sentinel: str) -> Outcome:
    """
    Classify the error of a single request.

    Parameters
    ----------
    err : Exception | None
        Error raised by the request, or None if it succeeded
    sentinel : str
        Not-found message for the entity that was requested

    Returns
    -------
    Outcome
        NOT_FOUND if the rendered error contains ``sentinel``, PROPAGATE for
        any other error, SUCCESS when there is no error

    """
    if err is None:
        return Outcome.SUCCESS
    if sentinel in str(err):
        return Outcome.NOT_FOUND
    return Outcome.PROPAGATE
