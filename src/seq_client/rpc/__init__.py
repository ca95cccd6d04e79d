"""RPC layer: request channel, error classification, asset cache, polling, and the client."""

from seq_client.rpc.cache import AssetCache
from seq_client.rpc.client import JSONRPCClient
from seq_client.rpc.errors import (
    ERR_ASSET_NOT_FOUND,
    ERR_TX_NOT_FOUND,
    AssetNotFoundError,
    ConfigError,
    DeadlineExceededError,
    Outcome,
    RequestCancelledError,
    RPCError,
    RPCRemoteError,
    RPCTimeoutError,
    RPCTransportError,
    SeqClientError,
    classify,
)
from seq_client.rpc.parser import Parser
from seq_client.rpc.requester import JSONRPC_ENDPOINT, EndpointRequester, Requester
from seq_client.rpc.wait import Deadline, WaitConfig, wait_until

__all__ = [
    "ERR_ASSET_NOT_FOUND",
    "ERR_TX_NOT_FOUND",
    "JSONRPC_ENDPOINT",
    "AssetCache",
    "AssetNotFoundError",
    "ConfigError",
    "Deadline",
    "DeadlineExceededError",
    "EndpointRequester",
    "JSONRPCClient",
    "Outcome",
    "Parser",
    "RPCError",
    "RPCRemoteError",
    "RPCTimeoutError",
    "RPCTransportError",
    "RequestCancelledError",
    "Requester",
    "SeqClientError",
    "WaitConfig",
    "classify",
    "wait_until",
]
