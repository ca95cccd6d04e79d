"""Typed client for a sequencer chain node's JSON-RPC API."""

from seq_client.rpc import Deadline, JSONRPCClient

__version__ = "0.1.0"

__all__ = ["Deadline", "JSONRPCClient", "__version__"]
