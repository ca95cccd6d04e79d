"""Core types: reply models, genesis, type registries, and unit helpers."""

from seq_client.core.genesis import CustomAllocation, Genesis, Rules
from seq_client.core.models import (
    AssetLookup,
    AssetRecord,
    BlockHeadersResponse,
    BlockInfo,
    SEQTransaction,
    SEQTransactionResponse,
    SequencerWarpBlock,
    SequencerWarpBlockResponse,
    TransactionResponse,
    TxStatus,
)
from seq_client.core.registry import ACTION_REGISTRY, AUTH_REGISTRY, TypeRegistry
from seq_client.core.units import format_balance, parse_balance

__all__ = [
    "ACTION_REGISTRY",
    "AUTH_REGISTRY",
    "AssetLookup",
    "AssetRecord",
    "BlockHeadersResponse",
    "BlockInfo",
    "CustomAllocation",
    "Genesis",
    "Rules",
    "SEQTransaction",
    "SEQTransactionResponse",
    "SequencerWarpBlock",
    "SequencerWarpBlockResponse",
    "TransactionResponse",
    "TxStatus",
    "TypeRegistry",
    "format_balance",
    "parse_balance",
]
