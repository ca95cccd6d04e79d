"""Data models for RPC replies, asset metadata, and lookup results."""

import base64
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def decode_bytes(value: Any) -> Any:
    """
    Decode a base64 string into bytes.

    Byte slices are rendered as base64 strings on the wire. Values that are
    already bytes (or ``None``) pass through untouched.

    Parameters
    ----------
    value : Any
        Raw field value

    Returns
    -------
    Any
        Decoded bytes, or the original value if it is not a string

    """
    if value is None:
        return b""
    if isinstance(value, str):
        return base64.b64decode(value)
    return value


def encode_bytes(value: bytes) -> str:
    """Encode bytes as a base64 string for the wire."""
    return base64.b64encode(value).decode("ascii")


class AssetRecord(BaseModel):
    """
    Asset metadata as reported by the node.

    Attributes
    ----------
    symbol : bytes
        Asset symbol (e.g., b'SEQ')
    decimals : int
        Number of decimal places
    metadata : bytes
        Free-form asset metadata
    supply : int
        Total minted supply
    owner : str
        Owner address
    is_warp : bool
        Whether the asset was imported over warp

    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore", ser_json_bytes="base64")

    symbol: bytes = b""
    decimals: int = Field(default=0, ge=0, le=255)
    metadata: bytes = b""
    supply: int = Field(default=0, ge=0)
    owner: str = ""
    is_warp: bool = Field(default=False, alias="warp")

    @field_validator("symbol", "metadata", mode="before")
    @classmethod
    def decode_base64(cls, value: Any) -> Any:
        return decode_bytes(value)

    @property
    def symbol_text(self) -> str:
        """Symbol decoded for display."""
        return self.symbol.decode("utf-8", errors="replace")


class AssetLookup(BaseModel):
    """
    Result of an asset lookup.

    ``record`` is ``None`` exactly when ``found`` is False.

    """

    model_config = ConfigDict(frozen=True)

    found: bool
    record: AssetRecord | None = None


class TxStatus(BaseModel):
    """
    Transaction status.

    Attributes
    ----------
    found : bool
        Whether the node knows the transaction
    success : bool
        Whether the transaction executed successfully
    timestamp : int
        Block timestamp in milliseconds, -1 when not found
    fee : int
        Fee paid

    """

    model_config = ConfigDict(frozen=True)

    found: bool
    success: bool = False
    timestamp: int = -1
    fee: int = 0

    @classmethod
    def not_found(cls) -> "TxStatus":
        """Status returned for transactions the node has not seen."""
        return cls(found=False, success=False, timestamp=-1, fee=0)


class TxReply(BaseModel):
    """Raw reply of the ``tx`` method."""

    model_config = ConfigDict(extra="allow")

    timestamp: int = -1
    success: bool = False
    fee: int = 0


class BalanceReply(BaseModel):
    """Raw reply of the ``balance`` and ``loan`` methods."""

    model_config = ConfigDict(extra="allow")

    amount: int = 0


class SubmitMsgTxReply(BaseModel):
    """Raw reply of the ``submitMsgTx`` method."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    tx_id: str = Field(default="", alias="txId")


class BlockInfo(BaseModel):
    """Block header summary."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = ""
    timestamp: int = 0
    l1_head: int = 0
    height: int = 0


class BlockHeadersResponse(BaseModel):
    """Block headers in a requested range plus their neighbours."""

    model_config = ConfigDict(extra="allow")

    blocks: list[BlockInfo] = Field(default_factory=list)
    prev: BlockInfo = Field(default_factory=BlockInfo)
    next: BlockInfo = Field(default_factory=BlockInfo)


class TransactionResponse(BaseModel):
    """Transactions contained in a block."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    txs: list[dict[str, Any]] = Field(default_factory=list)
    block_id: str = Field(default="", alias="blockId")


class SEQTransaction(BaseModel):
    """A sequenced transaction for one namespace."""

    model_config = ConfigDict(extra="allow")

    namespace: str = ""
    tx_id: str = ""
    index: int = 0
    transaction: bytes = b""

    @field_validator("transaction", mode="before")
    @classmethod
    def decode_base64(cls, value: Any) -> Any:
        return decode_bytes(value)


class SEQTransactionResponse(BaseModel):
    """Namespace-filtered transactions of a block."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    txs: list[SEQTransaction] = Field(default_factory=list)
    block_id: str = Field(default="", alias="blockId")


class SequencerWarpBlock(BaseModel):
    """Block commitment consumed by warp verifiers."""

    model_config = ConfigDict(extra="allow")

    block_id: str = ""
    timestamp: int = 0
    l1_head: int = 0
    height: int = 0
    root: str = ""
    parent_root: str = ""


class SequencerWarpBlockResponse(BaseModel):
    """Commitment blocks returned by ``getCommitmentBlocks``."""

    model_config = ConfigDict(extra="allow")

    blocks: list[SequencerWarpBlock] = Field(default_factory=list)
