"""JSON-RPC client for a sequencer chain node."""

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.markup import escape

from seq_client.core.genesis import Genesis
from seq_client.core.models import (
    AssetLookup,
    AssetRecord,
    BalanceReply,
    BlockHeadersResponse,
    SEQTransactionResponse,
    SequencerWarpBlockResponse,
    SubmitMsgTxReply,
    TransactionResponse,
    TxReply,
    TxStatus,
    encode_bytes,
)
from seq_client.core.registry import ACTION_REGISTRY, AUTH_REGISTRY, TypeRegistry
from seq_client.core.units import format_balance
from seq_client.rpc.cache import AssetCache
from seq_client.rpc.errors import (
    ERR_ASSET_NOT_FOUND,
    ERR_TX_NOT_FOUND,
    AssetNotFoundError,
    Outcome,
    RPCError,
    RPCTransportError,
    classify,
)
from seq_client.rpc.parser import Parser
from seq_client.rpc.requester import EndpointRequester, Requester
from seq_client.rpc.wait import Deadline, WaitConfig, wait_until

if TYPE_CHECKING:
    from seq_client.data.loader import ClientConfig

logger = logging.getLogger(__name__)

MAX_NETWORK_ID = 2**32 - 1

ModelT = TypeVar("ModelT", bound=BaseModel)


def _validate(model: type[ModelT], reply: Any, method: str) -> ModelT:
    """
    Parse the result of ``method`` into ``model``.

    Raises
    ------
    RPCTransportError
        If the reply does not match the model

    """
    try:
        return model.model_validate(reply or {})
    except ValidationError as e:
        msg = f"Malformed reply to {method}: {e}"
        raise RPCTransportError(msg) from e


class JSONRPCClient:
    """
    Client for the node's JSON-RPC API.

    One instance talks to one endpoint and is safe to share between threads.
    Asset metadata and the chain genesis are cached per instance.

    Parameters
    ----------
    uri : str
        Base URI of the node
    network_id : int
        Network identifier (32-bit)
    chain_id : str
        Chain identifier
    requester : Requester | None
        Request channel. Defaults to an :class:`EndpointRequester` on ``uri``.
    timeout : float
        Default request timeout in seconds for the default requester
    wait_config : WaitConfig | None
        Backoff policy for :meth:`wait_for_balance` and :meth:`wait_for_transaction`
    console : Console | None
        Console receiving wait progress lines. Defaults to stderr.
    quiet : bool
        Suppress wait progress lines on the console

    """

    def __init__(
        self,
        uri: str,
        network_id: int,
        chain_id: str,
        requester: Requester | None = None,
        *,
        timeout: float = 30.0,
        wait_config: WaitConfig | None = None,
        console: Console | None = None,
        quiet: bool = False,
    ) -> None:
        if not 0 <= network_id <= MAX_NETWORK_ID:
            msg = f"network_id {network_id} does not fit in 32 bits"
            raise ValueError(msg)

        self.uri = uri
        self._network_id = network_id
        self._chain_id = chain_id
        self.requester = requester or EndpointRequester(uri, timeout=timeout)
        self.wait_config = wait_config or WaitConfig()
        self.console = console or Console(stderr=True)
        self.quiet = quiet

        self.assets = AssetCache()
        self._genesis: Genesis | None = None

    @classmethod
    def from_config(cls, config: "ClientConfig", **kwargs: Any) -> "JSONRPCClient":
        """
        Build a client from loaded configuration.

        Parameters
        ----------
        config : ClientConfig
            Configuration from :func:`seq_client.data.load_config`
        **kwargs
            Extra constructor arguments (e.g., ``requester``, ``console``)

        Returns
        -------
        JSONRPCClient
            Configured client

        """
        kwargs.setdefault("timeout", config.timeout)
        kwargs.setdefault("wait_config", WaitConfig(interval=config.wait_interval))
        return cls(config.uri, config.network_id, config.chain_id, **kwargs)

    @property
    def network_id(self) -> int:
        """Network identifier fixed at construction."""
        return self._network_id

    @property
    def chain_id(self) -> str:
        """Chain identifier fixed at construction."""
        return self._chain_id

    def _send(self, method: str, params: dict[str, Any] | None = None, deadline: Deadline | None = None) -> Any:
        """Issue one request, bounded by ``deadline`` if given."""
        timeout = None
        if deadline is not None:
            deadline.check()
            timeout = deadline.remaining()
        try:
            return self.requester.send(method, params, timeout=timeout)
        except RPCTransportError:
            # A transport failure after the deadline ended is a cancellation.
            if deadline is not None:
                deadline.check()
            raise

    def genesis(self, deadline: Deadline | None = None) -> Genesis:
        """
        Get the chain genesis, fetching it on first use.

        Failed fetches are not cached. Concurrent first calls may each fetch;
        they all store an equal value.

        Returns
        -------
        Genesis
            Chain genesis

        """
        if self._genesis is not None:
            return self._genesis

        reply = self._send("genesis", None, deadline)
        if not isinstance(reply, dict):
            msg = "Malformed reply to genesis: expected a JSON object"
            raise RPCTransportError(msg)
        genesis = _validate(Genesis, reply.get("genesis"), "genesis")
        self._genesis = genesis
        return genesis

    def tx(self, tx_id: str, deadline: Deadline | None = None) -> TxStatus:
        """
        Get the status of a transaction.

        Parameters
        ----------
        tx_id : str
            Transaction identifier

        Returns
        -------
        TxStatus
            Status of the transaction. Unknown transactions yield
            ``TxStatus.not_found()`` rather than an error.

        Raises
        ------
        RPCError
            If the request fails for any reason other than not-found

        """
        try:
            reply = self._send("tx", {"txId": tx_id}, deadline)
        except RPCError as e:
            if classify(e, ERR_TX_NOT_FOUND) is Outcome.NOT_FOUND:
                return TxStatus.not_found()
            raise

        parsed = _validate(TxReply, reply, "tx")
        return TxStatus(found=True, success=parsed.success, timestamp=parsed.timestamp, fee=parsed.fee)

    def asset(self, asset_id: str, use_cache: bool = True, deadline: Deadline | None = None) -> AssetLookup:
        """
        Get the metadata of an asset.

        Parameters
        ----------
        asset_id : str
            Asset identifier
        use_cache : bool
            Return a previously fetched record without a request if one exists

        Returns
        -------
        AssetLookup
            ``found`` is False for assets the node does not know

        Raises
        ------
        RPCError
            If the request fails for any reason other than not-found

        """
        if use_cache:
            cached = self.assets.get(asset_id)
            if cached is not None:
                return AssetLookup(found=True, record=cached)

        try:
            reply = self._send("asset", {"asset": asset_id}, deadline)
        except RPCError as e:
            if classify(e, ERR_ASSET_NOT_FOUND) is Outcome.NOT_FOUND:
                return AssetLookup(found=False, record=None)
            raise

        record = _validate(AssetRecord, reply, "asset")
        self.assets.put(asset_id, record)
        return AssetLookup(found=True, record=record)

    def balance(self, address: str, asset_id: str, deadline: Deadline | None = None) -> int:
        """Get the balance of ``address`` in ``asset_id``."""
        reply = self._send("balance", {"address": address, "asset": asset_id}, deadline)
        return _validate(BalanceReply, reply, "balance").amount

    def loan(self, asset_id: str, destination: str, deadline: Deadline | None = None) -> int:
        """Get the amount of ``asset_id`` loaned to chain ``destination``."""
        reply = self._send("loan", {"asset": asset_id, "destination": destination}, deadline)
        return _validate(BalanceReply, reply, "loan").amount

    def get_block_headers_by_height(
        self,
        height: int,
        end: int,
        deadline: Deadline | None = None,
    ) -> BlockHeadersResponse:
        """
        Get block headers from ``height`` up to timestamp ``end``.

        Parameters
        ----------
        height : int
            First block height
        end : int
            End timestamp in milliseconds

        Returns
        -------
        BlockHeadersResponse
            Headers in range plus the neighbouring blocks

        """
        reply = self._send("getblockheadersbyheight", {"height": height, "end": end}, deadline)
        return _validate(BlockHeadersResponse, reply, "getblockheadersbyheight")

    def get_block_headers_id(self, block_id: str, end: int, deadline: Deadline | None = None) -> BlockHeadersResponse:
        """Get block headers from block ``block_id`` up to timestamp ``end``."""
        reply = self._send("getblockheadersid", {"id": block_id, "end": end}, deadline)
        return _validate(BlockHeadersResponse, reply, "getblockheadersid")

    def get_block_headers_by_start(self, start: int, end: int, deadline: Deadline | None = None) -> BlockHeadersResponse:
        """Get block headers with timestamps between ``start`` and ``end``."""
        reply = self._send("getBlockHeadersByStart", {"start": start, "end": end}, deadline)
        return _validate(BlockHeadersResponse, reply, "getBlockHeadersByStart")

    def get_block_transactions(self, block_id: str, deadline: Deadline | None = None) -> TransactionResponse:
        """Get all transactions of block ``block_id``."""
        reply = self._send("getblocktransactions", {"block_id": block_id}, deadline)
        return _validate(TransactionResponse, reply, "getblocktransactions")

    def get_block_transactions_by_namespace(
        self,
        height: int,
        namespace: str,
        deadline: Deadline | None = None,
    ) -> SEQTransactionResponse:
        """Get the transactions of ``namespace`` in the block at ``height``."""
        reply = self._send(
            "getBlockTransactionsByNamespace",
            {"height": height, "namespace": namespace},
            deadline,
        )
        return _validate(SEQTransactionResponse, reply, "getBlockTransactionsByNamespace")

    def get_commitment_blocks(
        self,
        first: int,
        current_height: int,
        max_blocks: int,
        deadline: Deadline | None = None,
    ) -> SequencerWarpBlockResponse:
        """
        Get block commitments for warp verification.

        Parameters
        ----------
        first : int
            First block height to return
        current_height : int
            Height the caller has already verified up to
        max_blocks : int
            Maximum number of blocks to return

        Returns
        -------
        SequencerWarpBlockResponse
            Commitment blocks

        """
        reply = self._send(
            "getCommitmentBlocks",
            {"first": first, "current_height": current_height, "max_blocks": max_blocks},
            deadline,
        )
        return _validate(SequencerWarpBlockResponse, reply, "getCommitmentBlocks")

    def get_accepted_block_window(self, deadline: Deadline | None = None) -> int:
        """Get the number of recently accepted blocks the node keeps."""
        reply = self._send("getAcceptedBlockWindow", None, deadline)
        if reply is None:
            return 0
        if isinstance(reply, bool) or not isinstance(reply, int):
            msg = f"Malformed reply to getAcceptedBlockWindow: expected an integer, got {reply!r}"
            raise RPCTransportError(msg)
        return reply

    def submit_msg_tx(
        self,
        chain_id: str,
        network_id: int,
        secondary_chain_id: bytes,
        data: bytes,
        deadline: Deadline | None = None,
    ) -> str:
        """
        Submit a sequencer message for a rollup.

        Parameters
        ----------
        chain_id : str
            Chain the message is sequenced on
        network_id : int
            Network identifier
        secondary_chain_id : bytes
            Rollup namespace the payload belongs to
        data : bytes
            Opaque payload

        Returns
        -------
        str
            Identifier of the submitted transaction

        """
        reply = self._send(
            "submitMsgTx",
            {
                "chain_id": chain_id,
                "network_id": network_id,
                "secondary_chain_id": encode_bytes(secondary_chain_id),
                "data": encode_bytes(data),
            },
            deadline,
        )
        return _validate(SubmitMsgTxReply, reply, "submitMsgTx").tx_id

    def wait_for_balance(
        self,
        address: str,
        asset_id: str,
        minimum: int,
        deadline: Deadline | None = None,
    ) -> None:
        """
        Block until ``address`` holds at least ``minimum`` of ``asset_id``.

        Parameters
        ----------
        address : str
            Account address
        asset_id : str
            Asset identifier
        minimum : int
            Raw amount to wait for
        deadline : Deadline | None
            Bound on the wait. Waits forever if None. Cancelling it ends the
            wait once the request in flight returns.

        Raises
        ------
        AssetNotFoundError
            If the node does not know the asset (no balance is polled)
        RequestCancelledError
            If the deadline ends first
        RPCError
            If a request fails

        """
        lookup = self.asset(asset_id, use_cache=True, deadline=deadline)
        if not lookup.found:
            raise AssetNotFoundError(asset_id)
        record = lookup.record

        def has_balance() -> bool:
            balance = self.balance(address, asset_id, deadline=deadline)
            if balance >= minimum:
                return True
            target = format_balance(minimum, record.decimals)
            logger.info(
                "Waiting for %s %s on %s (have %s)",
                target,
                record.symbol_text,
                address,
                format_balance(balance, record.decimals),
            )
            if not self.quiet:
                self.console.print(
                    f"[yellow]waiting for {target} {escape(record.symbol_text)} on {escape(address)}[/yellow]"
                )
            return False

        wait_until(has_balance, deadline, self.wait_config)

    def wait_for_transaction(self, tx_id: str, deadline: Deadline | None = None) -> tuple[bool, int]:
        """
        Block until the node reports ``tx_id``.

        Parameters
        ----------
        tx_id : str
            Transaction identifier
        deadline : Deadline | None
            Bound on the wait. Waits forever if None. Cancelling it ends the
            wait once the request in flight returns.

        Returns
        -------
        tuple[bool, int]
            Whether the transaction succeeded, and the fee it paid

        Raises
        ------
        RequestCancelledError
            If the deadline ends before the transaction is found
        RPCError
            If a request fails

        """
        statuses: list[TxStatus] = []

        def is_accepted() -> bool:
            status = self.tx(tx_id, deadline=deadline)
            if status.found:
                statuses.append(status)
            return status.found

        wait_until(is_accepted, deadline, self.wait_config)
        status = statuses[-1]
        return status.success, status.fee

    def parser(
        self,
        deadline: Deadline | None = None,
        action_registry: TypeRegistry = ACTION_REGISTRY,
        auth_registry: TypeRegistry = AUTH_REGISTRY,
    ) -> Parser:
        """
        Build a chain parser from the node's genesis.

        Parameters
        ----------
        action_registry : TypeRegistry
            Action types to expose. Defaults to the built-in registry.
        auth_registry : TypeRegistry
            Auth types to expose. Defaults to the built-in registry.

        Returns
        -------
        Parser
            Parser bound to this client's network and chain

        """
        genesis = self.genesis(deadline)
        return Parser(self._network_id, self._chain_id, genesis, action_registry, auth_registry)

    def close(self) -> None:
        """Close the request channel if it holds resources."""
        close = getattr(self.requester, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "JSONRPCClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
