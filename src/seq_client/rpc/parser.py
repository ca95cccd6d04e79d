"""Chain parser built from the node's genesis."""

# Populates the action and auth registries.
from seq_client.core import types  # noqa: F401
from seq_client.core.genesis import Genesis, Rules
from seq_client.core.registry import TypeRegistry


class Parser:
    """
    Parsing context for one chain: its id, rules, and type registries.

    Obtain one through :meth:`seq_client.rpc.JSONRPCClient.parser`, which
    fetches the genesis first.

    Parameters
    ----------
    network_id : int
        Network identifier
    chain_id : str
        Chain identifier
    genesis : Genesis
        Genesis of the chain
    action_registry : TypeRegistry
        Registered action types
    auth_registry : TypeRegistry
        Registered auth types

    """

    def __init__(
        self,
        network_id: int,
        chain_id: str,
        genesis: Genesis,
        action_registry: TypeRegistry,
        auth_registry: TypeRegistry,
    ) -> None:
        self._network_id = network_id
        self._chain_id = chain_id
        self._genesis = genesis
        self._action_registry = action_registry
        self._auth_registry = auth_registry

    @property
    def chain_id(self) -> str:
        """Chain identifier."""
        return self._chain_id

    @property
    def network_id(self) -> int:
        """Network identifier."""
        return self._network_id

    def rules(self, timestamp: int) -> Rules:
        """
        Get the rules in force at a timestamp.

        Parameters
        ----------
        timestamp : int
            Block timestamp in milliseconds

        Returns
        -------
        Rules
            Rule set derived from the genesis

        """
        return self._genesis.rules(timestamp, self._network_id, self._chain_id)

    def registry(self) -> tuple[TypeRegistry, TypeRegistry]:
        """Get the action and auth registries, in that order."""
        return self._action_registry, self._auth_registry
