"""Genesis value returned by the node and the rule set derived from it."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CustomAllocation(BaseModel):
    """Initial balance assigned to an address at genesis."""

    address: str
    balance: int = Field(ge=0)


class Genesis(BaseModel):
    """
    Chain genesis as served by the ``genesis`` method.

    Known chain parameters are typed; any other field is kept verbatim and
    reachable through :meth:`Rules.fetch_custom`. The genesis of a running
    chain never changes, so clients memoize this value.

    Attributes
    ----------
    hrp : str
        Human readable address prefix
    min_block_gap : int
        Minimum milliseconds between blocks
    min_empty_block_gap : int
        Minimum milliseconds between empty blocks
    min_unit_price : list[int]
        Minimum price per fee dimension
    unit_price_change_denominator : list[int]
        Fee market adjustment denominator per dimension
    window_target_units : list[int]
        Target units per fee window per dimension
    max_block_units : list[int]
        Maximum units per block per dimension
    validity_window : int
        Milliseconds a transaction stays valid after its timestamp
    max_actions_per_tx : int
        Maximum actions in a single transaction
    max_outputs_per_action : int
        Maximum outputs produced by a single action
    base_compute_units : int
        Compute units charged for every transaction
    state_branch_factor : int
        Branch factor of the state merkle trie
    custom_allocation : list[CustomAllocation]
        Initial balances

    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    hrp: str = "seq"
    min_block_gap: int = Field(default=100, alias="minBlockGap")
    min_empty_block_gap: int = Field(default=2_500, alias="minEmptyBlockGap")
    min_unit_price: list[int] = Field(default_factory=list, alias="minUnitPrice")
    unit_price_change_denominator: list[int] = Field(default_factory=list, alias="unitPriceChangeDenominator")
    window_target_units: list[int] = Field(default_factory=list, alias="windowTargetUnits")
    max_block_units: list[int] = Field(default_factory=list, alias="maxBlockUnits")
    validity_window: int = Field(default=60_000, alias="validityWindow")
    max_actions_per_tx: int = Field(default=16, alias="maxActionsPerTx")
    max_outputs_per_action: int = Field(default=1, alias="maxOutputsPerAction")
    base_compute_units: int = Field(default=1, alias="baseComputeUnits")
    state_branch_factor: int = Field(default=16, alias="stateBranchFactor")
    custom_allocation: list[CustomAllocation] = Field(default_factory=list, alias="customAllocation")

    def rules(self, timestamp: int, network_id: int, chain_id: str) -> "Rules":
        """
        Derive the rule set in force at a timestamp.

        Parameters
        ----------
        timestamp : int
            Block timestamp in milliseconds
        network_id : int
            Network identifier
        chain_id : str
            Chain identifier

        Returns
        -------
        Rules
            Rule set for the given chain at ``timestamp``

        """
        return Rules(
            network_id=network_id,
            chain_id=chain_id,
            timestamp=timestamp,
            min_block_gap=self.min_block_gap,
            min_empty_block_gap=self.min_empty_block_gap,
            min_unit_price=tuple(self.min_unit_price),
            unit_price_change_denominator=tuple(self.unit_price_change_denominator),
            window_target_units=tuple(self.window_target_units),
            max_block_units=tuple(self.max_block_units),
            validity_window=self.validity_window,
            max_actions_per_tx=self.max_actions_per_tx,
            max_outputs_per_action=self.max_outputs_per_action,
            base_compute_units=self.base_compute_units,
            custom=dict(self.model_extra or {}),
        )


class Rules(BaseModel):
    """Chain rules in force at one timestamp."""

    model_config = ConfigDict(frozen=True)

    network_id: int
    chain_id: str
    timestamp: int
    min_block_gap: int
    min_empty_block_gap: int
    min_unit_price: tuple[int, ...]
    unit_price_change_denominator: tuple[int, ...]
    window_target_units: tuple[int, ...]
    max_block_units: tuple[int, ...]
    validity_window: int
    max_actions_per_tx: int
    max_outputs_per_action: int
    base_compute_units: int
    custom: dict[str, Any] = Field(default_factory=dict)

    def fetch_custom(self, key: str) -> tuple[Any, bool]:
        """Look up a genesis field without a typed accessor."""
        if key in self.custom:
            return self.custom[key], True
        return None, False
