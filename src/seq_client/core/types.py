"""Action and auth types known to the sequencer chain.

Importing this module populates ``ACTION_REGISTRY`` and ``AUTH_REGISTRY``.
Only the type identities live here; their binary codecs belong to the node.
"""

from seq_client.core.registry import ACTION_REGISTRY, AUTH_REGISTRY


@ACTION_REGISTRY.register(0, "transfer")
class Transfer:
    """Move an amount of an asset to another address."""


@ACTION_REGISTRY.register(1, "create_asset")
class CreateAsset:
    """Create a new asset owned by the sender."""


@ACTION_REGISTRY.register(2, "mint_asset")
class MintAsset:
    """Mint new units of an owned asset."""


@ACTION_REGISTRY.register(3, "burn_asset")
class BurnAsset:
    """Burn units of an asset held by the sender."""


@ACTION_REGISTRY.register(4, "sequencer_msg")
class SequencerMsg:
    """Sequence an opaque payload for a rollup namespace."""


@ACTION_REGISTRY.register(5, "export_asset")
class ExportAsset:
    """Export an asset to another chain over warp."""


@ACTION_REGISTRY.register(6, "import_asset")
class ImportAsset:
    """Import an asset exported from another chain."""


@AUTH_REGISTRY.register(0, "ed25519")
class ED25519:
    """Ed25519 signature."""


@AUTH_REGISTRY.register(1, "secp256r1")
class SECP256R1:
    """secp256r1 (P-256) signature."""


@AUTH_REGISTRY.register(2, "bls")
class BLS:
    """BLS signature."""
