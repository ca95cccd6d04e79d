"""Per-client cache of asset metadata."""

import threading

from seq_client.core.models import AssetRecord


class AssetCache:
    """
    In-memory cache of asset records keyed by asset id.

    Entries never expire: asset metadata is treated as immutable for the
    lifetime of a client. Only successfully resolved records are stored.
    The lock guards the mapping only and is never held across a request.

    """

    def __init__(self) -> None:
        self._records: dict[str, AssetRecord] = {}
        self._lock = threading.Lock()

    def get(self, asset_id: str) -> AssetRecord | None:
        """
        Get the cached record for an asset.

        Parameters
        ----------
        asset_id : str
            Asset identifier

        Returns
        -------
        AssetRecord | None
            Cached record, or None if the asset was never resolved

        """
        with self._lock:
            return self._records.get(asset_id)

    def put(self, asset_id: str, record: AssetRecord) -> None:
        """
        Store a record, replacing any previous entry.

        Parameters
        ----------
        asset_id : str
            Asset identifier
        record : AssetRecord
            Record returned by the node

        """
        with self._lock:
            self._records[asset_id] = record

    def invalidate(self, asset_id: str) -> bool:
        """Drop one entry. Returns True if it was present."""
        with self._lock:
            return self._records.pop(asset_id, None) is not None

    def clear(self) -> None:
        """Clear all cached entries."""
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, asset_id: object) -> bool:
        with self._lock:
            return asset_id in self._records
