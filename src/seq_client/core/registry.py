"""Action and authentication type registries with decorator registration."""

from collections.abc import Callable
from typing import Protocol


class RegisteredType(Protocol):
    """
    Interface that every registered action or auth type exposes.

    Attributes
    ----------
    type_id : int
        Wire type identifier (one byte)
    name : str
        Unique type name (e.g., 'transfer', 'ed25519')

    """

    type_id: int
    name: str


class TypeRegistry:
    """
    Registry mapping wire type ids to action or auth types.

    Types register themselves using the ``@registry.register(type_id, name)``
    decorator. The registries are filled once at import time and are read-only
    afterwards; callers receive them through :class:`seq_client.rpc.Parser`.

    Parameters
    ----------
    kind : str
        What this registry holds ('action' or 'auth'), used in error messages

    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._types: dict[int, type] = {}

    def register(self, type_id: int, name: str) -> Callable[[type], type]:
        """
        Decorator to register a type under a wire id.

        Parameters
        ----------
        type_id : int
            Wire type identifier, 0-255
        name : str
            Unique type name

        Returns
        -------
        Callable
            Decorator returning the class unchanged

        Raises
        ------
        ValueError
            If the id is out of range or already taken, or the name is reused

        Examples
        --------
        >>> @ACTION_REGISTRY.register(0, "transfer")
        ... class Transfer:
        ...     pass

        """
        if not 0 <= type_id <= 255:
            msg = f"{self.kind} type id {type_id} out of range"
            raise ValueError(msg)

        def decorator(type_class: type) -> type:
            if type_id in self._types:
                existing = self._types[type_id].name
                msg = f"{self.kind} type id {type_id} already registered to '{existing}'"
                raise ValueError(msg)
            if self.get_by_name(name) is not None:
                msg = f"{self.kind} type '{name}' already registered"
                raise ValueError(msg)

            type_class.type_id = type_id
            type_class.name = name
            self._types[type_id] = type_class
            return type_class

        return decorator

    def get(self, type_id: int) -> type | None:
        """
        Get a registered type by wire id.

        Parameters
        ----------
        type_id : int
            Wire type identifier

        Returns
        -------
        type | None
            Registered class or None if unknown

        """
        return self._types.get(type_id)

    def get_by_name(self, name: str) -> type | None:
        """Get a registered type by name, or None if unknown."""
        for type_class in self._types.values():
            if type_class.name == name:
                return type_class
        return None

    def list_types(self) -> list[str]:
        """
        Get registered type names ordered by wire id.

        Returns
        -------
        list[str]
            Type names

        """
        return [self._types[type_id].name for type_id in sorted(self._types)]

    def clear(self) -> None:
        """Remove all registered types (useful for testing)."""
        self._types.clear()

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._types


ACTION_REGISTRY = TypeRegistry("action")
AUTH_REGISTRY = TypeRegistry("auth")
