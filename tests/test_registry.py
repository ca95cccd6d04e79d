"""Tests for action and auth type registries."""

import pytest

from seq_client.core.registry import ACTION_REGISTRY, AUTH_REGISTRY, TypeRegistry


def test_builtin_registration():
    """Test that built-in types register on import."""
    # Import triggers registration
    from seq_client.core import types  # noqa: F401

    assert ACTION_REGISTRY.list_types() == [
        "transfer",
        "create_asset",
        "mint_asset",
        "burn_asset",
        "sequencer_msg",
        "export_asset",
        "import_asset",
    ]
    assert AUTH_REGISTRY.list_types() == ["ed25519", "secp256r1", "bls"]


def test_get_type():
    """Test retrieving types by id and name."""
    from seq_client.core import types

    assert ACTION_REGISTRY.get(0) is types.Transfer
    assert ACTION_REGISTRY.get_by_name("sequencer_msg") is types.SequencerMsg
    assert types.SequencerMsg.type_id == 4
    assert AUTH_REGISTRY.get_by_name("ed25519").type_id == 0

    # Unknown types
    assert ACTION_REGISTRY.get(200) is None
    assert AUTH_REGISTRY.get_by_name("rsa") is None


def test_register_decorator():
    """Test registering a type on a fresh registry."""
    registry = TypeRegistry("action")

    @registry.register(7, "noop")
    class Noop:
        pass

    assert registry.get(7) is Noop
    assert Noop.type_id == 7
    assert Noop.name == "noop"
    assert 7 in registry
    assert len(registry) == 1


def test_list_types_ordered_by_id():
    """Test that type names are listed by wire id."""
    registry = TypeRegistry("auth")

    @registry.register(5, "late")
    class Late:
        pass

    @registry.register(1, "early")
    class Early:
        pass

    assert registry.list_types() == ["early", "late"]


def test_duplicate_id_rejected():
    """Test that a wire id cannot be registered twice."""
    registry = TypeRegistry("action")

    @registry.register(1, "first")
    class First:
        pass

    with pytest.raises(ValueError, match="already registered"):

        @registry.register(1, "second")
        class Second:
            pass

    assert registry.get(1) is First


def test_duplicate_name_rejected():
    """Test that a name cannot be registered twice."""
    registry = TypeRegistry("action")

    @registry.register(1, "transfer")
    class First:
        pass

    with pytest.raises(ValueError, match="already registered"):

        @registry.register(2, "transfer")
        class Second:
            pass

    assert 2 not in registry


@pytest.mark.parametrize("type_id", [-1, 256])
def test_type_id_range(type_id):
    """Test that type ids must fit in one byte."""
    registry = TypeRegistry("auth")

    with pytest.raises(ValueError, match="out of range"):
        registry.register(type_id, "bad")


def test_clear():
    """Test clearing a registry."""
    registry = TypeRegistry("action")

    @registry.register(0, "transfer")
    class Transfer:
        pass

    registry.clear()

    assert len(registry) == 0
    assert registry.get(0) is None


def test_register_returns_decorator():
    """Test that register returns a decorator handing back the class."""
    registry = TypeRegistry("action")
    decorator = registry.register(9, "custom")

    class Custom:
        pass

    assert callable(decorator)
    assert decorator(Custom) is Custom
    assert registry.get_by_name("custom") is Custom
