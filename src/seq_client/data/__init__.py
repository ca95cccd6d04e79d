"""Configuration loading."""

from seq_client.data.loader import ClientConfig, env_overrides, load_config, load_defaults

__all__ = [
    "ClientConfig",
    "env_overrides",
    "load_config",
    "load_defaults",
]
