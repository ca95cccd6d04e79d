"""Client configuration loader: packaged defaults, user YAML file, environment."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from seq_client.rpc.errors import ConfigError

logger = logging.getLogger(__name__)

ENV_OVERRIDES = {
    "SEQ_RPC_URI": "uri",
    "SEQ_NETWORK_ID": "network_id",
    "SEQ_CHAIN_ID": "chain_id",
    "SEQ_RPC_TIMEOUT": "timeout",
    "SEQ_WAIT_INTERVAL": "wait_interval",
}


class ClientConfig(BaseModel):
    """
    Settings needed to reach a node.

    Attributes
    ----------
    uri : str
        Base URI of the node
    network_id : int
        Network identifier (32-bit)
    chain_id : str
        Chain identifier
    timeout : float
        Request timeout in seconds
    wait_interval : float
        Delay between polls in blocking waits

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    uri: str = Field(min_length=1)
    network_id: int = Field(ge=0, le=2**32 - 1)
    chain_id: str = ""
    timeout: float = Field(default=30.0, gt=0)
    wait_interval: float = Field(default=0.5, ge=0)


def load_defaults() -> dict[str, Any]:
    """
    Load packaged default settings from defaults.yaml.

    Returns
    -------
    dict[str, Any]
        Default settings

    """
    path = Path(__file__).parent / "defaults.yaml"
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _load_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        msg = f"Config file not found: {path}"
        raise ConfigError(msg)
    with open(path, encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in {path}: {e}"
            raise ConfigError(msg) from e
    if not isinstance(raw, dict):
        msg = f"Config file {path} must contain a mapping"
        raise ConfigError(msg)
    return raw


def env_overrides(environ: dict[str, str] | None = None) -> dict[str, str]:
    """
    Collect settings from SEQ_* environment variables.

    Parameters
    ----------
    environ : dict[str, str] | None
        Environment to read. Uses ``os.environ`` if None.

    Returns
    -------
    dict[str, str]
        Settings keyed by field name (values still unparsed)

    """
    environ = os.environ if environ is None else environ
    return {field: environ[var] for var, field in ENV_OVERRIDES.items() if environ.get(var)}


def load_config(
    path: str | Path | None = None,
    environ: dict[str, str] | None = None,
    **overrides: Any,
) -> ClientConfig:
    """
    Load client configuration.

    Later sources win: packaged defaults, then the YAML file at ``path``,
    then SEQ_* environment variables, then non-None keyword ``overrides``.

    Parameters
    ----------
    path : str | Path | None
        Optional user config file
    environ : dict[str, str] | None
        Environment to read. Uses ``os.environ`` if None.
    **overrides
        Explicit settings (e.g., from CLI options)

    Returns
    -------
    ClientConfig
        Validated configuration

    Raises
    ------
    ConfigError
        If the file is missing or invalid, or a setting fails validation

    """
    raw = load_defaults()
    if path is not None:
        raw.update(_load_file(Path(path)))
    raw.update(env_overrides(environ))
    raw.update({key: value for key, value in overrides.items() if value is not None})

    try:
        config = ClientConfig.model_validate(raw)
    except ValidationError as e:
        msg = f"Invalid configuration: {e}"
        raise ConfigError(msg) from e

    logger.debug("Configuration loaded (uri=%s, network_id=%d)", config.uri, config.network_id)
    return config
