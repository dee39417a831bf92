"""YAML config loader with environment overrides and dotted-key lookup."""

import hashlib
import os
from pathlib import Path
from typing import Any

import yaml

from pingu.config.defaults import DEFAULT_CHAIN
from pingu.config.schema import ClientConfig

ENV_RPC_URL = "PINGU_RPC_URL"
ENV_PRIVATE_KEY = "PINGU_PRIVATE_KEY"


def load_config(path: str | Path | None = None) -> ClientConfig:
    """Load and validate client config from a YAML file.

    If no chain section is given, injects the Monad defaults. PINGU_RPC_URL
    and PINGU_PRIVATE_KEY override the file when set.
    """
    raw: dict[str, Any] = {}
    if path is not None:
        with open(Path(path)) as f:
            raw = yaml.safe_load(f) or {}

    if "chain" not in raw or not raw["chain"]:
        raw["chain"] = DEFAULT_CHAIN.model_dump()

    rpc_url = os.environ.get(ENV_RPC_URL)
    if rpc_url:
        raw["rpc_url"] = rpc_url
    private_key = os.environ.get(ENV_PRIVATE_KEY)
    if private_key:
        raw["private_key"] = private_key

    return ClientConfig(**raw)


def config_hash(config: ClientConfig) -> str:
    """Compute a deterministic SHA256 hash of the config (private key excluded)."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def get_config_value(config: ClientConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'chain.assets.USDC.decimals'."""
    if dotted_key.split(".")[-1] == "private_key":
        raise KeyError(f"Config key not readable: {dotted_key}")
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif isinstance(obj, dict):
            if part not in obj:
                raise KeyError(f"Config key not found: {dotted_key}")
            obj = obj[part]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
