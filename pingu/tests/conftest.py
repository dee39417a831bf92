"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from pingu.client import PinguClient
from pingu.config.schema import AssetConfig, ChainConfig, ClientConfig
from pingu.models.common import ADDRESS_ZERO
from pingu.tests.fakes import (
    DATA_STORE,
    RPC_A,
    RPC_B,
    RPC_C,
    TEST_PRIVATE_KEY,
    USDC,
    FakeChain,
    FakeWeb3,
)


@pytest.fixture
def chain() -> FakeChain:
    return FakeChain()


@pytest.fixture
def web3_factory(chain: FakeChain):
    def build(url: str) -> FakeWeb3:
        chain.connections.append(url)
        return FakeWeb3(url, chain)

    return build


@pytest.fixture
def chain_config() -> ChainConfig:
    return ChainConfig(
        chain_id=10143,
        name="Test Chain",
        rpc_urls=[RPC_A, RPC_B, RPC_C],
        data_store=DATA_STORE,
        assets={
            "USDC": AssetConfig(address=USDC, decimals=6, min_size=1_000_000),
            "MON": AssetConfig(
                address=ADDRESS_ZERO, decimals=18, min_size=10**18, is_gas_token=True
            ),
        },
    )


@pytest.fixture
def client_config(chain_config: ChainConfig) -> ClientConfig:
    return ClientConfig(chain=chain_config, private_key=TEST_PRIVATE_KEY)


@pytest.fixture
def client(client_config: ClientConfig, web3_factory) -> PinguClient:
    return PinguClient(client_config, web3_factory=web3_factory)


@pytest.fixture
def readonly_client(chain_config: ChainConfig, web3_factory) -> PinguClient:
    return PinguClient(ClientConfig(chain=chain_config), web3_factory=web3_factory)


@pytest.fixture
def config_yaml_path(tmp_path: Path, chain_config: ChainConfig) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "chain": chain_config.model_dump(),
        "request_timeout": 10,
        "default_asset": "USDC",
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
