"""Tests for pydantic config schema validation."""

import pytest
from pydantic import ValidationError

from pingu.config.defaults import DEFAULT_CHAIN, MONAD_RPC_URLS
from pingu.config.schema import AssetConfig, ChainConfig, ClientConfig


class TestAssetConfig:
    def test_valid(self):
        a = AssetConfig(address="0x0000000000000000000000000000000000000006", decimals=6)
        assert a.min_size == 0
        assert a.is_gas_token is False

    def test_negative_decimals_rejected(self):
        with pytest.raises(ValidationError):
            AssetConfig(address="0x00", decimals=-1)

    def test_negative_min_size_rejected(self):
        with pytest.raises(ValidationError):
            AssetConfig(address="0x00", decimals=6, min_size=-1)

    def test_frozen(self):
        a = AssetConfig(address="0x00", decimals=6)
        with pytest.raises(ValidationError):
            a.decimals = 8

    def test_extra_field_rejected(self):
        with pytest.raises(ValidationError):
            AssetConfig(address="0x00", decimals=6, symbol="USDC")


class TestChainConfig:
    def test_empty_rpc_urls_rejected(self):
        with pytest.raises(ValidationError):
            ChainConfig(chain_id=1, name="x", rpc_urls=[], data_store="0x00")

    def test_defaults_valid(self):
        assert DEFAULT_CHAIN.assets["USDC"].min_size == 1_000_000
        assert DEFAULT_CHAIN.assets["MON"].is_gas_token is True


class TestClientConfig:
    def test_endpoints_without_preferred(self):
        config = ClientConfig(chain=DEFAULT_CHAIN)
        assert config.endpoints == MONAD_RPC_URLS

    def test_preferred_endpoint_first(self):
        config = ClientConfig(chain=DEFAULT_CHAIN, rpc_url="https://mine.test")
        assert config.endpoints == ["https://mine.test", *MONAD_RPC_URLS]

    def test_private_key_hidden(self):
        config = ClientConfig(chain=DEFAULT_CHAIN, private_key="0xsecret")
        assert "0xsecret" not in repr(config)
        assert "private_key" not in config.model_dump()
        assert "0xsecret" not in config.model_dump_json()

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValidationError):
            ClientConfig(chain=DEFAULT_CHAIN, request_timeout=0)
