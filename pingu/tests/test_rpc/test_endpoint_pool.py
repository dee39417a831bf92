"""Tests for the endpoint pool and address resolution."""

import pytest
from eth_account import Account

from pingu.contracts.names import ContractName
from pingu.models.common import ADDRESS_ZERO
from pingu.rpc.endpoint_pool import EndpointPool
from pingu.rpc.errors import EndpointsExhaustedError, ValidationError
from pingu.rpc.fallback import FallbackExecutor
from pingu.rpc.registry import AddressResolver
from pingu.tests.fakes import DATA_STORE, REGISTRY, RPC_A, RPC_B, RPC_C, TEST_ADDRESS, TEST_PRIVATE_KEY


@pytest.fixture
def pool(web3_factory) -> EndpointPool:
    return EndpointPool([RPC_A, RPC_B, RPC_C], DATA_STORE, web3_factory)


@pytest.fixture
def resolver(pool: EndpointPool) -> AddressResolver:
    return AddressResolver(pool.state, FallbackExecutor(pool))


class TestEndpointPool:
    def test_empty_rejected(self, web3_factory):
        with pytest.raises(ValidationError):
            EndpointPool([], DATA_STORE, web3_factory)

    def test_connects_to_first(self, pool, chain):
        assert pool.size == 3
        assert pool.state.active_endpoint == RPC_A
        assert pool.web3.url == RPC_A
        assert chain.connections == [RPC_A]

    def test_switch_wraps_around(self, pool, chain):
        pool.switch_to_next()
        pool.switch_to_next()
        pool.switch_to_next()
        assert pool.state.active_index == 0
        assert pool.state.generation == 3
        assert chain.connections == [RPC_A, RPC_B, RPC_C, RPC_A]

    def test_switch_rebuilds_handles(self, pool):
        old_web3 = pool.web3
        old_registry = pool.state.registry
        pool.switch_to_next()
        assert pool.web3 is not old_web3
        assert pool.web3.url == RPC_B
        assert pool.state.registry is not old_registry
        assert pool.state.registry.url == RPC_B

    def test_signer_set_as_default_account(self, web3_factory):
        account = Account.from_key(TEST_PRIVATE_KEY)
        pool = EndpointPool([RPC_A, RPC_B], DATA_STORE, web3_factory, account=account)
        assert pool.web3.eth.default_account == TEST_ADDRESS
        pool.switch_to_next()
        assert pool.web3.eth.default_account == TEST_ADDRESS


class TestAddressResolver:
    def test_resolves_and_caches(self, resolver, chain):
        assert resolver.resolve(ContractName.ORDERS) == REGISTRY["Orders"]
        assert resolver.resolve("Orders") == REGISTRY["Orders"]
        assert len(chain.calls_to("getAddress")) == 1

    def test_switch_clears_cache(self, pool, resolver, chain):
        resolver.resolve(ContractName.MARKET_STORE)
        assert pool.state.address_cache
        pool.switch_to_next()
        assert pool.state.address_cache == {}

        resolver.resolve(ContractName.MARKET_STORE)
        lookups = chain.calls_to("getAddress")
        assert [c.url for c in lookups] == [RPC_A, RPC_B]

    def test_unknown_name_rejected_locally(self, resolver, chain):
        with pytest.raises(ValidationError, match="Unknown contract: Nope"):
            resolver.resolve("Nope")
        assert chain.calls == []

    def test_zero_address_rejected(self, resolver, chain):
        chain.registry["FundStore"] = ADDRESS_ZERO
        with pytest.raises(ValidationError, match="FundStore"):
            resolver.resolve(ContractName.FUND_STORE)

    def test_lookup_fails_over(self, pool, resolver, chain):
        chain.down.add(RPC_A)
        assert resolver.resolve(ContractName.POOL) == REGISTRY["Pool"]
        assert pool.state.active_endpoint == RPC_B

    def test_lookup_exhausted(self, resolver, chain):
        chain.down.update({RPC_A, RPC_B, RPC_C})
        with pytest.raises(EndpointsExhaustedError, match="All 3 RPC endpoints failed"):
            resolver.resolve(ContractName.POOL)
