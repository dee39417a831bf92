"""Tests for liquidity pool operations."""

import pytest

from pingu.models.common import ADDRESS_ZERO, MAX_UINT256
from pingu.pool import Pool
from pingu.rpc.errors import ValidationError
from pingu.tests.fakes import OTHER_ADDRESS, REGISTRY, TEST_ADDRESS, USDC


@pytest.fixture
def pool(client) -> Pool:
    return Pool(client)


def _pool_store(chain, unlocked, locked, total, balance, supply):
    chain.on_contract("PoolStore", "getUnlockedClpBalance", unlocked)
    chain.on_contract("PoolStore", "getLockedClpBalance", locked)
    chain.on_contract("PoolStore", "getUserClpBalance", total)
    chain.on_contract("PoolStore", "getBalance", balance)
    chain.on_contract("PoolStore", "getClpSupply", supply)


class TestDepositWithdraw:
    def test_deposit_erc20(self, pool, chain):
        pool.deposit("250", lockup_index=2)
        sent = chain.sent[0]
        assert sent.fn == "deposit"
        assert sent.args == (USDC, 250_000_000, 2)
        assert sent.value == 0
        assert sent.tx["to"] == REGISTRY["Pool"]

    def test_deposit_gas_asset_sends_value(self, pool, chain):
        pool.deposit("1.5", asset="MON")
        sent = chain.sent[0]
        assert sent.args == (ADDRESS_ZERO, 15 * 10**17, 0)
        assert sent.value == 15 * 10**17

    def test_withdraw(self, pool, chain):
        pool.withdraw(10)
        assert chain.sent[0].fn == "withdraw"
        assert chain.sent[0].args == (USDC, 10_000_000)

    def test_deposit_needs_signer(self, readonly_client, chain):
        with pytest.raises(ValidationError):
            Pool(readonly_client).deposit(1)
        assert chain.calls == []


class TestTaxes:
    def test_deposit_tax_percent(self, pool, chain):
        chain.on_contract("Pool", "getDepositTaxBps", 25)
        assert pool.get_deposit_tax(100, lockup_index=1) == 0.25
        assert chain.calls_to("getDepositTaxBps")[0].args == (USDC, 100_000_000, 1)

    def test_withdrawal_tax_percent(self, pool, chain):
        chain.on_contract("Pool", "getWithdrawalTaxBps", 150)
        assert pool.get_withdrawal_tax(100) == 1.5

    def test_single_bps_kept(self, pool, chain):
        chain.on_contract("Pool", "getWithdrawalTaxBps", 7)
        assert pool.get_withdrawal_tax(100) == 0.07


class TestUserBalance:
    def test_clp_converted_to_asset(self, pool, chain):
        # pool holds 2000 USDC against 1000 CLP: 1 CLP = 2 USDC
        _pool_store(
            chain,
            unlocked=100_000_000,
            locked=50_000_000,
            total=150_000_000,
            balance=2_000_000_000,
            supply=1_000_000_000,
        )
        b = pool.get_user_balance()
        assert (b.withdrawable, b.locked, b.total) == (200.0, 100.0, 300.0)
        assert chain.calls_to("getUserClpBalance")[0].args == (USDC, TEST_ADDRESS)

    def test_other_address(self, pool, chain):
        _pool_store(chain, 1, 0, 1, 1, 1)
        pool.get_user_balance(OTHER_ADDRESS)
        assert chain.calls_to("getUserClpBalance")[0].args == (USDC, OTHER_ADDRESS)

    def test_empty_supply_is_zero(self, pool, chain):
        _pool_store(chain, 100, 0, 100, 2_000, 0)
        b = pool.get_user_balance()
        assert (b.withdrawable, b.locked, b.total) == (0.0, 0.0, 0.0)

    def test_empty_pool_is_zero(self, pool, chain):
        _pool_store(chain, 100, 0, 100, 0, 1_000)
        assert pool.get_user_balance().total == 0.0


class TestApprove:
    def test_default_unlimited(self, pool, chain):
        pool.approve_asset()
        sent = chain.sent[0]
        assert sent.fn == "approve"
        assert sent.args == (REGISTRY["FundStore"], MAX_UINT256)
        assert sent.tx["to"] == USDC

    def test_explicit_amount(self, pool, chain):
        pool.approve_asset(amount=5_000_000)
        assert chain.sent[0].args == (REGISTRY["FundStore"], 5_000_000)

    def test_gas_asset_rejected(self, pool, chain):
        with pytest.raises(ValidationError, match="Cannot approve gas token"):
            pool.approve_asset("MON")
        assert chain.calls == []
