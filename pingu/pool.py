"""Liquidity pool: deposits, withdrawals, tax previews and CLP balances."""

import logging
from typing import Any

from web3 import Web3

from pingu.client import PinguClient
from pingu.contracts.names import ContractName
from pingu.models.amounts import AmountLike, to_float, to_scaled
from pingu.models.market import PoolBalance
from pingu.rpc.classifier import wrap_operation
from pingu.rpc.transactions import TransactionSender
from pingu.trading.approvals import approve_fund_store

logger = logging.getLogger(__name__)


class Pool:
    def __init__(self, client: PinguClient):
        self.client = client
        self.tx = TransactionSender(client)

    def deposit(self, amount: AmountLike, asset: str | None = None, lockup_index: int = 0) -> Any:
        """Deposit liquidity; ``lockup_index`` selects the lockup period tier."""
        self.client.require_signer()
        asset_cfg = self.client.asset(asset)
        asset_address = self.client.asset_address(asset)
        scaled = to_scaled(amount, asset_cfg.decimals)
        value = scaled if asset_cfg.is_gas_token else 0

        logger.info("Depositing %s of %s (lockup %d)", scaled, asset_address, lockup_index)
        with wrap_operation("deposit"):
            return self.tx.submit(
                lambda: self.client.get_contract(ContractName.POOL).functions.deposit(
                    asset_address, scaled, lockup_index
                ),
                value=value,
                action="deposit",
            )

    def withdraw(self, amount: AmountLike, asset: str | None = None) -> Any:
        self.client.require_signer()
        asset_cfg = self.client.asset(asset)
        asset_address = self.client.asset_address(asset)
        scaled = to_scaled(amount, asset_cfg.decimals)

        with wrap_operation("withdraw"):
            return self.tx.submit(
                lambda: self.client.get_contract(ContractName.POOL).functions.withdraw(
                    asset_address, scaled
                ),
                action="withdraw",
            )

    def get_deposit_tax(
        self, amount: AmountLike, asset: str | None = None, lockup_index: int = 0
    ) -> float:
        """Deposit tax in percent."""
        asset_cfg = self.client.asset(asset)
        asset_address = self.client.asset_address(asset)
        scaled = to_scaled(amount, asset_cfg.decimals)
        with wrap_operation("get deposit tax"):
            tax_bps = self.client.with_fallback(
                lambda: self.client.get_contract(ContractName.POOL)
                .functions.getDepositTaxBps(asset_address, scaled, lockup_index)
                .call(),
                label="get deposit tax",
            )
        return int(tax_bps) / 100

    def get_withdrawal_tax(self, amount: AmountLike, asset: str | None = None) -> float:
        """Withdrawal tax in percent."""
        asset_cfg = self.client.asset(asset)
        asset_address = self.client.asset_address(asset)
        scaled = to_scaled(amount, asset_cfg.decimals)
        with wrap_operation("get withdrawal tax"):
            tax_bps = self.client.with_fallback(
                lambda: self.client.get_contract(ContractName.POOL)
                .functions.getWithdrawalTaxBps(asset_address, scaled)
                .call(),
                label="get withdrawal tax",
            )
        return int(tax_bps) / 100

    def get_user_balance(self, address: str | None = None, asset: str | None = None) -> PoolBalance:
        """A user's pool share converted from CLP to asset units.

        amount = clp * poolBalance // clpSupply, for the unlocked, locked and
        total CLP balances. An empty pool reports zero across the board.
        """
        user = Web3.to_checksum_address(address) if address else self.client.address
        asset_cfg = self.client.asset(asset)
        asset_address = self.client.asset_address(asset)

        with wrap_operation("get user balance"):
            def fetch():
                store = self.client.get_contract(ContractName.POOL_STORE).functions
                return (
                    store.getUnlockedClpBalance(asset_address, user).call(),
                    store.getLockedClpBalance(asset_address, user).call(),
                    store.getUserClpBalance(asset_address, user).call(),
                    store.getBalance(asset_address).call(),
                    store.getClpSupply(asset_address).call(),
                )

            unlocked, locked, total, pool_balance, supply = self.client.with_fallback(
                fetch, label="get user balance"
            )

        if supply == 0 or pool_balance == 0:
            return PoolBalance(withdrawable=0.0, locked=0.0, total=0.0)

        d = asset_cfg.decimals
        return PoolBalance(
            withdrawable=to_float(unlocked * pool_balance // supply, d),
            locked=to_float(locked * pool_balance // supply, d),
            total=to_float(total * pool_balance // supply, d),
        )

    def approve_asset(self, asset: str | None = None, amount: int | None = None) -> Any:
        return approve_fund_store(self.client, self.tx, asset, amount)
