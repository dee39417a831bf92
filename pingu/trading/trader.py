"""Trading operations: orders, closes, cancels, margin and account reads."""

import logging
import math
from decimal import Decimal
from typing import Any

from web3 import Web3

from pingu.client import PinguClient
from pingu.contracts.names import ContractName
from pingu.ingest.price_feed import PriceFeedClient
from pingu.models.amounts import AmountLike, ScaledAmount, to_float, to_scaled
from pingu.models.common import BPS_DIVIDER
from pingu.models.market import feed_id_hex
from pingu.models.order import Order, OrderIntent, OrderType, Position
from pingu.rpc.classifier import wrap_operation
from pingu.rpc.errors import ValidationError
from pingu.rpc.transactions import TransactionSender
from pingu.trading.approvals import approve_fund_store
from pingu.trading.sizing import LeverageLike, compute_size, validate_min_size

logger = logging.getLogger(__name__)

PRICE_DECIMALS = 18

PriceLike = int | float | str | Decimal


class Trader:
    def __init__(self, client: PinguClient, price_feed: PriceFeedClient | None = None):
        self.client = client
        self.tx = TransactionSender(client)
        self.price_feed = price_feed or PriceFeedClient(
            client.config.price_feed_url, client.config.request_timeout
        )

    # --- Orders ---

    def submit_market_order(
        self,
        market: str,
        is_long: bool,
        margin: AmountLike,
        leverage: LeverageLike,
        asset: str | None = None,
        tp_price: PriceLike | None = None,
        sl_price: PriceLike | None = None,
    ) -> Any:
        """Submit a market order, optionally with take-profit / stop-loss.

        TP/SL are reduce-only opposite-side orders (limit / stop) of the same
        size sent in the same transaction. They do not cancel each other.
        """
        return self._submit_order(
            "submit market order",
            market=market,
            is_long=is_long,
            margin=margin,
            leverage=leverage,
            order_type=OrderType.MARKET,
            price=0,
            asset=asset,
            tp_price=tp_price,
            sl_price=sl_price,
        )

    def submit_limit_order(
        self,
        market: str,
        is_long: bool,
        margin: AmountLike,
        leverage: LeverageLike,
        price: PriceLike,
        asset: str | None = None,
        tp_price: PriceLike | None = None,
        sl_price: PriceLike | None = None,
        expiry: int = 0,
    ) -> Any:
        """Submit a limit order at ``price`` (human-readable, 18-decimal on-chain)."""
        return self._submit_order(
            "submit limit order",
            market=market,
            is_long=is_long,
            margin=margin,
            leverage=leverage,
            order_type=OrderType.LIMIT,
            price=to_scaled(price, PRICE_DECIMALS),
            asset=asset,
            tp_price=tp_price,
            sl_price=sl_price,
            expiry=expiry,
        )

    def _submit_order(
        self,
        operation: str,
        *,
        market: str,
        is_long: bool,
        margin: AmountLike,
        leverage: LeverageLike,
        order_type: OrderType,
        price: int,
        asset: str | None,
        tp_price: PriceLike | None,
        sl_price: PriceLike | None,
        expiry: int = 0,
    ) -> Any:
        self.client.require_signer()
        asset_name = asset or self.client.config.default_asset
        asset_cfg = self.client.asset(asset_name)
        asset_address = self.client.asset_address(asset_name)

        with wrap_operation(operation):
            raw_market = self._get_raw_market(market)
        max_leverage = int(raw_market.maxLeverage)

        margin_scaled = to_scaled(margin, asset_cfg.decimals)
        size = compute_size(margin_scaled, leverage, max_leverage)
        validate_min_size(size, asset_cfg, asset_name)

        main = OrderIntent(
            market=market,
            asset=asset_address,
            is_long=is_long,
            margin=margin_scaled,
            size=size,
            price=price,
            order_type=order_type,
            expiry=expiry,
        )
        intents = [main]
        if tp_price:
            intents.append(main.exit_order(to_scaled(tp_price, PRICE_DECIMALS), OrderType.LIMIT))
        if sl_price:
            intents.append(main.exit_order(to_scaled(sl_price, PRICE_DECIMALS), OrderType.STOP))

        value = 0
        if asset_cfg.is_gas_token:
            # margin + fee without referral discount; the contract refunds any excess
            value = margin_scaled + size * int(raw_market.fee) // BPS_DIVIDER

        logger.info(
            "%s: %s %s margin=%s size=%s (max leverage %dx, %d orders)",
            operation, "LONG" if is_long else "SHORT", market,
            margin_scaled, size, max_leverage, len(intents),
        )
        with wrap_operation(operation):
            return self._submit_intents(intents, value=value, action=operation)

    def close_position(
        self,
        market: str,
        is_long: bool,
        asset: str | None = None,
        size: AmountLike = None,
    ) -> Any:
        """Close a position with a reduce-only market order.

        Without ``size`` the whole position is closed; the matching position
        (market, direction, asset) is looked up first.
        """
        self.client.require_signer()
        asset_name = asset or self.client.config.default_asset
        asset_cfg = self.client.asset(asset_name)
        asset_address = self.client.asset_address(asset_name)

        if size is not None:
            close_size = to_scaled(size, asset_cfg.decimals)
        else:
            with wrap_operation("close position"):
                positions = self._get_raw_positions(self.client.address)
            match = next(
                (
                    p
                    for p in positions
                    if p.market == market
                    and p.is_long == is_long
                    and p.asset_address.lower() == asset_address.lower()
                ),
                None,
            )
            if match is None:
                raise ValidationError(
                    f"No {'long' if is_long else 'short'} position found "
                    f"for {market} [{asset_name}]"
                )
            close_size = ScaledAmount(match.size)

        intent = OrderIntent(
            market=market,
            asset=asset_address,
            is_long=not is_long,
            margin=0,
            size=close_size,
            is_reduce_only=True,
        )
        with wrap_operation("close position"):
            return self._submit_intents([intent], value=0, action="close position")

    def cancel_order(self, order_id: int) -> Any:
        self.client.require_signer()
        with wrap_operation("cancel order"):
            return self.tx.submit(
                lambda: self.client.get_contract(ContractName.ORDERS).functions.cancelOrder(
                    order_id
                ),
                action="cancel order",
            )

    def cancel_orders(self, order_ids: list[int]) -> Any:
        self.client.require_signer()
        if not order_ids:
            raise ValidationError("No order ids given")
        with wrap_operation("cancel orders"):
            return self.tx.submit(
                lambda: self.client.get_contract(ContractName.ORDERS).functions.cancelOrders(
                    list(order_ids)
                ),
                action="cancel orders",
            )

    # --- Margin ---

    def add_margin(self, market: str, amount: AmountLike, asset: str | None = None) -> Any:
        self.client.require_signer()
        asset_cfg = self.client.asset(asset)
        asset_address = self.client.asset_address(asset)
        margin = to_scaled(amount, asset_cfg.decimals)
        value = margin if asset_cfg.is_gas_token else 0

        with wrap_operation("add margin"):
            return self.tx.submit(
                lambda: self.client.get_contract(ContractName.POSITIONS).functions.addMargin(
                    asset_address, market, margin
                ),
                value=value,
                action="add margin",
            )

    def remove_margin(self, market: str, amount: AmountLike, asset: str | None = None) -> Any:
        """Remove margin from a position, raising its leverage.

        The remaining margin must stay above zero and the resulting leverage
        within the market maximum; both are enforced on-chain. Needs a fresh
        Pyth price update.
        """
        self.client.require_signer()
        asset_cfg = self.client.asset(asset)
        asset_address = self.client.asset_address(asset)
        margin = to_scaled(amount, asset_cfg.decimals)

        with wrap_operation("remove margin"):
            raw_market = self._get_raw_market(market)
        updates = self.price_feed.get_price_updates(feed_id_hex(raw_market.pythFeed))

        with wrap_operation("remove margin"):
            return self.tx.submit(
                lambda: self.client.get_contract(ContractName.POSITIONS).functions.removeMargin(
                    asset_address, market, margin, updates
                ),
                action="remove margin",
            )

    def close_position_without_profit(self, market: str, asset: str | None = None) -> Any:
        """Close a profitable position and take back only its margin.

        Emergency exit for when the pool cannot pay out profit: the profit is
        forfeited and the whole position closes. Reverts with !pnl-positive
        if the position is at a loss.
        """
        self.client.require_signer()
        asset_address = self.client.asset_address(asset)

        with wrap_operation("close position without profit"):
            raw_market = self._get_raw_market(market)
        updates = self.price_feed.get_price_updates(feed_id_hex(raw_market.pythFeed))

        with wrap_operation("close position without profit"):
            return self.tx.submit(
                lambda: self.client.get_contract(
                    ContractName.POSITIONS
                ).functions.closePositionWithoutProfit(asset_address, market, updates),
                action="close position without profit",
            )

    # --- Account reads ---

    def get_positions(self, address: str | None = None) -> list[Position]:
        user = Web3.to_checksum_address(address) if address else self.client.address
        with wrap_operation("get positions"):
            return self._get_raw_positions(user)

    def get_orders(self, address: str | None = None) -> list[Order]:
        user = Web3.to_checksum_address(address) if address else self.client.address
        with wrap_operation("get orders"):
            raw_orders = self.client.with_fallback(
                lambda: self.client.get_contract(ContractName.ORDER_STORE)
                .functions.getUserOrders(user)
                .call(),
                label="get orders",
            )
        return [Order.from_raw(o, self._asset_label(o.asset)) for o in raw_orders]

    def get_balance(self, asset: str | None = None) -> float:
        user = self.client.address
        asset_cfg = self.client.asset(asset)
        with wrap_operation("get balance"):
            if asset_cfg.is_gas_token:
                balance = self.client.with_fallback(
                    lambda: self.client.web3.eth.get_balance(user), label="get balance"
                )
            else:
                token = self.client.asset_address(asset)
                balance = self.client.with_fallback(
                    lambda: self.client.get_erc20_contract(token)
                    .functions.balanceOf(user)
                    .call(),
                    label="get balance",
                )
        return to_float(balance, asset_cfg.decimals)

    def get_allowance(self, asset: str | None = None) -> float:
        """FundStore allowance; the gas asset needs none and reports infinity."""
        user = self.client.address
        asset_cfg = self.client.asset(asset)
        if asset_cfg.is_gas_token:
            return math.inf
        token = self.client.asset_address(asset)
        with wrap_operation("get allowance"):
            spender = self.client.get_contract_address(ContractName.FUND_STORE)
            allowance = self.client.with_fallback(
                lambda: self.client.get_erc20_contract(token)
                .functions.allowance(user, spender)
                .call(),
                label="get allowance",
            )
        return to_float(allowance, asset_cfg.decimals)

    def approve_asset(self, asset: str | None = None, amount: int | None = None) -> Any:
        return approve_fund_store(self.client, self.tx, asset, amount)

    # --- Internals ---

    def _submit_intents(self, intents: list[OrderIntent], value: int, action: str) -> Any:
        tuples = [i.as_tuple() for i in intents]
        return self.tx.submit(
            lambda: self.client.get_contract(ContractName.ORDERS).functions.submitSimpleOrders(
                tuples, []
            ),
            value=value,
            action=action,
        )

    def _get_raw_market(self, market: str) -> Any:
        return self.client.with_fallback(
            lambda: self.client.get_contract(ContractName.MARKET_STORE).functions.get(market).call(),
            label=f"get market {market}",
        )

    def _get_raw_positions(self, user: str) -> list[Position]:
        raw_positions = self.client.with_fallback(
            lambda: self.client.get_contract(ContractName.POSITION_STORE)
            .functions.getUserPositions(user)
            .call(),
            label="get positions",
        )
        return [
            Position.from_raw(p, self._asset_label(p.asset))
            for p in raw_positions
            if int(p.size) != 0
        ]

    def _asset_label(self, address: str) -> str:
        return self.client.asset_name_by_address(address) or address
