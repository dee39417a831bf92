"""Registry keys for the contracts the client talks to."""

from enum import StrEnum

from pingu.contracts import abis
from pingu.rpc.errors import ValidationError


class ContractName(StrEnum):
    ORDERS = "Orders"
    ORDER_STORE = "OrderStore"
    POSITIONS = "Positions"
    POSITION_STORE = "PositionStore"
    MARKET_STORE = "MarketStore"
    POOL = "Pool"
    POOL_STORE = "PoolStore"
    RISK_STORE = "RiskStore"
    FUNDING_STORE = "FundingStore"
    FUNDING = "Funding"
    FUND_STORE = "FundStore"  # custody; address-only (allowance spender)


CONTRACT_ABIS: dict[ContractName, list[dict]] = {
    ContractName.ORDERS: abis.ORDERS_ABI,
    ContractName.ORDER_STORE: abis.ORDER_STORE_ABI,
    ContractName.POSITIONS: abis.POSITIONS_ABI,
    ContractName.POSITION_STORE: abis.POSITION_STORE_ABI,
    ContractName.MARKET_STORE: abis.MARKET_STORE_ABI,
    ContractName.POOL: abis.POOL_ABI,
    ContractName.POOL_STORE: abis.POOL_STORE_ABI,
    ContractName.RISK_STORE: abis.RISK_STORE_ABI,
    ContractName.FUNDING_STORE: abis.FUNDING_STORE_ABI,
    ContractName.FUNDING: abis.FUNDING_ABI,
}


def resolve_name(name: "ContractName | str") -> ContractName:
    """Coerce a registry key, rejecting unknown names locally."""
    try:
        return ContractName(name)
    except ValueError:
        available = ", ".join(n.value for n in ContractName)
        raise ValidationError(
            f"Unknown contract: {name}. Available: {available}"
        ) from None


def abi_for(name: ContractName) -> list[dict]:
    abi = CONTRACT_ABIS.get(name)
    if abi is None:
        raise ValidationError(f"Contract {name} has no callable interface")
    return abi
