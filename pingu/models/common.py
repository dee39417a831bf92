"""Common constants and helpers shared across models."""

ADDRESS_ZERO = "0x0000000000000000000000000000000000000000"
BPS_DIVIDER = 10_000
UNIT = 10**18  # on-chain fixed-point unit for prices and leverage
MAX_UINT256 = 2**256 - 1


def safe_div(numerator: int, denominator: int) -> int:
    """Floored integer division that returns 0 when the divisor is 0."""
    if denominator == 0:
        return 0
    return numerator // denominator


def calculate_leverage(size: int, margin: int) -> float:
    """Leverage of a position with 3-decimal precision, for display."""
    if margin == 0:
        return 0.0
    return (size * 1000 // margin) / 1000


def add_gas_buffer(gas_estimate: int) -> int:
    """Pad a gas estimate by 20%."""
    return gas_estimate * 12 // 10
