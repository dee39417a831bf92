"""Order sizing that reproduces the on-chain leverage check.

The Positions contract enforces::

    require(UNIT * size / margin <= maxLeverage * UNIT, "!max-leverage")

with floored integer division. ``compute_size`` returns the largest size the
requested leverage allows that still passes that check exactly.
"""

import math
from decimal import Decimal
from fractions import Fraction

from pingu.config.schema import AssetConfig
from pingu.models.amounts import ScaledAmount
from pingu.models.common import UNIT
from pingu.rpc.errors import ValidationError

LEVERAGE_SCALE = 10**10  # leverage is floored to 10 decimals

LeverageLike = int | float | str | Decimal | Fraction


def compute_size(margin: int, leverage: LeverageLike, max_leverage: int) -> ScaledAmount:
    """Position size for ``margin`` at ``leverage``, capped at ``max_leverage``.

    1. Cap leverage at the market maximum.
    2. Floor it to 10 decimals and multiply: size = margin * lev_fixed // 1e10.
    3. Re-run the contract's check; if rounding tipped it over, clamp to
       margin * max_leverage and, failing that, drop one unit.
    """
    if margin < 0:
        raise ValidationError(f"Margin must be non-negative: {margin}")
    if max_leverage < 0:
        raise ValidationError(f"Max leverage must be non-negative: {max_leverage}")
    desired = _to_fraction(leverage)

    capped = min(desired, Fraction(max_leverage))
    leverage_fixed = math.floor(capped * LEVERAGE_SCALE)
    size = margin * leverage_fixed // LEVERAGE_SCALE

    if margin == 0 or size == 0:
        return ScaledAmount(size)

    ceiling = max_leverage * UNIT
    if UNIT * size // margin > ceiling:
        size = margin * max_leverage
        if UNIT * size // margin > ceiling:
            size -= 1

    return ScaledAmount(size)


def passes_leverage_check(size: int, margin: int, max_leverage: int) -> bool:
    """The contract's leverage inequality, evaluated off-chain."""
    if margin == 0:
        return size == 0
    return UNIT * size // margin <= max_leverage * UNIT


def validate_min_size(size: int, asset: AssetConfig, asset_name: str) -> None:
    """Reject sizes below the asset minimum before anything is sent."""
    if size < asset.min_size:
        raise ValidationError(
            f"Order size {size} is below the minimum size {asset.min_size} "
            f"for {asset_name} (!min-size)"
        )


def _to_fraction(leverage: LeverageLike) -> Fraction:
    try:
        if isinstance(leverage, float):
            value = Fraction(repr(leverage))
        else:
            value = Fraction(leverage)
    except (ValueError, TypeError, OverflowError, ZeroDivisionError) as e:
        raise ValidationError(f"Invalid leverage: {leverage!r}") from e
    if value < 0:
        raise ValidationError(f"Leverage must be non-negative: {leverage!r}")
    return value
