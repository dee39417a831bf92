"""Fixed-point amount codec: human decimals <-> scaled integer amounts.

All parsing goes through decimal strings and integer arithmetic, never through
a binary float. Floats are accepted but converted via their shortest repr
first (``0.1`` becomes ``"0.1"``), so ``to_scaled(0.1, 6) == 100000``.
"""

from decimal import ROUND_DOWN, Context, Decimal, InvalidOperation

from pingu.rpc.errors import ValidationError

# Wide enough for any uint256 value at any supported decimal scale.
_CONTEXT = Context(prec=160)


class ScaledAmount(int):
    """An integer already expressed in an asset's smallest unit.

    Passing one to ``to_scaled`` returns it unchanged, while a plain int is
    read as a human-readable whole amount.
    """

    def __repr__(self) -> str:
        return f"ScaledAmount({int(self)})"


AmountLike = ScaledAmount | int | float | str | Decimal | None


def to_scaled(value: AmountLike, decimals: int) -> ScaledAmount:
    """Convert a human-readable amount to a scaled integer amount.

    Empty, zero and NaN-like inputs normalize to zero. Digits beyond
    ``decimals`` are truncated. Negative or infinite values raise
    ValidationError.
    """
    if isinstance(value, ScaledAmount):
        return value
    if value is None or isinstance(value, bool):
        return ScaledAmount(0)
    if isinstance(value, int):
        if value < 0:
            raise ValidationError(f"Amount must be non-negative: {value}")
        return ScaledAmount(value * 10**decimals)

    text = repr(value) if isinstance(value, float) else str(value).strip()
    if not text:
        return ScaledAmount(0)
    try:
        parsed = Decimal(text)
    except InvalidOperation as e:
        raise ValidationError(f"Invalid amount: {value!r}") from e

    if parsed.is_nan():
        return ScaledAmount(0)
    if parsed.is_infinite():
        raise ValidationError(f"Amount must be finite: {value!r}")
    if parsed < 0:
        raise ValidationError(f"Amount must be non-negative: {value!r}")

    scaled = parsed.scaleb(decimals, context=_CONTEXT)
    return ScaledAmount(int(scaled.to_integral_value(rounding=ROUND_DOWN, context=_CONTEXT)))


def from_scaled(amount: int | None, decimals: int) -> str:
    """Convert a scaled integer amount back to a decimal string.

    Trailing fractional zeros are dropped but one fractional digit is kept,
    e.g. ``from_scaled(1_500_000, 6) == "1.5"`` and
    ``from_scaled(0, 18) == "0.0"``.
    """
    if not amount:
        amount = 0
    sign = "-" if amount < 0 else ""
    whole, frac = divmod(abs(int(amount)), 10**decimals)
    if decimals == 0:
        return f"{sign}{whole}"
    frac_text = str(frac).rjust(decimals, "0").rstrip("0") or "0"
    return f"{sign}{whole}.{frac_text}"


def to_float(amount: int | None, decimals: int) -> float:
    """Display helper: scaled amount as a float. Never used for arithmetic."""
    return float(from_scaled(amount, decimals))
