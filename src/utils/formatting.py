from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal, localcontext


def format_decimal(value: Decimal) -> str:
    quantized = value.normalize()
    # Avoid scientific notation for integers.
    if quantized == quantized.to_integral():
        return f"{quantized:.0f}"
    return format(quantized, "f")


def format_amount(value: Decimal, decimal_places: int) -> str:
    """Round ``value`` to ``decimal_places`` and drop trailing zeros."""
    with localcontext() as ctx:
        # Room for every integer digit plus the requested fraction digits.
        ctx.prec = max(ctx.prec, value.adjusted() + decimal_places + 2)
        exponent = Decimal(1).scaleb(-decimal_places)
        rounded = value.quantize(exponent, rounding=ROUND_HALF_EVEN)
        formatted = format_decimal(rounded)
    # "-0" can appear after rounding tiny negative balances.
    return "0" if formatted == "-0" else formatted


def format_bool(value: bool) -> str:
    return "true" if value else "false"
