"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def minor_unit_epsilon(minor_unit: int) -> Decimal:
    """Return the smallest representable amount for a currency.

    Args:
        minor_unit: Number of decimal places of the currency (2 for cents).

    Returns:
        Decimal: One unit of the currency's minor precision.
    """
    if minor_unit < 0:
        raise ValueError(f"minor_unit must be non-negative, got {minor_unit}")
    return Decimal(1).scaleb(-minor_unit)


def round_money(value: Decimal, minor_unit: int = 2) -> Decimal:
    """Round an amount for presentation.

    Only adapters call this; domain computations keep full precision.

    Args:
        value: Amount to round.
        minor_unit: Number of decimal places to keep.

    Returns:
        Decimal: Amount quantized half-up to the minor unit.
    """
    return coerce_decimal(value).quantize(
        minor_unit_epsilon(minor_unit),
        rounding=ROUND_HALF_UP,
    )


__all__ = ["coerce_decimal", "minor_unit_epsilon", "round_money"]
