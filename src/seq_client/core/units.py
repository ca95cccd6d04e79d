"""Conversion between raw integer amounts and decimal display strings."""

from decimal import Decimal, InvalidOperation


def format_balance(amount: int, decimals: int) -> str:
    """
    Format a raw amount using the asset's decimal places.

    Parameters
    ----------
    amount : int
        Raw integer amount
    decimals : int
        Number of decimal places of the asset

    Returns
    -------
    str
        Amount with exactly ``decimals`` fractional digits

    Examples
    --------
    >>> format_balance(5_000_000, 6)
    '5.000000'

    """
    value = Decimal(amount).scaleb(-decimals)
    return f"{value:.{decimals}f}"


def parse_balance(text: str, decimals: int) -> int:
    """
    Parse a decimal string into a raw integer amount.

    Parameters
    ----------
    text : str
        Human-readable amount (e.g., '1.5')
    decimals : int
        Number of decimal places of the asset

    Returns
    -------
    int
        Raw integer amount

    Raises
    ------
    ValueError
        If the string is not a number, is negative, or has more fractional
        digits than the asset supports

    """
    try:
        value = Decimal(text.strip())
    except InvalidOperation as e:
        msg = f"Invalid amount: {text!r}"
        raise ValueError(msg) from e

    if not value.is_finite():
        msg = f"Invalid amount: {text!r}"
        raise ValueError(msg)
    if value < 0:
        msg = f"Amount must not be negative: {text!r}"
        raise ValueError(msg)

    raw = value.scaleb(decimals)
    if raw != raw.to_integral_value():
        msg = f"Amount {text!r} has more than {decimals} decimal places"
        raise ValueError(msg)
    return int(raw)
