import math
from typing import Optional

def format_currency(value: Optional[float], decimals: int = 2) -> str:
    """$ amount with a B/M/K suffix for large values and 8 decimals for dust."""
    if value is None:
        return "N/A"
    if value >= 1_000_000_000:
        return f"${value / 1_000_000_000:.2f}B"
    if value >= 1_000_000:
        return f"${value / 1_000_000:.2f}M"
    if value >= 1_000:
        return f"${value / 1_000:.2f}K"
    if value < 0.01:
        return f"${value:.8f}"
    return f"${value:.{decimals}f}"


def format_price(price: Optional[float]) -> str:
    """
    Token price with precision that grows as the price shrinks.
    Prices under $0.0001 use a zero-count notation: 0.0000001234 -> $0.0{6}1234
    """
    if price is None:
        return "N/A"
    if price <= 0:
        return "$0.00"
    if price >= 1:
        return f"${price:.2f}"
    if price >= 0.01:
        return f"${price:.4f}"
    if price >= 0.0001:
        return f"${price:.6f}"

    zeros = -math.floor(math.log10(price)) - 1
    if zeros >= 4:
        significand = price * 10 ** (zeros + 4)
        return f"$0.0{{{zeros}}}{significand:.0f}"
    return f"${price:.8f}"


def format_percentage(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.2f}%"


def format_number(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    if value >= 1_000_000_000:
        return f"{value / 1_000_000_000:.2f}B"
    if value >= 1_000_000:
        return f"{value / 1_000_000:.2f}M"
    if value >= 1_000:
        return f"{value / 1_000:.2f}K"
    return f"{value:.0f}"


def truncate_address(address: Optional[str], chars: int = 6) -> str:
    if not address:
        return "N/A"
    if len(address) <= chars * 2:
        return address
    return f"{address[:chars]}...{address[-chars:]}"
