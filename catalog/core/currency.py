import re

from catalog.core.config import settings

CURRENCIES: dict[str, dict[str, str]] = {
    "USD": {"name": "US Dollar", "symbol": "$", "code": "USD", "position": "before"},
    "AED": {"name": "Dirham", "symbol": "د.إ", "code": "AED", "position": "before"},
    "PKR": {"name": "Rs (Rupees)", "symbol": "₨", "code": "PKR", "position": "before"},
}

_NON_NUMERIC_RE = re.compile(r"[^\d.\-]")
_NUMBER_RE = re.compile(r"^-?(\d+\.?\d*|\.\d+)")


def get_currency(code: str | None = None) -> dict[str, str]:
    code = (code or settings.default_currency).upper()
    try:
        return CURRENCIES[code]
    except KeyError:
        raise ValueError(f"Unsupported currency: {code!r}") from None


def format_currency(
    amount: float,
    currency_code: str | None = None,
    *,
    show_symbol: bool = True,
    decimal_places: int = 2,
) -> str:
    currency = get_currency(currency_code)
    formatted = f"{amount:.{decimal_places}f}"
    if not show_symbol:
        return formatted
    if currency["position"] == "before":
        return f"{currency['symbol']}{formatted}"
    return f"{formatted}{currency['symbol']}"


def parse_currency(value: str) -> float:
    """Extract the amount from a formatted currency string, 0 when there is none."""
    match = _NUMBER_RE.match(_NON_NUMERIC_RE.sub("", value))
    return float(match.group(0)) if match else 0.0
