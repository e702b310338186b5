"""Display helpers for money and dates."""

from datetime import date
from decimal import Decimal

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "C$",
    "AUD": "A$",
}

# Settings date format tokens mapped to strftime directives, longest first
_DATE_TOKENS = (("YYYY", "%Y"), ("YY", "%y"), ("MM", "%m"), ("DD", "%d"))


def currency_symbol(code: str) -> str:
    """Symbol for a currency code, or the code itself if unknown."""
    return CURRENCY_SYMBOLS.get((code or "").upper(), code or "")


def format_money(amount: Decimal, currency: str = "USD") -> str:
    """Format an amount like "-$1,234.50"."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_symbol(currency)}{abs(amount):,.2f}"


def format_date(day: date, date_format: str = "MM/DD/YYYY") -> str:
    """Render a date with a settings format such as "DD/MM/YYYY"."""
    pattern = date_format
    for token, directive in _DATE_TOKENS:
        pattern = pattern.replace(token, directive)
    return day.strftime(pattern)
