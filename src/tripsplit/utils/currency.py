from __future__ import annotations

import math
import re
from decimal import Decimal, ROUND_HALF_UP

# Room currencies: code -> (name, en-US display symbol as printed by Intl.NumberFormat)
SUPPORTED_CURRENCIES = {
    "USD": ("US Dollar", "$"),
    "EUR": ("Euro", "€"),
    "GBP": ("British Pound", "£"),
    "JPY": ("Japanese Yen", "¥"),
    "CAD": ("Canadian Dollar", "CA$"),
    "AUD": ("Australian Dollar", "A$"),
    "CHF": ("Swiss Franc", "CHF"),
    "CNY": ("Chinese Yuan", "CN¥"),
    "INR": ("Indian Rupee", "₹"),
    "THB": ("Thai Baht", "THB"),
    "SGD": ("Singapore Dollar", "SGD"),
}

_CODE_RE = re.compile(r"^[A-Z]{3}$")


class UnsupportedCurrencyError(ValueError):
    pass


def currency_symbol(currency_code: str) -> str:
    code = currency_code.strip().upper()
    if not _CODE_RE.match(code):
        raise UnsupportedCurrencyError(f"Invalid currency code: {currency_code!r}")
    entry = SUPPORTED_CURRENCIES.get(code)
    return entry[1] if entry else code


def format_currency(amount: float, currency_code: str) -> str:
    """Format ``amount`` the en-US way, e.g. ``-$1,234.50`` or ``CHF 10.00``.

    Always two decimals, half-up rounding. Alphabetic symbols are separated
    from the number by a plain space, not the no-break space Intl uses, and
    well-formed codes missing from SUPPORTED_CURRENCIES print as the bare code
    (``NZD 3.00`` where Intl gives ``NZ$3.00``).
    """
    symbol = currency_symbol(currency_code)
    if not math.isfinite(amount):
        raise ValueError(f"amount must be finite, got {amount!r}")
    value = Decimal(repr(float(amount))).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    separator = " " if symbol[-1].isalpha() else ""
    return f"{sign}{symbol}{separator}{abs(value):,.2f}"
