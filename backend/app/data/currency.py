"""Currency utilities — supported currencies, fallback rates, and money formatting."""

from decimal import ROUND_HALF_UP, Decimal

SUPPORTED_CURRENCIES: list[str] = [
    "CAD", "USD", "EUR", "GBP", "AUD", "NZD", "MXN", "JPY",
    "CHF", "SGD", "HKD", "CNY", "THB", "INR", "ZAR", "BRL",
]

# Base currencies refreshed by the daily rate job
DAILY_REFRESH_BASES: list[str] = ["CAD", "USD", "EUR", "GBP"]

# Units of each currency per 1 USD, used when no stored or live rate exists
FALLBACK_RATES_PER_USD: dict[str, Decimal] = {
    "CAD": Decimal("1.38"),
    "USD": Decimal("1"),
    "EUR": Decimal("0.92"),
    "GBP": Decimal("0.79"),
    "AUD": Decimal("1.53"),
    "NZD": Decimal("1.67"),
    "MXN": Decimal("17.20"),
    "JPY": Decimal("154"),
    "CHF": Decimal("0.88"),
    "SGD": Decimal("1.34"),
    "HKD": Decimal("7.78"),
    "CNY": Decimal("7.24"),
    "THB": Decimal("34.5"),
    "INR": Decimal("84"),
    "ZAR": Decimal("17.8"),
    "BRL": Decimal("5.78"),
}

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$", "CAD": "CA$", "GBP": "£", "EUR": "€",
    "JPY": "¥", "AUD": "A$", "NZD": "NZ$", "SGD": "S$", "HKD": "HK$",
    "INR": "₹", "CHF": "CHF ", "CNY": "CN¥", "MXN": "MX$",
    "THB": "฿", "ZAR": "R", "BRL": "R$",
}

RATE_QUANTUM = Decimal("0.00000001")


def is_supported(currency: str) -> bool:
    return currency.upper() in SUPPORTED_CURRENCIES


def quantize_rate(rate: Decimal) -> Decimal:
    """Round a rate to the 8 decimal places stored in the database."""
    return rate.quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)


def fallback_rate(from_currency: str, to_currency: str) -> Decimal | None:
    """Cross rate from the static USD table, or None for an unknown currency."""
    from_per_usd = FALLBACK_RATES_PER_USD.get(from_currency.upper())
    to_per_usd = FALLBACK_RATES_PER_USD.get(to_currency.upper())
    if from_per_usd is None or to_per_usd is None:
        return None
    return quantize_rate(to_per_usd / from_per_usd)


def convert_cents(amount_cents: int, rate: Decimal) -> int:
    """Apply a rate to an integer cents amount, rounding half up."""
    return int((Decimal(amount_cents) * rate).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_cents(amount_cents: int, currency: str = "CAD") -> str:
    """Format a cents amount with currency symbol for display, e.g. "CA$1,234.50"."""
    symbol = CURRENCY_SYMBOLS.get(currency, currency + " ")
    sign = "-" if amount_cents < 0 else ""
    return f"{sign}{symbol}{abs(amount_cents) / 100:,.2f}"


def agent_commission_cents(commission_total_cents: int, split_percentage: Decimal) -> int:
    """Agent's share of a commission, rounded half up to the cent."""
    return convert_cents(commission_total_cents, Decimal(split_percentage) / 100)


def dollars_to_cents(amount: Decimal) -> int:
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
