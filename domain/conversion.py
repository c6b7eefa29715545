import math
import re
from decimal import Decimal, InvalidOperation

from domain.exceptions.exchange_rate import ParseError
from domain.models.exchange_rate import FIAT_SMALLEST_UNIT_EXPONENT

CURRENCY_CODE_PATTERN = re.compile(r"^[A-Z]{3,5}$")


def parse_decimal(raw) -> float:
    """Parse a JSON scalar as a locale-insensitive decimal number."""
    if isinstance(raw, bool) or not isinstance(raw, (str, int, float)):
        raise ParseError(f"Not a decimal value: {raw!r}")
    try:
        value = float(str(raw).strip())
    except ValueError as e:
        raise ParseError(f"Not a decimal value: {raw!r}") from e
    if not math.isfinite(value):
        raise ParseError(f"Not a finite value: {raw!r}")
    return value


def scale_fiat(raw, multiplier: float, currency_code: str) -> int:
    """
    Convert a per-BTC upstream quote into a fixed-point fiat amount per coin.

    The product is computed in double precision, rendered with 8 decimals and
    parsed back into an integer count of 10^-8 fiat units.
    """
    if not currency_code or not CURRENCY_CODE_PATTERN.match(currency_code):
        raise ParseError(f"Unrecognized currency code: {currency_code!r}")

    rendered = f"{parse_decimal(raw) * multiplier:.8f}"
    try:
        amount = Decimal(rendered)
    except InvalidOperation as e:
        raise ParseError(f"Cannot parse {rendered!r} for {currency_code}") from e
    if not amount.is_finite():
        raise ParseError(f"Not a finite amount for {currency_code}: {rendered}")

    fiat_amount = int(amount.scaleb(FIAT_SMALLEST_UNIT_EXPONENT))
    if fiat_amount <= 0:
        raise ParseError(f"Non-positive amount for {currency_code}: {rendered}")
    return fiat_amount
