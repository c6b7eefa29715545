import locale
import logging

logger = logging.getLogger(__name__)

CURRENCY_SYMBOLS = {
    "AUD": "A$",
    "BRL": "R$",
    "CAD": "CA$",
    "CHF": "CHF",
    "CNY": "CN¥",
    "CZK": "Kč",
    "DKK": "kr.",
    "EUR": "€",
    "GBP": "£",
    "HKD": "HK$",
    "ILS": "₪",
    "INR": "₹",
    "JPY": "¥",
    "KRW": "₩",
    "MXN": "MX$",
    "NGN": "₦",
    "NZD": "NZ$",
    "PHP": "₱",
    "PLN": "zł",
    "RUB": "₽",
    "THB": "฿",
    "TRY": "₺",
    "TWD": "NT$",
    "UAH": "₴",
    "USD": "$",
    "VND": "₫",
    "ZAR": "R",
}


def currency_symbol(code: str) -> str:
    return CURRENCY_SYMBOLS.get(code, code)


def locale_currency_code() -> str | None:
    """Currency code of the process locale, or None when it cannot be resolved."""
    try:
        locale.setlocale(locale.LC_MONETARY, "")
        code = locale.localeconv()["int_curr_symbol"].strip()
    except (locale.Error, KeyError) as e:
        logger.debug(f"No default currency for process locale: {e}")
        return None
    return code[:3] or None
