from dataclasses import dataclass
from decimal import Decimal

COIN = 100_000_000
FIAT_SMALLEST_UNIT_EXPONENT = 8

# The reference coin's own tickers never show up as fiat rates.
EXCLUDED_CURRENCY_CODES = frozenset({"BTC", "mBTC", "µBTC"})


@dataclass(frozen=True)
class ExchangeRate:
    currency_code: str
    coin_amount: int
    fiat_amount: int
    source: str

    def __post_init__(self):
        if not self.currency_code:
            raise ValueError("currency_code must not be empty")
        if self.currency_code in EXCLUDED_CURRENCY_CODES:
            raise ValueError(f"{self.currency_code} is not a fiat currency")
        if self.coin_amount <= 0:
            raise ValueError(f"coin_amount must be positive, got {self.coin_amount}")
        if self.fiat_amount <= 0:
            raise ValueError(f"fiat_amount must be positive, got {self.fiat_amount}")

    @property
    def fiat_value(self) -> Decimal:
        return Decimal(self.fiat_amount).scaleb(-FIAT_SMALLEST_UNIT_EXPONENT)

    @property
    def rate(self) -> Decimal:
        """Fiat value of one whole coin."""
        return self.fiat_value * COIN / self.coin_amount


def code_hash(code: str) -> int:
    """Stable 32-bit signed hash of a currency code, used as a row id."""
    h = 0
    for char in code:
        h = (31 * h + ord(char)) & 0xFFFFFFFF
    return h - 0x100000000 if h >= 0x80000000 else h


@dataclass(frozen=True)
class ExchangeRateRow:
    id: int
    currency_code: str
    rate_coin: int
    rate_fiat: int
    source: str

    @classmethod
    def from_exchange_rate(cls, rate: ExchangeRate) -> "ExchangeRateRow":
        return cls(
            id=code_hash(rate.currency_code),
            currency_code=rate.currency_code,
            rate_coin=rate.coin_amount,
            rate_fiat=rate.fiat_amount,
            source=rate.source,
        )

    def to_exchange_rate(self) -> ExchangeRate:
        return ExchangeRate(
            currency_code=self.currency_code,
            coin_amount=self.rate_coin,
            fiat_amount=self.rate_fiat,
            source=self.source,
        )
