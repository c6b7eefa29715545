from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from domain.models.exchange_rate import ExchangeRateRow


class ExchangeRateRowResponse(BaseModel):
	id: int = Field(..., description='Row id derived from the currency code')
	currency_code: str = Field(..., description='Fiat currency code')
	rate_coin: int = Field(..., description='Coin amount in its smallest unit')
	rate_fiat: int = Field(..., description='Fiat amount in 10^-8 units')
	rate: Decimal = Field(..., description='Fiat value of one coin')
	source: str = Field(..., description='Provider of the rate')

	@classmethod
	def from_row(cls, row: ExchangeRateRow) -> 'ExchangeRateRowResponse':
		return cls(
			id=row.id,
			currency_code=row.currency_code,
			rate_coin=row.rate_coin,
			rate_fiat=row.rate_fiat,
			rate=row.to_exchange_rate().rate,
			source=row.source,
		)


class ExchangeRatesResponse(BaseModel):
	available: bool = Field(..., description='False when no rates have been cached yet')
	rates: list[ExchangeRateRowResponse] = Field(default_factory=list)

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'available': True,
				'rates': [
					{
						'id': 84326,
						'currency_code': 'USD',
						'rate_coin': 100000000,
						'rate_fiat': 3000000,
						'rate': '0.03',
						'source': 'coindesk.com',
					}
				],
			}
		}
	)
