import time
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_exchange_rate_service
from api.schemas import ExchangeRateRowResponse, ExchangeRatesResponse
from application.services import ExchangeRateService, QueryMode

router = APIRouter(prefix='/api', tags=['exchange-rates'])

ServiceDep = Annotated[ExchangeRateService, Depends(get_exchange_rate_service)]


@router.get(
	'/exchange-rates',
	response_model=ExchangeRatesResponse,
	status_code=status.HTTP_200_OK,
	summary='List, search or pick exchange rates',
)
async def query_exchange_rates(
	service: ServiceDep,
	q: Annotated[str | None, Query(min_length=1, description='Search code or symbol')] = None,
	currency_code: Annotated[
		str | None, Query(min_length=3, max_length=5, description='Preferred currency code')
	] = None,
	offline: Annotated[bool, Query(description='Never contact upstream sources')] = False,
) -> ExchangeRatesResponse:
	if q is not None and currency_code is not None:
		raise HTTPException(
			status_code=status.HTTP_400_BAD_REQUEST,
			detail='Use either q or currency_code, not both',
		)

	if currency_code is not None:
		mode, argument = QueryMode.CURRENCY_CODE, currency_code.upper()
	elif q is not None:
		mode, argument = QueryMode.SEARCH, q
	else:
		mode, argument = QueryMode.ALL, None

	rows = await service.handle(int(time.time() * 1000), offline, mode, argument)
	if rows is None:
		return ExchangeRatesResponse(available=False, rates=[])
	return ExchangeRatesResponse(
		available=True, rates=[ExchangeRateRowResponse.from_row(row) for row in rows]
	)


@router.get('/exchange-rates/type', summary='Not supported')
async def get_exchange_rates_type(service: ServiceDep) -> str:
	return await service.get_type()


@router.post('/exchange-rates', summary='Not supported')
async def insert_exchange_rate(service: ServiceDep) -> None:
	await service.insert({})


@router.put('/exchange-rates', summary='Not supported')
async def update_exchange_rates(service: ServiceDep) -> int:
	return await service.update({})


@router.delete('/exchange-rates', summary='Not supported')
async def delete_exchange_rates(service: ServiceDep) -> int:
	return await service.delete()
