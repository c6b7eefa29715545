import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from domain.exceptions.exchange_rate import UnsupportedOperationError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(UnsupportedOperationError)
	async def unsupported_operation_handler(request: Request, exc: UnsupportedOperationError):
		return JSONResponse(
			status_code=status.HTTP_405_METHOD_NOT_ALLOWED, content={'detail': str(exc)}
		)

	@app.exception_handler(Exception)
	async def global_exception_handler(request: Request, exc: Exception):
		logger.error(f'Unhandled exception: {exc}', exc_info=True)
		return JSONResponse(status_code=500, content={'detail': 'Internal server error'})
