import logging
import time
from typing import Any

import httpx

from domain.exceptions.exchange_rate import NetworkError, ParseError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15


def create_http_client(
    user_agent: str,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Client shared by every upstream: fixed timeout, no redirects, gzip only."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        follow_redirects=False,
        headers={"User-Agent": user_agent, "Accept-Encoding": "gzip"},
        transport=transport,
    )


class JSONSource:
    """One upstream endpoint answering a GET with a JSON document."""

    def __init__(self, url: str, client: httpx.AsyncClient):
        self.url = url
        self._client = client

    async def fetch_json(self) -> Any:
        start = time.monotonic()
        try:
            response = await self._client.get(self.url)
        except httpx.RequestError as e:
            raise NetworkError(f"Request to {self.url} failed: {e.__class__.__name__}") from e

        if response.status_code != httpx.codes.OK:
            raise NetworkError(f"HTTP status {response.status_code} from {self.url}")

        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(f"Invalid JSON from {self.url}: {e}") from e

        logger.info(
            f"fetched {self.url} ({response.headers.get('content-encoding')}), "
            f"{len(response.text)} chars, took {int((time.monotonic() - start) * 1000)} ms"
        )
        return data
