"""ActiveInTime API client: lowest level, sends request and unwraps the envelope. No validation."""
import json
import logging
from typing import Any

import httpx

from swimtimes.core.constants import RESPONSE_ENVELOPE_KEY
from swimtimes.core.errors import FetchError
from swimtimes.services.activeintime.config import ActiveInTimeConfig

logger = logging.getLogger(__name__)


class ActiveInTimeClient:
    """Async GET client for the ActiveInTime v1 API. No retries and no timeout."""

    def __init__(
        self,
        config: ActiveInTimeConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or ActiveInTimeConfig()
        self._http = httpx.AsyncClient(
            headers=self._config.headers(),
            timeout=None,
            transport=transport,
        )
        self.requests_made = 0

    @property
    def config(self) -> ActiveInTimeConfig:
        return self._config

    async def __aenter__(self) -> "ActiveInTimeClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def fetch_raw(self, url: str) -> bytes:
        """GET url and return the raw body. Transport errors and non-2xx raise FetchError."""
        logger.debug("GET %s", url)
        self.requests_made += 1
        try:
            r = await self._http.get(url)
        except httpx.HTTPError as e:
            raise FetchError(url, f"ActiveInTime request failed: {e}") from e
        if not r.is_success:
            raise FetchError(url, f"ActiveInTime API error: {r.status_code}", status_code=r.status_code)
        return r.content

    async def fetch(self, url: str) -> Any:
        """GET url, parse JSON and return the value inside the {"response": ...} envelope."""
        body = await self.fetch_raw(url)
        try:
            data = json.loads(body)
        except (TypeError, ValueError) as e:
            raise FetchError(url, f"ActiveInTime returned non-JSON body: {e}") from e
        if not isinstance(data, dict) or RESPONSE_ENVELOPE_KEY not in data:
            raise FetchError(url, "ActiveInTime response has no envelope")
        return data[RESPONSE_ENVELOPE_KEY]
