"""ActiveInTime API: cached fetch. Client sends the request; cache stores unwrapped bodies by URL."""
import logging
from typing import Any

from swimtimes.services.activeintime.cache import MISS, ResponseCache
from swimtimes.services.activeintime.client import ActiveInTimeClient
from swimtimes.services.activeintime.config import ActiveInTimeConfig

logger = logging.getLogger(__name__)


class CachedFetcher:
    """
    fetch-with-cache: cache hit returns the stored body; miss fetches, stores and returns.
    Two concurrent misses on one URL both fetch and write the same body.
    """

    def __init__(self, client: ActiveInTimeClient, cache: ResponseCache) -> None:
        self.client = client
        self.cache = cache
        self.hits = 0
        self.misses = 0

    @property
    def config(self) -> ActiveInTimeConfig:
        return self.client.config

    async def get_or_fetch(self, url: str) -> Any:
        body = self.cache.get(url)
        if body is not MISS:
            self.hits += 1
            logger.debug("Cache hit %s", self.cache.key_for(url))
            return body
        self.misses += 1
        body = await self.client.fetch(url)
        self.cache.put(url, body)
        return body


__all__ = ["MISS", "ActiveInTimeClient", "ActiveInTimeConfig", "CachedFetcher", "ResponseCache"]
