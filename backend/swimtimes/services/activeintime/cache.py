"""
Content-addressed response cache: one file per request URL, named by the MD5 of the URL,
holding the unwrapped JSON body. Entries never expire; delete the directory to refetch.
"""
import hashlib
import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Returned by ResponseCache.get when nothing usable is stored. A cached JSON null is a hit.
MISS = object()


class ResponseCache:
    """
    get/put of JSON bodies by URL under cache_dir (created on first put).

    File reads and writes are blocking and run on the event loop thread during the ingest
    fan-out; bodies are small and local, so they are not offloaded.
    """

    def __init__(self, cache_dir: Path | str) -> None:
        self.cache_dir = Path(cache_dir)

    @staticmethod
    def key_for(url: str) -> str:
        return hashlib.md5(url.encode()).hexdigest()

    def path_for(self, url: str) -> Path:
        return self.cache_dir / f"{self.key_for(url)}.json"

    def get(self, url: str) -> Any:
        """Cached body for url, or MISS. Corrupt or unreadable files count as a miss and are removed."""
        path = self.path_for(url)
        if not path.exists():
            return MISS
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Discarding unreadable cache file %s: %s", path.name, e)
            path.unlink(missing_ok=True)
            return MISS

    def put(self, url: str, body: Any) -> Path:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(url)
        path.write_text(json.dumps(body), encoding="utf-8")
        return path

    def clear(self) -> int:
        """Delete every cached body. Returns the number of files removed."""
        if not self.cache_dir.exists():
            return 0
        n = 0
        for path in self.cache_dir.glob("*.json"):
            path.unlink()
            n += 1
        return n
