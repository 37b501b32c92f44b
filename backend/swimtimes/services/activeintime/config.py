"""ActiveInTime API config. Key, base URL and user agent from settings or ActiveInTimeClient args."""
from datetime import date

from swimtimes.config import settings
from swimtimes.core.constants import ENTRY_WINDOW_DAYS


class ActiveInTimeConfig:
    """API key, base URL and request headers for ActiveInTime."""

    __slots__ = ("api_key", "base_url", "user_agent")

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        user_agent: str | None = None,
    ) -> None:
        self.api_key = (api_key if api_key is not None else settings.activeintime_api_key).strip()
        self.base_url = (base_url or settings.activeintime_base_url).rstrip("/")
        self.user_agent = user_agent or settings.activeintime_user_agent

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json, text/plain, */*",
        }

    def site_url(self, site_id: int) -> str:
        return f"{self.base_url}/sites/{site_id}.json?key={self.api_key}"

    def timetable_url(self, timetable_id: int) -> str:
        return f"{self.base_url}/timetables/{timetable_id}.json?key={self.api_key}"

    def timetable_entries_url(
        self,
        timetable_id: int,
        from_date: date,
        number_of_days: int = ENTRY_WINDOW_DAYS,
    ) -> str:
        """Entries for number_of_days starting at from_date (YYYY-MM-DD)."""
        return (
            f"{self.base_url}/timetables/{timetable_id}/timetable_entries.json"
            f"?numberOfDays={number_of_days}&fromDate={from_date.isoformat()}&key={self.api_key}"
        )
