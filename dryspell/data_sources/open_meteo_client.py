"""Historical daily precipitation via the Open-Meteo archive API."""

import json
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional

import httpx
from loguru import logger

from dryspell.core.exceptions import DataSourceError
from dryspell.core.models import DailyRecord
from dryspell.utils.config import settings


class OpenMeteoClient:
    """Client for point daily precipitation series (free, no API key)."""

    def __init__(self, cache_dir: Optional[str] = None, transport: Optional[httpx.BaseTransport] = None):
        self.archive_url = settings.open_meteo.archive_url
        self.timeout = settings.open_meteo.timeout_seconds
        self.cache_ttl_days = settings.open_meteo.cache_ttl_days
        self.cache_dir = Path(cache_dir or settings.open_meteo.cache_dir)
        self.default_start = date.fromisoformat(settings.open_meteo.start_date)
        self.default_end = date.fromisoformat(settings.open_meteo.end_date)
        self.transport = transport

    def _cache_path(self, key: str) -> Path:
        return self.cache_dir / f"{key}.json"

    def _read_cache(self, key: str) -> Optional[dict]:
        path = self._cache_path(key)
        if not path.exists():
            return None
        try:
            with open(path) as f:
                data = json.load(f)
            cached_at = datetime.fromisoformat(data["cached_at"])
            if cached_at.tzinfo is None:
                cached_at = cached_at.replace(tzinfo=timezone.utc)
        except (OSError, ValueError, KeyError) as e:
            logger.warning(f"Ignoring unreadable cache {path.name}: {e}")
            return None
        if datetime.now(timezone.utc) - cached_at < timedelta(days=self.cache_ttl_days):
            return data["data"]
        return None

    def _write_cache(self, key: str, data: dict):
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        with open(self._cache_path(key), "w") as f:
            json.dump({"cached_at": datetime.now(timezone.utc).isoformat(), "data": data}, f)

    def get_daily_series(
        self,
        lat: float,
        lon: float,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[DailyRecord]:
        """Daily precipitation at the nearest grid cell, ascending by date."""
        start = start or self.default_start
        end = end or self.default_end
        if start > end:
            raise DataSourceError(f"start {start} is after end {end}")

        cache_key = f"daily_{lat}_{lon}_{start.isoformat()}_{end.isoformat()}"
        daily = self._read_cache(cache_key)
        if daily is not None:
            logger.debug(f"Cache hit: {cache_key}")
        else:
            daily = self._fetch(lat, lon, start, end)
            self._write_cache(cache_key, daily)

        return self._to_records(daily)

    def _fetch(self, lat: float, lon: float, start: date, end: date) -> dict:
        params = {
            "latitude": lat,
            "longitude": lon,
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "daily": "precipitation_sum",
            "timezone": settings.open_meteo.timezone,
        }

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                resp = client.get(self.archive_url, params=params)
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Daily series fetch failed ({lat}, {lon}): {e}")
            raise DataSourceError(f"Open-Meteo request failed: {e}") from e

        daily = data.get("daily")
        if not daily or "time" not in daily or "precipitation_sum" not in daily:
            logger.error(f"Unexpected Open-Meteo payload keys: {list(data)}")
            raise DataSourceError("Open-Meteo response has no daily precipitation")

        logger.info(f"Fetched {len(daily['time'])} days at ({lat}, {lon})")
        return {"time": daily["time"], "precipitation_sum": daily["precipitation_sum"]}

    def _to_records(self, daily: dict) -> List[DailyRecord]:
        times = daily["time"]
        precip = daily["precipitation_sum"]
        if len(times) != len(precip):
            raise DataSourceError(f"{len(times)} dates but {len(precip)} precipitation values")

        return [
            DailyRecord(
                date=date.fromisoformat(t),
                precipitation_mm=None if p is None else round(float(p), 1),
            )
            for t, p in zip(times, precip)
        ]


open_meteo_client = OpenMeteoClient()
