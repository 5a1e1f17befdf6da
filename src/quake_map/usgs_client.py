"""HTTP client for the USGS earthquake summary feeds."""

from __future__ import annotations

import logging

import httpx

from quake_map.config import DEFAULT_TIMEOUT
from quake_map.exceptions import FeedError
from quake_map.models import Earthquake

logger = logging.getLogger(__name__)

BASE_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary"

FEEDS = {
    "hour": f"{BASE_URL}/all_hour.geojson",
    "day": f"{BASE_URL}/all_day.geojson",
    "week": f"{BASE_URL}/all_week.geojson",
    "significant": f"{BASE_URL}/significant_month.geojson",
}


def feed_url(period: str = "week") -> str:
    """Return the summary feed URL for a period."""
    url = FEEDS.get(period)
    if url is None:
        raise ValueError(f"Unknown period '{period}'. Choose from: {list(FEEDS.keys())}")
    return url


async def fetch_feed(
    client: httpx.AsyncClient,
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict:
    """Fetch a GeoJSON feature collection in a single request.

    There is no retry: any network error, non-2xx status or undecodable body
    is raised as FeedError.
    """
    try:
        resp = await client.get(url, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except httpx.HTTPStatusError as exc:
        raise FeedError(
            f"Feed returned HTTP {exc.response.status_code}",
            url=url,
            status_code=exc.response.status_code,
        ) from exc
    except httpx.RequestError as exc:
        raise FeedError(f"Feed request failed: {exc}", url=url) from exc
    except ValueError as exc:
        raise FeedError(f"Feed is not valid JSON: {exc}", url=url) from exc

    if not isinstance(data, dict) or not isinstance(data.get("features"), list):
        raise FeedError("Feed is not a GeoJSON FeatureCollection", url=url)

    logger.info(
        "Fetched %d features", len(data["features"]),
        extra={"feed": url, "event_count": len(data["features"])},
    )
    return data


def parse_features(data: dict) -> list[Earthquake]:
    """Convert every feature of a collection, keeping feed order."""
    return [Earthquake.from_geojson_feature(f) for f in data["features"]]
