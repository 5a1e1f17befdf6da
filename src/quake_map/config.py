"""Map configuration: feed location, palette, initial view and tile providers."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace

FEED_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/all_week.geojson"
DEFAULT_TIMEOUT = 15.0

# Light green (shallow) → red (deep)
DEPTH_PALETTE: tuple[str, ...] = (
    "#9AFF9A",
    "#5AFF5A",
    "#28C428",
    "#FF7878",
    "#FF3232",
    "#FF0000",
)

# Non-positive depths are drawn at this floor
DEPTH_FLOOR = 0.01


@dataclass(frozen=True)
class TileProvider:
    """One base tile layer offered in the layer control."""

    name: str
    url: str
    attribution: str
    max_zoom: int | None = None


# For tile options see https://leaflet-extras.github.io/leaflet-providers/preview/
TILE_PROVIDERS: tuple[TileProvider, ...] = (
    TileProvider(
        name="Base",
        url=(
            "https://server.arcgisonline.com/ArcGIS/rest/services/"
            "Canvas/World_Light_Gray_Base/MapServer/tile/{z}/{y}/{x}"
        ),
        attribution="Tiles &copy; Esri &mdash; Esri, DeLorme, NAVTEQ",
        max_zoom=16,
    ),
    TileProvider(
        name="Streets",
        url="https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
        attribution=(
            '&copy; <a href="https://www.openstreetmap.org/copyright">'
            "OpenStreetMap</a> contributors"
        ),
    ),
    TileProvider(
        name="Satellite",
        url=(
            "https://basemap.nationalmap.gov/arcgis/rest/services/"
            "USGSImageryOnly/MapServer/tile/{z}/{y}/{x}"
        ),
        attribution='Tiles courtesy of the <a href="https://usgs.gov/">U.S. Geological Survey</a>',
        max_zoom=16,
    ),
)


@dataclass(frozen=True)
class MapConfig:
    """Everything a render pass needs besides the feed itself."""

    feed_url: str = FEED_URL
    timeout: float = DEFAULT_TIMEOUT
    palette: tuple[str, ...] = DEPTH_PALETTE
    center: tuple[float, float] = (37.0902, -95.7129)
    zoom: int = 4
    tile_providers: tuple[TileProvider, ...] = field(default=TILE_PROVIDERS)

    @classmethod
    def from_env(cls) -> MapConfig:
        """Build a config, overriding feed URL and timeout from the environment."""
        config = cls()
        feed_url = os.environ.get("QUAKE_MAP_FEED_URL")
        if feed_url:
            config = replace(config, feed_url=feed_url)
        timeout = os.environ.get("QUAKE_MAP_TIMEOUT")
        if timeout:
            config = replace(config, timeout=float(timeout))
        return config
