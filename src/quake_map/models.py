"""Earthquake and marker data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from quake_map.exceptions import FeedFormatError


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Earthquake:
    """Represents a single earthquake event from the USGS feed."""

    id: str
    magnitude: float
    place: str
    time: datetime
    longitude: float
    latitude: float
    depth: float
    url: str

    @classmethod
    def from_geojson_feature(cls, feature: dict) -> Earthquake:
        fid = feature.get("id", "?") if isinstance(feature, dict) else "?"
        try:
            props = feature["properties"]
            coords = feature["geometry"]["coordinates"]
            longitude, latitude, depth = coords[0], coords[1], coords[2]
            magnitude = props["mag"]
            epoch_ms = props["time"]
        except (KeyError, IndexError, TypeError) as exc:
            raise FeedFormatError(f"Feature {fid} is missing {exc}") from exc

        for name, value in (("longitude", longitude), ("latitude", latitude),
                            ("depth", depth), ("time", epoch_ms)):
            if not _is_number(value):
                raise FeedFormatError(f"Feature {fid} has non-numeric {name}: {value!r}")
        if magnitude is not None and not _is_number(magnitude):
            raise FeedFormatError(f"Feature {fid} has non-numeric magnitude: {magnitude!r}")

        try:
            time = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise FeedFormatError(f"Feature {fid} has invalid time {epoch_ms!r}") from exc

        return cls(
            id=feature.get("id") or "",
            magnitude=magnitude or 0.0,
            place=props.get("place") or "Unknown",
            time=time,
            longitude=longitude,
            latitude=latitude,
            depth=depth,
            url=props.get("url") or "",
        )


@dataclass(frozen=True)
class Marker:
    """A circle marker for one earthquake, independent of any map widget."""

    latitude: float
    longitude: float
    radius: float
    color: str
    popup: str
    depth: float
    magnitude: float
    fill_opacity: float = 0.8
    stroke: bool = False

    @property
    def location(self) -> list[float]:
        return [self.latitude, self.longitude]
