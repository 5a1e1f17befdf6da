"""Convert earthquakes into widget-independent circle markers."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import Decimal

from quake_map.depth_scale import ColorScale, effective_depth
from quake_map.models import Earthquake, Marker


def radius_for_magnitude(magnitude: float) -> float:
    """Marker radius in pixels.

    Quakes below M0.5 keep a radius of 2 so they stay visible.
    """
    if magnitude < 0.5:
        return 2
    return magnitude * 4


def format_event_time(time: datetime) -> str:
    """Medium date, short time in UTC, e.g. ``Nov 14, 2023, 10:13 PM``."""
    t = time.astimezone(timezone.utc)
    hour = t.hour % 12 or 12
    return f"{t:%b} {t.day}, {t.year}, {hour}:{t:%M} {t:%p}"


def _format_number(value: float) -> str:
    """Print a number the way a browser's ``String(number)`` does."""
    if isinstance(value, int):
        return str(value)
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    # Plain decimals between 1e-6 and 1e21, exponent form outside
    if "e" in text and 1e-6 <= abs(value) < 1e21:
        return format(Decimal(text), "f")
    return text


def build_popup(quake: Earthquake) -> str:
    """Popup HTML: place, magnitude and UTC time separated by rules."""
    return (
        f"{quake.place}<hr>"
        f"Magnitude: {_format_number(quake.magnitude)}<hr>"
        f"{format_event_time(quake.time)} UTC"
    )


def build_marker(quake: Earthquake, scale: ColorScale) -> Marker:
    depth = effective_depth(quake.depth)
    return Marker(
        latitude=quake.latitude,
        longitude=quake.longitude,
        radius=radius_for_magnitude(quake.magnitude),
        color=scale.color_for(depth),
        popup=build_popup(quake),
        depth=depth,
        magnitude=quake.magnitude,
    )


def build_markers(quakes: Iterable[Earthquake], scale: ColorScale) -> list[Marker]:
    """One marker per quake, in feed order."""
    return [build_marker(q, scale) for q in quakes]
