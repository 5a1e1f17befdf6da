"""Weekly USGS earthquakes on an interactive map, colored by depth."""

from quake_map.config import MapConfig
from quake_map.pipeline import PipelineState, QuakeMapPipeline, RenderResult, render_quakes

__all__ = [
    "MapConfig",
    "PipelineState", "QuakeMapPipeline", "RenderResult", "render_quakes",
]
