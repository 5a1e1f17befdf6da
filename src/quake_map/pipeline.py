"""Two-stage fetch-then-render pipeline: load the feed, then build the layers.

The load stage is the only asynchronous step and reports its outcome through
an observable state (loading / ready / failed). The render stage is pure:
depths, color scale, markers and legend are recomputed from the loaded
quakes on every call and passed explicitly between steps.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass

import httpx

from quake_map.config import MapConfig
from quake_map.depth_scale import ColorScale, build_color_scale, effective_depths
from quake_map.exceptions import PipelineStateError, QuakeMapError
from quake_map.legend import build_legend_html
from quake_map.markers import build_markers
from quake_map.models import Earthquake, Marker
from quake_map.usgs_client import fetch_feed, parse_features

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Unable to load earthquake data"


class PipelineState(enum.Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class RenderResult:
    """Everything a map adapter needs from one render pass."""

    markers: tuple[Marker, ...]
    scale: ColorScale
    legend_html: str


def render_quakes(quakes: Sequence[Earthquake], palette: Sequence[str]) -> RenderResult:
    """Depth extraction → color scale → markers → legend, in that order."""
    depths = effective_depths(quakes)
    logger.info("Total earthquakes: %d", len(depths), extra={"event_count": len(depths)})
    scale = build_color_scale(depths, palette)
    markers = build_markers(quakes, scale)
    return RenderResult(
        markers=tuple(markers),
        scale=scale,
        legend_html=build_legend_html(scale),
    )


class QuakeMapPipeline:
    """Fetches the feed once and renders it on demand.

    Usage:
        pipeline = QuakeMapPipeline(MapConfig())
        await pipeline.load()
        if pipeline.state is PipelineState.READY:
            result = pipeline.render()
    """

    def __init__(
        self,
        config: MapConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or MapConfig()
        self._client = client
        self.state = PipelineState.LOADING
        self.error: str | None = None
        self.quakes: tuple[Earthquake, ...] = ()

    async def load(self) -> PipelineState:
        """Fetch and parse the feed; never retries.

        Feed and format errors move the pipeline to FAILED with a
        user-facing message instead of raising.
        """
        self.state = PipelineState.LOADING
        self.error = None
        url = self.config.feed_url
        start = time.monotonic()
        try:
            if self._client is not None:
                data = await fetch_feed(self._client, url, self.config.timeout)
            else:
                async with httpx.AsyncClient() as client:
                    data = await fetch_feed(client, url, self.config.timeout)
            quakes = parse_features(data)
        except QuakeMapError as exc:
            self.state = PipelineState.FAILED
            self.error = f"{FAILURE_MESSAGE}: {exc}"
            self.quakes = ()
            logger.error(
                "Feed load failed: %s", exc,
                extra={"feed": url, "state": self.state.value},
            )
            return self.state

        self.quakes = tuple(quakes)
        self.state = PipelineState.READY
        logger.info(
            "Feed loaded",
            extra={
                "feed": url,
                "event_count": len(self.quakes),
                "duration_ms": round((time.monotonic() - start) * 1000),
                "state": self.state.value,
            },
        )
        return self.state

    def render(self) -> RenderResult:
        if self.state is not PipelineState.READY:
            raise PipelineStateError(f"Cannot render while pipeline is {self.state.value}")
        return render_quakes(self.quakes, self.config.palette)

    def run(self) -> RenderResult:
        """Load synchronously, then render. Raises if the load failed."""
        asyncio.run(self.load())
        if self.state is PipelineState.FAILED:
            raise PipelineStateError(self.error or FAILURE_MESSAGE)
        return self.render()
