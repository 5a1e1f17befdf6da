"""Streamlit host page for the earthquake map.

Run with: streamlit run src/quake_map/dashboard.py
"""

from __future__ import annotations

import asyncio

import streamlit as st
import streamlit.components.v1 as components

from quake_map.config import MapConfig
from quake_map.map_layers import build_folium_map
from quake_map.pipeline import FAILURE_MESSAGE, PipelineState, QuakeMapPipeline, RenderResult


@st.cache_data(ttl=300)
def load_render(
    feed_url: str,
    timeout: float,
    palette: tuple[str, ...],
) -> tuple[str, RenderResult | None, str | None]:
    """Load and render once per feed; cached for five minutes."""
    pipeline = QuakeMapPipeline(MapConfig(feed_url=feed_url, timeout=timeout, palette=palette))
    asyncio.run(pipeline.load())
    if pipeline.state is PipelineState.FAILED:
        return pipeline.state.value, None, pipeline.error
    return pipeline.state.value, pipeline.render(), None


def main() -> None:
    st.set_page_config(page_title="Weekly Earthquakes", layout="wide")
    config = MapConfig.from_env()

    with st.spinner("Loading earthquake data..."):
        state, result, error = load_render(config.feed_url, config.timeout, config.palette)

    if state == PipelineState.FAILED.value or result is None:
        st.error(error or FAILURE_MESSAGE)
        return

    st.caption(f"{len(result.markers)} earthquakes in the current feed")
    fmap = build_folium_map(result, config)
    components.html(fmap.get_root().render(), height=720)


if __name__ == "__main__":
    main()
