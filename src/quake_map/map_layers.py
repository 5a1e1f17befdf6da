"""Map rendering for the earthquake markers.

Provides two map modes over the same marker descriptors:
- Leaflet map: folium with three switchable base tile layers, the marker
  overlay, an expanded layer control and the depth legend control
- Plotly map: Scattermapbox over the light base raster tiles, one trace per
  depth bin

Neither adapter computes colors or sizes; those come from the markers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import folium
import plotly.graph_objects as go
from branca.element import MacroElement
from jinja2 import Template

from quake_map.config import MapConfig
from quake_map.depth_scale import ColorScale
from quake_map.legend import LEGEND_CSS, LEGEND_TITLE

if TYPE_CHECKING:
    from quake_map.pipeline import RenderResult

OVERLAY_NAME = "Earthquakes"

# Guide lines marking where the map data ends at the antimeridian
SEAM_LINES = (
    [[-85, 180], [85, 180]],
    [[-85, -180], [85, -180]],
)
SEAM_COLOR = "#ddd"


class DepthLegend(MacroElement):
    """Static Leaflet control holding the prerendered legend HTML."""

    _template = Template("""
        {% macro header(this, kwargs) %}
            <style>{{ this.css }}</style>
        {% endmacro %}

        {% macro script(this, kwargs) %}
            var {{ this.get_name() }} = L.control({position: {{ this.position|tojson }}});
            {{ this.get_name() }}.onAdd = function (map) {
                var div = L.DomUtil.create("div", "legend");
                div.innerHTML = {{ this.html|tojson }};
                return div;
            };
            {{ this.get_name() }}.addTo({{ this._parent.get_name() }});
        {% endmacro %}
    """)

    def __init__(self, html: str, position: str = "bottomright", css: str = LEGEND_CSS):
        super().__init__()
        self._name = "DepthLegend"
        self.html = html
        self.position = position
        self.css = css


def build_folium_map(result: RenderResult, config: MapConfig | None = None) -> folium.Map:
    """Compose base layers, marker overlay, seam lines, layer control and legend."""
    config = config or MapConfig()
    fmap = folium.Map(location=list(config.center), zoom_start=config.zoom, tiles=None)

    # The first provider is the base layer shown on load
    for i, provider in enumerate(config.tile_providers):
        options = {"max_zoom": provider.max_zoom} if provider.max_zoom is not None else {}
        folium.TileLayer(
            tiles=provider.url,
            attr=provider.attribution,
            name=provider.name,
            overlay=False,
            control=True,
            show=i == 0,
            **options,
        ).add_to(fmap)

    overlay = folium.FeatureGroup(name=OVERLAY_NAME, overlay=True, control=True, show=True)
    for marker in result.markers:
        folium.CircleMarker(
            location=marker.location,
            radius=marker.radius,
            color=marker.color,
            fill=True,
            fill_color=marker.color,
            fill_opacity=marker.fill_opacity,
            stroke=marker.stroke,
            popup=folium.Popup(marker.popup),
        ).add_to(overlay)
    overlay.add_to(fmap)

    for line in SEAM_LINES:
        folium.PolyLine(line, color=SEAM_COLOR).add_to(fmap)

    folium.LayerControl(collapsed=False).add_to(fmap)
    DepthLegend(result.legend_html).add_to(fmap)
    return fmap


def bin_labels(scale: ColorScale) -> list[str]:
    """Legend label per palette color for the plotly map."""
    if scale.is_empty:
        return []
    labels = [f"≤ {b:,.2f}" for b in scale.boundaries]
    labels.append(f"> {scale.boundaries[-1]:,.2f}")
    return labels


def build_plotly_figure(result: RenderResult, config: MapConfig | None = None) -> go.Figure:
    """Build a Plotly Scattermapbox map of the same markers.

    Args:
        result: Markers and color scale from one render pass
        config: Center, zoom and tile providers (the first one is used)
    """
    config = config or MapConfig()
    fig = go.Figure()

    for line in SEAM_LINES:
        fig.add_trace(go.Scattermapbox(
            lat=[p[0] for p in line],
            lon=[p[1] for p in line],
            mode="lines",
            line=dict(width=1, color=SEAM_COLOR),
            hoverinfo="skip",
            showlegend=False,
        ))

    labels = bin_labels(result.scale)
    for index, label in enumerate(labels):
        color = result.scale.palette[index]
        members = [m for m in result.markers if result.scale.bin_index(m.depth) == index]
        if not members:
            continue
        fig.add_trace(go.Scattermapbox(
            lat=[m.latitude for m in members],
            lon=[m.longitude for m in members],
            mode="markers",
            marker=dict(
                # Leaflet radius is in pixels, plotly size is a diameter
                size=[m.radius * 2 for m in members],
                color=color,
                opacity=members[0].fill_opacity,
                sizemode="diameter",
            ),
            text=[m.popup.replace("<hr>", "<br>") for m in members],
            hoverinfo="text",
            name=label,
        ))

    base = config.tile_providers[0]
    fig.update_layout(
        mapbox=dict(
            style="white-bg",
            layers=[dict(
                below="traces",
                sourcetype="raster",
                sourceattribution=base.attribution,
                source=[base.url],
            )],
            center=dict(lat=config.center[0], lon=config.center[1]),
            zoom=config.zoom,
        ),
        height=650,
        margin=dict(l=0, r=0, t=0, b=0),
        legend=dict(
            title=dict(text=LEGEND_TITLE),
            bgcolor="rgba(255,255,255,0.8)",
            borderwidth=1,
            x=0.99, y=0.01,
            xanchor="right", yanchor="bottom",
        ),
    )
    return fig
