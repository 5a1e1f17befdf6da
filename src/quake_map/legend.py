"""Depth legend markup."""

from __future__ import annotations

from quake_map.depth_scale import ColorScale

LEGEND_TITLE = "Depth (km)"

# The lowest boundary sits just above zero; it is always labelled as the floor
FLOOR_LABEL = "0.01 +"

LEGEND_CSS = """
.legend {
    background: rgba(255, 255, 255, 0.9);
    border-radius: 5px;
    box-shadow: 0 0 15px rgba(0, 0, 0, 0.2);
    padding: 6px 10px;
    font: 13px/1.4 Arial, Helvetica, sans-serif;
}
.legend .legend_title { margin: 0 0 6px; font-size: 14px; }
.legend .data_container { display: flex; }
.legend .gradient { width: 18px; min-height: 120px; margin-right: 8px; }
.legend .gradient_values ul {
    display: flex;
    flex-direction: column;
    justify-content: space-between;
    height: 100%;
    list-style: none;
    margin: 0;
    padding: 0;
}
"""


def format_boundary(value: float, index: int) -> str:
    if index == 0:
        return FLOOR_LABEL
    return f"{value:,.2f}"


def build_legend_html(scale: ColorScale) -> str:
    """Legend body: title, vertical palette gradient and boundary labels."""
    items = "".join(
        f"<li>{format_boundary(value, i)}</li>"
        for i, value in enumerate(scale.boundaries)
    )
    gradient = ", ".join(scale.palette)
    return (
        f'<h3 class="legend_title">{LEGEND_TITLE}</h3>'
        '<div class="data_container">'
        f'<div class="gradient" style="background: linear-gradient({gradient})"></div>'
        '<div class="gradient_values">'
        f"<ul>{items}</ul>"
        "</div>"
        "</div>"
    )
