"""Depth extraction and the quantile color scale used for markers and legend.

Depths are clamped to a small positive floor, then split into equal-frequency
bins: with a palette of N colors the scale holds the N - 1 quantile cut
points at probabilities 1/N, 2/N, ... (N-1)/N. Bin i (colored palette[i])
holds the depths above boundary i-1 and up to boundary i, so each color
covers a comparable share of the observed events even when depths are
heavily skewed toward shallow quakes.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd

from quake_map.config import DEPTH_FLOOR, DEPTH_PALETTE
from quake_map.models import Earthquake


def effective_depth(depth: float) -> float:
    """Depth used for coloring: non-positive depths become DEPTH_FLOOR."""
    return depth if depth > 0 else DEPTH_FLOOR


def effective_depths(quakes: Iterable[Earthquake]) -> pd.Series:
    """Effective depth of every quake, in input order."""
    depths = pd.Series([q.depth for q in quakes], dtype="float64")
    return depths.where(depths > 0, DEPTH_FLOOR)


@dataclass(frozen=True)
class ColorScale:
    """Palette bound to ordered depth boundaries."""

    palette: tuple[str, ...]
    boundaries: tuple[float, ...]
    limits: tuple[float, float] | None = None

    def bin_index(self, depth: float) -> int:
        """Index of the bin holding depth (bins are closed on the right)."""
        return bisect_left(self.boundaries, depth)

    def color_for(self, depth: float) -> str:
        return self.palette[self.bin_index(depth)]

    @property
    def is_empty(self) -> bool:
        return not self.boundaries


def build_color_scale(
    depths: Sequence[float] | pd.Series,
    palette: Sequence[str] = DEPTH_PALETTE,
) -> ColorScale:
    """Build the equal-frequency scale over already-clamped depths.

    An empty depth set gives a scale with no boundaries; every lookup then
    returns the first palette color.
    """
    if len(palette) < 2:
        raise ValueError("palette needs at least two colors")

    values = np.asarray(depths, dtype="float64")
    if values.size == 0:
        return ColorScale(palette=tuple(palette), boundaries=())

    n = len(palette)
    probs = np.arange(1, n) / n
    cuts = np.quantile(values, probs)
    # Interpolation can leave float noise between equal neighbours
    cuts = np.maximum.accumulate(cuts)
    return ColorScale(
        palette=tuple(palette),
        boundaries=tuple(float(c) for c in cuts),
        limits=(float(values.min()), float(values.max())),
    )
