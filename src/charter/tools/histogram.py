"""
Render one numeric record as a fixed-size bar histogram.

Figures are built with the object-oriented Matplotlib API on an Agg canvas,
so rendering works headless and never touches pyplot's global figure list.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

# 8 x 6 inches at 100 dpi -> 800 x 600 px
FIGURE_SIZE_IN = (8.0, 6.0)
FIGURE_DPI = 100


def render_histogram(
    values: Sequence[int] | np.ndarray,
    path: Path,
    *,
    title: Optional[str] = None,
    labels: Optional[Sequence[str]] = None,
) -> Path:
    """Draw ``values`` as one bar per field and save a PNG to ``path``."""
    data = np.asarray(values, dtype=np.int64).reshape(-1)
    positions = np.arange(data.size)

    fig = Figure(figsize=FIGURE_SIZE_IN, dpi=FIGURE_DPI)
    FigureCanvasAgg(fig)
    ax = fig.add_subplot(111)
    ax.bar(positions, data, width=0.8, color="tab:blue", edgecolor="black")
    ax.set_xticks(positions)
    ax.set_xticklabels(labels if labels is not None else [str(p) for p in positions])
    ax.set_xlabel("Field")
    ax.set_ylabel("Value")
    low = min(0, int(data.min())) if data.size else 0
    high = max(1, int(data.max())) if data.size else 1
    ax.set_ylim(low, high * 1.1 if high > 0 else 1)
    if title:
        ax.set_title(title)
    ax.grid(True, axis="y", alpha=0.3)

    fig.savefig(path, dpi=FIGURE_DPI)
    return path
