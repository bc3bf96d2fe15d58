"""Altair chart builders for trial results."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

import altair as alt
import numpy as np
import pandas as pd

from .models import TrialSummary
from .stats import results_frame

CHART_THEME_NAME: Final[str] = "yahtzee_simulator"
POINT_COLOR: Final[str] = "#3b82f6"
AVERAGE_COLOR: Final[str] = "#ef4444"
POINTS_LABEL: Final[str] = "Rolls per Trial"
CHART_HEIGHT: Final[int] = 320
# Altair refuses to serialise more rows than this by default.
MAX_CHART_POINTS: Final[int] = 5000


def _chart_theme() -> dict:
    return {
        "config": {
            "view": {"strokeOpacity": 0},
            "axis": {"gridColor": "#e2e8f0", "labelFontSize": 11, "titleFontSize": 12},
            "legend": {"orient": "top", "labelFontSize": 12},
        }
    }


def register_chart_theme() -> None:
    """Register and enable the simulator's Altair theme.

    Call once at process start, before any chart is rendered.
    """

    alt.theme.register(CHART_THEME_NAME, enable=True)(_chart_theme)


def thin_results_frame(frame: pd.DataFrame, limit: int = MAX_CHART_POINTS) -> pd.DataFrame:
    """Keep at most ``limit`` evenly spaced rows, always including the min and max.

    Trial numbers are preserved so thinned points still sit at their trial.
    """

    if limit < 3:
        raise ValueError("limit must be at least 3.")
    total = len(frame)
    if total <= limit:
        return frame
    step = -(-total // (limit - 2))
    rolls = frame["rolls"].to_numpy()
    indices = np.unique(
        np.concatenate(
            [np.arange(0, total, step), [int(rolls.argmin()), int(rolls.argmax())]]
        )
    )
    return frame.iloc[indices].reset_index(drop=True)


def average_label(mean: float) -> str:
    """Return the legend label used for the average line."""

    return f"Average: {mean:.2f}"


def build_results_chart(results: Sequence[int], summary: TrialSummary) -> alt.LayerChart:
    """Return a scatter of rolls per trial layered with a dashed average line.

    Batches larger than ``MAX_CHART_POINTS`` are thinned for plotting; the
    average line always uses the full batch.

    Parameters
    ----------
    results:
        Trial batch in trial order.
    summary:
        Statistics for the same batch; only ``mean`` is drawn.
    """

    label = average_label(summary.mean)
    color_scale = alt.Scale(domain=[POINTS_LABEL, label], range=[POINT_COLOR, AVERAGE_COLOR])
    legend_color = alt.Color("series:N", scale=color_scale, title=None)

    points_data = thin_results_frame(results_frame(results)).assign(series=POINTS_LABEL)
    points = alt.Chart(points_data).mark_circle(size=14, opacity=0.9).encode(
        x=alt.X("trial:Q", title="Trial"),
        y=alt.Y("rolls:Q", title="Rolls to Yahtzee", scale=alt.Scale(zero=True)),
        color=legend_color,
        tooltip=[
            alt.Tooltip("trial:Q", title="Trial"),
            alt.Tooltip("rolls:Q", title="Rolls"),
        ],
    )

    average_data = pd.DataFrame({"average": [summary.mean], "series": [label]})
    average = alt.Chart(average_data).mark_rule(strokeDash=[5, 5], strokeWidth=2).encode(
        y="average:Q",
        color=legend_color,
        tooltip=[alt.Tooltip("average:Q", title="Average", format=".2f")],
    )

    return alt.layer(points, average).properties(height=CHART_HEIGHT)
