# tickerboard/dashboard/charts.py

from typing import Dict, List, Optional, Sequence

import plotly.graph_objects as go

from tickerboard.data.schemas import PricePoint

HISTORY_COLOR = "#2f6bff"
FORECAST_COLOR = "#f97316"
BAND_COLOR = "rgba(249, 115, 22, 0.2)"


class ChartArena:
    """
    Owns every figure created during one render cycle.

    The grid is rebuilt from scratch on each state change: ``reset`` drops
    all figures of the previous cycle before new ones are created.
    """

    def __init__(self):
        self._charts: Dict[str, go.Figure] = {}

    def __len__(self) -> int:
        return len(self._charts)

    def __contains__(self, key: str) -> bool:
        return key in self._charts

    def add(self, key: str, figure: go.Figure) -> go.Figure:
        previous = self._charts.pop(key, None)
        if previous is not None:
            previous.data = ()
        self._charts[key] = figure
        return figure

    def get(self, key: str) -> Optional[go.Figure]:
        return self._charts.get(key)

    def reset(self) -> None:
        for figure in self._charts.values():
            figure.data = ()
        self._charts.clear()


def sparkline_figure(points: Sequence[PricePoint], height: int = 70) -> go.Figure:
    """Axis-less close-price line for a card."""
    fig = go.Figure(
        go.Scatter(
            x=[p.date for p in points],
            y=[p.close for p in points],
            mode="lines",
            line=dict(color=HISTORY_COLOR, width=2, shape="spline"),
            hoverinfo="skip",
        )
    )
    fig.update_layout(
        height=height,
        margin=dict(l=0, r=0, t=0, b=0),
        showlegend=False,
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        template="plotly_white",
    )
    return fig


def _pad(values: Sequence[float], offset: int) -> List[Optional[float]]:
    return [None] * offset + list(values)


def detail_figure(detail, height: int = 420) -> go.Figure:
    """
    History plus dashed forecast and a filled uncertainty band.

    Args:
        detail: ``DetailModel`` from ``tickerboard.dashboard.detail``.
    """
    offset = len(detail.history)
    labels = detail.labels

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=labels[:offset],
        y=[p.close for p in detail.history],
        mode="lines",
        name="History",
        line=dict(color=HISTORY_COLOR),
    ))
    fig.add_trace(go.Scatter(
        x=labels,
        y=_pad(detail.forecast, offset),
        mode="lines",
        name="Forecast",
        line=dict(color=FORECAST_COLOR, dash="dash"),
    ))
    fig.add_trace(go.Scatter(
        x=labels,
        y=_pad([upper for _, upper in detail.band], offset),
        mode="lines",
        name="Band upper",
        line=dict(color=BAND_COLOR),
        showlegend=False,
    ))
    fig.add_trace(go.Scatter(
        x=labels,
        y=_pad([lower for lower, _ in detail.band], offset),
        mode="lines",
        name="Band lower",
        line=dict(color=BAND_COLOR),
        fill="tonexty",
        fillcolor=BAND_COLOR,
        showlegend=False,
    ))

    fig.update_layout(
        height=height,
        showlegend=False,
        template="plotly_white",
        xaxis=dict(nticks=8, type="category"),
        margin=dict(l=10, r=10, t=10, b=10),
    )
    return fig
