"""Chart rendering for the buy-vs-rent simulator.

Figure builders are pure (they return a ``plotly.graph_objects.Figure``) so
they can be unit tested without Streamlit; :func:`render_simulation_chart` is
the only function that touches the Streamlit module, which is passed in
explicitly.

Views
-----
``"wealth"``   owner net wealth vs tenant savings.
``"monthly"``  owner average monthly cost vs average rent.
"""

from __future__ import annotations

from typing import Any, Dict, Literal

import numpy as np
import plotly.graph_objects as go

from immosim.core.defaults import MONTHS_PER_YEAR
from immosim.core.models import SimulationResult

from .formatters import format_axis_value

ChartView = Literal["wealth", "monthly"]
GraphScale = Literal["years", "months"]

OWNER_COLOR = "#2563eb"
TENANT_COLOR = "#f59e0b"

# attribute -> legend label, per view
_SERIES: Dict[str, Dict[str, str]] = {
    "wealth": {"owner_wealth": "Propriétaire", "tenant_wealth": "Locataire"},
    "monthly": {"monthly_cost_owner": "Coût Propriétaire", "monthly_cost_tenant": "Coût Locataire"},
}


def _series_values(points, attr: str, log_y: bool) -> np.ndarray:
    vals = np.asarray([getattr(p, attr) for p in points], dtype=float)
    if log_y:
        # Log axes cannot show zero/negative values; leave gaps instead.
        vals = np.where(vals > 0.0, vals, np.nan)
    return vals


def build_simulation_figure(
    result: SimulationResult,
    *,
    view: ChartView = "wealth",
    scale: GraphScale = "years",
    log_y: bool = False,
    target_year: int | None = None,
) -> go.Figure:
    """Build the owner vs tenant line chart for one view."""
    points = result.yearly_data if scale == "years" else result.monthly_data
    x = np.asarray([p.year if scale == "years" else p.month for p in points], dtype=float)
    time_label = "Année" if scale == "years" else "Mois"

    fig = go.Figure()
    colors = (OWNER_COLOR, TENANT_COLOR)
    for (attr, label), color in zip(_SERIES[view].items(), colors):
        fig.add_trace(
            go.Scatter(
                x=x,
                y=_series_values(points, attr, log_y),
                mode="lines",
                name=label,
                line=dict(color=color, width=2.5, shape="spline"),
                hovertemplate=f"{time_label} %{{x}}<br>{label}: %{{y:,.0f}} €<extra></extra>",
            )
        )

    if target_year is not None:
        ref_x = target_year if scale == "years" else target_year * MONTHS_PER_YEAR
        fig.add_vline(x=ref_x, line_dash="dash", line_color="#64748b")

    y_vals = np.concatenate([np.asarray(t.y, dtype=float) for t in fig.data]) if fig.data else np.array([])
    tick_vals = _axis_ticks(y_vals, log_y)

    fig.update_layout(
        margin=dict(l=10, r=10, t=30, b=10),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1.0),
        hovermode="x unified",
        xaxis_title=time_label,
        yaxis=dict(
            type="log" if log_y else "linear",
            tickvals=tick_vals,
            ticktext=[format_axis_value(v) for v in tick_vals],
        ),
    )
    return fig


def _axis_ticks(values: np.ndarray, log_y: bool, n: int = 6) -> list[float]:
    finite = values[np.isfinite(values)] if values.size else values
    if finite.size == 0:
        return []
    lo, hi = float(finite.min()), float(finite.max())
    if log_y:
        ticks = np.geomspace(max(lo, 1.0), max(hi, 1.0), n)
    else:
        ticks = np.linspace(lo, hi, n)
    return [float(v) for v in np.round(ticks, -2)]


def render_simulation_chart(result: SimulationResult, st_module: Any, **kwargs: Any) -> go.Figure:
    """Build the figure and hand it to ``st_module.plotly_chart``."""
    fig = build_simulation_figure(result, **kwargs)
    st_module.plotly_chart(fig, use_container_width=True)
    return fig
