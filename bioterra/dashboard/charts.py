"""
BioTerra Dashboard - Chart Library
==================================

Every public function returns either a ``plotly.graph_objects.Figure`` or an
HTML string that the pages render with ``st.plotly_chart()`` /
``st.markdown(..., unsafe_allow_html=True)``.

All figures go through ``_apply_theme()`` so they share the transparent dark
background, Inter typography and slate grid of ``styles.get_plotly_theme``.
"""

import html

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from ..categories.thresholds import AQI_BOUNDS
from ..core.config import RISK_COLORS
from ..models.data_models import CategoryReport, Region
from .styles import get_plotly_theme, AXIS_STYLE, level_badge_html


def _apply_theme(fig: go.Figure) -> go.Figure:
    fig.update_layout(**get_plotly_theme())
    fig.update_xaxes(**AXIS_STYLE)
    fig.update_yaxes(**AXIS_STYLE)
    return fig


def chart_air_quality_gauge(region: Region) -> go.Figure:
    """Gauge of the region's air quality index with the AQI bands shaded."""
    good, moderate, sensitive = AQI_BOUNDS
    fig = go.Figure(go.Indicator(
        mode='gauge+number',
        value=region.air_quality,
        title={'text': 'Air Quality Index'},
        gauge={
            'axis': {'range': [0, 500]},
            'bar': {'color': RISK_COLORS[region.risk_level.value]},
            'steps': [
                {'range': [0, good], 'color': 'rgba(39, 174, 96, 0.35)'},
                {'range': [good, moderate], 'color': 'rgba(243, 156, 18, 0.35)'},
                {'range': [moderate, sensitive], 'color': 'rgba(231, 76, 60, 0.35)'},
                {'range': [sensitive, 500], 'color': 'rgba(192, 57, 43, 0.35)'},
            ],
        },
    ))
    _apply_theme(fig)
    fig.update_layout(height=240, margin=dict(l=20, r=20, t=50, b=10))
    return fig


def chart_deforestation_by_region(df: pd.DataFrame) -> go.Figure:
    """Horizontal bars of annual deforestation, coloured by risk level.

    Args:
        df: Output of ``RegionCatalog.to_frame()``.
    """
    ordered = df.sort_values('deforestation_rate')
    fig = px.bar(
        ordered,
        x='deforestation_rate',
        y='name',
        orientation='h',
        color='risk_level',
        color_discrete_map=RISK_COLORS,
        labels={'deforestation_rate': 'Annual forest loss (%)', 'name': '', 'risk_level': 'Risk'},
    )
    _apply_theme(fig)
    fig.update_layout(height=360)
    return fig


def metric_table_html(report: CategoryReport) -> str:
    """The report's metric rows as an HTML table with level badges."""
    rows = "".join(
        f"<tr><td>{html.escape(m.name)}</td><td>{html.escape(m.value)}</td>"
        f"<td>{level_badge_html(m.level.value)}</td></tr>"
        for m in report.metrics
    )
    return (
        '<table class="metric-table">'
        '<thead><tr><th>Metric</th><th>Value</th><th>Level</th></tr></thead>'
        f'<tbody>{rows}</tbody></table>'
    )


def data_sources_html(report: CategoryReport) -> str:
    return "".join(
        f'<span class="source-chip">{html.escape(s)}</span>' for s in report.data_sources
    )
