"""
BioTerra Dashboard - Styles & Theme Configuration
=================================================

Single source of truth for the dashboard's visual constants: the level and
risk badge colours, the Plotly dark theme, and the CSS injected into every
page (map pins, info panel, metric badges).

Risk palette
------------
    Risk        Hex        Used for
    ----------  ---------  ------------------------------------------
    low         #27ae60    pins, risk badge, chart bars
    medium      #f39c12
    high        #e74c3c
    critical    #c0392b

The palette is imported from ``bioterra.core.config.RISK_COLORS`` so that
map pins and dashboard badges can never disagree.
"""

import streamlit as st

from ..core.config import RISK_COLORS

# Metric level -> badge colour.  Levels describe severity, so "low" is good.
LEVEL_COLORS = {
    'low': '#27ae60',
    'medium': '#f39c12',
    'high': '#e74c3c',
}


def get_plotly_theme() -> dict:
    """Base Plotly layout for the dark dashboard theme."""
    return dict(
        paper_bgcolor='rgba(0,0,0,0)',
        plot_bgcolor='rgba(0,0,0,0)',
        font=dict(family='Inter', color='#E0E0E0'),
        margin=dict(l=40, r=40, t=50, b=40),
    )


# Subtle grid lines that blend with the dark theme.
AXIS_STYLE = dict(
    gridcolor='#1e293b',
    zerolinecolor='#1e293b',
)


def risk_badge_html(risk_level: str) -> str:
    color = RISK_COLORS.get(risk_level, '#6D6E71')
    return (
        f'<span class="risk-badge" style="background: {color};">'
        f'{risk_level.upper()} RISK</span>'
    )


def level_badge_html(level: str) -> str:
    color = LEVEL_COLORS.get(level, '#6D6E71')
    return f'<span class="level-badge" style="border-color: {color}; color: {color};">{level}</span>'


def inject_css():
    """Inject the dashboard stylesheet.

    Covers the Inter font, the location-pin DivIcon (head, shadow and pulse
    ring all coloured by the ``--risk-color`` custom property), the info
    panel cards, risk/level badges and the metric table.
    """
    st.markdown("""
<style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700;800&display=swap');
    .stApp { font-family: 'Inter', sans-serif; }

    /* ================================================================
       LOCATION PIN (folium DivIcon)
       ================================================================ */
    .custom-marker { background: transparent; border: none; }
    .location-pin { position: relative; width: 100%; height: 100%; cursor: pointer; }
    .location-pin .pin-head {
        position: absolute; left: 50%; top: 0;
        width: 70%; aspect-ratio: 1;
        transform: translateX(-50%) rotate(-45deg);
        border-radius: 50% 50% 50% 0;
        background: var(--risk-color);
        box-shadow: 0 0 6px rgba(0, 0, 0, 0.45);
    }
    .location-pin .pin-shadow {
        position: absolute; left: 50%; bottom: 0;
        width: 40%; height: 12%;
        transform: translateX(-50%);
        border-radius: 50%;
        background: rgba(0, 0, 0, 0.3);
    }
    .location-pin .pulse-animation {
        position: absolute; left: 50%; bottom: 0;
        width: 60%; height: 18%;
        transform: translateX(-50%);
        border-radius: 50%;
        border: 2px solid var(--risk-color);
        animation: pin-pulse 1.8s ease-out infinite;
        opacity: 0;
    }
    @keyframes pin-pulse {
        0%   { transform: translateX(-50%) scale(0.4); opacity: 0.9; }
        100% { transform: translateX(-50%) scale(1.8); opacity: 0; }
    }

    /* ================================================================
       INFO PANEL
       ================================================================ */
    .info-panel {
        background: linear-gradient(145deg, #0f172a 0%, #1e293b 100%);
        border: 1px solid rgba(0, 191, 255, 0.15);
        border-radius: 12px;
        padding: 1.2rem 1.4rem;
        margin-bottom: 1rem;
    }
    .info-panel h3 { margin: 0 0 0.4rem 0; color: #F1F5F9; }
    .info-panel p { color: #CBD5E1; margin: 0.2rem 0; }
    .info-panel.category-details-open { border-color: rgba(0, 165, 168, 0.45); }

    .risk-badge {
        display: inline-block; padding: 2px 10px; border-radius: 999px;
        color: #fff; font-size: 0.75rem; font-weight: 700; letter-spacing: 0.04em;
    }
    .level-badge {
        display: inline-block; padding: 1px 8px; border-radius: 999px;
        border: 1px solid; font-size: 0.72rem; font-weight: 600; text-transform: uppercase;
    }

    /* ================================================================
       METRIC TABLE
       ================================================================ */
    .metric-table { width: 100%; border-collapse: collapse; font-size: 0.88rem; }
    .metric-table th {
        text-align: left; color: #94A3B8; font-weight: 600;
        border-bottom: 1px solid #334155; padding: 6px 4px;
    }
    .metric-table td { color: #E2E8F0; border-bottom: 1px solid #1e293b; padding: 6px 4px; }

    .source-chip {
        display: inline-block; margin: 2px 4px 2px 0; padding: 2px 8px;
        border-radius: 6px; background: rgba(0, 119, 182, 0.25); color: #BAE6FD;
        font-size: 0.75rem;
    }
</style>
""", unsafe_allow_html=True)
