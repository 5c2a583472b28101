"""
BioTerra Dashboard - Region and category panels
===============================================

The right-hand column of the Region Explorer page.  Which panel renders
depends only on ``explorer.phase``:

    IDLE              -> a short hint to click a marker
    REGION_FOCUSED    -> region overview + category buttons
    CATEGORY_FOCUSED  -> category detail (report + detail map)

Buttons use ``on_click`` callbacks, which Streamlit runs *before* the next
script run, so the transition has already been applied when the panel is
drawn again.

The detail panel registers its map container and emits the adapter's
``container_mounted`` signal immediately after drawing it; this is what
completes the deferred detail-map mount requested by ``open_category``.
"""

import logging

import streamlit as st
from streamlit_folium import st_folium

from ..categories.registry import CATEGORY_LABELS
from ..core.config import DETAIL_MAP_CONTAINER, DETAIL_MAP_HEIGHT
from ..models.data_models import ExplorerPhase
from .charts import chart_air_quality_gauge, metric_table_html, data_sources_html
from .session import ExplorerView
from .styles import risk_badge_html

logger = logging.getLogger(__name__)


def intervention_message(region_name: str) -> str:
    return (
        f"Simulating intervention for {region_name}. "
        "This would show predictive models and potential outcomes."
    )


def _open_health_details(region_name: str) -> None:
    logger.info(f"[Panels] Health details requested for {region_name}")


def render_panel(view: ExplorerView) -> None:
    phase = view.explorer.phase
    if phase is ExplorerPhase.IDLE:
        st.info("Click a department marker on the map to see its environmental indicators.")
    elif phase is ExplorerPhase.REGION_FOCUSED:
        render_region_panel(view)
    else:
        render_category_panel(view)


def render_region_panel(view: ExplorerView) -> None:
    explorer = view.explorer
    region = explorer.selected_region

    st.markdown(f"""
    <div class="info-panel">
        <h3>{region.name}</h3>
        {risk_badge_html(region.risk_level.value)}
        <p><b>Air quality index:</b> {region.air_quality:g}</p>
        <p><b>Water quality:</b> {region.water_quality}</p>
        <p><b>Deforestation:</b> {region.deforestation_rate:g}% annual loss</p>
        <p><b>Health impact:</b> {region.health_impact}</p>
    </div>
    """, unsafe_allow_html=True)

    st.plotly_chart(chart_air_quality_gauge(region), use_container_width=True,
                    key=f"gauge-{region.name}")

    st.markdown("##### Analysis categories")
    cols = st.columns(3)
    for i, (key, (icon, label)) in enumerate(CATEGORY_LABELS.items()):
        cols[i % 3].button(
            f"{icon} {label}",
            key=f"category-{key.value}",
            on_click=explorer.open_category,
            args=(key.value,),
            use_container_width=True,
        )

    c1, c2, c3 = st.columns(3)
    c1.button("🩺 Health details", key="health-details",
              on_click=_open_health_details, args=(region.name,), use_container_width=True)
    if c2.button("🧪 Simulate intervention", key="simulate-intervention", use_container_width=True):
        st.info(intervention_message(region.name))
    c3.button("✖ Close", key="close-panel", on_click=explorer.close_panel, use_container_width=True)


def render_category_panel(view: ExplorerView) -> None:
    explorer = view.explorer
    region = explorer.selected_region
    report = explorer.state.category_report

    st.markdown(f"""
    <div class="info-panel category-details-open">
        <h3>{report.title}</h3>
        {risk_badge_html(region.risk_level.value)}
        <p>{report.description}</p>
    </div>
    """, unsafe_allow_html=True)

    detail_slot = st.container()
    view.containers.register(DETAIL_MAP_CONTAINER, detail_slot)
    view.adapter.container_mounted(DETAIL_MAP_CONTAINER)
    handle = view.adapter.secondary
    if handle is not None:
        with detail_slot:
            st_folium(
                handle.widget,
                key=handle.widget_key,
                height=DETAIL_MAP_HEIGHT,
                use_container_width=True,
                returned_objects=[],
            )

    st.markdown("##### Data sources")
    st.markdown(data_sources_html(report), unsafe_allow_html=True)

    st.markdown("##### Key metrics")
    st.markdown(metric_table_html(report), unsafe_allow_html=True)

    st.markdown("##### Recommendations")
    st.markdown("\n".join(f"- {r}" for r in report.recommendations))

    c1, c2 = st.columns(2)
    c1.button("← Back to region", key="close-category",
              on_click=explorer.close_category, use_container_width=True)
    c2.button("✖ Close", key="close-panel-category",
              on_click=explorer.close_panel, use_container_width=True)
