"""
BioTerra Dashboard - Region Explorer (the ``map`` route)
========================================================

Interactive map of Peru's departments, each marked by a pin coloured by its
environmental risk level.  Clicking a pin focuses the region; the side panel
then offers six analysis categories, each of which opens a report with its
own zoomed-in detail map.

PAGE LAYOUT
-----------
1. Header
2. Two columns:
   - *Left*  : overview map (``st_folium``) in the ``map`` container
   - *Right* : the panel for the current explorer phase (see ``panels.py``)
3. Catalog table + deforestation chart
Sidebar: a region picker mirroring the marker click.

RUN ORDER
---------
Every rerun follows the same sequence so that the adapter's deferred mount
always sees the containers of *this* run:

    clear containers -> register 'map' -> mount overview if needed ->
    render map -> dispatch click -> render panel (registers detail
    container, signals container_mounted) -> drain scheduler ->
    rerun after the retry delay while a detail mount is still pending
"""

# ---------------------------------------------------------------------------
# PATH SETUP: make the ``bioterra`` package importable when Streamlit runs
# this file directly as a page.
# ---------------------------------------------------------------------------
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[3]))

import logging

import streamlit as st
from streamlit_folium import st_folium

from bioterra.core.config import PRIMARY_MAP_CONTAINER, PRIMARY_MAP_HEIGHT
from bioterra.dashboard.charts import chart_deforestation_by_region
from bioterra.dashboard.panels import render_panel
from bioterra.dashboard.session import get_view, finish_render
from bioterra.dashboard.styles import inject_css

logger = logging.getLogger(__name__)

inject_css()

view = get_view()
explorer = view.explorer
adapter = view.adapter

# Containers from the previous run no longer exist on screen.
view.containers.clear()

# ============================================================================
# HEADER
# ============================================================================
st.markdown("## 🗺️ Region Explorer")
st.caption("Environmental indicators for the departments of Peru. Click a pin to begin.")

# ============================================================================
# SIDEBAR - region picker
# ============================================================================
_NO_REGION = "-- none --"
with st.sidebar:
    st.markdown("### Region")
    options = [_NO_REGION] + explorer.catalog.names()
    current = explorer.selected_region.name if explorer.selected_region else _NO_REGION
    picked = st.selectbox(
        "Focus a department",
        options,
        index=options.index(current),
        key=f"region-picker-{current}",
    )
    if picked != current:
        if picked == _NO_REGION:
            explorer.close_panel()
        else:
            explorer.select_region(picked)
        st.rerun()

# ============================================================================
# MAP + PANEL
# ============================================================================
col_map, col_panel = st.columns([3, 2], gap="large")

with col_map:
    map_slot = st.container()
    view.containers.register(PRIMARY_MAP_CONTAINER, map_slot)
    handle = adapter.primary
    if handle is None or handle.removed:
        handle = explorer.mount(PRIMARY_MAP_CONTAINER)

    if handle is not None:
        with map_slot:
            payload = st_folium(
                handle.widget,
                key=handle.widget_key,
                center=list(handle.center),
                zoom=handle.zoom,
                height=PRIMARY_MAP_HEIGHT,
                use_container_width=True,
                returned_objects=[
                    'last_clicked',
                    'last_object_clicked',
                    'last_object_clicked_tooltip',
                ],
            )
        if adapter.dispatch_click(handle, payload):
            st.rerun()
    else:
        st.error("The overview map could not be mounted.")

with col_panel:
    render_panel(view)

# ============================================================================
# CATALOG
# ============================================================================
st.markdown("---")
st.markdown("### Department catalog")
catalog_df = explorer.catalog.to_frame()
c1, c2 = st.columns([3, 2], gap="large")
with c1:
    st.dataframe(
        catalog_df[['name', 'risk_level', 'air_quality', 'water_quality',
                    'deforestation_rate', 'health_impact']],
        hide_index=True,
        use_container_width=True,
    )
with c2:
    st.plotly_chart(chart_deforestation_by_region(catalog_df), use_container_width=True)

# Pending detail-map retries queued during this run; a mount still pending
# after them reruns the page after the retry delay.
if finish_render(view):
    st.rerun()
