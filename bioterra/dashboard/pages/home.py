"""
BioTerra Dashboard - Home (default route)

Landing page: what BioTerra monitors and a shortcut into the Region Explorer.
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[3]))

import streamlit as st

from bioterra.catalog.regions import RegionCatalog
from bioterra.dashboard.styles import inject_css
from bioterra.models.data_models import RiskLevel

inject_css()

st.markdown("# 🌎 BioTerra")
st.markdown(
    "Satellite-driven environmental monitoring for the departments of Peru: "
    "air and water quality, forest loss, climate and atmosphere, and progress "
    "towards sustainable cities."
)

catalog = RegionCatalog.default()
counts = {level: 0 for level in RiskLevel}
for region in catalog:
    counts[region.risk_level] += 1

cols = st.columns(len(counts) + 1)
cols[0].metric("Departments", len(catalog))
for col, (level, n) in zip(cols[1:], counts.items()):
    col.metric(f"{level.value.title()} risk", n)

st.markdown("---")
st.page_link("bioterra/dashboard/pages/region_explorer.py", label="Open the Region Explorer", icon="🗺️")
