"""
BioTerra Dashboard - Services

One card per analysis category offered in the Region Explorer.
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[3]))

import streamlit as st

from bioterra.categories.registry import CATEGORY_LABELS
from bioterra.dashboard.styles import inject_css
from bioterra.models.data_models import CategoryKey

inject_css()

SERVICE_BLURBS = {
    CategoryKey.AIR: "Ozone, sulphur and nitrogen dioxide levels with an AQI reading and health impact.",
    CategoryKey.WATER: "Water quality, contamination risk, groundwater level and availability.",
    CategoryKey.VEGETATION: "Forest loss, vegetation health, erosion risk and carbon storage.",
    CategoryKey.CLIMATE: "Temperature trends, precipitation patterns and extreme-weather risk.",
    CategoryKey.ATMOSPHERE: "Ozone layer health, UV exposure and atmospheric stability.",
    CategoryKey.SDG_CITIES: "Progress towards UN Sustainable Development Goal 11 for cities.",
}

st.markdown("## 🛰️ Services")
st.markdown("Each department can be analysed from six angles:")

cols = st.columns(2)
for i, (key, (icon, label)) in enumerate(CATEGORY_LABELS.items()):
    cols[i % 2].markdown(f"""
    <div class="info-panel">
        <h3>{icon} {label}</h3>
        <p>{SERVICE_BLURBS[key]}</p>
    </div>
    """, unsafe_allow_html=True)

st.page_link("bioterra/dashboard/pages/region_explorer.py", label="Try them in the Region Explorer", icon="🗺️")
