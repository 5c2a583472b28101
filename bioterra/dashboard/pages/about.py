"""BioTerra Dashboard - About Us"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[3]))

import streamlit as st

from bioterra import __version__
from bioterra.dashboard.styles import inject_css

inject_css()

st.markdown("## 🌱 About BioTerra")
st.markdown(
    "BioTerra brings together open satellite products (Sentinel-5P, Sentinel-2, "
    "Landsat, MODIS, ERA5) and national monitoring data into a single view of "
    "environmental risk across Peru."
)
st.caption(f"Version {__version__}")
