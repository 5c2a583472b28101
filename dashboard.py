"""
BioTerra Dashboard Launcher

Serves the BioTerra site as a multi-page Streamlit app.  The Region Explorer
lives on the ``map`` route; the other routes are static pages.

Usage:
    streamlit run dashboard.py --server.port 8501
    python run.py --port 8501                     # with health check + logging
"""

import sys
from pathlib import Path

# Ensure the bioterra package is importable
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

import streamlit as st

from bioterra.core.config import APP_TITLE, ROUTES
from bioterra.dashboard.session import drop_view

# ============================================================================
# PAGE CONFIG
# ============================================================================
st.set_page_config(
    page_title=APP_TITLE,
    page_icon="🌎",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ============================================================================
# NAVIGATION
# ============================================================================
pages_dir = project_root / "bioterra" / "dashboard" / "pages"
site_pages = [
    st.Page(
        str(pages_dir / filename),
        title=title,
        icon=icon,
        url_path=url_path or None,
        default=(url_path == ""),
    )
    for url_path, title, icon, filename in ROUTES
]

pg = st.navigation({"BioTerra": site_pages})

# Leaving the map route unmounts the explorer and its maps.
if pg.url_path != "map":
    drop_view()

pg.run()
