"""
Central Configuration Module for the BioTerra Region Explorer.

=== PURPOSE ===
This module is the single source of truth for every tunable constant used
across the explorer: map viewports and zoom levels, the tile provider, the
risk-level marker palette, DOM container identifiers, the deferred-mount
retry policy and the route table of the host dashboard.  Every other module
imports from here rather than defining its own magic numbers.

=== DATA FLOW ===
  1. The state machine (bioterra.explorer) reads REGION_ZOOM / DETAIL_ZOOM
     when it re-centres the overview map or opens a detail map.
  2. The map adapter (bioterra.maps) reads the tile settings, the marker
     palette and pin geometry, and the MOUNT_RETRY_* policy.
  3. The Streamlit pages read the container ids, map heights and ROUTES.

=== KEY DESIGN DECISIONS ===
- RISK_COLORS is a presentation contract: visual regression tests compare
  marker colours against it, so the four hex values must not drift.
- The retry policy is small (five attempts, 0.1 s apart); a detail container
  that never renders is abandoned, not waited on.
- A few values can be overridden from the environment so a deployment can
  point at a different tile server without code changes.
"""

import os
import logging

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    """Read an integer from the environment, falling back on bad input."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"[Config] Ignoring non-integer {name}={raw!r}, using {default}")
        return default


def _env_float(name: str, default: float) -> float:
    """Read a float from the environment, falling back on bad input."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"[Config] Ignoring non-numeric {name}={raw!r}, using {default}")
        return default


# ==========================================
# VIEWPORTS & ZOOM LEVELS
# ==========================================
# Initial overview centred on Peru.  Zoom 5 shows every department marker.
INITIAL_CENTER = (-9.1900, -75.0152)
INITIAL_ZOOM = 5

# Zoom applied to the overview map when a region is selected.
REGION_ZOOM = 7

# Closer zoom used by the secondary (detail) map of an open category.
DETAIL_ZOOM = 9

# ==========================================
# TILE PROVIDER
# ==========================================
# OpenStreetMap raster tiles, addressed by (zoom, x, y).  Best-effort only:
# missing tiles degrade the imagery, never the explorer state.
TILE_URL = os.getenv(
    "BIOTERRA_TILE_URL",
    "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
)
TILE_ATTRIBUTION = "© OpenStreetMap contributors"
PRIMARY_MAX_ZOOM = 18
DETAIL_MAX_ZOOM = 13

# Probe URL used by the launcher health check (a single fixed tile).
TILE_HEALTH_URL = "https://tile.openstreetmap.org/0/0/0.png"

# ==========================================
# MARKER ENCODING
# ==========================================
# Risk level -> pin colour.  Preserved exactly for visual regression tests.
RISK_COLORS = {
    'low': '#27ae60',       # Green
    'medium': '#f39c12',    # Amber
    'high': '#e74c3c',      # Red
    'critical': '#c0392b',  # Dark red
}

# Pin geometry as (width, height) and anchor (x, y) in pixels.
PRIMARY_PIN_SIZE = (30, 42)
PRIMARY_PIN_ANCHOR = (15, 42)
DETAIL_PIN_SIZE = (25, 35)
DETAIL_PIN_ANCHOR = (12, 35)

# Degrees of tolerance when matching a clicked marker back to a region.
CLICK_MATCH_TOLERANCE = 0.001

# ==========================================
# DOM CONTAINERS
# ==========================================
PRIMARY_MAP_CONTAINER = "map"
DETAIL_MAP_CONTAINER = "department-map"

PRIMARY_MAP_HEIGHT = 560
DETAIL_MAP_HEIGHT = 320

# ==========================================
# DEFERRED MOUNT POLICY
# ==========================================
# How many times the adapter tries to mount a map whose container has not
# rendered yet, and the delay between attempts.
MOUNT_RETRY_ATTEMPTS = _env_int("BIOTERRA_MOUNT_RETRY_ATTEMPTS", 5)
MOUNT_RETRY_DELAY_S = _env_float("BIOTERRA_MOUNT_RETRY_DELAY_S", 0.1)

# ==========================================
# ROUTES
# ==========================================
# (url_path, title, icon, page module under bioterra/dashboard/pages).
# The empty path is the default page; Streamlit sends unknown paths there.
ROUTES = [
    ("", "Home", "🏠", "home.py"),
    ("login", "Login", "🔐", "login.py"),
    ("services", "Services", "🛰️", "services.py"),
    ("about", "About Us", "🌱", "about.py"),
    ("contact", "Contact", "✉️", "contact.py"),
    ("map", "Region Explorer", "🗺️", "region_explorer.py"),
]

APP_TITLE = "BioTerra | Environmental Region Explorer"
