"""
BioTerra - environmental indicator explorer for the departments of Peru.

This package provides:
- A static region catalog with air, water, deforestation and health indicators
- Pure category report templates (air, water, vegetation, climate,
  atmosphere, SDG 11 cities)
- The selection state machine driving which panel is open
- A folium map adapter owning overview and detail map lifecycles
- A Streamlit dashboard (``bioterra.dashboard``) served by ``dashboard.py``
"""

__version__ = "1.0.0"
__author__ = "BioTerra Team"

from .models import (
    RiskLevel,
    MetricLevel,
    CategoryKey,
    ExplorerPhase,
    Region,
    Metric,
    CategoryReport,
    Viewport,
    SelectionState,
)
from .catalog import RegionCatalog, get_groundwater_level, lookup_attribute
from .categories import CATEGORY_REGISTRY, build_report
from .explorer import RegionExplorer
from .maps import MapAdapter, MapHandle, ContainerRegistry, RenderScheduler

__all__ = [
    # Models
    'RiskLevel',
    'MetricLevel',
    'CategoryKey',
    'ExplorerPhase',
    'Region',
    'Metric',
    'CategoryReport',
    'Viewport',
    'SelectionState',

    # Catalog & Categories
    'RegionCatalog',
    'get_groundwater_level',
    'lookup_attribute',
    'CATEGORY_REGISTRY',
    'build_report',

    # Explorer & Maps
    'RegionExplorer',
    'MapAdapter',
    'MapHandle',
    'ContainerRegistry',
    'RenderScheduler',

    # Metadata
    '__version__',
]
