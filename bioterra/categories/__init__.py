"""
Category Template Registry.

Pure ``(Region) -> CategoryReport`` functions keyed by category, plus the
fixed-threshold classifiers they rely on.
"""

from .registry import (
    CATEGORY_REGISTRY,
    CATEGORY_LABELS,
    get_template,
    build_report,
    air_report,
    water_report,
    vegetation_report,
    climate_report,
    atmosphere_report,
    sdg_cities_report,
)
from .thresholds import (
    get_air_quality_level,
    calculate_aqi,
    get_health_impact_level,
    get_contamination_risk,
    get_deforestation_level,
    get_vegetation_health,
    get_carbon_storage,
)

__all__ = [
    'CATEGORY_REGISTRY',
    'CATEGORY_LABELS',
    'get_template',
    'build_report',
    'air_report',
    'water_report',
    'vegetation_report',
    'climate_report',
    'atmosphere_report',
    'sdg_cities_report',
    'get_air_quality_level',
    'calculate_aqi',
    'get_health_impact_level',
    'get_contamination_risk',
    'get_deforestation_level',
    'get_vegetation_health',
    'get_carbon_storage',
]
