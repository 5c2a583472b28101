"""
Category Template Registry.

Maps each ``CategoryKey`` to a pure function ``(Region) -> CategoryReport``.
The functions take the region explicitly and read nothing else but the
fixed threshold classifiers and the auxiliary attribute table, so a report
can be recomputed at any time (every time a category panel opens) without
caching and tested without instantiating the explorer.
"""

import logging
from typing import Callable, Dict, Optional

from ..catalog.attributes import (
    lookup_attribute,
    get_groundwater_level,
    get_water_availability,
    get_erosion_risk,
    get_urban_sustainability,
    get_green_space_access,
    get_transport_coverage,
    get_sdg_progress,
)
from ..models.data_models import CategoryKey, CategoryReport, Metric, MetricLevel, Region
from .thresholds import (
    get_air_quality_level,
    calculate_aqi,
    get_health_impact_level,
    get_contamination_risk,
    get_contamination_level,
    get_deforestation_level,
    get_vegetation_health,
    get_carbon_storage,
)

logger = logging.getLogger(__name__)

CategoryTemplate = Callable[[Region], CategoryReport]


def _fmt_number(value: float) -> str:
    """Render 85.0 as '85' and 12.5 as '12.5'."""
    return f"{value:g}"


def air_report(region: Region) -> CategoryReport:
    air_level = get_air_quality_level(region.air_quality)
    aqi = calculate_aqi(region.air_quality)
    return CategoryReport(
        title=f"Air Quality Analysis - {region.name}",
        description=(
            f"Indicator scores for the selected region {region.name} "
            "using NASA satellite data"
        ),
        data_sources=[
            'MODIS Aerosol Optical Depth',
            'CALIPSO Lidar Measurements',
            'TEMPO Tropospheric Emissions',
            'OMI Nitrogen Dioxide Levels',
        ],
        metrics=[
            Metric('Tropospheric ozone(O3)', f"{_fmt_number(region.air_quality)} μg/m³", air_level),
            Metric('Sulfur dioxide (SO2)', aqi, air_level),
            Metric('Nitrogen dioxide (NO2)', aqi, air_level),
            Metric('Health Impact', region.health_impact,
                   get_health_impact_level(region.health_impact)),
        ],
        recommendations=[
            'Implement vehicle emission controls in urban areas',
            'Promote green spaces to improve air filtration',
            'Monitor industrial emissions regularly',
            'Develop early warning systems for poor air quality days',
            'Promote public transportation and electric vehicles',
            'Implement air quality monitoring stations across the region',
        ],
    )


def water_report(region: Region) -> CategoryReport:
    return CategoryReport(
        title='Water Resources Analysis',
        description=(
            f"Assessment of water quality and availability in {region.name} "
            "using NASA GRACE, SWOT, and Landsat data."
        ),
        data_sources=[
            'GRACE Water Storage',
            'SWOT Surface Water',
            'Landsat Water Quality',
            'MODIS Flood Monitoring',
        ],
        metrics=[
            Metric('Water Quality Index', region.water_quality, MetricLevel.MEDIUM),
            Metric('Groundwater Levels', get_groundwater_level(region.name), MetricLevel.MEDIUM),
            Metric('Surface Water Availability', get_water_availability(region.name),
                   MetricLevel.MEDIUM),
            Metric('Contamination Risk', get_contamination_risk(region.water_quality),
                   get_contamination_level(region.water_quality)),
        ],
        recommendations=[
            'Implement watershed protection programs',
            'Upgrade water treatment facilities',
            'Monitor agricultural runoff',
            'Develop drought contingency plans',
        ],
    )


def vegetation_report(region: Region) -> CategoryReport:
    level = get_deforestation_level(region.deforestation_rate)
    return CategoryReport(
        title='Vegetation & Soil Analysis',
        description=(
            "Comprehensive analysis of forest cover, soil health, and vegetation "
            f"dynamics in {region.name}."
        ),
        data_sources=[
            'Landsat Vegetation Index',
            'MODIS Fire Detection',
            'GEDI Forest Structure',
            'SMAP Soil Moisture',
        ],
        metrics=[
            Metric('Deforestation Rate',
                   f"{_fmt_number(region.deforestation_rate)}% annual loss", level),
            Metric('Vegetation Health', get_vegetation_health(region.deforestation_rate), level),
            Metric('Soil Erosion Risk', get_erosion_risk(region.name), MetricLevel.MEDIUM),
            Metric('Carbon Storage', get_carbon_storage(region.deforestation_rate), level),
        ],
        recommendations=[
            'Implement reforestation programs',
            'Promote sustainable agriculture',
            'Protect biodiversity hotspots',
            'Monitor illegal logging activities',
        ],
    )


def climate_report(region: Region) -> CategoryReport:
    return CategoryReport(
        title='Climate & Meteorology',
        description=(
            f"Climate pattern analysis and meteorological monitoring for {region.name} "
            "using NASA satellite systems."
        ),
        data_sources=[
            'TRMM Precipitation',
            'CERES Radiation Budget',
            'AIRS Temperature Profiles',
            'GPM Global Precipitation',
        ],
        metrics=[
            Metric('Temperature Trend', lookup_attribute(region.name, 'temperature_trend'),
                   MetricLevel.MEDIUM),
            Metric('Precipitation Patterns', lookup_attribute(region.name, 'precipitation_pattern'),
                   MetricLevel.MEDIUM),
            Metric('Extreme Weather Risk', lookup_attribute(region.name, 'weather_risk'),
                   MetricLevel.MEDIUM),
            Metric('Climate Change Impact', lookup_attribute(region.name, 'climate_impact'),
                   MetricLevel.MEDIUM),
        ],
        recommendations=[
            'Develop climate adaptation strategies',
            'Implement early warning systems',
            'Promote water conservation',
            'Plan for climate-resilient infrastructure',
        ],
    )


def atmosphere_report(region: Region) -> CategoryReport:
    return CategoryReport(
        title='Atmosphere & Sky Monitoring',
        description=(
            f"Upper atmosphere analysis and space-based observations for {region.name} "
            "using advanced NASA instruments."
        ),
        data_sources=[
            'SAGE III Ozone',
            'CALIPSO Cloud-Aerosol',
            'TES Tropospheric Chemistry',
            'OMPS Limb Profiler',
        ],
        metrics=[
            Metric('Ozone Layer Health', lookup_attribute(region.name, 'ozone_health'),
                   MetricLevel.MEDIUM),
            Metric('UV Radiation Levels', lookup_attribute(region.name, 'uv_level'),
                   MetricLevel.MEDIUM),
            Metric('Atmospheric Stability', lookup_attribute(region.name, 'atmospheric_stability'),
                   MetricLevel.MEDIUM),
            Metric('Satellite Coverage', lookup_attribute(region.name, 'satellite_coverage'),
                   MetricLevel.MEDIUM),
        ],
        recommendations=[
            'Monitor stratospheric ozone levels',
            'Track atmospheric composition changes',
            'Study aerosol impacts on climate',
            'Develop air quality forecasting models',
        ],
    )


def sdg_cities_report(region: Region) -> CategoryReport:
    return CategoryReport(
        title='ODS 11 - Sustainable Cities & Communities',
        description=(
            f"Analysis of {region.name}'s progress towards UN Sustainable Development "
            "Goal 11 using NASA urban monitoring data."
        ),
        data_sources=[
            'Landsat Urban Growth',
            'VIIRS Nighttime Lights',
            'SMAP Urban Heat Islands',
            'GEDI Building Density',
        ],
        metrics=[
            Metric('Urban Sustainability', get_urban_sustainability(region.name), MetricLevel.MEDIUM),
            Metric('Green Space Access', get_green_space_access(region.name), MetricLevel.MEDIUM),
            Metric('Public Transport Coverage', get_transport_coverage(region.name),
                   MetricLevel.MEDIUM),
            Metric('SDG 11 Progress', get_sdg_progress(region.name), MetricLevel.MEDIUM),
        ],
        recommendations=[
            'Develop sustainable urban planning',
            'Increase green infrastructure',
            'Improve public transportation',
            'Promote affordable housing',
            'Enhance disaster resilience',
        ],
    )


CATEGORY_REGISTRY: Dict[CategoryKey, CategoryTemplate] = {
    CategoryKey.AIR: air_report,
    CategoryKey.WATER: water_report,
    CategoryKey.VEGETATION: vegetation_report,
    CategoryKey.CLIMATE: climate_report,
    CategoryKey.ATMOSPHERE: atmosphere_report,
    CategoryKey.SDG_CITIES: sdg_cities_report,
}

# Button labels for the region overview panel, in display order.
CATEGORY_LABELS = {
    CategoryKey.AIR: ('🌫️', 'Air Quality'),
    CategoryKey.WATER: ('💧', 'Water Resources'),
    CategoryKey.VEGETATION: ('🌳', 'Vegetation & Soil'),
    CategoryKey.CLIMATE: ('🌦️', 'Climate'),
    CategoryKey.ATMOSPHERE: ('🛰️', 'Atmosphere'),
    CategoryKey.SDG_CITIES: ('🏙️', 'SDG 11 Cities'),
}


def get_template(key) -> Optional[CategoryTemplate]:
    """Return the template for ``key`` (enum or string), or None if unknown."""
    parsed = CategoryKey.parse(key)
    if parsed is None:
        return None
    return CATEGORY_REGISTRY.get(parsed)


def build_report(key, region: Region) -> Optional[CategoryReport]:
    """Run the template for ``key`` against ``region``.

    Returns None when ``key`` is outside the closed category set.
    """
    template = get_template(key)
    if template is None:
        logger.warning(f"[Categories] Unknown category key: {key!r}")
        return None
    return template(region)
