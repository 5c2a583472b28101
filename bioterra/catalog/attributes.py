"""
Region-keyed auxiliary attributes with a single fallback policy.

Several category reports show descriptive values that are not part of the
core Region record (groundwater level, erosion risk, SDG 11 progress, ...).
They all live in one table, ``REGION_ATTRIBUTES``, keyed by region name.
A region missing from the table, or a field missing from a region's row,
resolves to the field's entry in ``DEFAULT_ATTRIBUTES``.  A missing region
never raises; only an unknown field name does.

Climate and atmosphere descriptors are currently identical for every
department, so they exist only as defaults.
"""

from typing import Dict


DEFAULT_ATTRIBUTES: Dict[str, str] = {
    'groundwater': 'Moderate',
    'water_availability': 'Adequate',
    'erosion_risk': 'Medium',
    'urban_sustainability': 'Moderate',
    'green_space_access': 'Moderate',
    'transport_coverage': 'Moderate',
    'sdg_progress': '50% Complete',
    'temperature_trend': '+1.2°C since 1980',
    'precipitation_pattern': 'Decreasing trend in dry season',
    'weather_risk': 'Moderate risk of extreme events',
    'climate_impact': 'Significant impact on agriculture',
    'ozone_health': 'Stable with seasonal variations',
    'uv_level': 'High due to altitude and latitude',
    'atmospheric_stability': 'Generally stable with seasonal variations',
    'satellite_coverage': 'Excellent (multiple daily passes)',
}

REGION_ATTRIBUTES: Dict[str, Dict[str, str]] = {
    'Lima': {
        'groundwater': 'Stable',
        'water_availability': 'Limited',
        'erosion_risk': 'High',
        'urban_sustainability': 'Developing',
        'green_space_access': 'Limited',
        'transport_coverage': 'Extensive',
        'sdg_progress': '60% Complete',
    },
    'Arequipa': {
        'groundwater': 'High',
        'water_availability': 'Adequate',
        'erosion_risk': 'Medium',
        'urban_sustainability': 'Good',
        'green_space_access': 'Good',
        'transport_coverage': 'Good',
        'sdg_progress': '75% Complete',
    },
    'Cusco': {
        'groundwater': 'Moderate',
        'water_availability': 'Seasonal',
        'erosion_risk': 'High',
        'urban_sustainability': 'Moderate',
        'green_space_access': 'Moderate',
        'transport_coverage': 'Moderate',
        'sdg_progress': '55% Complete',
    },
    'Loreto': {
        'groundwater': 'Very High',
        'water_availability': 'Abundant',
        'erosion_risk': 'Low',
        'urban_sustainability': 'Poor',
        'green_space_access': 'Excellent',
        'transport_coverage': 'Limited',
        'sdg_progress': '40% Complete',
    },
    'Madre de Dios': {
        'groundwater': 'High',
        'water_availability': 'Abundant',
        'erosion_risk': 'Low',
        'urban_sustainability': 'Poor',
        'green_space_access': 'Excellent',
        'transport_coverage': 'Limited',
        'sdg_progress': '35% Complete',
    },
    'Piura': {
        'groundwater': 'Low',
        'water_availability': 'Limited',
        'erosion_risk': 'High',
        'urban_sustainability': 'Developing',
        'green_space_access': 'Limited',
        'transport_coverage': 'Moderate',
        'sdg_progress': '50% Complete',
    },
    'La Libertad': {
        'groundwater': 'Moderate',
        'water_availability': 'Adequate',
        'erosion_risk': 'Medium',
        'urban_sustainability': 'Good',
        'green_space_access': 'Good',
        'transport_coverage': 'Good',
        'sdg_progress': '70% Complete',
    },
    'Amazonas': {
        'groundwater': 'Very High',
        'water_availability': 'Abundant',
        'erosion_risk': 'Low',
        'urban_sustainability': 'Poor',
        'green_space_access': 'Excellent',
        'transport_coverage': 'Limited',
        'sdg_progress': '45% Complete',
    },
    'Puno': {
        'groundwater': 'High',
        'water_availability': 'Adequate',
        'erosion_risk': 'Medium',
        'urban_sustainability': 'Moderate',
        'green_space_access': 'Good',
        'transport_coverage': 'Moderate',
        'sdg_progress': '65% Complete',
    },
}


def lookup_attribute(region_name: str, attribute: str) -> str:
    """Return ``attribute`` for ``region_name``, or the attribute's default.

    Raises:
        KeyError: Only if ``attribute`` itself is not a known attribute name,
            which is a programming error rather than missing data.
    """
    default = DEFAULT_ATTRIBUTES[attribute]
    return REGION_ATTRIBUTES.get(region_name, {}).get(attribute, default)


# ---------------------------------------------------------------------------
# Named accessors used by the category templates
# ---------------------------------------------------------------------------

def get_groundwater_level(region_name: str) -> str:
    return lookup_attribute(region_name, 'groundwater')


def get_water_availability(region_name: str) -> str:
    return lookup_attribute(region_name, 'water_availability')


def get_erosion_risk(region_name: str) -> str:
    return lookup_attribute(region_name, 'erosion_risk')


def get_urban_sustainability(region_name: str) -> str:
    return lookup_attribute(region_name, 'urban_sustainability')


def get_green_space_access(region_name: str) -> str:
    return lookup_attribute(region_name, 'green_space_access')


def get_transport_coverage(region_name: str) -> str:
    return lookup_attribute(region_name, 'transport_coverage')


def get_sdg_progress(region_name: str) -> str:
    return lookup_attribute(region_name, 'sdg_progress')
