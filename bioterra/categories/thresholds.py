"""
Fixed-threshold classifiers used by the category templates.

Every function here is pure.  Bands are inclusive at the upper bound, so an
air quality of exactly 50 is still ``low`` and 51 is ``medium``.

    Indicator            Bands (upper bound inclusive)
    -------------------  ------------------------------------------------
    Air quality level    <=50 low | <=100 medium | else high
    AQI label            <=50 Good | <=100 Moderate |
                         <=150 Unhealthy for Sensitive Groups | else Unhealthy
    Deforestation level  <=10 low | <=20 medium | else high
    Vegetation health    <=10 Excellent | <=20 Good | <=30 Fair | else Poor
    Carbon storage       <=10 High | <=20 Medium | <=30 Low | else Very Low
"""

from ..core.utils import bucket, contains_any
from ..models.data_models import MetricLevel

AIR_QUALITY_BOUNDS = [50, 100]
AQI_BOUNDS = [50, 100, 150]
DEFORESTATION_BOUNDS = [10, 20]
VEGETATION_BOUNDS = [10, 20, 30]

_THREE_LEVELS = [MetricLevel.LOW, MetricLevel.MEDIUM, MetricLevel.HIGH]


def get_air_quality_level(air_quality: float) -> MetricLevel:
    return bucket(air_quality, AIR_QUALITY_BOUNDS, _THREE_LEVELS)


def calculate_aqi(air_quality: float) -> str:
    """Human label for an air quality index value."""
    return bucket(
        air_quality,
        AQI_BOUNDS,
        ['Good', 'Moderate', 'Unhealthy for Sensitive Groups', 'Unhealthy'],
    )


def get_health_impact_level(health_impact: str) -> MetricLevel:
    """Level from the severity word a health-impact descriptor starts with.

    Descriptors without a recognised word fall back to ``medium``.
    """
    if contains_any(health_impact, ['Low']):
        return MetricLevel.LOW
    if contains_any(health_impact, ['Medium']):
        return MetricLevel.MEDIUM
    if contains_any(health_impact, ['High', 'Critical']):
        return MetricLevel.HIGH
    return MetricLevel.MEDIUM


def get_contamination_risk(water_quality: str) -> str:
    if contains_any(water_quality, ['Good']):
        return 'Low'
    if contains_any(water_quality, ['Moderate']):
        return 'Medium'
    return 'High'


def get_contamination_level(water_quality: str) -> MetricLevel:
    return MetricLevel(get_contamination_risk(water_quality).lower())


def get_deforestation_level(deforestation_rate: float) -> MetricLevel:
    return bucket(deforestation_rate, DEFORESTATION_BOUNDS, _THREE_LEVELS)


def get_vegetation_health(deforestation_rate: float) -> str:
    return bucket(deforestation_rate, VEGETATION_BOUNDS, ['Excellent', 'Good', 'Fair', 'Poor'])


def get_carbon_storage(deforestation_rate: float) -> str:
    return bucket(
        deforestation_rate,
        VEGETATION_BOUNDS,
        [
            'High (>100 tons/ha)',
            'Medium (50-100 tons/ha)',
            'Low (20-50 tons/ha)',
            'Very Low (<20 tons/ha)',
        ],
    )
