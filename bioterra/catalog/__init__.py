"""
Region Catalog.

Static department records plus the region-keyed auxiliary attribute table.
"""

from .regions import REGION_RECORDS, RegionCatalog, region_from_record
from .attributes import (
    DEFAULT_ATTRIBUTES,
    REGION_ATTRIBUTES,
    lookup_attribute,
    get_groundwater_level,
    get_water_availability,
    get_erosion_risk,
    get_urban_sustainability,
    get_green_space_access,
    get_transport_coverage,
    get_sdg_progress,
)

__all__ = [
    'REGION_RECORDS',
    'RegionCatalog',
    'region_from_record',
    'DEFAULT_ATTRIBUTES',
    'REGION_ATTRIBUTES',
    'lookup_attribute',
    'get_groundwater_level',
    'get_water_availability',
    'get_erosion_risk',
    'get_urban_sustainability',
    'get_green_space_access',
    'get_transport_coverage',
    'get_sdg_progress',
]
