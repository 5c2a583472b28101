"""
Region Catalog - static department records.

The catalog is the explorer's only "database": a fixed table of Peruvian
departments with their coordinates and indicator values, compiled into the
running view.  It is validated once when the catalog is built and never
mutated afterwards.

Validation rules (a malformed record raises ``ValueError`` at build time):
    - names are unique
    - air quality lies in 0-500
    - deforestation rate lies in 0-100
    - risk level is one of low / medium / high / critical
    - coordinates are a valid (lat, lon) pair
"""

import logging
from typing import Dict, Iterator, List, Optional

import pandas as pd

from ..models.data_models import Region, RiskLevel

logger = logging.getLogger(__name__)


REGION_RECORDS = [
    {
        'name': 'Lima',
        'air_quality': 85,
        'water_quality': 'Moderate',
        'deforestation_rate': 12,
        'health_impact': 'Medium - Respiratory issues common in urban areas',
        'risk_level': 'medium',
        'coordinates': (-12.0464, -77.0428),
    },
    {
        'name': 'Arequipa',
        'air_quality': 65,
        'water_quality': 'Good - Minimal contamination',
        'deforestation_rate': 8,
        'health_impact': 'Low - Few environmental health concerns',
        'risk_level': 'low',
        'coordinates': (-16.4090, -71.5375),
    },
    {
        'name': 'Cusco',
        'air_quality': 75,
        'water_quality': 'Moderate - Some agricultural runoff',
        'deforestation_rate': 15,
        'health_impact': 'Medium - Seasonal air quality issues from tourism',
        'risk_level': 'medium',
        'coordinates': (-13.5320, -71.9675),
    },
    {
        'name': 'Loreto',
        'air_quality': 45,
        'water_quality': 'Poor - Mining contamination in rivers',
        'deforestation_rate': 25,
        'health_impact': 'High - Waterborne diseases prevalent',
        'risk_level': 'high',
        'coordinates': (-3.7491, -73.2530),
    },
    {
        'name': 'Madre de Dios',
        'air_quality': 40,
        'water_quality': 'Poor - Heavy metal contamination from mining',
        'deforestation_rate': 35,
        'health_impact': 'Critical - Mercury exposure affecting communities',
        'risk_level': 'critical',
        'coordinates': (-12.6, -70.1),
    },
    {
        'name': 'Piura',
        'air_quality': 70,
        'water_quality': 'Moderate - Industrial pollution in coastal areas',
        'deforestation_rate': 18,
        'health_impact': 'Medium - Water scarcity during dry seasons',
        'risk_level': 'medium',
        'coordinates': (-5.1945, -80.6328),
    },
    {
        'name': 'La Libertad',
        'air_quality': 68,
        'water_quality': 'Good - Well maintained water infrastructure',
        'deforestation_rate': 10,
        'health_impact': 'Low - Good environmental conditions',
        'risk_level': 'low',
        'coordinates': (-8.1092, -79.0215),
    },
    {
        'name': 'Amazonas',
        'air_quality': 55,
        'water_quality': 'Moderate - Deforestation runoff affecting rivers',
        'deforestation_rate': 22,
        'health_impact': 'High - Loss of biodiversity affecting traditional medicine',
        'risk_level': 'high',
        'coordinates': (-5.0703, -78.1583),
    },
    {
        'name': 'Puno',
        'air_quality': 72,
        'water_quality': 'Good - Clean mountain water sources',
        'deforestation_rate': 9,
        'health_impact': 'Low - Clean high-altitude environment',
        'risk_level': 'low',
        'coordinates': (-15.8402, -70.0219),
    },
]


def region_from_record(record: dict) -> Region:
    """Build a validated Region from a raw record dict.

    Raises:
        ValueError: If any field is missing or outside its allowed range.
    """
    try:
        name = str(record['name']).strip()
        air_quality = float(record['air_quality'])
        deforestation = float(record['deforestation_rate'])
        lat, lon = (float(c) for c in record['coordinates'])
        risk = RiskLevel(record['risk_level'])
    except KeyError as e:
        raise ValueError(f"Region record missing field {e}: {record!r}")
    except (TypeError, ValueError) as e:
        raise ValueError(f"Malformed region record {record.get('name')!r}: {e}")

    if not name:
        raise ValueError("Region name must not be empty")
    if not 0 <= air_quality <= 500:
        raise ValueError(f"{name}: air quality {air_quality} outside 0-500")
    if not 0 <= deforestation <= 100:
        raise ValueError(f"{name}: deforestation rate {deforestation} outside 0-100")
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        raise ValueError(f"{name}: invalid coordinates ({lat}, {lon})")

    return Region(
        name=name,
        air_quality=air_quality,
        water_quality=str(record.get('water_quality', '')),
        deforestation_rate=deforestation,
        health_impact=str(record.get('health_impact', '')),
        risk_level=risk,
        coordinates=(lat, lon),
    )


class RegionCatalog:
    """
    Immutable, name-indexed collection of regions.

    Usage:
        >>> catalog = RegionCatalog.default()
        >>> catalog.get('Lima').risk_level
        <RiskLevel.MEDIUM: 'medium'>
        >>> catalog.get('Atlantis') is None
        True
    """

    def __init__(self, regions: List[Region]):
        self._regions: List[Region] = list(regions)
        self._by_name: Dict[str, Region] = {}
        for region in self._regions:
            if region.name in self._by_name:
                raise ValueError(f"Duplicate region name in catalog: {region.name!r}")
            self._by_name[region.name] = region
        logger.debug(f"[Catalog] Loaded {len(self._regions)} regions")

    @classmethod
    def from_records(cls, records: List[dict]) -> 'RegionCatalog':
        return cls([region_from_record(r) for r in records])

    @classmethod
    def default(cls) -> 'RegionCatalog':
        """The built-in department catalog."""
        return cls.from_records(REGION_RECORDS)

    def get(self, name: str) -> Optional[Region]:
        """Return the region called ``name``, or None if it is not catalogued."""
        return self._by_name.get(name)

    def names(self) -> List[str]:
        return [r.name for r in self._regions]

    def __iter__(self) -> Iterator[Region]:
        return iter(self._regions)

    def __len__(self) -> int:
        return len(self._regions)

    def __contains__(self, name) -> bool:
        return name in self._by_name

    def to_frame(self) -> pd.DataFrame:
        """Tabular view of the catalog for the dashboard overview table."""
        df = pd.DataFrame([r.to_dict() for r in self._regions])
        if df.empty:
            return df
        # Sort worst risk first so the table reads like a triage list.
        order = {level.value: i for i, level in enumerate(RiskLevel)}
        df['_risk_rank'] = df['risk_level'].map(order)
        df = df.sort_values(['_risk_rank', 'name'], ascending=[False, True])
        return df.drop(columns=['_risk_rank']).reset_index(drop=True)
