"""
Data models for the Region Explorer.

This module defines the **schema layer** of the explorer.  Every entity that
flows between the catalog, the category registry, the state machine and the
map adapter is described here as a dataclass or an enum.

Dataclass hierarchy
-------------------
::

    Region
        One department with fixed coordinates and indicator values.
        Frozen: loaded once at import and never mutated.

    Metric
        A single (name, value, level) row of a category report.

    CategoryReport
        Derived, ephemeral analysis of one Region under one CategoryKey.
        Recomputed every time a category is opened.

    SelectionState
        The only mutable entity: which region / category is open.

    Viewport
        A map centre plus zoom level.

Enums
-----
``RiskLevel``      low < medium < high < critical (drives marker colour).
``MetricLevel``    low < medium < high (drives metric badges).
``CategoryKey``    the closed set of analytical lenses.
``ExplorerPhase``  Idle / RegionFocused / CategoryFocused.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Any, Tuple


class RiskLevel(Enum):
    """Ordinal risk classification of a region."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class MetricLevel(Enum):
    """Three-band level attached to each report metric."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CategoryKey(Enum):
    """
    Closed set of category lenses.

    ``ods11`` (Objetivo de Desarrollo Sostenible 11) is accepted as an alias
    of ``sdg-cities`` by ``parse`` for links written against the old name.
    """
    AIR = "air"
    WATER = "water"
    VEGETATION = "vegetation"
    CLIMATE = "climate"
    ATMOSPHERE = "atmosphere"
    SDG_CITIES = "sdg-cities"

    @classmethod
    def parse(cls, value) -> Optional['CategoryKey']:
        """Return the matching key, or None for anything outside the set."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        value = value.strip().lower()
        if value == "ods11":
            return cls.SDG_CITIES
        try:
            return cls(value)
        except ValueError:
            return None


class ExplorerPhase(Enum):
    """Visible panel configuration of the explorer."""
    IDLE = "idle"
    REGION_FOCUSED = "region_focused"
    CATEGORY_FOCUSED = "category_focused"


# ============================================================================
# REGION
# ============================================================================

@dataclass(frozen=True)
class Region:
    """A department of the country with its environmental indicators.

    Attributes:
        name: Unique identity within the catalog.
        air_quality: Air quality index on the 0-500 scale.
        water_quality: Free-text descriptor, e.g. "Poor - Mining contamination".
        deforestation_rate: Annual forest loss in percent.
        health_impact: Free-text descriptor starting with a severity word.
        risk_level: Overall risk classification (marker colour).
        coordinates: (latitude, longitude) of the marker.
    """
    name: str
    air_quality: float
    water_quality: str
    deforestation_rate: float
    health_impact: str
    risk_level: RiskLevel
    coordinates: Tuple[float, float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'air_quality': self.air_quality,
            'water_quality': self.water_quality,
            'deforestation_rate': self.deforestation_rate,
            'health_impact': self.health_impact,
            'risk_level': self.risk_level.value,
            'latitude': self.coordinates[0],
            'longitude': self.coordinates[1],
        }


# ============================================================================
# CATEGORY REPORT
# ============================================================================

@dataclass(frozen=True)
class Metric:
    """One row of a category report."""
    name: str
    value: str
    level: MetricLevel


@dataclass(frozen=True)
class CategoryReport:
    """Analysis of one region through one category lens.

    Attributes:
        title: Panel heading.
        description: One-paragraph summary naming the region.
        data_sources: Satellite products the analysis is attributed to.
        metrics: Ordered (name, value, level) rows.
        recommendations: Suggested interventions, in display order.
    """
    title: str
    description: str
    data_sources: List[str] = field(default_factory=list)
    metrics: List[Metric] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'description': self.description,
            'data_sources': list(self.data_sources),
            'metrics': [
                {'name': m.name, 'value': m.value, 'level': m.level.value}
                for m in self.metrics
            ],
            'recommendations': list(self.recommendations),
        }


# ============================================================================
# VIEWPORT
# ============================================================================

@dataclass(frozen=True)
class Viewport:
    """Map centre (lat, lon) and zoom level."""
    center: Tuple[float, float]
    zoom: int


# ============================================================================
# SELECTION STATE
# ============================================================================

@dataclass
class SelectionState:
    """Which region and category the explorer currently shows.

    Mutated only by the four transitions of ``RegionExplorer``.  The
    invariant ``active_category is not None -> selected_region is not None``
    holds after every transition.
    """
    selected_region: Optional[Region] = None
    active_category: Optional[CategoryKey] = None
    category_report: Optional[CategoryReport] = None

    @property
    def phase(self) -> ExplorerPhase:
        if self.selected_region is None:
            return ExplorerPhase.IDLE
        if self.active_category is None:
            return ExplorerPhase.REGION_FOCUSED
        return ExplorerPhase.CATEGORY_FOCUSED

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serialisable snapshot (region by name, category by key)."""
        return {
            'phase': self.phase.value,
            'selected_region': self.selected_region.name if self.selected_region else None,
            'active_category': self.active_category.value if self.active_category else None,
            'category_report': self.category_report.to_dict() if self.category_report else None,
        }
