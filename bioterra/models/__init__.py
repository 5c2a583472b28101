"""
Data models for the Region Explorer.
"""

from .data_models import (
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

__all__ = [
    'RiskLevel',
    'MetricLevel',
    'CategoryKey',
    'ExplorerPhase',
    'Region',
    'Metric',
    'CategoryReport',
    'Viewport',
    'SelectionState',
]
