"""
Map Adapter.

Folium-backed map widgets, their lifecycle owner, and the container registry
and scheduler that handle deferred mounting.
"""

from .adapter import MapAdapter, MapHandle, PendingMount
from .containers import ContainerRegistry, RenderScheduler
from .widgets import FoliumMapFactory, risk_color, pin_icon_html, popup_html, tooltip_html

__all__ = [
    'MapAdapter',
    'MapHandle',
    'PendingMount',
    'ContainerRegistry',
    'RenderScheduler',
    'FoliumMapFactory',
    'risk_color',
    'pin_icon_html',
    'popup_html',
    'tooltip_html',
]
