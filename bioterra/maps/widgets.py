"""
Folium widget builders for the overview and detail maps.

Every function here builds plain ``folium`` objects and returns them; none
of them know about Streamlit or explorer state.  Marker colour comes from
``RISK_COLORS`` (a presentation contract) and is rendered as a CSS custom
property on a DivIcon so the pin, its shadow and its pulse ring share it.
"""

from typing import Iterable

import folium

from ..core.config import (
    TILE_URL, TILE_ATTRIBUTION, PRIMARY_MAX_ZOOM, DETAIL_MAX_ZOOM,
    RISK_COLORS, PRIMARY_PIN_SIZE, PRIMARY_PIN_ANCHOR,
    DETAIL_PIN_SIZE, DETAIL_PIN_ANCHOR, DETAIL_ZOOM,
)
from ..models.data_models import Region, RiskLevel, Viewport


def risk_color(risk_level: RiskLevel) -> str:
    return RISK_COLORS[risk_level.value]


def pin_icon_html(risk_level: RiskLevel) -> str:
    return (
        f'<div class="location-pin" style="--risk-color: {risk_color(risk_level)}">'
        '<div class="pin-head"></div>'
        '<div class="pin-shadow"></div>'
        '<div class="pulse-animation"></div>'
        '</div>'
    )


def pin_icon(risk_level: RiskLevel, size=PRIMARY_PIN_SIZE, anchor=PRIMARY_PIN_ANCHOR) -> folium.DivIcon:
    return folium.DivIcon(
        html=pin_icon_html(risk_level),
        icon_size=size,
        icon_anchor=anchor,
        class_name='custom-marker',
    )


def tooltip_html(region: Region) -> str:
    return (
        '<div style="text-align: center;">'
        f'<strong>{region.name}</strong><br>'
        'Click for details'
        '</div>'
    )


def popup_html(region: Region) -> str:
    return (
        '<div style="text-align: center;">'
        f'<strong>{region.name}</strong><br>'
        f'<small>{region.risk_level.value.upper()} Risk Level</small>'
        '</div>'
    )


def _base_map(center, zoom: int, max_zoom: int) -> folium.Map:
    m = folium.Map(location=list(center), zoom_start=zoom, max_zoom=max_zoom, tiles=None)
    folium.TileLayer(
        tiles=TILE_URL,
        attr=TILE_ATTRIBUTION,
        max_zoom=max_zoom,
        name='OpenStreetMap',
    ).add_to(m)
    return m


class FoliumMapFactory:
    """Builds the two kinds of map the explorer mounts."""

    def create_overview(self, viewport: Viewport, regions: Iterable[Region]) -> folium.Map:
        m = _base_map(viewport.center, viewport.zoom, PRIMARY_MAX_ZOOM)
        for region in regions:
            folium.Marker(
                location=list(region.coordinates),
                icon=pin_icon(region.risk_level),
                tooltip=folium.Tooltip(tooltip_html(region), direction='top'),
            ).add_to(m)
        return m

    def create_detail(self, region: Region) -> folium.Map:
        m = _base_map(region.coordinates, DETAIL_ZOOM, DETAIL_MAX_ZOOM)
        folium.Marker(
            location=list(region.coordinates),
            icon=pin_icon(region.risk_level, DETAIL_PIN_SIZE, DETAIL_PIN_ANCHOR),
            popup=folium.Popup(popup_html(region), max_width=240),
        ).add_to(m)
        return m
