"""
Selection State Machine - the Region Explorer.

=== STATES ===
::

    IDLE ──select_region──▶ REGION_FOCUSED ──open_category──▶ CATEGORY_FOCUSED
      ▲                        ▲     │                              │
      │                        │     └──────select_region───────────┤
      │                        └─────────close_category─────────────┘
      └────────────close_panel (from any state)─────────────────────

=== TRANSITIONS ===
``select_region(name)``   any -> REGION_FOCUSED; unknown name is a no-op.
``open_category(key)``    needs a selected region; otherwise a no-op.
``close_category()``      CATEGORY_FOCUSED -> REGION_FOCUSED; no-op elsewhere.
``close_panel()``         any -> IDLE.

Every transition is synchronous, returns True when the state changed, and
leaves the state untouched when it is a no-op, so repeating a call is safe.

=== MAP SIDE EFFECTS ===
When an adapter is attached, transitions drive it:
  - select_region destroys the detail map, then re-centres the overview map
    on the region at REGION_ZOOM.
  - open_category asks for a detail map on DETAIL_MAP_CONTAINER; the adapter
    defers it until the panel's container has rendered.
  - close_category / close_panel destroy the detail map.
  - select_region, close_category and close_panel reset the overview map's
    click memory, so a pin can be clicked again after any selection change.
The explorer runs without an adapter too, which is how the state tests use it.
"""

import logging
from typing import Optional

from ..catalog.regions import RegionCatalog
from ..categories.registry import build_report
from ..core.config import (
    REGION_ZOOM, INITIAL_CENTER, INITIAL_ZOOM,
    PRIMARY_MAP_CONTAINER, DETAIL_MAP_CONTAINER,
)
from ..models.data_models import (
    CategoryKey, ExplorerPhase, Region, SelectionState, Viewport,
)

logger = logging.getLogger(__name__)


class RegionExplorer:
    """
    Owns one SelectionState and (optionally) one MapAdapter.

    Usage:
        >>> explorer = RegionExplorer(RegionCatalog.default())
        >>> explorer.select_region('Lima')
        True
        >>> explorer.open_category('air')
        True
        >>> explorer.state.category_report.title
        'Air Quality Analysis - Lima'

    Attributes:
        catalog (RegionCatalog): Closed set of selectable regions.
        adapter (MapAdapter | None): Map lifecycle owner for this view.
        state (SelectionState): The current selection; replace only through
            the transition methods.
    """

    def __init__(self, catalog: Optional[RegionCatalog] = None, adapter=None):
        self.catalog = catalog if catalog is not None else RegionCatalog.default()
        self.adapter = adapter
        self.state = SelectionState()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def phase(self) -> ExplorerPhase:
        return self.state.phase

    @property
    def selected_region(self) -> Optional[Region]:
        return self.state.selected_region

    @property
    def active_category(self) -> Optional[CategoryKey]:
        return self.state.active_category

    # ------------------------------------------------------------------
    # View lifecycle
    # ------------------------------------------------------------------

    def mount(self, container_id: str = PRIMARY_MAP_CONTAINER,
              viewport: Optional[Viewport] = None):
        """Mount the overview map with click handlers wired to transitions."""
        if self.adapter is None:
            return None
        viewport = viewport or Viewport(INITIAL_CENTER, INITIAL_ZOOM)
        handle = self.adapter.mount_primary(
            container_id, viewport,
            on_region_click=self.select_region,
            on_background_click=self.close_panel,
        )
        # Remounting mid-session keeps the user's focus on screen.
        if handle is not None and self.state.selected_region is not None:
            self.adapter.recenter(handle, self.state.selected_region.coordinates, REGION_ZOOM)
        return handle

    def unmount(self) -> None:
        if self.adapter is not None:
            self.adapter.unmount_all()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def select_region(self, name: str) -> bool:
        region = self.catalog.get(name)
        if region is None:
            logger.warning(f"[Explorer] Ignoring selection of unknown region {name!r}")
            return False

        before = self.state.to_dict()
        self._drop_detail_map()
        self.state = SelectionState(selected_region=region)
        if self.adapter is not None:
            self.adapter.recenter(self.adapter.primary, region.coordinates, REGION_ZOOM)
            self.adapter.reset_primary_clicks()

        logger.debug(f"[Explorer] Focused region {region.name}")
        return self.state.to_dict() != before

    def open_category(self, key) -> bool:
        region = self.state.selected_region
        if region is None:
            logger.debug(f"[Explorer] open_category({key!r}) ignored: no region selected")
            return False

        category = CategoryKey.parse(key)
        if category is None:
            logger.warning(f"[Explorer] Ignoring unknown category {key!r}")
            return False

        if category == self.state.active_category and self._detail_map_live():
            return False

        report = build_report(category, region)
        self.state = SelectionState(
            selected_region=region,
            active_category=category,
            category_report=report,
        )
        if self.adapter is not None:
            self.adapter.mount_secondary(DETAIL_MAP_CONTAINER, region)

        logger.debug(f"[Explorer] Opened {category.value} for {region.name}")
        return True

    def close_category(self) -> bool:
        if self.state.active_category is None:
            return False
        self._drop_detail_map()
        self.state = SelectionState(selected_region=self.state.selected_region)
        self._reset_map_clicks()
        logger.debug("[Explorer] Closed category panel")
        return True

    def close_panel(self) -> bool:
        changed = self.state.phase is not ExplorerPhase.IDLE
        self._drop_detail_map()
        self.state = SelectionState()
        if changed:
            self._reset_map_clicks()
            logger.debug("[Explorer] Cleared selection")
        return changed

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _drop_detail_map(self) -> None:
        if self.adapter is not None:
            self.adapter.unmount_secondary()

    def _reset_map_clicks(self) -> None:
        if self.adapter is not None:
            self.adapter.reset_primary_clicks()

    def _detail_map_live(self) -> bool:
        if self.adapter is None:
            return True
        return self.adapter.secondary is not None or self.adapter.has_pending_mount
