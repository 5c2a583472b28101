"""
Map Adapter - lifecycle owner of the explorer's map widgets.

The adapter translates explorer transitions into map operations and widget
click payloads back into explorer transitions.  It owns at most two live
handles:

    primary    The overview map, one marker per catalog region.  Mounted
               once when the view mounts, unmounted when it goes away.
    secondary  The detail map of an open category.  Created on demand and
               destroyed when the category closes or another region is
               selected.

Deferred mounting
-----------------
A detail container is rendered *after* the transition that asks for its map,
so ``mount_secondary`` usually finds no container yet.  The request is parked
as a pending mount and completed by whichever comes first:

1. ``container_mounted(container_id)`` -- the post-render signal the page
   emits right after drawing the container;
2. a retry queued on the scheduler, up to ``max_mount_attempts`` attempts in
   total, after which the request is silently abandoned.

Retries run when the scheduler is drained at the end of a page run.  The
dashboard reruns the page after ``retry_delay_s`` while a mount is pending,
so the attempts complete without user input and the budget bounds both the
attempts and the reruns.

A generation counter stamps every pending request, so a retry that fires
after the request was cancelled or replaced does nothing.

Bindings
--------
Every live handle is indexed by container id.  Mounting onto a container
that already carries a map destroys the old map first; a container never
holds two bindings.
"""

import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from ..core.config import (
    MOUNT_RETRY_ATTEMPTS, MOUNT_RETRY_DELAY_S, CLICK_MATCH_TOLERANCE, DETAIL_ZOOM,
)
from ..models.data_models import Region, Viewport
from .widgets import FoliumMapFactory

logger = logging.getLogger(__name__)

_handle_ids = itertools.count(1)


@dataclass
class MapHandle:
    """Opaque handle to one mounted map widget.

    Attributes:
        container_id: Container the widget is bound to.
        widget: The folium map (None once removed).
        center: Current (lat, lon) of the viewport.
        zoom: Current zoom level.
        kind: 'primary' or 'secondary'.
        handle_id: Process-unique id; part of ``widget_key``.
        markers: Marker coordinates -> region name, for click routing.
        on_region_click: Called with a region name when a marker is clicked.
        on_background_click: Called when empty map area is clicked.
        revision: Bumped after every selection change; part of ``widget_key``.
    """
    container_id: str
    widget: Any
    center: Tuple[float, float]
    zoom: int
    kind: str = 'primary'
    handle_id: int = field(default_factory=lambda: next(_handle_ids))
    markers: Dict[Tuple[float, float], str] = field(default_factory=dict)
    on_region_click: Optional[Callable[[str], Any]] = None
    on_background_click: Optional[Callable[[], Any]] = None
    removed: bool = False
    revision: int = 0
    _seen_events: Dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def widget_key(self) -> str:
        """Component key unique to this handle and revision.

        A new key gives a fresh component whose click payloads start empty.
        """
        return f"{self.container_id}-{self.handle_id}-r{self.revision}"

    def reset_events(self) -> None:
        """Start a fresh component so the same marker can be clicked again."""
        self.revision += 1
        self._seen_events.clear()

    def remove(self) -> None:
        self.removed = True
        self.widget = None
        self.on_region_click = None
        self.on_background_click = None
        self.markers.clear()


@dataclass
class PendingMount:
    container_id: str
    region: Region
    generation: int
    attempts: int = 0


class MapAdapter:
    """
    Owns the primary and secondary map handles of one explorer view.

    Args:
        catalog: Iterable of regions rendered as overview markers.
        container_lookup: ``container_id -> container or None``.
        scheduler: Object with ``call_later(delay_s, callback)``; when None,
            a missing detail container gets a single attempt per signal.
        factory: Widget factory (defaults to ``FoliumMapFactory``).
        max_mount_attempts: Total attempts before a pending mount is dropped.
        retry_delay_s: Delay requested between attempts.
    """

    def __init__(self, catalog, container_lookup: Callable[[str], Any],
                 scheduler=None, factory=None,
                 max_mount_attempts: int = MOUNT_RETRY_ATTEMPTS,
                 retry_delay_s: float = MOUNT_RETRY_DELAY_S):
        self.catalog = catalog
        self.container_lookup = container_lookup
        self.scheduler = scheduler
        self.factory = factory or FoliumMapFactory()
        self.max_mount_attempts = max(1, int(max_mount_attempts))
        self.retry_delay_s = retry_delay_s

        self.primary: Optional[MapHandle] = None
        self.secondary: Optional[MapHandle] = None
        self._bindings: Dict[str, MapHandle] = {}
        self._pending: Optional[PendingMount] = None
        self._generation = 0

    # ------------------------------------------------------------------
    # Primary map
    # ------------------------------------------------------------------

    def mount_primary(self, container_id: str, viewport: Viewport,
                      on_region_click: Callable[[str], Any],
                      on_background_click: Callable[[], Any]) -> Optional[MapHandle]:
        """Create the overview map on ``container_id``.

        Returns the new handle, or None (with an error logged) when the
        container is absent.  An existing primary map is destroyed first.
        """
        if self.container_lookup(container_id) is None:
            logger.error(f"[MapAdapter] Cannot mount overview map: container '{container_id}' not found")
            return None

        self.unmount_primary()
        self._release_binding(container_id)

        regions = list(self.catalog)
        widget = self.factory.create_overview(viewport, regions)
        handle = MapHandle(
            container_id=container_id,
            widget=widget,
            center=tuple(viewport.center),
            zoom=viewport.zoom,
            kind='primary',
            markers={tuple(r.coordinates): r.name for r in regions},
            on_region_click=on_region_click,
            on_background_click=on_background_click,
        )
        self.primary = handle
        self._bindings[container_id] = handle
        logger.debug(f"[MapAdapter] Overview map mounted on '{container_id}' with {len(regions)} markers")
        return handle

    def unmount_primary(self) -> None:
        if self.primary is None:
            return
        self._destroy(self.primary)
        self.primary = None

    # ------------------------------------------------------------------
    # Viewport
    # ------------------------------------------------------------------

    def recenter(self, handle: Optional[MapHandle], coordinates, zoom: int) -> None:
        if handle is None or handle.removed:
            return
        handle.center = (float(coordinates[0]), float(coordinates[1]))
        handle.zoom = int(zoom)
        if handle.widget is not None and hasattr(handle.widget, 'location'):
            handle.widget.location = list(handle.center)
        logger.debug(f"[MapAdapter] Recentered '{handle.container_id}' on {handle.center} @ z{handle.zoom}")

    # ------------------------------------------------------------------
    # Secondary map
    # ------------------------------------------------------------------

    def mount_secondary(self, container_id: str, region: Region) -> Optional[MapHandle]:
        """Mount the detail map for ``region``, deferring if needed.

        Returns the handle when the container was already present, else None
        (the mount stays pending until the container appears or the retry
        budget runs out).
        """
        self.unmount_secondary()
        self._generation += 1
        self._pending = PendingMount(container_id, region, self._generation)
        return self._attempt_pending(self._generation)

    def unmount_secondary(self) -> None:
        """Destroy the detail map and cancel any pending mount."""
        if self._pending is not None:
            logger.debug(f"[MapAdapter] Cancelled pending mount on '{self._pending.container_id}'")
            self._pending = None
        if self.secondary is not None:
            self._destroy(self.secondary)
            self.secondary = None

    def container_mounted(self, container_id: str) -> Optional[MapHandle]:
        """Post-render signal: ``container_id`` now exists."""
        pending = self._pending
        if pending is None or pending.container_id != container_id:
            return None
        return self._attempt_pending(pending.generation)

    @property
    def has_pending_mount(self) -> bool:
        return self._pending is not None

    def _attempt_pending(self, generation: int) -> Optional[MapHandle]:
        pending = self._pending
        if pending is None or pending.generation != generation:
            # Cancelled or superseded since this attempt was queued.
            return None

        pending.attempts += 1
        if self.container_lookup(pending.container_id) is not None:
            self._pending = None
            return self._create_secondary(pending.container_id, pending.region)

        if pending.attempts >= self.max_mount_attempts:
            logger.debug(
                f"[MapAdapter] Abandoned detail map for {pending.region.name}: "
                f"container '{pending.container_id}' missing after {pending.attempts} attempts"
            )
            self._pending = None
            return None

        if self.scheduler is not None:
            self.scheduler.call_later(self.retry_delay_s, lambda: self._attempt_pending(generation))
        return None

    def _create_secondary(self, container_id: str, region: Region) -> MapHandle:
        self._release_binding(container_id)
        handle = MapHandle(
            container_id=container_id,
            widget=self.factory.create_detail(region),
            center=tuple(region.coordinates),
            zoom=DETAIL_ZOOM,
            kind='secondary',
            markers={tuple(region.coordinates): region.name},
        )
        self.secondary = handle
        self._bindings[container_id] = handle
        logger.debug(f"[MapAdapter] Detail map mounted on '{container_id}' for {region.name}")
        return handle

    # ------------------------------------------------------------------
    # Click routing
    # ------------------------------------------------------------------

    def dispatch_click(self, handle: Optional[MapHandle], payload: Optional[dict]) -> bool:
        """Route a streamlit-folium payload to the handle's click handlers.

        Marker clicks arrive as ``last_object_clicked`` and are matched back
        to a region by coordinates.  Background clicks arrive as
        ``last_clicked``.  The component re-sends its last values on every
        rerun, so only values that changed since the previous call on this
        handle are dispatched.  ``reset_primary_clicks`` starts the overview
        map clean after each selection change.

        Returns:
            True if a handler was invoked.
        """
        if handle is None or handle.removed or not payload:
            return False

        obj_click = payload.get('last_object_clicked')
        if obj_click and self._is_new_event(handle, 'last_object_clicked', obj_click):
            # A marker click also refreshes last_clicked in some component
            # versions; remember it so it is not replayed as a background click.
            self._is_new_event(handle, 'last_clicked', payload.get('last_clicked'))
            name = self._match_marker(handle, obj_click, payload.get('last_object_clicked_tooltip'))
            if name is not None and handle.on_region_click is not None:
                handle.on_region_click(name)
                return True
            return False

        map_click = payload.get('last_clicked')
        if map_click and self._is_new_event(handle, 'last_clicked', map_click):
            if handle.on_background_click is not None:
                handle.on_background_click()
                return True
        return False

    def reset_primary_clicks(self) -> None:
        """Forget dispatched clicks on the overview map after a selection change.

        streamlit-folium re-sends the last clicked object on every rerun, so
        without a fresh component a pin clicked before Close (or before a
        sidebar pick) could never be clicked again.
        """
        if self.primary is None or self.primary.removed:
            return
        self.primary.reset_events()
        logger.debug(f"[MapAdapter] Overview map clicks reset (key {self.primary.widget_key})")

    @staticmethod
    def _is_new_event(handle: MapHandle, key: str, value) -> bool:
        if value is None or handle._seen_events.get(key) == value:
            return False
        handle._seen_events[key] = value
        return True

    @staticmethod
    def _match_marker(handle: MapHandle, click: dict, tooltip: Optional[str]) -> Optional[str]:
        lat, lng = click.get('lat'), click.get('lng')
        if lat is not None and lng is not None:
            for (m_lat, m_lng), name in handle.markers.items():
                if abs(m_lat - lat) < CLICK_MATCH_TOLERANCE and abs(m_lng - lng) < CLICK_MATCH_TOLERANCE:
                    return name
        if tooltip:
            for name in handle.markers.values():
                if name in tooltip:
                    return name
        return None

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def unmount_all(self) -> None:
        """View unmount: destroy every handle and cancel pending work."""
        self.unmount_secondary()
        self.unmount_primary()

    def _release_binding(self, container_id: str) -> None:
        existing = self._bindings.get(container_id)
        if existing is None:
            return
        logger.debug(f"[MapAdapter] Replacing existing binding on '{container_id}'")
        if existing is self.primary:
            self.primary = None
        if existing is self.secondary:
            self.secondary = None
        self._destroy(existing)

    def _destroy(self, handle: MapHandle) -> None:
        if self._bindings.get(handle.container_id) is handle:
            del self._bindings[handle.container_id]
        handle.remove()
        logger.debug(f"[MapAdapter] Destroyed {handle.kind} map on '{handle.container_id}'")

    def bound_handle(self, container_id: str) -> Optional[MapHandle]:
        return self._bindings.get(container_id)
