"""
BioTerra Dashboard - Per-session explorer view
==============================================

Streamlit re-runs the page script on every interaction; ``st.session_state``
is the only object that survives between reruns.  Each browser session gets
one ``ExplorerView`` bundle -- explorer, adapter, container registry and
scheduler -- stored under ``VIEW_KEY``.  Nothing is shared between sessions,
so two users (or two test instances) never see each other's selection.

Navigating away from the map route drops the bundle after destroying its
maps, which is the view-unmount of the explorer.
"""

import logging
import time
from dataclasses import dataclass

import streamlit as st

from ..catalog.regions import RegionCatalog
from ..explorer.state_machine import RegionExplorer
from ..maps.adapter import MapAdapter
from ..maps.containers import ContainerRegistry, RenderScheduler

logger = logging.getLogger(__name__)

VIEW_KEY = 'region_explorer_view'


@dataclass
class ExplorerView:
    explorer: RegionExplorer
    adapter: MapAdapter
    containers: ContainerRegistry
    scheduler: RenderScheduler


def build_view(catalog: RegionCatalog = None) -> ExplorerView:
    """Wire a fresh explorer to its own adapter, registry and scheduler."""
    catalog = catalog if catalog is not None else RegionCatalog.default()
    containers = ContainerRegistry()
    scheduler = RenderScheduler()
    adapter = MapAdapter(catalog, containers.get, scheduler=scheduler)
    explorer = RegionExplorer(catalog, adapter)
    return ExplorerView(explorer, adapter, containers, scheduler)


def get_view() -> ExplorerView:
    """Return this session's view, creating it on first use."""
    if st.session_state.get(VIEW_KEY) is None:
        st.session_state[VIEW_KEY] = build_view()
        logger.debug("[Session] Created region explorer view")
    return st.session_state[VIEW_KEY]


def drop_view() -> None:
    """Unmount and forget this session's view, if it exists."""
    view = st.session_state.get(VIEW_KEY)
    if view is None:
        return
    view.explorer.unmount()
    st.session_state[VIEW_KEY] = None
    logger.debug("[Session] Dropped region explorer view")


def finish_render(view: ExplorerView, sleep=time.sleep) -> bool:
    """Run the retries queued during this script run.

    Returns True when a detail-map mount is still pending with retries
    queued; the page then reruns itself after ``retry_delay_s`` so the
    remaining attempts happen without waiting for user input.  The attempt
    budget bounds the number of such reruns.
    """
    view.scheduler.drain()
    if view.adapter.has_pending_mount and view.scheduler.pending():
        sleep(view.adapter.retry_delay_s)
        return True
    return False
