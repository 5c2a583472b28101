"""
Unit tests for the RegionExplorer selection state machine.

Covers:
- Transitions between IDLE, REGION_FOCUSED and CATEGORY_FOCUSED
- No-op behaviour for unknown regions, unknown categories and IDLE opens
- Idempotence of repeated transitions
- Map side effects through a MapAdapter backed by fake widgets
"""

import unittest
from unittest.mock import MagicMock
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from bioterra.core.config import (
    DETAIL_MAP_CONTAINER, PRIMARY_MAP_CONTAINER, REGION_ZOOM, INITIAL_ZOOM,
)
from bioterra.explorer.state_machine import RegionExplorer
from bioterra.maps.adapter import MapAdapter
from bioterra.maps.containers import ContainerRegistry, RenderScheduler
from bioterra.models.data_models import CategoryKey, ExplorerPhase
from tests.fixtures.sample_data import create_sample_catalog, FakeMapFactory


def assert_invariant(test, explorer):
    """An open category always has a selected region and a report."""
    state = explorer.state
    if state.active_category is not None:
        test.assertIsNotNone(state.selected_region)
        test.assertIsNotNone(state.category_report)
    else:
        test.assertIsNone(state.category_report)


class TestTransitions(unittest.TestCase):
    """State-only tests: no adapter attached."""

    def setUp(self):
        self.explorer = RegionExplorer(create_sample_catalog())

    def test_starts_idle(self):
        self.assertEqual(self.explorer.phase, ExplorerPhase.IDLE)
        self.assertIsNone(self.explorer.selected_region)

    def test_select_region(self):
        self.assertTrue(self.explorer.select_region('Lima'))
        self.assertEqual(self.explorer.phase, ExplorerPhase.REGION_FOCUSED)
        self.assertEqual(self.explorer.selected_region.name, 'Lima')
        assert_invariant(self, self.explorer)

    def test_select_unknown_region_is_noop(self):
        self.explorer.select_region('Lima')
        before = self.explorer.state.to_dict()
        with self.assertLogs('bioterra.explorer.state_machine', level='WARNING'):
            self.assertFalse(self.explorer.select_region('Atlantis'))
        self.assertEqual(self.explorer.state.to_dict(), before)

    def test_select_same_region_twice_is_idempotent(self):
        self.assertTrue(self.explorer.select_region('Lima'))
        self.assertFalse(self.explorer.select_region('Lima'))
        self.assertEqual(self.explorer.phase, ExplorerPhase.REGION_FOCUSED)

    def test_open_category_from_idle_is_noop(self):
        self.assertFalse(self.explorer.open_category('air'))
        self.assertEqual(self.explorer.phase, ExplorerPhase.IDLE)
        self.assertIsNone(self.explorer.state.category_report)

    def test_open_category(self):
        self.explorer.select_region('Lima')
        self.assertTrue(self.explorer.open_category('air'))
        self.assertEqual(self.explorer.phase, ExplorerPhase.CATEGORY_FOCUSED)
        self.assertEqual(self.explorer.active_category, CategoryKey.AIR)
        self.assertEqual(self.explorer.state.category_report.title, 'Air Quality Analysis - Lima')
        assert_invariant(self, self.explorer)

    def test_open_unknown_category_is_noop(self):
        self.explorer.select_region('Lima')
        self.assertFalse(self.explorer.open_category('geology'))
        self.assertEqual(self.explorer.phase, ExplorerPhase.REGION_FOCUSED)

    def test_switching_category_replaces_report(self):
        self.explorer.select_region('Lima')
        self.explorer.open_category('air')
        self.assertTrue(self.explorer.open_category('water'))
        self.assertEqual(self.explorer.active_category, CategoryKey.WATER)
        self.assertEqual(self.explorer.state.category_report.title, 'Water Resources Analysis')

    def test_close_category_round_trip(self):
        self.explorer.select_region('Lima')
        region_only = self.explorer.state.to_dict()
        self.explorer.open_category('vegetation')
        self.assertTrue(self.explorer.close_category())
        self.assertEqual(self.explorer.state.to_dict(), region_only)
        self.assertFalse(self.explorer.close_category())

    def test_close_panel_from_every_phase(self):
        self.assertFalse(self.explorer.close_panel())
        self.explorer.select_region('Lima')
        self.assertTrue(self.explorer.close_panel())
        self.explorer.select_region('Lima')
        self.explorer.open_category('climate')
        self.assertTrue(self.explorer.close_panel())
        self.assertEqual(self.explorer.phase, ExplorerPhase.IDLE)
        assert_invariant(self, self.explorer)

    def test_close_panel_twice_is_idempotent(self):
        self.explorer.select_region('Lima')
        self.explorer.open_category('air')
        self.explorer.close_panel()
        once = self.explorer.state.to_dict()
        self.assertFalse(self.explorer.close_panel())
        self.assertEqual(self.explorer.state.to_dict(), once)

    def test_selecting_new_region_clears_category(self):
        self.explorer.select_region('Lima')
        self.explorer.open_category('air')
        self.assertTrue(self.explorer.select_region('Madre de Dios'))
        self.assertEqual(self.explorer.phase, ExplorerPhase.REGION_FOCUSED)
        self.assertIsNone(self.explorer.active_category)
        assert_invariant(self, self.explorer)


class TestMapSideEffects(unittest.TestCase):
    """Transitions driving a MapAdapter with fake widgets."""

    def setUp(self):
        self.catalog = create_sample_catalog()
        self.containers = ContainerRegistry()
        self.scheduler = RenderScheduler()
        self.factory = FakeMapFactory()
        self.adapter = MapAdapter(
            self.catalog, self.containers.get,
            scheduler=self.scheduler, factory=self.factory,
        )
        self.explorer = RegionExplorer(self.catalog, self.adapter)
        self.containers.register(PRIMARY_MAP_CONTAINER)
        self.primary = self.explorer.mount(PRIMARY_MAP_CONTAINER)

    def test_mount_creates_overview_with_all_markers(self):
        self.assertIsNotNone(self.primary)
        self.assertEqual(self.primary.zoom, INITIAL_ZOOM)
        self.assertEqual(len(self.primary.markers), len(self.catalog))

    def test_select_region_recenters_overview(self):
        self.explorer.select_region('Lima')
        self.assertEqual(self.primary.center, (-12.0464, -77.0428))
        self.assertEqual(self.primary.zoom, REGION_ZOOM)
        self.assertEqual(self.primary.widget.location, [-12.0464, -77.0428])

    def test_open_category_mounts_detail_map_once_container_renders(self):
        self.explorer.select_region('Lima')
        self.explorer.open_category('air')
        self.assertIsNone(self.adapter.secondary)
        self.assertTrue(self.adapter.has_pending_mount)

        self.containers.register(DETAIL_MAP_CONTAINER)
        handle = self.adapter.container_mounted(DETAIL_MAP_CONTAINER)
        self.assertIsNotNone(handle)
        self.assertIs(self.adapter.secondary, handle)
        self.assertEqual(self.factory.details[-1][1].name, 'Lima')

    def test_reopening_same_category_keeps_detail_map(self):
        self.containers.register(DETAIL_MAP_CONTAINER)
        self.explorer.select_region('Lima')
        self.explorer.open_category('air')
        handle = self.adapter.secondary
        self.assertFalse(self.explorer.open_category('air'))
        self.assertIs(self.adapter.secondary, handle)
        self.assertFalse(handle.removed)

    def test_selecting_second_region_destroys_detail_map(self):
        self.containers.register(DETAIL_MAP_CONTAINER)
        self.explorer.select_region('Lima')
        self.explorer.open_category('air')
        detail = self.adapter.secondary
        self.explorer.select_region('Madre de Dios')
        self.assertTrue(detail.removed)
        self.assertIsNone(self.adapter.secondary)
        self.assertIsNone(self.adapter.bound_handle(DETAIL_MAP_CONTAINER))

    def test_close_panel_cancels_pending_mount(self):
        self.explorer.select_region('Lima')
        self.explorer.open_category('air')
        self.explorer.close_panel()
        self.assertFalse(self.adapter.has_pending_mount)
        self.containers.register(DETAIL_MAP_CONTAINER)
        self.assertIsNone(self.adapter.container_mounted(DETAIL_MAP_CONTAINER))
        self.assertEqual(self.factory.details, [])

    def test_marker_click_selects_region(self):
        payload = {'last_object_clicked': {'lat': -12.6, 'lng': -70.1}}
        self.assertTrue(self.adapter.dispatch_click(self.primary, payload))
        self.assertEqual(self.explorer.selected_region.name, 'Madre de Dios')

    def test_same_pin_clickable_again_after_close(self):
        lima_click = {'last_object_clicked': {'lat': -12.0464, 'lng': -77.0428}}
        self.assertTrue(self.adapter.dispatch_click(self.primary, lima_click))
        self.explorer.close_panel()
        self.assertIsNone(self.explorer.selected_region)

        self.assertTrue(self.adapter.dispatch_click(self.primary, lima_click))
        self.assertEqual(self.explorer.selected_region.name, 'Lima')

    def test_same_pin_clickable_again_after_sidebar_pick(self):
        lima_click = {'last_object_clicked': {'lat': -12.0464, 'lng': -77.0428}}
        self.adapter.dispatch_click(self.primary, lima_click)
        self.explorer.select_region('Madre de Dios')

        self.assertTrue(self.adapter.dispatch_click(self.primary, lima_click))
        self.assertEqual(self.explorer.selected_region.name, 'Lima')

    def test_same_pin_clickable_again_after_back(self):
        lima_click = {'last_object_clicked': {'lat': -12.0464, 'lng': -77.0428}}
        self.adapter.dispatch_click(self.primary, lima_click)
        self.explorer.open_category('air')
        self.explorer.close_category()
        self.explorer.select_region('Testville')

        self.assertTrue(self.adapter.dispatch_click(self.primary, lima_click))
        self.assertEqual(self.explorer.selected_region.name, 'Lima')

    def test_selection_change_rotates_widget_key(self):
        key = self.primary.widget_key
        self.explorer.select_region('Lima')
        after_select = self.primary.widget_key
        self.assertNotEqual(after_select, key)
        self.explorer.close_panel()
        self.assertNotEqual(self.primary.widget_key, after_select)

    def test_category_open_keeps_widget_key(self):
        self.explorer.select_region('Lima')
        key = self.primary.widget_key
        self.explorer.open_category('air')
        self.assertEqual(self.primary.widget_key, key)

    def test_background_click_closes_panel(self):
        self.explorer.select_region('Lima')
        self.adapter.dispatch_click(self.primary, {'last_clicked': {'lat': 0.0, 'lng': 0.0}})
        self.assertEqual(self.explorer.phase, ExplorerPhase.IDLE)

    def test_unmount_destroys_everything(self):
        self.containers.register(DETAIL_MAP_CONTAINER)
        self.explorer.select_region('Lima')
        self.explorer.open_category('air')
        detail = self.adapter.secondary
        self.explorer.unmount()
        self.assertTrue(self.primary.removed)
        self.assertTrue(detail.removed)
        self.assertIsNone(self.adapter.primary)

    def test_remount_restores_focus(self):
        self.explorer.select_region('Lima')
        handle = self.explorer.mount(PRIMARY_MAP_CONTAINER)
        self.assertTrue(self.primary.removed)
        self.assertEqual(handle.zoom, REGION_ZOOM)

    def test_mount_without_adapter_is_noop(self):
        explorer = RegionExplorer(self.catalog)
        self.assertIsNone(explorer.mount())
        explorer.unmount()

    def test_adapter_can_be_mocked(self):
        adapter = MagicMock()
        explorer = RegionExplorer(self.catalog, adapter)
        explorer.select_region('Lima')
        adapter.unmount_secondary.assert_called_once()
        adapter.recenter.assert_called_once_with(adapter.primary, (-12.0464, -77.0428), REGION_ZOOM)
        explorer.open_category('air')
        adapter.mount_secondary.assert_called_once()
        self.assertEqual(adapter.mount_secondary.call_args[0][0], DETAIL_MAP_CONTAINER)


if __name__ == '__main__':
    unittest.main()
