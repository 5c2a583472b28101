"""
Unit tests for the dashboard helpers that do not need a running app:
session wiring, chart builders, HTML fragments and route table.
"""

import unittest
from unittest.mock import patch, MagicMock
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

import plotly.graph_objects as go

from bioterra.catalog.regions import RegionCatalog
from bioterra.categories.registry import build_report
from bioterra.core.config import ROUTES, PRIMARY_MAP_CONTAINER
from bioterra.dashboard import session
from bioterra.dashboard.charts import (
    chart_air_quality_gauge,
    chart_deforestation_by_region,
    metric_table_html,
    data_sources_html,
)
from bioterra.dashboard.panels import intervention_message
from bioterra.dashboard.styles import risk_badge_html, level_badge_html
from bioterra.models.data_models import CategoryKey


class TestSession(unittest.TestCase):
    """Each session owns an isolated explorer view."""

    def setUp(self):
        self.fake_st = MagicMock()
        self.fake_st.session_state = {}
        patcher = patch.object(session, 'st', self.fake_st)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_build_view_wires_components(self):
        view = session.build_view()
        self.assertIs(view.explorer.adapter, view.adapter)
        self.assertIs(view.adapter.scheduler, view.scheduler)
        view.containers.register(PRIMARY_MAP_CONTAINER)
        self.assertTrue(view.adapter.container_lookup(PRIMARY_MAP_CONTAINER))

    def test_get_view_is_cached_per_session(self):
        first = session.get_view()
        self.assertIs(session.get_view(), first)

    def test_views_are_independent(self):
        a = session.build_view()
        b = session.build_view()
        a.explorer.select_region('Lima')
        self.assertIsNone(b.explorer.selected_region)

    def test_drop_view_unmounts(self):
        view = session.get_view()
        view.containers.register(PRIMARY_MAP_CONTAINER)
        handle = view.explorer.mount(PRIMARY_MAP_CONTAINER)
        session.drop_view()
        self.assertTrue(handle.removed)
        self.assertIsNone(self.fake_st.session_state[session.VIEW_KEY])
        # Dropping twice is harmless.
        session.drop_view()


class TestFinishRender(unittest.TestCase):
    """Pending detail mounts keep retrying through timed reruns."""

    def setUp(self):
        self.view = session.build_view()
        self.sleep = MagicMock()
        self.view.explorer.select_region('Lima')

    def test_no_pending_mount_no_rerun(self):
        self.assertFalse(session.finish_render(self.view, sleep=self.sleep))
        self.sleep.assert_not_called()

    def test_pending_mount_reruns_until_budget_spent(self):
        self.view.explorer.open_category('air')
        self.assertTrue(self.view.adapter.has_pending_mount)

        reruns = 0
        while session.finish_render(self.view, sleep=self.sleep):
            reruns += 1
            self.assertLessEqual(reruns, self.view.adapter.max_mount_attempts)

        self.assertEqual(reruns, self.view.adapter.max_mount_attempts - 2)
        self.assertFalse(self.view.adapter.has_pending_mount)
        self.sleep.assert_called_with(self.view.adapter.retry_delay_s)

    def test_rerun_completes_mount_when_container_appears(self):
        from bioterra.core.config import DETAIL_MAP_CONTAINER
        self.view.explorer.open_category('air')
        self.assertTrue(session.finish_render(self.view, sleep=self.sleep))
        self.view.containers.register(DETAIL_MAP_CONTAINER)
        self.assertFalse(session.finish_render(self.view, sleep=self.sleep))
        self.assertIsNotNone(self.view.adapter.secondary)


class TestCharts(unittest.TestCase):

    def setUp(self):
        self.catalog = RegionCatalog.default()
        self.lima = self.catalog.get('Lima')

    def test_gauge(self):
        fig = chart_air_quality_gauge(self.lima)
        self.assertIsInstance(fig, go.Figure)
        self.assertEqual(fig.data[0].value, 85)

    def test_deforestation_chart_has_one_bar_per_region(self):
        fig = chart_deforestation_by_region(self.catalog.to_frame())
        bars = sum(len(trace.y) for trace in fig.data)
        self.assertEqual(bars, len(self.catalog))

    def test_metric_table_and_sources(self):
        report = build_report(CategoryKey.AIR, self.lima)
        table = metric_table_html(report)
        self.assertEqual(table.count('<tr>'), 1 + len(report.metrics))
        self.assertIn('85 μg/m³', table)
        self.assertEqual(data_sources_html(report).count('source-chip'), 4)


class TestHtmlFragments(unittest.TestCase):

    def test_badges(self):
        self.assertIn('#c0392b', risk_badge_html('critical'))
        self.assertIn('CRITICAL RISK', risk_badge_html('critical'))
        self.assertIn('#27ae60', level_badge_html('low'))

    def test_intervention_message(self):
        message = intervention_message('Lima')
        self.assertIn('Simulating intervention for Lima', message)
        self.assertIn('predictive models', message)


class TestConfigOverrides(unittest.TestCase):

    @patch.dict('os.environ', {'BIOTERRA_MOUNT_RETRY_ATTEMPTS': '8'})
    def test_env_int(self):
        from bioterra.core.config import _env_int
        self.assertEqual(_env_int('BIOTERRA_MOUNT_RETRY_ATTEMPTS', 5), 8)

    @patch.dict('os.environ', {'BIOTERRA_MOUNT_RETRY_DELAY_S': 'soon'})
    def test_bad_env_value_falls_back(self):
        from bioterra.core.config import _env_float
        with self.assertLogs('bioterra.core.config', level='WARNING'):
            self.assertEqual(_env_float('BIOTERRA_MOUNT_RETRY_DELAY_S', 0.1), 0.1)


class TestRoutes(unittest.TestCase):

    def test_route_table(self):
        paths = [r[0] for r in ROUTES]
        self.assertEqual(paths, ['', 'login', 'services', 'about', 'contact', 'map'])

    def test_page_files_exist(self):
        pages_dir = Path(__file__).parent.parent / 'bioterra' / 'dashboard' / 'pages'
        for _, _, _, filename in ROUTES:
            self.assertTrue((pages_dir / filename).exists(), filename)


if __name__ == '__main__':
    unittest.main()
