"""
Unit tests for run.py

Tests the entry point script:
- Argument parsing
- Required package detection
- Tile server and catalog checks
- Health check summary
- Dashboard launch guards
"""

import unittest
from unittest.mock import patch, MagicMock
from pathlib import Path
import sys

import requests

# Add parent directory to path to import run module
sys.path.insert(0, str(Path(__file__).parent.parent))

import run


class TestParseArgs(unittest.TestCase):

    def test_defaults(self):
        args = run.parse_args([])
        self.assertEqual(args.port, 8501)
        self.assertFalse(args.no_browser)
        self.assertFalse(args.verbose)
        self.assertFalse(args.health_check)

    def test_flags(self):
        args = run.parse_args(['--port', '8600', '--no-browser', '-v', '--health-check'])
        self.assertEqual(args.port, 8600)
        self.assertTrue(args.no_browser)
        self.assertTrue(args.verbose)
        self.assertTrue(args.health_check)


class TestPackageCheck(unittest.TestCase):

    def test_all_packages_present(self):
        with patch('builtins.__import__', return_value=MagicMock()):
            ok, missing = run.check_required_packages()
        self.assertTrue(ok)
        self.assertEqual(missing, [])

    def test_missing_package_reports_pip_name(self):
        real_import = __import__

        def fake_import(name, *args, **kwargs):
            if name == 'streamlit_folium':
                raise ImportError(name)
            return real_import(name, *args, **kwargs)

        with patch('builtins.__import__', side_effect=fake_import):
            ok, missing = run.check_required_packages()
        self.assertFalse(ok)
        self.assertEqual(missing, ['streamlit-folium'])


class TestTileServerCheck(unittest.TestCase):

    @patch('requests.get')
    def test_reachable(self, mock_get):
        mock_get.return_value = MagicMock(status_code=200)
        self.assertTrue(run.check_tile_server('http://tiles.example/0/0/0.png'))
        self.assertEqual(mock_get.call_args[0][0], 'http://tiles.example/0/0/0.png')

    @patch('requests.get')
    def test_error_status(self, mock_get):
        mock_get.return_value = MagicMock(status_code=503)
        self.assertFalse(run.check_tile_server('http://tiles.example/0/0/0.png'))

    @patch('requests.get', side_effect=requests.ConnectionError("offline"))
    def test_unreachable(self, mock_get):
        self.assertFalse(run.check_tile_server('http://tiles.example/0/0/0.png'))


class TestCatalogCheck(unittest.TestCase):

    def test_bundled_catalog_passes(self):
        ok, message = run.check_catalog_integrity()
        self.assertTrue(ok)
        self.assertIn('9 regions', message)

    @patch('bioterra.catalog.regions.RegionCatalog.default', side_effect=ValueError("Duplicate region name"))
    def test_broken_catalog_fails(self, mock_default):
        ok, message = run.check_catalog_integrity()
        self.assertFalse(ok)
        self.assertIn('Duplicate', message)


class TestHealthCheck(unittest.TestCase):

    @patch('run.check_tile_server', return_value=False)
    @patch('run.check_catalog_integrity', return_value=(True, 'ok'))
    @patch('run.check_required_packages', return_value=(True, []))
    def test_tile_server_is_informational(self, *mocks):
        self.assertTrue(run.health_check())

    @patch('run.check_tile_server', return_value=True)
    @patch('run.check_catalog_integrity')
    @patch('run.check_required_packages', return_value=(False, ['folium']))
    def test_missing_packages_fail_and_skip_catalog(self, mock_packages, mock_catalog, mock_tiles):
        self.assertFalse(run.health_check())
        mock_catalog.assert_not_called()
        mock_tiles.assert_not_called()

    @patch('run.check_tile_server', return_value=True)
    @patch('run.check_catalog_integrity', return_value=(False, 'broken'))
    @patch('run.check_required_packages', return_value=(True, []))
    def test_catalog_failure_is_critical(self, *mocks):
        self.assertFalse(run.health_check())


class TestLaunchDashboard(unittest.TestCase):

    @patch('run.subprocess.Popen')
    @patch('run.is_port_in_use', return_value=True)
    def test_port_in_use_aborts(self, mock_port, mock_popen):
        self.assertFalse(run.launch_dashboard(port=8501, open_browser=False))
        mock_popen.assert_not_called()

    @patch('run.atexit.register')
    @patch('run.subprocess.Popen')
    @patch('run.is_port_in_use', return_value=False)
    def test_launches_streamlit(self, mock_port, mock_popen, mock_atexit):
        process = MagicMock(returncode=0)
        mock_popen.return_value = process
        self.assertTrue(run.launch_dashboard(port=8600, open_browser=False))
        cmd = mock_popen.call_args[0][0]
        self.assertIn('streamlit', cmd)
        self.assertTrue(cmd[4].endswith('dashboard.py'))
        self.assertEqual(cmd[cmd.index('--server.port') + 1], '8600')
        process.wait.assert_called_once()
        mock_atexit.assert_called_once()

    def test_command_is_headless(self):
        cmd = run.build_streamlit_command(Path('dashboard.py'), 8501)
        self.assertEqual(cmd[cmd.index('--server.headless') + 1], 'true')


class TestMain(unittest.TestCase):

    @patch('run.setup_logging')
    @patch('run.health_check', return_value=True)
    def test_health_check_exits_zero(self, mock_health, mock_logging):
        with self.assertRaises(SystemExit) as context:
            run.main(['--health-check'])
        self.assertEqual(context.exception.code, 0)
        mock_logging.assert_called_once_with(verbose=False)

    @patch('run.setup_logging')
    @patch('run.launch_dashboard', return_value=False)
    def test_failed_launch_exits_nonzero(self, mock_launch, mock_logging):
        with self.assertRaises(SystemExit) as context:
            run.main(['--port', '8700', '--no-browser'])
        self.assertEqual(context.exception.code, 1)
        mock_launch.assert_called_once_with(port=8700, open_browser=False)


if __name__ == '__main__':
    unittest.main()
