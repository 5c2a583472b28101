#!/usr/bin/env python3
"""
BioTerra - Main CLI Entry Point
===============================

This script is the single command-line entry point for the BioTerra
dashboard.  It does two things:

HEALTH CHECK  (health_check)
    A quick diagnostic report: Python version, required packages, the
    integrity of the bundled region catalog and category templates, and
    (informational only) whether the map tile server is reachable.

DASHBOARD  (launch_dashboard)
    Spawns a Streamlit subprocess running dashboard.py, which serves the
    home, login, services, about, contact and Region Explorer pages.

Usage:
    python run.py                      Launch the dashboard on port 8501
    python run.py --port 8502          Use a custom port
    python run.py --no-browser         Do not open a browser tab
    python run.py --health-check       Run diagnostics and exit
    python run.py --verbose            Show INFO-level logs in the console

Logging:
    Every run writes a DEBUG-level log to logs/bioterra_<timestamp>.log.
    The console only shows warnings unless --verbose is given.
"""

import logging
import sys
import subprocess
import argparse
import webbrowser
from pathlib import Path
import time
import atexit
import socket
import threading


# ==========================================
# LOGGING CONFIGURATION
# ==========================================
# Dual-output logging: a verbose DEBUG-level log file and a quieter console
# handler (WARNING by default, INFO with --verbose).  The log file is
# timestamped so successive runs don't overwrite each other.

def setup_logging(verbose: bool = False):
    """
    Configure the root logger with file and console handlers.

    Args:
        verbose: When True, lower the console handler to INFO level.

    Returns:
        Path: Path to the newly created log file.
    """
    log_dir = Path(__file__).parent / "logs"
    log_dir.mkdir(exist_ok=True)

    timestamp = time.strftime('%Y%m%d_%H%M%S')
    log_file = log_dir / f"bioterra_{timestamp}.log"

    file_formatter = logging.Formatter(
        '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter(
        '%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%H:%M:%S'
    )

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(file_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    console_handler.setFormatter(console_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # setup_logging may run twice (import, then --verbose in main()).
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    if verbose:
        print(f"\U0001f4dd Verbose logging enabled. Log file: {log_file}")
    else:
        print(f"\U0001f4dd Logging to: {log_file}")

    return log_file


logger = logging.getLogger(__name__)


# ==========================================
# HEALTH CHECK UTILITIES
# ==========================================

def check_required_packages():
    """
    Verify that the dashboard's Python packages are importable.

    Returns:
        Tuple of (all_installed: bool, missing_packages: list[str]).
        missing_packages contains pip install names, not import names.
    """
    # Mapping: Python import name -> pip install name
    required = {
        'streamlit': 'streamlit',
        'folium': 'folium',
        'streamlit_folium': 'streamlit-folium',
        'pandas': 'pandas',
        'plotly': 'plotly',
        'requests': 'requests',
    }

    missing = []
    for import_name, package_name in required.items():
        try:
            __import__(import_name)
        except ImportError:
            missing.append(package_name)

    return len(missing) == 0, missing


def check_tile_server(url: str = None, timeout: float = 3.0):
    """
    Check whether the map tile server answers.

    Only informational: the dashboard still starts without tiles, the maps
    are just blank.

    Returns:
        bool: True if the server responded with HTTP 200.
    """
    import requests
    from bioterra.core.config import TILE_HEALTH_URL

    url = url or TILE_HEALTH_URL
    try:
        response = requests.get(url, timeout=timeout, headers={'User-Agent': 'bioterra-health-check'})
        return response.status_code == 200
    except requests.RequestException as e:
        logger.debug(f"Tile server check failed: {e}")
        return False


def check_catalog_integrity():
    """
    Load the bundled catalog and render every category for every region.

    Returns:
        Tuple of (ok: bool, message: str).
    """
    from bioterra.catalog.regions import RegionCatalog
    from bioterra.categories.registry import CATEGORY_REGISTRY

    try:
        catalog = RegionCatalog.default()
    except ValueError as e:
        return False, str(e)

    for region in catalog:
        for key, template in CATEGORY_REGISTRY.items():
            try:
                template(region)
            except Exception as e:
                logger.error(f"Category '{key.value}' failed for {region.name}", exc_info=True)
                return False, f"{key.value} report failed for {region.name}: {e}"

    return True, f"{len(catalog)} regions x {len(CATEGORY_REGISTRY)} categories"


def health_check():
    """
    Run the diagnostic checks and print a human-readable report.

    Checks performed:
        1. Python version (>= 3.9 required)
        2. Required Python packages
        3. Region catalog and category templates
        4. Tile server connectivity (informational)

    Returns:
        bool: True if all critical checks passed.
    """
    print()
    print("=" * 60)
    print("  \U0001f3e5 BIOTERRA - HEALTH CHECK")
    print("=" * 60)
    print()

    python_version = sys.version_info
    python_ok = python_version >= (3, 9)
    status = "✅" if python_ok else "❌"
    print(f"{status} Python Version: {python_version.major}.{python_version.minor}.{python_version.micro}")
    if not python_ok:
        print("   Required: Python 3.9+")

    packages_ok, missing = check_required_packages()
    status = "✅" if packages_ok else "❌"
    print(f"{status} Required Packages: {'All installed' if packages_ok else f'{len(missing)} missing'}")
    if missing:
        print(f"   Missing: {', '.join(missing)}")
        print(f"   Install with: pip install {' '.join(missing)}")

    # The catalog check imports bioterra, which needs pandas.
    if packages_ok:
        catalog_ok, catalog_msg = check_catalog_integrity()
    else:
        catalog_ok, catalog_msg = False, "skipped (missing packages)"
    status = "✅" if catalog_ok else "❌"
    print(f"{status} Region Catalog: {catalog_msg}")

    tiles_ok = packages_ok and check_tile_server()
    status = "✅" if tiles_ok else "⚠️ "
    print(f"{status} Tile Server: {'Reachable' if tiles_ok else 'Not reachable (maps will have no background)'}")

    print()
    print("=" * 60)

    all_critical = python_ok and packages_ok and catalog_ok
    if all_critical:
        print("  ✅ All critical checks passed!")
    else:
        print("  ❌ Some critical checks failed. Please fix the issues above.")
    print("=" * 60)
    print()

    return all_critical


def parse_args(argv=None):
    """
    Parse and return command-line arguments.

    Returns:
        argparse.Namespace with the parsed flags.
    """
    parser = argparse.ArgumentParser(
        description='BioTerra - Environmental Region Explorer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py                  Launch the dashboard
  python run.py --port 8502      Use custom port for dashboard
  python run.py --health-check   Run diagnostics and exit
        """
    )

    parser.add_argument(
        '--port',
        type=int,
        default=8501,
        help='Port for Streamlit dashboard (default: 8501)'
    )

    parser.add_argument(
        '--no-browser',
        action='store_true',
        help='Do not automatically open browser'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show detailed logging output'
    )

    parser.add_argument(
        '--health-check',
        action='store_true',
        help='Run system health check and exit'
    )

    return parser.parse_args(argv)


def is_port_in_use(port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        return sock.connect_ex(('localhost', port)) == 0


def build_streamlit_command(dashboard_path: Path, port: int):
    """Streamlit command line with the BioTerra dark theme."""
    return [
        sys.executable, "-m", "streamlit", "run",
        str(dashboard_path),
        "--server.port", str(port),
        "--server.headless", "true",
        "--browser.gatherUsageStats", "false",
        "--theme.base", "dark",
        "--theme.primaryColor", "#27ae60",
        "--theme.backgroundColor", "#0b1620",
        "--theme.secondaryBackgroundColor", "#12232e",
        "--theme.textColor", "#E0E0E0",
    ]


def launch_dashboard(port: int = 8501, open_browser: bool = True):
    """
    Launch the Streamlit dashboard as a managed subprocess.

    This function:
        1. Checks that the dashboard.py entry point exists.
        2. Refuses to start if the port is already taken.
        3. Starts Streamlit headless with the dark theme.
        4. Optionally opens the browser after a short delay.
        5. Registers an atexit cleanup handler that terminates the Streamlit
           subprocess on exit.

    Returns:
        bool: True if the dashboard ran and exited cleanly (including Ctrl+C
              shutdown), False on errors.
    """
    print()
    print("=" * 60)
    print("  \U0001f310 Launching BioTerra Dashboard")
    print("=" * 60)
    print()

    dashboard_path = Path(__file__).parent / "dashboard.py"
    if not dashboard_path.exists():
        print(f"❌ Error: Dashboard not found at {dashboard_path}")
        return False

    try:
        if is_port_in_use(port):
            print(f"⚠️  Port {port} is already in use")
            print("   Please use a different port with --port flag")
            return False
    except OSError as e:
        logger.warning(f"Could not check port status: {e}")

    print(f"  \U0001f4ca Starting Streamlit server on port {port}...")
    print(f"  \U0001f517 URL: http://localhost:{port}")
    print()
    print("  Press Ctrl+C to stop the dashboard")
    print("-" * 60)
    sys.stdout.flush()

    cmd = build_streamlit_command(dashboard_path, port)
    streamlit_process = None

    def cleanup():
        """Terminate the Streamlit subprocess: SIGTERM, then SIGKILL after 5s."""
        nonlocal streamlit_process
        if streamlit_process and streamlit_process.poll() is None:
            print("\n\U0001f9f9 Cleaning up dashboard process...")
            streamlit_process.terminate()
            try:
                streamlit_process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                print("   Force killing process...")
                streamlit_process.kill()

    atexit.register(cleanup)

    try:
        if open_browser:
            def open_browser_delayed():
                time.sleep(3)  # Wait for server to start accepting connections
                try:
                    webbrowser.open(f"http://localhost:{port}")
                except webbrowser.Error as e:
                    logger.warning(f"Failed to open browser: {e}")

            threading.Thread(target=open_browser_delayed, daemon=True).start()

        logger.info(f"Starting Streamlit: {' '.join(cmd)}")
        streamlit_process = subprocess.Popen(cmd)
        streamlit_process.wait()
        return streamlit_process.returncode == 0

    except KeyboardInterrupt:
        print("\n\n✅ Dashboard stopped by user.")
        cleanup()
        return True
    except FileNotFoundError:
        print("\n❌ Streamlit not found. Install with: pip install streamlit")
        return False
    except OSError as e:
        print(f"\n❌ Error launching dashboard: {e}")
        logger.error("Dashboard launch failed", exc_info=True)
        cleanup()
        return False


def main(argv=None):
    """
    Parse CLI args and dispatch: health check, or launch the dashboard.
    """
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    if args.health_check:
        success = health_check()
        sys.exit(0 if success else 1)

    ok = launch_dashboard(port=args.port, open_browser=not args.no_browser)
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
