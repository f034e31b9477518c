"""Diagnostic tool for verifying the mixradio installation and API reachability."""

import socket
import sys
from importlib import import_module
from typing import Optional
from urllib.parse import urlparse

from rich.console import Console
from rich.table import Table

DEFAULT_API_BASE_URI = "http://api.mixrad.io/1.x/"


def check_dependency(module_name: str, package_name: Optional[str] = None) -> tuple[bool, str]:
    """
    Check if a Python module is importable.

    Args:
        module_name: Name of the module to import
        package_name: Display name of the package (defaults to module_name)

    Returns:
        Tuple of (success: bool, message: str)
    """
    display_name = package_name or module_name

    try:
        import_module(module_name)
        return True, f"[OK] {display_name}"
    except ImportError:
        return False, f"[MISSING] {display_name}"


def check_api_host(base_uri: str = DEFAULT_API_BASE_URI) -> tuple[bool, str]:
    """
    Check that the API host name resolves.

    Returns:
        Tuple of (success: bool, message: str)
    """
    host = urlparse(base_uri).hostname
    if not host:
        return False, f"[FAIL] API host - cannot parse {base_uri!r}"

    try:
        socket.gethostbyname(host)
        return True, f"[OK] API host resolves ({host})"
    except socket.gaierror:
        return False, f"[FAIL] API host - DNS resolution failed ({host})"
    except OSError as e:
        return False, f"[WARN] API host - {e} ({host})"


def run_doctor(base_uri: str = DEFAULT_API_BASE_URI, console: Optional[Console] = None) -> int:
    """
    Run diagnostic checks and display results.

    Args:
        base_uri: API base URI whose host is checked
        console: Console to print to

    Returns:
        Exit code (0 if all dependencies are importable, 1 otherwise)
    """
    console = console or Console()
    console.print("Running mixradio diagnostics...\n")

    dependency_checks = [
        ("aiohttp", "aiohttp"),
        ("pydantic", "pydantic"),
        ("yaml", "pyyaml"),
        ("rich", "rich"),
    ]
    dependency_results = [check_dependency(mod, pkg) for mod, pkg in dependency_checks]

    all_checks = {
        "Dependencies": dependency_results,
        "Network": [check_api_host(base_uri)],
    }

    for category, results in all_checks.items():
        table = Table(title=category, show_header=False, box=None)
        table.add_column("Status", style="bold")

        for success, message in results:
            style = "green" if success else ("yellow" if "[WARN]" in message else "red")
            # Messages contain [OK]-style markers, not rich markup
            table.add_row(message.replace("[", "\\["), style=style)

        console.print(table)
        console.print()

    if any(not success for success, _ in dependency_results):
        console.print("WARNING: Some dependencies are missing!")
        console.print("  Reinstall with: pip install --upgrade --force-reinstall mixradio")
        return 1

    console.print("All dependencies installed correctly!")
    return 0


if __name__ == "__main__":
    sys.exit(run_doctor())
