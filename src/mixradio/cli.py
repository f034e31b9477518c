"""Command-line interface for mixradio."""

import argparse
import asyncio
import os
import sys
from pathlib import Path
from typing import Any, Optional

# Verify core dependencies
try:
    import aiohttp  # noqa: F401
    import pydantic  # noqa: F401
    import rich  # noqa: F401
    import yaml  # noqa: F401
except ImportError as e:
    print(f"\nERROR: Missing required dependency: {e.name}", file=sys.stderr)
    print("\nmixradio requires all core dependencies to be installed.", file=sys.stderr)
    print("\nRecommended fixes:", file=sys.stderr)
    print("  1. For pip users: pip install --upgrade --force-reinstall mixradio", file=sys.stderr)
    print("  2. For development: pip install -e .[dev]", file=sys.stderr)
    print("\nTo diagnose issues, run: mixradio --doctor", file=sys.stderr)
    sys.exit(1)

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from . import __version__
from .auth.oauth import ConsoleAuthBrowser
from .auth.types import AuthResultCode, Scope
from .core.client import MusicClient
from .logging_config import setup_logging
from .models.config import MusicClientSettings
from .models.response import Response
from .models.types import Artist, Category, Mix, Page, Product
from .parsing import parse_enum_or_default
from .tasks import (
    LaunchTask,
    MusicSearchTask,
    PlayMixTask,
    ShowArtistTask,
    ShowGigsTask,
    ShowProductTask,
    TaskBase,
)

CLIENT_ID_ENV = "MIXRADIO_CLIENT_ID"
CLIENT_SECRET_ENV = "MIXRADIO_CLIENT_SECRET"

SCOPE_NAMES = {
    "read_userplayhistory": Scope.READ_USER_PLAY_HISTORY,
    "receive_notifications": Scope.RECEIVE_NOTIFICATIONS,
    "read_userfavorites": Scope.READ_USER_FAVORITES,
}


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="mixradio",
        description="Query the MixRadio music catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Latest album releases in the UK
  mixradio --client-id abc --country gb new-releases album

  # Search for artists
  mixradio --country gb search "Muse" --category artist

  # Open an artist page in MixRadio (or the web site)
  mixradio launch artist --name "Muse"

  # Authorize a user and print the access token
  mixradio --config mixradio.yaml auth --scope read_userplayhistory
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Run diagnostic checks",
    )

    # Client settings
    client_group = parser.add_argument_group("client settings")
    client_group.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        metavar="FILE",
        help="YAML settings file",
    )
    client_group.add_argument(
        "--client-id",
        type=str,
        default=None,
        help=f"API client id (default: ${CLIENT_ID_ENV})",
    )
    client_group.add_argument(
        "--country",
        type=str,
        default=None,
        metavar="CODE",
        help="Two-letter country code",
    )
    client_group.add_argument(
        "--language",
        type=str,
        default=None,
        metavar="CODE",
        help="Preferred response language",
    )
    client_group.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Request timeout (default: 30)",
    )

    # Output control
    output_group = parser.add_argument_group("output control")
    output_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    output_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress output",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    new_releases = subparsers.add_parser("new-releases", help="List new releases")
    new_releases.add_argument("category", choices=["album", "single", "track"])
    _add_paging_arguments(new_releases)

    search = subparsers.add_parser("search", help="Search the catalog")
    search.add_argument("term", help="Text to search for")
    search.add_argument(
        "--category",
        choices=[c.value for c in Category if c is not Category.UNKNOWN],
        default=None,
        help="Restrict results to one category",
    )
    _add_paging_arguments(search)

    launch = subparsers.add_parser("launch", help="Open MixRadio content")
    launch.add_argument("target", choices=["app", "search", "mix", "artist", "gigs", "product"])
    launch.add_argument("--id", dest="item_id", default=None, help="Mix, artist or product id")
    launch.add_argument("--name", default=None, help="Artist name")
    launch.add_argument("--terms", default=None, help="Search terms")

    auth = subparsers.add_parser("auth", help="Authorize a user")
    auth.add_argument(
        "--scope",
        nargs="+",
        choices=sorted(SCOPE_NAMES),
        default=["read_userplayhistory"],
        help="Scopes to request",
    )

    subparsers.add_parser("server-time", help="Show the API server time")

    return parser


def _add_paging_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--start", type=int, default=0, help="Index of the first item (default: 0)")
    parser.add_argument("--count", type=int, default=10, help="Items per page (default: 10)")


def build_settings(args: argparse.Namespace) -> MusicClientSettings:
    """
    Build client settings from a config file, the environment and arguments.

    Arguments override the config file, which overrides the environment.
    """
    data: dict[str, Any] = {}
    if args.config:
        data = MusicClientSettings.from_yaml_file(args.config).model_dump(exclude_none=True)

    client_id = args.client_id or data.get("client_id") or os.environ.get(CLIENT_ID_ENV)
    if client_id:
        data["client_id"] = client_id
    if "client_secret" not in data and os.environ.get(CLIENT_SECRET_ENV):
        data["client_secret"] = os.environ[CLIENT_SECRET_ENV]
    if args.country:
        data["country_code"] = args.country
    if args.language:
        data["language"] = args.language
    if args.timeout is not None:
        data.setdefault("network", {})["request_timeout"] = args.timeout

    if args.verbose:
        data["log_level"] = "DEBUG"
    elif args.quiet:
        data["log_level"] = "ERROR"

    return MusicClientSettings(**data)


def build_task(args: argparse.Namespace) -> TaskBase:
    """Create the launch task named on the command line."""
    if args.target == "search":
        return MusicSearchTask(search_terms=args.terms)
    if args.target == "mix":
        return PlayMixTask(mix_id=args.item_id, artist_name=args.name)
    if args.target == "artist":
        return ShowArtistTask(artist_id=args.item_id, artist_name=args.name)
    if args.target == "gigs":
        return ShowGigsTask(search_terms=args.terms)
    if args.target == "product":
        return ShowProductTask(product_id=args.item_id)
    return LaunchTask()


def _describe(item: Any) -> tuple[str, str, str]:
    if isinstance(item, Product):
        return item.id, item.name, ", ".join(item.performers) or item.category.value
    if isinstance(item, Artist):
        return item.id, item.name, "artist"
    if isinstance(item, Mix):
        return item.id, item.name, "mix"
    return "", str(item), ""


def print_page(console: Console, title: str, response: Response[Page[Any]]) -> int:
    """Print a page of results, or the error that replaced it."""
    if response.error is not None:
        console.print(f"[red]Error:[/red] {response.error}")
        return 1
    if response.result is None:
        console.print("[yellow]No response; the device may be offline[/yellow]")
        return 1

    page = response.result
    table = Table(title=f"{title} ({page.start_index + 1}-{page.start_index + len(page.items)} of {page.total_results})")
    table.add_column("Id", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Details")
    for item in page.items:
        table.add_row(*_describe(item))
    console.print(table)
    return 0


async def run_command(args: argparse.Namespace, settings: MusicClientSettings, console: Console) -> int:
    """Run an API subcommand."""
    async with MusicClient(settings) as client:
        if args.command == "new-releases":
            category = parse_enum_or_default(Category, args.category, Category.UNKNOWN)
            response = await client.get_new_releases_async(category, args.start, args.count)
            return print_page(console, f"New {category.value} releases", response)

        if args.command == "search":
            category = parse_enum_or_default(Category, args.category, Category.UNKNOWN) if args.category else None
            found = await client.search_async(args.term, category, args.start, args.count)
            return print_page(console, f"Results for {args.term!r}", found)

        if args.command == "auth":
            scopes = Scope.NONE
            for name in args.scope:
                scopes |= SCOPE_NAMES[name]
            auth = await client.authenticate_user_async(scopes, ConsoleAuthBrowser())
            if auth.result is not AuthResultCode.SUCCESS or client.token_response is None:
                reason = auth.error or (auth.result.value if auth.result else "unknown")
                console.print(f"[red]Authorization failed:[/red] {reason}")
                return 1
            console.print(f"[green]Access token:[/green] {client.token_response.access_token}")
            if client.token_response.refresh_token:
                console.print(f"Refresh token: {client.token_response.refresh_token}")
            return 0

        if args.command == "server-time":
            # Any catalog call carries the Date header that fixes the offset
            probe = await client.get_new_releases_async(Category.ALBUM, 0, 1)
            if probe.status_code is None:
                console.print(f"[red]Error:[/red] {probe.error or 'no response'}")
                return 1
            console.print(f"Server time (UTC): {client.server_time_utc.isoformat()}")
            return 0

    console.print(f"[red]Error:[/red] Unknown command {args.command!r}")
    return 1


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    console = Console()

    if args.doctor:
        from .doctor import run_doctor

        return run_doctor(console=console)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "launch":
        try:
            build_task(args).show()
        except ValueError as e:
            console.print(f"[red]Error:[/red] {e}")
            return 1
        return 0

    try:
        settings = build_settings(args)
    except (ValidationError, OSError) as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    setup_logging(settings.log_level, str(settings.log_file) if settings.log_file else None)

    try:
        return asyncio.run(run_command(args, settings, console))
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
