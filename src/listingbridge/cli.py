"""Command-line access to the listing service through the caching layer.

Run via: python -m listingbridge.cli search --search loft --max-price 250000
"""

import argparse
import logging
import sys
from typing import Optional
from uuid import UUID

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .aggregator import ListingAggregator
from .clients.base import ListingClient
from .clients.http import HttpListingClient
from .config import Settings, config
from .models.listing import ListingSummary, NamedRef
from .search.criteria import CriteriaTranslator, StaticNameIndex, build_criteria
from .search.orchestrator import SearchOrchestrator

console = Console()


def setup_logging(verbose: bool = False, level: str = "INFO") -> None:
    """Configure logging with Rich handler."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def parse_name_map(entries: Optional[list[str]]) -> list[NamedRef]:
    """Parse NAME=UUID pairs into reference rows.

    Raises:
        argparse.ArgumentTypeError: If an entry is not NAME=UUID
    """
    refs = []
    for entry in entries or []:
        name, sep, raw_id = entry.partition("=")
        if not sep or not name.strip():
            raise argparse.ArgumentTypeError(f"Expected NAME=UUID, got {entry!r}")
        try:
            refs.append(NamedRef(id=UUID(raw_id.strip()), name=name.strip()))
        except ValueError:
            raise argparse.ArgumentTypeError(f"Invalid UUID in {entry!r}")
    return refs


def render_listings(listings: list[ListingSummary], title: str) -> Table:
    """Build a Rich table for listings."""
    table = Table(title=f"{title} ({len(listings)})")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title")
    table.add_column("Price", justify="right")
    table.add_column("Beds", justify="right")
    table.add_column("Baths", justify="right")
    table.add_column("Area", justify="right")
    table.add_column("Status")

    for listing in listings:
        table.add_row(
            str(listing.id),
            listing.title or "-",
            f"{listing.price:,.0f}" if listing.price is not None else "-",
            str(listing.bedrooms) if listing.bedrooms is not None else "-",
            str(listing.bathrooms) if listing.bathrooms is not None else "-",
            str(listing.area) if listing.area is not None else "-",
            listing.status or "ACTIVE",
        )
    return table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="listingbridge",
        description="Query the listing service through the ListingBridge cache",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  listingbridge search --search loft
  listingbridge search --city Sofia --city-map Sofia=6f1c... --min-beds 2
  listingbridge featured
  listingbridge stats
  listingbridge show 6f1c2a9e-...
        """,
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Listing service base URL (default from LISTINGBRIDGE_LISTING_SERVICE_URL)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="Search listings")
    search.add_argument("--search", help="Free-text term")
    search.add_argument("--city", help="City name (resolved via --city-map)")
    search.add_argument("--type", help="Property type name (resolved via --type-map)")
    search.add_argument("--min-price")
    search.add_argument("--max-price")
    search.add_argument("--min-beds")
    search.add_argument("--min-baths")
    search.add_argument("--min-area")
    search.add_argument("--max-area")
    search.add_argument("--featured", help="true/false")
    search.add_argument(
        "--city-map", action="append", metavar="NAME=UUID", help="City name mapping"
    )
    search.add_argument(
        "--type-map", action="append", metavar="NAME=UUID", help="Property type mapping"
    )

    subparsers.add_parser("featured", help="List featured listings")
    subparsers.add_parser("stats", help="Show listing statistics")

    show = subparsers.add_parser("show", help="Show a single listing")
    show.add_argument("listing_id", type=UUID)

    return parser


def run(
    args: argparse.Namespace,
    client: ListingClient,
    settings: Optional[Settings] = None,
) -> int:
    """Execute a parsed command against a client.

    Returns:
        Process exit code
    """
    aggregator = ListingAggregator(client, settings=settings)

    if args.command == "search":
        translator = CriteriaTranslator(
            StaticNameIndex(parse_name_map(args.city_map)),
            StaticNameIndex(parse_name_map(args.type_map)),
        )
        orchestrator = SearchOrchestrator(client, aggregator, translator)
        criteria = build_criteria(
            search=args.search,
            city=args.city,
            type=args.type,
            min_price=args.min_price,
            max_price=args.max_price,
            min_beds=args.min_beds,
            min_baths=args.min_baths,
            min_area=args.min_area,
            max_area=args.max_area,
            featured=args.featured,
        )
        console.print(render_listings(orchestrator.search(criteria), "Search results"))
        return 0

    if args.command == "featured":
        console.print(render_listings(aggregator.get_featured(), "Featured listings"))
        return 0

    if args.command == "stats":
        stats = aggregator.statistics()
        console.print(f"[bold]Total listings:[/bold] {stats.total}")
        console.print(f"[bold]Active listings:[/bold] {stats.active}")
        console.print(f"[bold]Featured (active):[/bold] {stats.featured}")
        console.print(f"[bold]Average active price:[/bold] {stats.average_active_price:,.2f}")
        return 0

    if args.command == "show":
        listing = aggregator.get_by_id(args.listing_id)
        if listing is None:
            console.print(f"[yellow]Listing {args.listing_id} not found[/yellow]")
            return 1
        console.print(render_listings([listing], "Listing"))
        if listing.description:
            console.print(listing.description)
        return 0

    return 2


def main() -> None:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, level=config.log_level)

    try:
        with HttpListingClient(base_url=args.url) as client:
            code = run(args, client)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    sys.exit(code)


if __name__ == "__main__":
    main()
