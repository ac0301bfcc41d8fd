"""
Build a recommendation feed page from local files and print it.
Useful for checking how profile changes move the ranking.

Usage:
    # First page for the default profile
    python scripts/build_feed.py

    # Custom profile and history, second page
    python scripts/build_feed.py --profile profile.json --interactions history.json --offset 8

    # Ask the explanation proxy to rewrite why-tags
    python scripts/build_feed.py --enrich
"""

import sys
from pathlib import Path

# Add parent directory to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

import argparse
import json
import logging

from vibefeed_recommendation_service.config import get_catalog_path, get_feed_page_size
from vibefeed_recommendation_service.models import InteractionEvent, UserTasteProfile
from vibefeed_recommendation_service.repos import CatalogRepository
from vibefeed_recommendation_service.services import FeedBuilder, WhyTagsEnrichmentClient

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def load_json_file(path: str | None, default):
    """
    Load a JSON document, or return default when no path is given.

    Args:
        path: File path (None to skip)
        default: Value returned when path is None

    Returns:
        Parsed JSON or default
    """
    if not path:
        return default
    with open(path) as f:
        return json.load(f)


def parse_watchlist(value: str | None) -> list[str]:
    """Split a comma-separated list of title ids."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build one recommendation feed page")

    parser.add_argument(
        "--catalog",
        type=str,
        default=None,
        help="Catalog file, .json or .csv (default: CATALOG_PATH or data/catalog.json)",
    )
    parser.add_argument(
        "--profile", type=str, default=None, help="Taste profile JSON file (default profile if omitted)"
    )
    parser.add_argument(
        "--interactions", type=str, default=None, help="Interaction history JSON file (list of events)"
    )
    parser.add_argument(
        "--watchlist", type=str, default=None, help="Comma-separated saved title ids"
    )
    parser.add_argument(
        "--limit", type=int, default=None, help="Cards per page (default: FEED_PAGE_SIZE or 8)"
    )
    parser.add_argument("--offset", type=int, default=0, help="Position of the first card (default: 0)")
    parser.add_argument(
        "--enrich",
        action="store_true",
        help="Rewrite why-tags through the explanation proxy (LLM_PROXY_URL)",
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main execution function."""
    args = parse_args(argv)

    catalog_path = Path(args.catalog) if args.catalog else get_catalog_path()
    catalog = CatalogRepository.from_file(catalog_path)
    titles = catalog.list_titles()

    profile = UserTasteProfile.from_dict(load_json_file(args.profile, None))
    interactions = [InteractionEvent.from_dict(e) for e in load_json_file(args.interactions, [])]
    watchlist = parse_watchlist(args.watchlist)
    limit = args.limit if args.limit is not None else get_feed_page_size()

    logger.info("=" * 70)
    logger.info(f"BUILDING FEED (limit: {limit}, offset: {args.offset})")
    logger.info("=" * 70)

    cards = FeedBuilder().build(titles, profile, interactions, watchlist, limit, args.offset)

    if args.enrich:
        client = WhyTagsEnrichmentClient(enabled=True)
        cards = client.enrich(cards, titles, profile)

    if not cards:
        logger.info("No cards for this page")
        return cards

    for i, card in enumerate(cards, args.offset + 1):
        marker = " [exploration]" if card.exploration_pick else ""
        logger.info(
            f"  {i}. {card.title_name} ({card.year}) "
            f"score: {card.match_score:.3f}, confidence: {card.confidence.value}{marker}"
        )
        logger.info(f"     why: {', '.join(card.why_tags)}")

    if len(cards) < limit:
        logger.info("\n✓ Final page reached")
    else:
        logger.info(f"\n✓ Next offset: {args.offset + limit}")

    return cards


if __name__ == "__main__":
    main()
