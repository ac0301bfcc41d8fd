"""Serve cursor-paginated feed pages with optional why-tag enrichment."""
from datetime import datetime
from typing import Iterable, Optional
import logging

from vibefeed_recommendation_service.config import get_feed_page_size
from vibefeed_recommendation_service.models import FeedResponse, InteractionEvent, UserTasteProfile
from vibefeed_recommendation_service.repos import CatalogRepository
from vibefeed_recommendation_service.services.explanation_service import WhyTagsEnrichmentClient
from vibefeed_recommendation_service.services.feed_builder_service import FeedBuilder

logger = logging.getLogger(__name__)


def parse_cursor(cursor: Optional[str]) -> int:
    """Cursor -> offset. Missing, non-numeric or negative cursors start at 0."""
    if cursor is None:
        return 0
    try:
        offset = int(str(cursor).strip())
    except ValueError:
        return 0
    return max(0, offset)


class FeedService:
    """
    Caller-side feed orchestration.

    Builds a page with the (pure) feed builder, then hands it to the
    enrichment client, whose failures never reach the caller.
    """

    def __init__(
            self,
            catalog: CatalogRepository,
            enrichment_client: Optional[WhyTagsEnrichmentClient] = None,
            page_size: Optional[int] = None,
            feed_builder: Optional[FeedBuilder] = None
    ):
        """
        Initialize the feed service.

        Args:
            catalog: Title catalog
            enrichment_client: Why-tag enrichment client (default: configured from env)
            page_size: Cards per page (default: FEED_PAGE_SIZE config)
            feed_builder: Feed builder (default: standard weights)
        """
        self.catalog = catalog
        self.enrichment_client = enrichment_client or WhyTagsEnrichmentClient()
        self.page_size = page_size or get_feed_page_size()
        self.feed_builder = feed_builder or FeedBuilder()

        logger.info(
            f"Initialized FeedService (page size: {self.page_size}, "
            f"enrichment: {'on' if self.enrichment_client.enabled else 'off'})"
        )

    def fetch_feed(
            self,
            profile: UserTasteProfile,
            interactions: Iterable[InteractionEvent],
            watchlist: Iterable[str],
            cursor: Optional[str] = None,
            now: Optional[datetime] = None
    ) -> FeedResponse:
        """
        Fetch one feed page.

        Args:
            profile: User taste profile snapshot
            interactions: Interaction history
            watchlist: Saved title ids
            cursor: Opaque cursor from the previous page (None for the first page)
            now: Reference time for interaction recency

        Returns:
            FeedResponse; next_cursor is None once a short page is returned
        """
        offset = parse_cursor(cursor)
        titles = self.catalog.list_titles()

        cards = self.feed_builder.build(
            titles,
            profile,
            interactions,
            watchlist,
            limit=self.page_size,
            offset=offset,
            now=now
        )
        cards = self.enrichment_client.enrich(cards, titles, profile)

        next_cursor = None if len(cards) < self.page_size else str(offset + self.page_size)
        return FeedResponse(cards=cards, next_cursor=next_cursor)
