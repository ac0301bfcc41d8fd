"""Service classes"""

from .feed_builder_service import FeedBuilder, build_recommendation_feed
from .explanation_service import WhyTagsEnrichmentClient
from .feed_service import FeedService

__all__ = ["FeedBuilder", "FeedService", "WhyTagsEnrichmentClient", "build_recommendation_feed"]
