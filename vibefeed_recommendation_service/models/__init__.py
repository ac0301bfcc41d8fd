"""Domain models"""

from vibefeed_recommendation_service.models.title import Title
from vibefeed_recommendation_service.models.taste_profile import RuntimePreference, UserTasteProfile
from vibefeed_recommendation_service.models.interaction_event import (
    InteractionContext,
    InteractionEvent,
    SwipeAction,
)
from vibefeed_recommendation_service.models.recommendation_card import (
    Confidence,
    FeedResponse,
    RecommendationCard,
)

__all__ = [
    "Confidence",
    "FeedResponse",
    "InteractionContext",
    "InteractionEvent",
    "RecommendationCard",
    "RuntimePreference",
    "SwipeAction",
    "Title",
    "UserTasteProfile",
]
