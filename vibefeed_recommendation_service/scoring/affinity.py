"""Recency-weighted action affinity per title."""
from collections import defaultdict
from datetime import UTC, datetime
from typing import Dict, Iterable, Optional

from vibefeed_recommendation_service.models import InteractionEvent, SwipeAction

ACTION_WEIGHTS: Dict[SwipeAction, float] = {
    SwipeAction.LIKE: 1.0,
    SwipeAction.PASS: -0.7,
    SwipeAction.SUPER_LIKE: 1.4,
    SwipeAction.SAVE: 1.2,
    SwipeAction.UNSAVE: -0.5,
}

# Recency halves an event's weight after this many days
RECENCY_SCALE_DAYS = 7.0

SECONDS_PER_DAY = 86400.0


def recency_factor(event_time: datetime, now: datetime) -> float:
    """
    Hyperbolic recency decay: 1 / (1 + age_days / 7).

    Events stamped in the future count as age zero.
    """
    age_days = max(0.0, (now - event_time).total_seconds() / SECONDS_PER_DAY)
    return 1.0 / (1.0 + age_days / RECENCY_SCALE_DAYS)


def build_affinity_map(
    interactions: Iterable[InteractionEvent],
    now: Optional[datetime] = None,
) -> Dict[str, float]:
    """
    Aggregate interaction history into a signed affinity per title id.

    Every event contributes action_weight * recency; contributions for the
    same title are summed, so a pass after a like partly cancels it.

    Args:
        interactions: Interaction history (any order)
        now: Reference time for event age (default: current UTC time)

    Returns:
        Dict mapping title_id -> accumulated affinity
    """
    if now is None:
        now = datetime.now(UTC)

    affinity: Dict[str, float] = defaultdict(float)
    for event in interactions:
        weight = ACTION_WEIGHTS[SwipeAction(event.action)]
        affinity[event.title_id] += weight * recency_factor(event.parsed_timestamp(), now)

    return dict(affinity)
