"""Build ranked, diversified and paginated recommendation feeds."""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Sequence
import logging

import numpy as np

from vibefeed_recommendation_service.models import (
    Confidence,
    InteractionEvent,
    RecommendationCard,
    Title,
    UserTasteProfile,
)
from vibefeed_recommendation_service.scoring import TitleScorer, build_affinity_map, ensure_why_tags
from vibefeed_recommendation_service.scoring.title_scorer import clamp

logger = logging.getLogger(__name__)

HIGH_CONFIDENCE_MIN_SCORE = 0.72
MEDIUM_CONFIDENCE_MIN_SCORE = 0.48
SAME_GENRE_PENALTY = 0.12


def confidence_from_score(score: float) -> Confidence:
    if score >= HIGH_CONFIDENCE_MIN_SCORE:
        return Confidence.HIGH
    if score >= MEDIUM_CONFIDENCE_MIN_SCORE:
        return Confidence.MEDIUM
    return Confidence.LOW


@dataclass
class RankedTitle:
    """A title with its (possibly diversity-penalised) score and reasons."""

    title: Title
    score: float
    reasons: List[str]


class FeedBuilder:
    """
    Orchestrates scoring across the catalog.

    Pipeline: drop saved titles, score, drop hard-blocked, sort, diversify
    the full ranked list, slice the requested page and assemble cards.
    """

    def __init__(
        self,
        scorer: Optional[TitleScorer] = None,
        same_genre_penalty: float = SAME_GENRE_PENALTY,
    ):
        """
        Initialize the feed builder.

        Args:
            scorer: Title scorer (default: TitleScorer with standard weights)
            same_genre_penalty: Penalty for repeating the previous primary genre
        """
        self.scorer = scorer or TitleScorer()
        self.same_genre_penalty = same_genre_penalty

    def rank(
        self,
        titles: Sequence[Title],
        profile: UserTasteProfile,
        interactions: Iterable[InteractionEvent],
        watchlist: Iterable[str],
        now: Optional[datetime] = None,
    ) -> List[RankedTitle]:
        """
        Score, filter and sort every eligible title.

        Ties keep catalog order so that pagination is stable across calls.

        Returns:
            Ranked titles, best first, before diversification
        """
        favorite_ids = set(profile.favorite_title_ids)
        favorite_titles = [title for title in titles if title.id in favorite_ids]
        affinity_map = build_affinity_map(interactions, now=now)
        saved = set(watchlist)

        candidates: List[RankedTitle] = []
        blocked_count = 0
        for title in titles:
            if title.id in saved:
                continue

            result = self.scorer.score(title, profile, affinity_map, favorite_titles)
            if result.hard_blocked:
                blocked_count += 1
                continue

            candidates.append(RankedTitle(title=title, score=result.score, reasons=result.reasons))

        if not candidates:
            logger.debug(f"No eligible titles ({blocked_count} hard-blocked, {len(saved)} saved)")
            return []

        scores = np.array([candidate.score for candidate in candidates], dtype=float)
        order = np.argsort(-scores, kind="stable")

        logger.debug(
            f"Ranked {len(candidates)} titles ({blocked_count} hard-blocked, {len(saved)} saved)"
        )
        return [candidates[idx] for idx in order]

    def diversify(self, ranked: Sequence[RankedTitle]) -> List[RankedTitle]:
        """
        Penalise titles whose primary genre repeats the previous one.

        Single forward pass; the ranking order is left untouched, only the
        scores shown on cards (and hence confidence) change.

        Args:
            ranked: Titles in ranked order

        Returns:
            New list with adjusted scores
        """
        diversified: List[RankedTitle] = []
        # None, not "": a genre-less first entry has nothing to repeat
        previous_primary_genre: Optional[str] = None
        for entry in ranked:
            primary_genre = entry.title.primary_genre
            score = entry.score
            if primary_genre == previous_primary_genre:
                score = clamp(score - self.same_genre_penalty, 0.0, 1.0)

            diversified.append(RankedTitle(title=entry.title, score=score, reasons=entry.reasons))
            previous_primary_genre = primary_genre

        return diversified

    def to_card(self, entry: RankedTitle, position: int) -> RecommendationCard:
        """
        Assemble the card for a ranked title.

        Args:
            entry: Diversified title
            position: Absolute position in the feed (offset + index in page)

        Returns:
            RecommendationCard
        """
        confidence = confidence_from_score(entry.score)
        title = entry.title
        return RecommendationCard(
            id=f"{title.id}-{position}",
            title_id=title.id,
            title_name=title.title_name,
            poster_url=title.poster_url,
            year=title.year,
            genres=list(title.genres),
            runtime=title.runtime,
            match_score=round(entry.score, 3),
            why_tags=ensure_why_tags(entry.reasons, confidence == Confidence.LOW),
            confidence=confidence,
            availability_hint=title.availability_hint,
        )

    def build(
        self,
        titles: Sequence[Title],
        profile: UserTasteProfile,
        interactions: Iterable[InteractionEvent],
        watchlist: Iterable[str],
        limit: int,
        offset: int,
        now: Optional[datetime] = None,
    ) -> List[RecommendationCard]:
        """
        Build one page of the recommendation feed.

        Args:
            titles: Catalog
            profile: User taste profile snapshot
            interactions: Interaction history
            watchlist: Saved title ids, never shown in the feed
            limit: Page size; zero or negative gives an empty page
            offset: Position of the first card; negative is treated as 0
            now: Reference time for interaction recency (default: now, UTC)

        Returns:
            Cards for positions [offset, offset + limit)
        """
        offset = max(0, offset)
        if limit <= 0:
            return []

        diversified = self.diversify(self.rank(titles, profile, interactions, watchlist, now=now))
        page = diversified[offset:offset + limit]
        return [self.to_card(entry, offset + index) for index, entry in enumerate(page)]


_default_builder = FeedBuilder()


def build_recommendation_feed(
    titles: Sequence[Title],
    profile: UserTasteProfile,
    interactions: Iterable[InteractionEvent],
    watchlist: Iterable[str],
    limit: int,
    offset: int,
    now: Optional[datetime] = None,
) -> List[RecommendationCard]:
    """Build a feed page with the default scorer and penalty."""
    return _default_builder.build(
        titles, profile, interactions, watchlist, limit, offset, now=now
    )
