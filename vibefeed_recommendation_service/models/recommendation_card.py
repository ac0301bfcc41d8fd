"""Recommendation cards returned by the feed"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class RecommendationCard:
    """
    One feed entry. Built fresh on every feed request and never persisted.

    exploration_pick is not a constructor argument: it is derived from the
    confidence bucket so the two can never disagree.
    """

    id: str
    title_id: str
    title_name: str
    poster_url: str
    year: int
    genres: List[str]
    runtime: int
    match_score: float
    why_tags: List[str]
    confidence: Confidence
    availability_hint: str

    @property
    def exploration_pick(self) -> bool:
        return self.confidence == Confidence.LOW

    def with_why_tags(self, why_tags: List[str]) -> "RecommendationCard":
        """Copy of this card carrying different why-tags."""
        return replace(self, why_tags=list(why_tags))

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "title_id": self.title_id,
            "title_name": self.title_name,
            "poster_url": self.poster_url,
            "year": self.year,
            "genres": list(self.genres),
            "runtime": self.runtime,
            "match_score": self.match_score,
            "why_tags": list(self.why_tags),
            "confidence": self.confidence.value,
            "availability_hint": self.availability_hint,
            "exploration_pick": self.exploration_pick,
        }


@dataclass
class FeedResponse:
    """A page of cards plus the cursor for the next page (None when final)."""

    cards: List[RecommendationCard] = field(default_factory=list)
    next_cursor: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            "cards": [card.to_dict() for card in self.cards],
            "next_cursor": self.next_cursor,
        }
