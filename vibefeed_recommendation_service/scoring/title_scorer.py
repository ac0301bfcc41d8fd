"""Score a single catalog title against a user's taste profile."""
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from vibefeed_recommendation_service.models import Title, UserTasteProfile

BLOCKED_GENRE_REASON = "Blocked genre preference"
RUNTIME_REASON = "Outside runtime preference"
LANGUAGE_REASON = "Outside language preference"

RECENT_LIKES_REASON = "Fits your recent likes"
QUICK_WATCH_REASON = "Quick watch runtime"
TRENDING_REASON = "Trending in catalog"

QUICK_WATCH_MAX_RUNTIME = 50
TRENDING_MIN_POPULARITY = 90
RECENT_LIKES_MIN_FIT = 0.7


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass
class ScoreResult:
    score: float
    hard_blocked: bool
    reasons: List[str] = field(default_factory=list)


# noinspection PyMethodMayBeStatic
class TitleScorer:
    """
    Compute a bounded relevance score, hard-block verdict and reasons for
    one title.

    The score blends three weighted signals (content similarity, explicit
    preference fit, recency/cross-title signal), then adds a popularity
    nudge and the optional more-like/less-like nudges.
    """

    def __init__(
        self,
        content_weight: float = 0.45,
        preference_weight: float = 0.35,
        recency_weight: float = 0.20,
        popularity_weight: float = 0.08,
        more_like_boost: float = 0.07,
        less_like_penalty: float = 0.08,
        cross_title_factor: float = 0.2,
    ):
        """
        Initialize title scorer.

        Args:
            content_weight: Weight for genre/mood similarity
            preference_weight: Weight for the title's own action affinity
            recency_weight: Weight for the recency/cross-title signal
            popularity_weight: Scale of the additive popularity nudge
            more_like_boost: Flat boost when the "more like" anchor shares a genre
            less_like_penalty: Flat penalty when the "less like" anchor shares a genre
            cross_title_factor: Share of a favorite's affinity passed on per shared genre
        """
        self.content_weight = content_weight
        self.preference_weight = preference_weight
        self.recency_weight = recency_weight
        self.popularity_weight = popularity_weight
        self.more_like_boost = more_like_boost
        self.less_like_penalty = less_like_penalty
        self.cross_title_factor = cross_title_factor

    def hard_block_reason(self, title: Title, profile: UserTasteProfile) -> str | None:
        """
        Check the exclusion rules in order: blocked genre, runtime, language.

        Returns:
            Reason of the first failing rule, or None if the title passes
        """
        blocked = set(profile.blocked_genres)
        if any(genre in blocked for genre in title.genres):
            return BLOCKED_GENRE_REASON

        if profile.runtime_pref is not None and not profile.runtime_pref.contains(title.runtime):
            return RUNTIME_REASON

        if profile.language_pref and title.language not in profile.language_pref:
            return LANGUAGE_REASON

        return None

    def content_similarity(
        self,
        title: Title,
        profile: UserTasteProfile,
        favorite_genres: set,
    ) -> float:
        vibe_chips = set(profile.vibe_chips)
        genre_overlap = sum(1 for genre in title.genres if genre in favorite_genres)
        mood_overlap = sum(1 for mood in title.moods if mood in vibe_chips)

        similarity = (
            0.6 * genre_overlap / max(1, len(title.genres))
            + 0.4 * mood_overlap / max(1, len(profile.vibe_chips) or 1)
        )
        return clamp(similarity, 0.0, 1.0)

    def explicit_preference_fit(self, title: Title, affinity_map: Dict[str, float]) -> float:
        # Affinity is unbounded, so strongly negative history lands below 0 before the clamp
        return clamp((affinity_map.get(title.id, 0.0) + 1.0) / 2.0, 0.0, 1.0)

    def recency_signal(
        self,
        title: Title,
        affinity_map: Dict[str, float],
        favorites_by_id: Dict[str, Title],
    ) -> float:
        """
        Cross-title signal rescaled to [0, 1].

        Affinity on favorites sharing genres with the candidate leaks into
        it, on top of the candidate's own affinity.
        """
        candidate_genres = set(title.genres)
        total = 0.0
        for title_id, affinity in affinity_map.items():
            if title_id == title.id:
                total += affinity
                continue

            source = favorites_by_id.get(title_id)
            if source is None:
                continue

            shared = sum(1 for genre in source.genres if genre in candidate_genres)
            total += shared * affinity * self.cross_title_factor

        return (clamp(total, -1.0, 1.0) + 1.0) / 2.0

    def _anchor_shares_genre(
        self,
        anchor_id: str | None,
        title: Title,
        favorites_by_id: Dict[str, Title],
    ) -> bool:
        if not anchor_id:
            return False
        source = favorites_by_id.get(anchor_id)
        if source is None:
            return False
        return any(genre in title.genres for genre in source.genres)

    def score(
        self,
        title: Title,
        profile: UserTasteProfile,
        affinity_map: Dict[str, float],
        favorite_titles: Sequence[Title],
    ) -> ScoreResult:
        """
        Score one title.

        Args:
            title: Candidate title
            profile: User taste profile snapshot
            affinity_map: Output of build_affinity_map for this build
            favorite_titles: Catalog titles listed in profile.favorite_title_ids

        Returns:
            ScoreResult; hard-blocked titles get score 0 and a single reason
        """
        block_reason = self.hard_block_reason(title, profile)
        if block_reason is not None:
            return ScoreResult(score=0.0, hard_blocked=True, reasons=[block_reason])

        favorites_by_id = {favorite.id: favorite for favorite in favorite_titles}
        favorite_genres = {genre for favorite in favorite_titles for genre in favorite.genres}
        vibe_chips = set(profile.vibe_chips)

        content = self.content_similarity(title, profile, favorite_genres)
        preference_fit = self.explicit_preference_fit(title, affinity_map)
        recency = self.recency_signal(title, affinity_map, favorites_by_id)

        score = (
            content * self.content_weight
            + preference_fit * self.preference_weight
            + recency * self.recency_weight
        )
        score += clamp(title.popularity / 100.0, 0.0, 1.0) * self.popularity_weight

        if self._anchor_shares_genre(profile.more_like_title_id, title, favorites_by_id):
            score += self.more_like_boost
        if self._anchor_shares_genre(profile.less_like_title_id, title, favorites_by_id):
            score -= self.less_like_penalty

        score = clamp(score, 0.0, 1.0)

        reasons: List[str] = []
        matched_genre = next((g for g in title.genres if g in favorite_genres), None)
        if matched_genre is not None:
            reasons.append(f"{matched_genre} match")
        matched_mood = next((m for m in title.moods if m in vibe_chips), None)
        if matched_mood is not None:
            reasons.append(f"{matched_mood} vibe")
        if preference_fit > RECENT_LIKES_MIN_FIT:
            reasons.append(RECENT_LIKES_REASON)
        if title.runtime <= QUICK_WATCH_MAX_RUNTIME:
            reasons.append(QUICK_WATCH_REASON)
        if title.popularity >= TRENDING_MIN_POPULARITY:
            reasons.append(TRENDING_REASON)

        return ScoreResult(score=score, hard_blocked=False, reasons=reasons)


_default_scorer = TitleScorer()


def score_title(
    title: Title,
    profile: UserTasteProfile,
    affinity_map: Dict[str, float],
    favorite_titles: Sequence[Title],
) -> ScoreResult:
    """Score a title with the default weights."""
    return _default_scorer.score(title, profile, affinity_map, favorite_titles)
