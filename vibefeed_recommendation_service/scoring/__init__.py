"""Per-title scoring and why-tag handling"""

from .affinity import ACTION_WEIGHTS, build_affinity_map
from .title_scorer import ScoreResult, TitleScorer, score_title
from .tag_processor import ensure_why_tags, normalize_tags

__all__ = [
    "ACTION_WEIGHTS",
    "ScoreResult",
    "TitleScorer",
    "build_affinity_map",
    "ensure_why_tags",
    "normalize_tags",
    "score_title",
]
