"""Why-tag cleanup utilities."""
from typing import Iterable, List

MAX_WHY_TAGS = 3
MIN_WHY_TAGS = 2

EXPLORATION_FALLBACK_TAGS = ["Exploration pick", "Broadening your feed"]
GENERIC_FALLBACK_TAGS = ["Aligned with your selected vibes", "Balanced genre coverage"]


def clean_tags(tags: Iterable) -> List[str]:
    """
    Trim tags, drop empty ones and remove duplicates (case-sensitive),
    keeping first-seen order.

    Args:
        tags: Raw tags

    Returns:
        List of cleaned, unique tags
    """
    seen = set()
    cleaned = []
    for tag in tags:
        text = str(tag).strip()
        if not text or text in seen:
            continue
        seen.add(text)
        cleaned.append(text)
    return cleaned


def ensure_why_tags(reasons: Iterable[str], exploration: bool) -> List[str]:
    """
    Turn scorer reasons into the 2-3 why-tags shown on a card.

    Args:
        reasons: Scorer reasons, in priority order
        exploration: Whether the card is an exploration pick

    Returns:
        Between 2 and 3 unique, non-empty tags
    """
    base = clean_tags(reasons)[:MAX_WHY_TAGS]
    if len(base) >= MIN_WHY_TAGS:
        return base

    fallback = EXPLORATION_FALLBACK_TAGS if exploration else GENERIC_FALLBACK_TAGS
    return clean_tags(base + fallback)[:MAX_WHY_TAGS]


def normalize_tags(incoming: Iterable, fallback: List[str]) -> List[str]:
    """
    Validate tags returned by the explanation proxy.

    Args:
        incoming: Tags from the proxy response
        fallback: Tags to keep when fewer than two usable tags survive

    Returns:
        Cleaned incoming tags (max 3), or fallback
    """
    deduped = clean_tags(incoming)[:MAX_WHY_TAGS]
    if len(deduped) < MIN_WHY_TAGS:
        return list(fallback)
    return deduped
