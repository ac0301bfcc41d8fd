"""Client for the why-tag explanation proxy."""
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence, Tuple
import json
import logging
import time

import requests

from vibefeed_recommendation_service.config import (
    get_explanation_proxy_url,
    get_explanation_timeout_ms,
    get_explanations_enabled,
)
from vibefeed_recommendation_service.models import RecommendationCard, Title, UserTasteProfile
from vibefeed_recommendation_service.scoring import normalize_tags

logger = logging.getLogger(__name__)

WHY_TAGS_ENDPOINT_PATH = "/v1/recs/why-tags"
RESPONSE_CHUNK_SIZE = 1024

# Shared by every client; a request that overruns its deadline is abandoned here
_request_pool = ThreadPoolExecutor(max_workers=4, thread_name_prefix="why-tags")


def is_why_tags_response(payload) -> bool:
    """Check the proxy response shape: {"cards": [{"title_id": str, "why_tags": [str]}]}."""
    if not isinstance(payload, dict) or not isinstance(payload.get("cards"), list):
        return False

    return all(
        isinstance(item, dict)
        and isinstance(item.get("title_id"), str)
        and isinstance(item.get("why_tags"), list)
        and all(isinstance(tag, str) for tag in item["why_tags"])
        for item in payload["cards"]
    )


class WhyTagsEnrichmentClient:
    """
    Rewrites card why-tags through the explanation proxy.

    One attempt per call, bounded by a timeout. Any failure leaves the cards
    exactly as they came from the feed builder.
    """

    def __init__(
            self,
            proxy_url: Optional[str] = None,
            timeout_ms: Optional[int] = None,
            enabled: Optional[bool] = None
    ):
        self.proxy_url = proxy_url or get_explanation_proxy_url()
        self.timeout_ms = timeout_ms or get_explanation_timeout_ms()
        self.enabled = get_explanations_enabled() if enabled is None else enabled

        # No retry adapter: a single attempt with timeout is the contract
        self.session = requests.Session()

    @property
    def endpoint(self) -> Optional[str]:
        if not self.proxy_url:
            return None
        return f"{self.proxy_url.rstrip('/')}{WHY_TAGS_ENDPOINT_PATH}"

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    def build_payload(
            self,
            cards: Sequence[RecommendationCard],
            titles: Sequence[Title],
            profile: UserTasteProfile
    ) -> Dict:
        """Request body: a profile subset plus one entry per card."""
        titles_by_id = {title.id: title for title in titles}

        items = []
        for card in cards:
            title = titles_by_id.get(card.title_id)
            items.append({
                "title_id": card.title_id,
                "title_name": card.title_name,
                "year": card.year,
                "genres": list(card.genres),
                "moods": list(title.moods) if title else [],
                "synopsis": title.synopsis if title else "",
                "match_score": card.match_score,
                "confidence": card.confidence.value,
                "exploration_pick": card.exploration_pick,
                "base_why_tags": list(card.why_tags),
            })

        return {
            "profile": {
                "favorite_title_ids": list(profile.favorite_title_ids),
                "vibe_chips": list(profile.vibe_chips),
                "blocked_genres": list(profile.blocked_genres),
                "language_pref": list(profile.language_pref),
                "mood_intensity": profile.mood_intensity,
            },
            "cards": items,
        }

    def _post(
            self,
            payload: Dict,
            deadline: float,
            inflight: List[requests.Response]
    ) -> Tuple[int, Optional[bytes]]:
        """
        POST and read the whole body, giving up once the deadline passes.

        Returns:
            (status code, body); body is None for non-2xx responses
        """
        response = self.session.post(
            self.endpoint,
            json=payload,
            timeout=self.timeout_seconds,
            stream=True
        )
        inflight.append(response)
        with response:
            if not response.ok:
                return response.status_code, None

            body = bytearray()
            for chunk in response.iter_content(chunk_size=RESPONSE_CHUNK_SIZE):
                if time.monotonic() > deadline:
                    raise requests.Timeout("Why-tag response exceeded the deadline")
                body.extend(chunk)
            return response.status_code, bytes(body)

    def request_why_tags(self, payload: Dict) -> Optional[Dict[str, List[str]]]:
        """
        POST the payload to the proxy.

        The timeout bounds the whole exchange (connect, headers and body),
        not just each socket read.

        Returns:
            Dict mapping title_id -> raw why_tags, or None when the caller
            must fall back to the input cards
        """
        deadline = time.monotonic() + self.timeout_seconds
        inflight: List[requests.Response] = []
        future = _request_pool.submit(self._post, payload, deadline, inflight)

        try:
            status_code, content = future.result(timeout=self.timeout_seconds)
        except (TimeoutError, requests.Timeout):
            future.cancel()
            for response in inflight:
                response.close()
            logger.warning(f"Why-tag enrichment timed out after {self.timeout_ms}ms")
            return None
        except requests.RequestException as e:
            logger.warning(f"Why-tag enrichment request failed: {e}")
            return None

        if content is None:
            logger.warning(f"Why-tag enrichment returned HTTP {status_code}")
            return None

        try:
            body = json.loads(content)
        except ValueError:
            logger.warning("Why-tag enrichment returned malformed JSON")
            return None

        if not is_why_tags_response(body):
            logger.warning("Why-tag enrichment response did not match the expected schema")
            return None

        return {item["title_id"]: item["why_tags"] for item in body["cards"]}

    def enrich(
            self,
            cards: List[RecommendationCard],
            titles: Sequence[Title],
            profile: UserTasteProfile
    ) -> List[RecommendationCard]:
        """
        Enrich card why-tags, falling back to the input cards on any failure.

        Args:
            cards: Cards from the feed builder
            titles: Catalog, for moods and synopsis
            profile: User taste profile snapshot

        Returns:
            Cards with enriched (normalized) tags, or the input cards
        """
        if not self.enabled or not self.endpoint or not cards:
            return cards

        tags_by_title = self.request_why_tags(self.build_payload(cards, titles, profile))
        if tags_by_title is None:
            return cards

        enriched = []
        matched = 0
        for card in cards:
            candidate = tags_by_title.get(card.title_id)
            if candidate is None:
                enriched.append(card)
                continue
            matched += 1
            enriched.append(card.with_why_tags(normalize_tags(candidate, card.why_tags)))

        logger.info(f"✓ Enriched why-tags for {matched} of {len(cards)} cards")
        return enriched
