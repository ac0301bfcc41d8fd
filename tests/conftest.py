"""Shared test fixtures and configuration for pytest."""
import pytest
import json
from datetime import UTC, datetime, timedelta
from typing import List
from unittest.mock import Mock

from vibefeed_recommendation_service.models import (
    InteractionContext,
    InteractionEvent,
    RuntimePreference,
    SwipeAction,
    Title,
    UserTasteProfile,
)


# ===== Time Fixtures =====

@pytest.fixture
def fixed_now() -> datetime:
    """Reference build time so recency weights are deterministic."""
    return datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def make_event(fixed_now):
    """Factory for interaction events N days before fixed_now."""
    def _make_event(title_id: str, action: str, days_ago: float = 0.0, user_id: str = "user-1"):
        timestamp = (fixed_now - timedelta(days=days_ago)).isoformat()
        return InteractionEvent(
            user_id=user_id,
            title_id=title_id,
            action=SwipeAction(action),
            timestamp=timestamp,
            context=InteractionContext(screen="swipe-feed"),
        )
    return _make_event


# ===== Catalog Fixtures =====

@pytest.fixture
def scenario_titles() -> List[Title]:
    """Three-title catalog: two English dramas and a French comedy."""
    return [
        Title(id="A", title_name="Title A", year=2020, genres=["Drama"], runtime=90,
              language="en", popularity=95),
        Title(id="B", title_name="Title B", year=2021, genres=["Drama"], runtime=120,
              language="en", popularity=10),
        Title(id="C", title_name="Title C", year=2022, genres=["Comedy"], runtime=95,
              language="fr", popularity=50),
    ]


@pytest.fixture
def sample_titles() -> List[Title]:
    """Mixed catalog for ranking, filtering and pagination tests."""
    return [
        Title(id="t1", title_name="Harbor Lights", year=2021, genres=["Drama", "Romance"],
              runtime=112, language="en", moods=["Cozy", "Heartfelt"], popularity=78,
              synopsis="Two strangers in a fishing town.", poster_url="p/t1.jpg",
              availability_hint="Streaming on Northwave"),
        Title(id="t2", title_name="Signal Lost", year=2023, genres=["Thriller", "Sci-Fi"],
              runtime=104, language="en", moods=["Tense", "Mind-bending"], popularity=92,
              synopsis="Messages from a dead station.", poster_url="p/t2.jpg",
              availability_hint="Rent or buy"),
        Title(id="t3", title_name="Pocket Chefs", year=2022, genres=["Comedy", "Reality"],
              runtime=42, language="en", moods=["Light", "Cozy"], popularity=66),
        Title(id="t4", title_name="Nuit Blanche", year=2019, genres=["Drama", "Crime"],
              runtime=97, language="fr", moods=["Dark", "Tense"], popularity=58),
        Title(id="t5", title_name="Starlight Lane", year=2024, genres=["Animation", "Family"],
              runtime=88, language="en", moods=["Light", "Uplifting"], popularity=95),
        Title(id="t6", title_name="Ledger", year=2020, genres=["Crime", "Drama"],
              runtime=126, language="en", moods=["Dark", "Slow-burn"], popularity=81),
        Title(id="t7", title_name="Field Notes", year=2018, genres=["Documentary"],
              runtime=48, language="en", moods=["Calm"], popularity=44),
        Title(id="t8", title_name="Overtime", year=2022, genres=["Comedy", "Sports"],
              runtime=101, language="en", moods=["Light", "Uplifting"], popularity=73),
        Title(id="t9", title_name="Hollow Pines", year=2021, genres=["Horror", "Mystery"],
              runtime=94, language="en", moods=["Dark", "Tense"], popularity=69),
        Title(id="t10", title_name="The Long Orbit", year=2017, genres=["Sci-Fi", "Drama"],
              runtime=148, language="en", moods=["Mind-bending"], popularity=88),
        Title(id="t11", title_name="Second Harbor", year=2022, genres=["Drama"],
              runtime=101, language="en", moods=["Heartfelt"], popularity=60),
        Title(id="t12", title_name="Short Fuse", year=2024, genres=["Action", "Thriller"],
              runtime=45, language="en", moods=["Tense"], popularity=90),
    ]


@pytest.fixture
def sample_catalog_records(sample_titles) -> List[dict]:
    return [title.to_dict() for title in sample_titles]


@pytest.fixture
def catalog_file(tmp_path, sample_catalog_records):
    """JSON catalog file with the sample titles."""
    path = tmp_path / "catalog.json"
    with open(path, "w") as f:
        json.dump(sample_catalog_records, f)
    return path


# ===== Profile Fixtures =====

@pytest.fixture
def open_profile() -> UserTasteProfile:
    """Profile with no constraints at all."""
    return UserTasteProfile()


@pytest.fixture
def english_profile() -> UserTasteProfile:
    return UserTasteProfile(language_pref=["en"])


@pytest.fixture
def taste_profile() -> UserTasteProfile:
    """Onboarded profile with favorites, vibes and a runtime window."""
    return UserTasteProfile(
        favorite_title_ids=["t1", "t2"],
        vibe_chips=["Cozy", "Tense"],
        blocked_genres=["Horror"],
        runtime_pref=RuntimePreference(min=40, max=130),
        language_pref=["en"],
        mood_intensity=70,
    )


# ===== Configuration Fixtures =====

@pytest.fixture
def mock_config(monkeypatch):
    """Mock configuration values."""
    monkeypatch.setenv('ENABLE_LLM_EXPLANATIONS', 'true')
    monkeypatch.setenv('LLM_PROXY_URL', 'http://proxy.test/')
    monkeypatch.setenv('LLM_REQUEST_TIMEOUT_MS', '2500')
    monkeypatch.setenv('FEED_PAGE_SIZE', '4')


@pytest.fixture
def clean_config(monkeypatch):
    """Remove every configuration variable from the environment."""
    for key in (
        'ENABLE_LLM_EXPLANATIONS',
        'LLM_PROXY_URL',
        'LLM_REQUEST_TIMEOUT_MS',
        'FEED_PAGE_SIZE',
        'CATALOG_PATH',
    ):
        monkeypatch.delenv(key, raising=False)


# ===== Azure Functions Fixtures =====

@pytest.fixture
def mock_http_request():
    """Mock Azure Functions HttpRequest."""
    mock_req = Mock()
    mock_req.route_params = {}
    mock_req.params = {}
    mock_req.get_json.return_value = {}
    return mock_req
