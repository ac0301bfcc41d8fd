"""
Tests for scripts/build_feed.py
"""

import json
from unittest.mock import patch

import pytest

from scripts.build_feed import load_json_file, main, parse_args, parse_watchlist


class TestLoadJsonFile:
    """Tests for load_json_file function."""

    def test_returns_default_without_path(self):
        assert load_json_file(None, []) == []

    def test_loads_file(self, tmp_path):
        path = tmp_path / "profile.json"
        path.write_text(json.dumps({"vibe_chips": ["Cozy"]}))

        assert load_json_file(str(path), None) == {"vibe_chips": ["Cozy"]}

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_json_file(str(tmp_path / "missing.json"), None)


class TestParseWatchlist:
    """Tests for parse_watchlist function."""

    def test_empty(self):
        assert parse_watchlist(None) == []
        assert parse_watchlist("") == []

    def test_splits_and_trims(self):
        assert parse_watchlist("t1, t2,,t3 ") == ["t1", "t2", "t3"]


class TestParseArgs:
    """Tests for parse_args function."""

    def test_defaults(self):
        args = parse_args([])

        assert args.catalog is None
        assert args.limit is None
        assert args.offset == 0
        assert args.enrich is False

    def test_all_options(self):
        args = parse_args([
            "--catalog", "c.json", "--profile", "p.json", "--interactions", "i.json",
            "--watchlist", "t1,t2", "--limit", "5", "--offset", "10", "--enrich",
        ])

        assert args.catalog == "c.json"
        assert args.profile == "p.json"
        assert args.interactions == "i.json"
        assert args.watchlist == "t1,t2"
        assert args.limit == 5
        assert args.offset == 10
        assert args.enrich is True


class TestMain:
    """Tests for main function."""

    def test_main_builds_page(self, catalog_file, tmp_path, clean_config):
        """Test building a page from catalog, profile and history files."""
        # Arrange
        profile_path = tmp_path / "profile.json"
        profile_path.write_text(json.dumps({
            "favorite_title_ids": ["t1"],
            "blocked_genres": ["Horror"],
            "language_pref": ["en"],
        }))
        history_path = tmp_path / "history.json"
        history_path.write_text(json.dumps([
            {"user_id": "u1", "title_id": "t3", "action": "like", "timestamp": "2026-03-14T10:00:00Z"},
        ]))

        # Act
        cards = main([
            "--catalog", str(catalog_file),
            "--profile", str(profile_path),
            "--interactions", str(history_path),
            "--watchlist", "t2",
            "--limit", "5",
        ])

        # Assert
        assert len(cards) == 5
        ids = [card.title_id for card in cards]
        assert "t2" not in ids
        assert "t9" not in ids
        assert "t4" not in ids

    def test_main_uses_page_size_config(self, catalog_file, monkeypatch, clean_config):
        monkeypatch.setenv('FEED_PAGE_SIZE', '3')

        cards = main(["--catalog", str(catalog_file)])

        assert len(cards) == 3

    def test_main_offset_past_end(self, catalog_file, clean_config):
        assert main(["--catalog", str(catalog_file), "--offset", "100"]) == []

    @patch('scripts.build_feed.WhyTagsEnrichmentClient')
    def test_main_with_enrich(self, mock_client_cls, catalog_file, clean_config):
        # Arrange
        mock_client_cls.return_value.enrich.side_effect = lambda cards, titles, profile: cards

        # Act
        cards = main(["--catalog", str(catalog_file), "--limit", "2", "--enrich"])

        # Assert
        mock_client_cls.assert_called_once_with(enabled=True)
        mock_client_cls.return_value.enrich.assert_called_once()
        assert len(cards) == 2

    @patch('scripts.build_feed.WhyTagsEnrichmentClient')
    def test_main_without_enrich_skips_client(self, mock_client_cls, catalog_file, clean_config):
        main(["--catalog", str(catalog_file), "--limit", "2"])

        mock_client_cls.assert_not_called()
