"""Application configuration"""

import json
import os
from pathlib import Path

DEFAULT_EXPLANATION_TIMEOUT_MS = 7000
DEFAULT_FEED_PAGE_SIZE = 8


def _get_config_value(key: str, default: str | None = None) -> str | None:
    """
    Get configuration value from environment or local.settings.json.

    Priority:
    1. Environment variable
    2. local.settings.json (Values.key)
    3. Default value

    Args:
        key: Configuration key name
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    # Try environment variable first
    value = os.getenv(key)
    if value:
        return value

    # Try local.settings.json
    project_root = Path(__file__).resolve().parent.parent
    local_settings_path = project_root / "local.settings.json"

    if local_settings_path.exists():
        try:
            with open(local_settings_path) as f:
                settings = json.load(f)
                value = settings.get("Values", {}).get(key)
                if value:
                    return value
        except (json.JSONDecodeError, KeyError):
            pass

    # Return default
    return default


def _parse_boolean(value: str | None, fallback: bool) -> bool:
    """Parse 1/true/yes and 0/false/no, returning fallback for anything else."""
    if not value:
        return fallback

    normalized = value.strip().lower()
    if normalized in ("1", "true", "yes"):
        return True
    if normalized in ("0", "false", "no"):
        return False
    return fallback


def _parse_positive_int(value: str | None, fallback: int) -> int:
    """Parse a strictly positive integer, returning fallback when invalid."""
    if not value:
        return fallback

    try:
        parsed = int(value.strip())
    except ValueError:
        return fallback

    if parsed <= 0:
        return fallback
    return parsed


def get_explanations_enabled() -> bool:
    """
    Check if why-tag enrichment through the explanation proxy is enabled.

    Returns:
        True if ENABLE_LLM_EXPLANATIONS is set to a truthy value (default: False)
    """
    return _parse_boolean(_get_config_value("ENABLE_LLM_EXPLANATIONS"), False)


def get_explanation_proxy_url() -> str | None:
    """
    Get the base URL of the explanation proxy.

    Returns:
        URL without trailing slash, or None when not configured
    """
    value = _get_config_value("LLM_PROXY_URL")
    if not value:
        return None

    trimmed = value.strip()
    if not trimmed:
        return None

    return trimmed.rstrip("/")


def get_explanation_timeout_ms() -> int:
    """
    Get the timeout for a single enrichment request.

    Returns:
        Timeout in milliseconds (default: 7000)
    """
    return _parse_positive_int(
        _get_config_value("LLM_REQUEST_TIMEOUT_MS"),
        DEFAULT_EXPLANATION_TIMEOUT_MS,
    )


def get_feed_page_size() -> int:
    """
    Get the number of cards served per feed page.

    Returns:
        Page size (default: 8)
    """
    return _parse_positive_int(_get_config_value("FEED_PAGE_SIZE"), DEFAULT_FEED_PAGE_SIZE)


def get_catalog_path() -> Path:
    """
    Get the path of the catalog file loaded at startup.

    Returns:
        Catalog path (default: data/catalog.json in project root)
    """
    value = _get_config_value("CATALOG_PATH")
    if value:
        return Path(value)

    project_root = Path(__file__).resolve().parent.parent
    return project_root / "data" / "catalog.json"
