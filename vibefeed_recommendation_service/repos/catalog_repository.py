"""Repository for the in-memory title catalog."""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from vibefeed_recommendation_service.models import Title

logger = logging.getLogger(__name__)

LIST_COLUMNS = ("genres", "moods", "cast")
CSV_LIST_SEPARATOR = "|"
DEFAULT_BROWSE_SIZE = 8
MAX_SEARCH_RESULTS = 12


def clean_catalog_dataframe(df: pd.DataFrame) -> pd.DataFrame:
    """
    Replace NaN/NA values with None so records map cleanly onto Title.

    Args:
        df: Raw catalog DataFrame

    Returns:
        Cleaned DataFrame
    """
    df = df.astype(object)
    df = df.where(pd.notnull(df), None)

    return df


def _split_list_value(value) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [part.strip() for part in str(value).split(CSV_LIST_SEPARATOR) if part.strip()]


class CatalogRepository:
    """
    Read-only, process-wide title catalog.

    Titles keep the order they were loaded in; that order is the feed's
    tie-break between equal scores.
    """

    def __init__(self, titles: Iterable[Title]):
        self._titles: List[Title] = list(titles)
        self._by_id = {title.id: title for title in self._titles}

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "CatalogRepository":
        return cls(Title.from_dict(record) for record in records)

    @classmethod
    def from_file(cls, path: Path) -> "CatalogRepository":
        """
        Load the catalog from a JSON (list of records) or CSV file.

        CSV list columns (genres, moods, cast) are '|'-separated.

        Args:
            path: Catalog file

        Returns:
            CatalogRepository
        """
        path = Path(path)
        logger.info(f"Loading catalog from {path}...")

        if path.suffix.lower() == ".csv":
            df = pd.read_csv(path, dtype={"id": str})
        else:
            df = pd.read_json(path, orient="records", dtype={"id": str})

        df = clean_catalog_dataframe(df)
        records = df.to_dict("records")
        for record in records:
            for column in LIST_COLUMNS:
                record[column] = _split_list_value(record.get(column))

        repo = cls.from_records(records)
        logger.info(f"✓ Loaded {repo.count()} titles")
        return repo

    def list_titles(self) -> List[Title]:
        return list(self._titles)

    def count(self) -> int:
        return len(self._titles)

    def get_title(self, title_id: str) -> Optional[Title]:
        """
        Get a title by id.

        Args:
            title_id: Title id

        Returns:
            Title or None if not in the catalog
        """
        return self._by_id.get(str(title_id))

    def get_titles(self, title_ids: Sequence[str]) -> List[Title]:
        """
        Get the titles for a set of ids, in catalog order.

        Unknown ids are skipped.
        """
        wanted = {str(title_id) for title_id in title_ids}
        return [title for title in self._titles if title.id in wanted]

    def search(self, query: Optional[str]) -> List[Title]:
        """
        Case-insensitive substring search on title names.

        Args:
            query: Search text; blank returns the first titles for browsing

        Returns:
            Matching titles (max 12)
        """
        clean = (query or "").strip().lower()
        if not clean:
            return self._titles[:DEFAULT_BROWSE_SIZE]

        matches = [title for title in self._titles if clean in title.title_name.lower()]
        return matches[:MAX_SEARCH_RESULTS]
