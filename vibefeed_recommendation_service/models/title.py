"""Catalog title"""
from dataclasses import dataclass, field, asdict
from typing import Dict, List


@dataclass(frozen=True)
class Title:
    """A catalog entry. Read-only and shared by every feed build."""

    id: str
    title_name: str
    year: int
    genres: List[str] = field(default_factory=list)
    runtime: int = 0
    language: str = ""
    moods: List[str] = field(default_factory=list)
    popularity: float = 0.0
    synopsis: str = ""
    cast: List[str] = field(default_factory=list)
    poster_url: str = ""
    availability_hint: str = ""

    @property
    def primary_genre(self) -> str:
        """First listed genre, or empty string when the title has none."""
        return self.genres[0] if self.genres else ""

    @classmethod
    def from_dict(cls, data: Dict) -> "Title":
        """
        Build a Title from a catalog record.

        Args:
            data: Dict with at least id, title_name and year

        Returns:
            Title instance
        """
        return cls(
            id=str(data["id"]),
            title_name=data["title_name"],
            year=int(data["year"]),
            genres=list(data.get("genres") or []),
            runtime=int(data.get("runtime") or 0),
            language=data.get("language") or "",
            moods=list(data.get("moods") or []),
            popularity=float(data.get("popularity") or 0.0),
            synopsis=data.get("synopsis") or "",
            cast=list(data.get("cast") or []),
            poster_url=data.get("poster_url") or "",
            availability_hint=data.get("availability_hint") or "",
        )

    def to_dict(self) -> Dict:
        return asdict(self)

    def __repr__(self):
        return f"<Title(id='{self.id}', title_name='{self.title_name}')>"
