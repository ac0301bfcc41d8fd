"""User taste profile"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

DEFAULT_LANGUAGE_PREF = ["en"]
DEFAULT_MOOD_INTENSITY = 50


@dataclass(frozen=True)
class RuntimePreference:
    """Inclusive runtime window in minutes."""

    min: int
    max: int

    def contains(self, runtime: int) -> bool:
        return self.min <= runtime <= self.max


@dataclass
class UserTasteProfile:
    """
    Per-user preference state.

    The app-state layer owns and mutates it; scoring treats it as a
    read-only snapshot for the duration of one feed build.
    """

    favorite_title_ids: List[str] = field(default_factory=list)
    vibe_chips: List[str] = field(default_factory=list)
    blocked_genres: List[str] = field(default_factory=list)
    runtime_pref: Optional[RuntimePreference] = None
    language_pref: List[str] = field(default_factory=list)
    # Reserved for future weighting, not consumed by scoring
    mood_intensity: int = DEFAULT_MOOD_INTENSITY
    more_like_title_id: Optional[str] = None
    less_like_title_id: Optional[str] = None

    @classmethod
    def default(cls) -> "UserTasteProfile":
        """Profile used before onboarding has filled anything in."""
        return cls(language_pref=list(DEFAULT_LANGUAGE_PREF))

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "UserTasteProfile":
        """
        Build a profile from a request payload, substituting defaults for
        missing fields.

        Args:
            data: Profile dict (None or empty gives the default profile)

        Returns:
            UserTasteProfile instance
        """
        if not data:
            return cls.default()

        runtime_pref = data.get("runtime_pref")
        language_pref = data.get("language_pref")
        mood_intensity = data.get("mood_intensity")

        return cls(
            favorite_title_ids=[str(i) for i in data.get("favorite_title_ids") or []],
            vibe_chips=list(data.get("vibe_chips") or []),
            blocked_genres=list(data.get("blocked_genres") or []),
            runtime_pref=(
                RuntimePreference(min=int(runtime_pref["min"]), max=int(runtime_pref["max"]))
                if runtime_pref
                else None
            ),
            language_pref=(
                list(language_pref) if language_pref is not None else list(DEFAULT_LANGUAGE_PREF)
            ),
            mood_intensity=(
                int(mood_intensity) if mood_intensity is not None else DEFAULT_MOOD_INTENSITY
            ),
            more_like_title_id=data.get("more_like_title_id"),
            less_like_title_id=data.get("less_like_title_id"),
        )

    def to_dict(self) -> Dict:
        return {
            "favorite_title_ids": list(self.favorite_title_ids),
            "vibe_chips": list(self.vibe_chips),
            "blocked_genres": list(self.blocked_genres),
            "runtime_pref": (
                {"min": self.runtime_pref.min, "max": self.runtime_pref.max}
                if self.runtime_pref
                else None
            ),
            "language_pref": list(self.language_pref),
            "mood_intensity": self.mood_intensity,
            "more_like_title_id": self.more_like_title_id,
            "less_like_title_id": self.less_like_title_id,
        }
