"""User interaction events"""
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Dict, Optional


class SwipeAction(str, Enum):
    LIKE = "like"
    PASS = "pass"
    SUPER_LIKE = "super_like"
    SAVE = "save"
    UNSAVE = "unsave"


@dataclass(frozen=True)
class InteractionContext:
    screen: str = ""
    card_rank: Optional[int] = None


@dataclass(frozen=True)
class InteractionEvent:
    """A timestamped user action on a title. Never mutated once recorded."""

    user_id: str
    title_id: str
    action: SwipeAction
    timestamp: str
    context: InteractionContext = field(default_factory=InteractionContext)

    def parsed_timestamp(self) -> datetime:
        """
        Parse the ISO timestamp into an aware datetime.

        Naive timestamps are treated as UTC.
        """
        parsed = datetime.fromisoformat(self.timestamp.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed

    @classmethod
    def from_dict(cls, data: Dict) -> "InteractionEvent":
        """
        Build an event from a request payload.

        Raises:
            TypeError: If the timestamp is not a string or the context is not an object
        """
        timestamp = data["timestamp"]
        if not isinstance(timestamp, str):
            raise TypeError(f"timestamp must be an ISO-8601 string, got {type(timestamp).__name__}")

        context = data.get("context") or {}
        if not isinstance(context, dict):
            raise TypeError(f"context must be an object, got {type(context).__name__}")
        card_rank = context.get("card_rank")
        return cls(
            user_id=str(data.get("user_id", "")),
            title_id=str(data["title_id"]),
            action=SwipeAction(data["action"]),
            timestamp=timestamp,
            context=InteractionContext(
                screen=context.get("screen", ""),
                card_rank=int(card_rank) if card_rank is not None else None,
            ),
        )

    def to_dict(self) -> Dict:
        context: Dict = {"screen": self.context.screen}
        if self.context.card_rank is not None:
            context["card_rank"] = self.context.card_rank
        return {
            "user_id": self.user_id,
            "title_id": self.title_id,
            "action": self.action.value,
            "timestamp": self.timestamp,
            "context": context,
        }
