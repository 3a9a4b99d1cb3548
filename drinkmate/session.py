"""
Drinking session: profile, drink log (newest first, capped) and BAC aggregate.
A Session is immutable; every log/edit/delete returns a new Session with the
aggregate recomputed from the retained events.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from drinkmate import calculations

MAX_EVENTS = 10
DEFAULT_WEIGHT_KG = 75.0

Events = Tuple["DrinkEvent", ...]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_event_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class DrinkEvent:
    """One logged drink and the BAC rise it added when it was logged."""

    id: str
    name: str
    glyph: str
    amount: float  # standard servings
    is_double: bool
    bac: float  # rise in % BAC, fixed at log/edit time
    timestamp: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "glyph": self.glyph,
            "amount": self.amount,
            "is_double": self.is_double,
            "bac": self.bac,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "DrinkEvent":
        """Build from ``to_dict`` output. Raises KeyError/ValueError/TypeError if malformed."""
        timestamp = datetime.fromisoformat(raw["timestamp"])
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return cls(
            id=str(raw["id"]),
            name=str(raw["name"]),
            glyph=str(raw.get("glyph", "")),
            amount=float(raw["amount"]),
            is_double=bool(raw.get("is_double", False)),
            bac=float(raw["bac"]),
            timestamp=timestamp,
        )


def recompute(events: Iterable[DrinkEvent]) -> Tuple[float, float]:
    """Return (total_bac, time_until_safe_hours) from scratch for the given events."""
    bac = calculations.total_bac(e.bac for e in events)
    return bac, calculations.time_until_safe(bac)


def apply_event(events: Sequence[DrinkEvent], new_event: DrinkEvent) -> Tuple[Events, float, float]:
    """Insert or replace ``new_event`` and return (events, total_bac, time_until_safe_hours).

    An event whose id is already present replaces it in place and keeps the
    original timestamp. Otherwise it goes to the front and the oldest entries
    beyond MAX_EVENTS are dropped.
    """
    updated = list(events)
    for i, existing in enumerate(updated):
        if existing.id == new_event.id:
            updated[i] = replace(new_event, timestamp=existing.timestamp)
            break
    else:
        updated.insert(0, new_event)
        del updated[MAX_EVENTS:]

    bac, hours = recompute(updated)
    return tuple(updated), bac, hours


def remove_event(events: Sequence[DrinkEvent], event_id: str) -> Events:
    """Drop the event with ``event_id``. Callers recompute the aggregate."""
    return tuple(e for e in events if e.id != event_id)


@dataclass(frozen=True)
class Session:
    weight_kg: float = DEFAULT_WEIGHT_KG
    sex_index: int = calculations.SEX_MALE
    events: Events = ()
    bac: float = 0.0
    time_until_safe_hours: float = 0.0

    @classmethod
    def from_events(cls, weight_kg: float, sex_index: int, events: Sequence[DrinkEvent]) -> "Session":
        kept = tuple(events)[:MAX_EVENTS]
        bac, hours = recompute(kept)
        return cls(weight_kg=weight_kg, sex_index=sex_index, events=kept, bac=bac, time_until_safe_hours=hours)

    @property
    def r(self) -> float:
        return calculations.sex_factor(self.sex_index)

    @property
    def drink_count(self) -> int:
        return len(self.events)

    def find(self, event_id: str) -> Optional[DrinkEvent]:
        return next((e for e in self.events if e.id == event_id), None)

    def build_event(
        self,
        entry,
        amount: float = 1.0,
        is_double: bool = False,
        event_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> DrinkEvent:
        rise, _ = calculations.compute_contribution(amount, entry, is_double, self.weight_kg, self.r)
        return DrinkEvent(
            id=event_id or new_event_id(),
            name=entry.name,
            glyph=entry.glyph,
            amount=amount,
            is_double=is_double,
            bac=rise,
            timestamp=now or _utcnow(),
        )

    def apply(self, event: DrinkEvent) -> "Session":
        events, bac, hours = apply_event(self.events, event)
        return replace(self, events=events, bac=bac, time_until_safe_hours=hours)

    def log_drink(
        self,
        entry,
        amount: float = 1.0,
        is_double: bool = False,
        event_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Tuple["Session", DrinkEvent]:
        """Log (or, with an existing ``event_id``, edit) a drink from a catalog entry.

        Returns the new session and the event as stored in it.
        """
        event = self.build_event(entry, amount, is_double, event_id=event_id, now=now)
        updated = self.apply(event)
        return updated, updated.find(event.id)

    def remove_event(self, event_id: str) -> "Session":
        events = remove_event(self.events, event_id)
        bac, hours = recompute(events)
        return replace(self, events=events, bac=bac, time_until_safe_hours=hours)

    def reset(self) -> "Session":
        return Session(weight_kg=self.weight_kg, sex_index=self.sex_index)

    def with_profile(self, weight_kg: float, sex_index: int) -> "Session":
        # Logged rises were fixed at log time and are left as they are.
        return replace(self, weight_kg=weight_kg, sex_index=sex_index)
