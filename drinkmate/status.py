"""Display helpers for the session: BAC status band, time formatting, drink lines.

Educational only; an estimate never guarantees it is safe or legal to drive.
"""

from typing import List

from drinkmate.session import DrinkEvent, Session

LOW_BAC = 0.02
MODERATE_BAC = 0.05


def status_text(bac: float) -> str:
    if bac < LOW_BAC:
        return "Low"
    if bac < MODERATE_BAC:
        return "Mod"
    return "High"


def format_hours_minutes(hours: float) -> str:
    """Render hours as zero-padded HH:MM, e.g. 2.5 -> "02:30"."""
    if hours <= 0:
        return "00:00"
    total_minutes = int(hours * 60)
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def describe_event(event: DrinkEvent) -> str:
    text = f"{event.amount:.1f} × {event.name}"
    if event.is_double:
        text += " (Double)"
    return text


def _clock(event: DrinkEvent) -> str:
    # Local wall-clock h:mmAM, no leading zero on the hour.
    return event.timestamp.astimezone().strftime("%I:%M%p").lstrip("0")


def recent_drinks(session: Session) -> List[dict]:
    """One display row per logged drink, newest first."""
    band = status_text(session.bac)
    duration = f"{session.time_until_safe_hours:.1f}h"
    return [
        {
            "id": e.id,
            "name": e.name,
            "time": _clock(e),
            "bac": round(e.bac, 4),
            "drinks": describe_event(e),
            "risk_level": band,
            "duration": duration,
            "thumbnail": e.glyph,
        }
        for e in session.events
    ]
