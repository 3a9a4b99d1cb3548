"""Risk pattern scoring for recent drinking behaviour.

Recent drinks (last 3 hours) are scored by a table of weighted rules:

- BAC level          0-40 points
- drinks in window   0-25 points
- pace between drinks 0-20 points
- double servings    0-10 points
- high-alcohol drinks 0-5 points

A total of 50+ is Risky, 25+ is Caution, anything lower is Safe. Insights are
separate advisory strings with their own thresholds.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from drinkmate.session import DrinkEvent

TIME_WINDOW = timedelta(hours=3)

RISKY_SCORE = 50
CAUTION_SCORE = 25

HIGH_ALCOHOL_DRINKS = ("Martini", "Vodka Red Bull", "Whiskey", "Vodka", "Rum", "Tequila")

LEGAL_LIMIT_BAC = 0.08
APPROACHING_LIMIT_BAC = 0.05
FAST_PACE_INSIGHT_MINUTES = 20

INSIGHT_FAST_PACE = "Drinking faster than recommended pace"
INSIGHT_MULTIPLE_DOUBLES = "Multiple double shots increase risk"
INSIGHT_ABOVE_LIMIT = "BAC is above legal driving limit in most regions"
INSIGHT_APPROACHING_LIMIT = "Approaching legal limit - avoid driving"


class RiskLevel(Enum):
    SAFE = "Safe"
    CAUTION = "Caution"
    RISKY = "Risky"

    @property
    def message(self) -> str:
        return _MESSAGES[self]

    @property
    def icon(self) -> str:
        return _ICONS[self]

    @property
    def color(self) -> Tuple[float, float, float]:
        """(red, green, blue) in 0-1."""
        return _COLORS[self]


_MESSAGES = {
    RiskLevel.SAFE: "Pace looks good",
    RiskLevel.CAUTION: "Consider slowing down",
    RiskLevel.RISKY: "High-risk pattern detected",
}
_ICONS = {
    RiskLevel.SAFE: "checkmark.shield.fill",
    RiskLevel.CAUTION: "exclamationmark.triangle.fill",
    RiskLevel.RISKY: "exclamationmark.octagon.fill",
}
_COLORS = {
    RiskLevel.SAFE: (0.3, 0.8, 0.3),
    RiskLevel.CAUTION: (1.0, 0.7, 0.0),
    RiskLevel.RISKY: (0.95, 0.3, 0.3),
}


@dataclass
class RiskAssessment:
    level: RiskLevel
    score: float = 0.0
    insights: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "level": self.level.value,
            "message": self.level.message,
            "icon": self.level.icon,
            "color": list(self.level.color),
            "score": self.score,
            "insights": list(self.insights),
        }


@dataclass(frozen=True)
class RiskContext:
    """What the scoring rules look at: drinks inside the window and current BAC."""

    events: Tuple[DrinkEvent, ...]
    current_bac: float

    @property
    def double_count(self) -> int:
        return sum(1 for e in self.events if e.is_double)

    @property
    def high_alcohol_count(self) -> int:
        return sum(1 for e in self.events if is_high_alcohol(e.name))

    @property
    def mean_interval_minutes(self) -> Optional[float]:
        return mean_interval_minutes(self.events)


def _tiered(value: float, tiers: Sequence[Tuple[float, float]]) -> float:
    """Points for the first (minimum, points) tier that value reaches."""
    for minimum, points in tiers:
        if value >= minimum:
            return points
    return 0.0


def _bac_points(ctx: RiskContext) -> float:
    return _tiered(ctx.current_bac, ((0.08, 40), (0.05, 25), (0.03, 10)))


def _count_points(ctx: RiskContext) -> float:
    return _tiered(len(ctx.events), ((5, 25), (3, 15), (2, 5)))


def _pace_points(ctx: RiskContext) -> float:
    minutes = ctx.mean_interval_minutes
    if minutes is None:
        return 0.0
    for limit, points in ((15, 20), (30, 10), (45, 5)):
        if minutes < limit:
            return points
    return 0.0


def _double_points(ctx: RiskContext) -> float:
    return _tiered(ctx.double_count, ((2, 10), (1, 5)))


def _high_alcohol_points(ctx: RiskContext) -> float:
    return _tiered(ctx.high_alcohol_count, ((2, 5),))


# Evaluated in order; add a rule here to add a factor.
RISK_FACTORS: List[Tuple[str, Callable[[RiskContext], float]]] = [
    ("bac_level", _bac_points),
    ("drink_count", _count_points),
    ("pace", _pace_points),
    ("doubles", _double_points),
    ("high_alcohol", _high_alcohol_points),
]


def is_high_alcohol(name: str) -> bool:
    return any(keyword in name for keyword in HIGH_ALCOHOL_DRINKS)


def mean_interval_minutes(events: Sequence[DrinkEvent]) -> Optional[float]:
    """Average gap between consecutive drinks in minutes, or None for fewer than 2."""
    if len(events) < 2:
        return None
    ordered = sorted(events, key=lambda e: e.timestamp, reverse=True)
    total = sum(
        (newer.timestamp - older.timestamp).total_seconds()
        for newer, older in zip(ordered, ordered[1:])
    )
    return total / (len(ordered) - 1) / 60.0


def recent_events(
    events: Sequence[DrinkEvent],
    time_window: timedelta = TIME_WINDOW,
    now: Optional[datetime] = None,
) -> Tuple[DrinkEvent, ...]:
    now = now or datetime.now(timezone.utc)
    return tuple(e for e in events if now - e.timestamp <= time_window)


def score_breakdown(ctx: RiskContext) -> List[Tuple[str, float]]:
    return [(name, rule(ctx)) for name, rule in RISK_FACTORS]


def risk_score(
    events: Sequence[DrinkEvent],
    current_bac: float,
    time_window: timedelta = TIME_WINDOW,
    now: Optional[datetime] = None,
) -> float:
    recent = recent_events(events, time_window, now)
    if not recent:
        return 0.0
    return float(sum(points for _, points in score_breakdown(RiskContext(recent, current_bac))))


def level_for_score(score: float) -> RiskLevel:
    if score >= RISKY_SCORE:
        return RiskLevel.RISKY
    if score >= CAUTION_SCORE:
        return RiskLevel.CAUTION
    return RiskLevel.SAFE


def insights(
    events: Sequence[DrinkEvent],
    current_bac: float,
    now: Optional[datetime] = None,
) -> List[str]:
    """Advisory strings for the last 3 hours, in a fixed order."""
    recent = recent_events(events, TIME_WINDOW, now)
    if not recent:
        return []

    out: List[str] = []
    minutes = mean_interval_minutes(recent)
    if minutes is not None and int(minutes) < FAST_PACE_INSIGHT_MINUTES:
        out.append(INSIGHT_FAST_PACE)

    if sum(1 for e in recent if e.is_double) >= 2:
        out.append(INSIGHT_MULTIPLE_DOUBLES)

    if current_bac >= LEGAL_LIMIT_BAC:
        out.append(INSIGHT_ABOVE_LIMIT)
    elif current_bac >= APPROACHING_LIMIT_BAC:
        out.append(INSIGHT_APPROACHING_LIMIT)
    return out


def classify(
    events: Sequence[DrinkEvent],
    current_bac: float,
    time_window: timedelta = TIME_WINDOW,
    now: Optional[datetime] = None,
) -> RiskAssessment:
    """Score recent drinks and return the risk level with insights."""
    now = now or datetime.now(timezone.utc)
    recent = recent_events(events, time_window, now)
    if not recent:
        return RiskAssessment(RiskLevel.SAFE)

    score = risk_score(recent, current_bac, time_window, now)
    return RiskAssessment(level_for_score(score), score, insights(events, current_bac, now))
