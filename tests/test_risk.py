"""Tests for risk pattern scoring and insights."""
from datetime import datetime, timedelta, timezone

import pytest

from drinkmate.risk import (
    INSIGHT_ABOVE_LIMIT,
    INSIGHT_APPROACHING_LIMIT,
    INSIGHT_FAST_PACE,
    INSIGHT_MULTIPLE_DOUBLES,
    RISK_FACTORS,
    RiskContext,
    RiskLevel,
    classify,
    insights,
    is_high_alcohol,
    level_for_score,
    mean_interval_minutes,
    recent_events,
    risk_score,
)
from drinkmate.session import DrinkEvent

NOW = datetime(2026, 3, 14, 23, 0, tzinfo=timezone.utc)


def ev(minutes_ago, name="Lager", is_double=False, event_id=None):
    return DrinkEvent(
        id=event_id or f"{name}-{minutes_ago}",
        name=name,
        glyph="",
        amount=1.0,
        is_double=is_double,
        bac=0.0,
        timestamp=NOW - timedelta(minutes=minutes_ago),
    )


def test_no_events_is_safe():
    result = classify([], 0.2, now=NOW)
    assert result.level is RiskLevel.SAFE
    assert result.score == 0
    assert result.insights == []


def test_events_outside_window_are_ignored():
    old = [ev(200, "Vodka", True), ev(190, "Vodka", True), ev(185, "Vodka", True)]
    result = classify(old, 0.15, now=NOW)
    assert result.level is RiskLevel.SAFE
    assert result.insights == []
    assert insights(old, 0.15, now=NOW) == []


def test_window_edges():
    inside = ev(180)
    outside = DrinkEvent(**{**inside.__dict__, "id": "late", "timestamp": NOW - timedelta(hours=3, seconds=1)})
    future = ev(-5)
    assert recent_events([inside, outside, future], now=NOW) == (inside, future)


@pytest.mark.parametrize(
    "score,level",
    [(0, RiskLevel.SAFE), (24, RiskLevel.SAFE), (25, RiskLevel.CAUTION), (49, RiskLevel.CAUTION), (50, RiskLevel.RISKY), (100, RiskLevel.RISKY)],
)
def test_level_boundaries(score, level):
    assert level_for_score(score) is level


def test_bac_alone_at_caution_boundary():
    result = classify([ev(10)], 0.05, now=NOW)
    assert result.score == 25
    assert result.level is RiskLevel.CAUTION


def test_exactly_fifty_is_risky():
    # BAC 25 + three drinks 15 + slow pace 0 + two doubles 10
    events = [ev(0, is_double=True), ev(60, is_double=True), ev(120)]
    result = classify(events, 0.05, now=NOW)
    assert result.score == 50
    assert result.level is RiskLevel.RISKY


def test_forty_five_is_caution():
    events = [ev(0, is_double=True), ev(60), ev(120)]
    assert classify(events, 0.05, now=NOW).score == 45
    assert classify(events, 0.05, now=NOW).level is RiskLevel.CAUTION


def test_twenty_is_safe():
    # BAC 10 + two drinks 5 + 40 minute pace 5
    result = classify([ev(0), ev(40)], 0.03, now=NOW)
    assert result.score == 20
    assert result.level is RiskLevel.SAFE


def test_fast_pace_scores_twenty():
    events = [ev(0), ev(10), ev(20)]
    assert mean_interval_minutes(events) == pytest.approx(10)
    assert risk_score(events, 0.0, now=NOW) == 35


def test_everything_maxed():
    events = [ev(i * 5, "Vodka", True) for i in range(6)]
    result = classify(events, 0.12, now=NOW)
    assert result.score == 100
    assert result.level is RiskLevel.RISKY


def test_high_alcohol_match_is_case_sensitive():
    assert is_high_alcohol("Vodka Red Bull")
    assert is_high_alcohol("Whiskey Sour")
    assert is_high_alcohol("Dirty Martini")
    assert not is_high_alcohol("vodka soda")
    assert not is_high_alcohol("Lager")


def test_high_alcohol_needs_two():
    one = [ev(0, "Rum"), ev(90, "Lager")]
    two = [ev(0, "Rum"), ev(90, "Tequila")]
    assert risk_score(two, 0.0, now=NOW) - risk_score(one, 0.0, now=NOW) == 5


def _points(factor, ctx):
    return dict(RISK_FACTORS)[factor](ctx)


def _non_decreasing(values):
    return all(a <= b for a, b in zip(values, values[1:]))


def test_factors_are_monotone():
    bac = [_points("bac_level", RiskContext((ev(0),), b)) for b in (0, 0.02, 0.03, 0.05, 0.08, 0.3)]
    count = [_points("drink_count", RiskContext(tuple(ev(i * 60) for i in range(n)), 0)) for n in range(7)]
    pace = [_points("pace", RiskContext((ev(0), ev(gap)), 0)) for gap in (90, 45, 44, 30, 29, 15, 14, 1)]
    doubles = [_points("doubles", RiskContext(tuple(ev(i, is_double=i < n) for i in range(3)), 0)) for n in range(4)]
    strong = [_points("high_alcohol", RiskContext(tuple(ev(i, "Gin" if i >= n else "Rum") for i in range(3)), 0)) for n in range(4)]

    assert bac == [0, 0, 10, 25, 40, 40]
    assert count == [0, 0, 5, 15, 15, 25, 25]
    assert pace == [0, 0, 5, 5, 10, 10, 20, 20]
    assert doubles == [0, 5, 10, 10]
    assert strong == [0, 0, 5, 5]
    for series in (bac, count, pace, doubles, strong):
        assert _non_decreasing(series)


def test_total_score_monotone_in_bac():
    events = [ev(0), ev(30)]
    scores = [risk_score(events, b, now=NOW) for b in (0.0, 0.029, 0.03, 0.05, 0.079, 0.08, 0.2)]
    assert _non_decreasing(scores)


def test_insights_order():
    events = [ev(0, is_double=True), ev(5, is_double=True), ev(10)]
    assert insights(events, 0.09, now=NOW) == [INSIGHT_FAST_PACE, INSIGHT_MULTIPLE_DOUBLES, INSIGHT_ABOVE_LIMIT]


def test_insight_pace_uses_whole_minutes():
    just_under = [ev(0), DrinkEvent(**{**ev(0).__dict__, "id": "x", "timestamp": NOW - timedelta(minutes=20, seconds=-30)})]
    at_twenty = [ev(0), DrinkEvent(**{**ev(0).__dict__, "id": "y", "timestamp": NOW - timedelta(minutes=20, seconds=30)})]
    assert insights(just_under, 0.0, now=NOW) == [INSIGHT_FAST_PACE]
    assert insights(at_twenty, 0.0, now=NOW) == []


def test_insights_bac_bands():
    events = [ev(0)]
    assert insights(events, 0.049, now=NOW) == []
    assert insights(events, 0.05, now=NOW) == [INSIGHT_APPROACHING_LIMIT]
    assert insights(events, 0.079, now=NOW) == [INSIGHT_APPROACHING_LIMIT]
    assert insights(events, 0.08, now=NOW) == [INSIGHT_ABOVE_LIMIT]


def test_insights_independent_of_level():
    # 25-minute pace: +10 score but no pace insight.
    events = [ev(0), ev(25), ev(50)]
    result = classify(events, 0.0, now=NOW)
    assert result.level is RiskLevel.CAUTION
    assert result.insights == []


def test_classify_accepts_custom_window():
    events = [ev(0), ev(100)]
    assert classify(events, 0.0, time_window=timedelta(hours=1), now=NOW).score == 0
    assert classify(events, 0.0, now=NOW).score == 5


def test_assessment_to_dict():
    data = classify([ev(0)], 0.09, now=NOW).to_dict()
    assert data["level"] == "Caution"
    assert data["message"] == "Consider slowing down"
    assert data["icon"] == "exclamationmark.triangle.fill"
    assert data["score"] == 40
    assert data["insights"] == [INSIGHT_ABOVE_LIMIT]
    assert data["color"] == [1.0, 0.7, 0.0]
