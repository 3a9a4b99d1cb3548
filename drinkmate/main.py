"""
DrinkMate CLI demo. Run from project root: python -m drinkmate.main
Searches the drink catalog, or logs a sample night and prints BAC, time until
safe to drive, and the risk pattern.
"""

import argparse
import logging
import sys
from datetime import datetime, timedelta, timezone

from drinkmate import catalog, risk
from drinkmate.app_logging import configure_logging
from drinkmate.session import Session
from drinkmate.status import describe_event, format_hours_minutes, status_text

logger = logging.getLogger("drinkmate.main")

# (minutes ago, drink name, servings, double)
DEMO_DRINKS = [
    (100, "Lager", 1.0, False),
    (75, "Lager", 1.0, False),
    (50, "Vodka", 1.0, True),
    (30, "Tequila", 1.0, False),
    (10, "Mojito", 1.0, False),
]


def run_search(query: str) -> None:
    matches = catalog.search(query)
    if not matches:
        print(f"No drinks match {query!r}")
        return
    for e in matches:
        print(f"{e.glyph} {e.name:<24} {e.volume_ml:>6.0f} mL  {e.abv * 100:4.1f}%  {e.category}")


def log_demo_drinks(session: Session, now: datetime) -> Session:
    for minutes_ago, name, amount, is_double in DEMO_DRINKS:
        entry = catalog.get_entry(name)
        if entry is None:
            logger.warning("Demo drink %r missing from catalog", name)
            continue
        session, _ = session.log_drink(entry, amount, is_double, now=now - timedelta(minutes=minutes_ago))
    return session


def print_summary(session: Session, now: datetime) -> None:
    if not session.events:
        print("No drinks logged.")
    for e in session.events:
        print(f"  {e.glyph} {describe_event(e):<28} +{e.bac:.3f}%")

    assessment = risk.classify(session.events, session.bac, now=now)
    print(f"BAC: {session.bac:.3f}% ({status_text(session.bac)})")
    print(f"Time until safe to drive: {format_hours_minutes(session.time_until_safe_hours)}")
    print(f"Risk: {assessment.level.value} - {assessment.level.message} (score {assessment.score:.0f})")
    for line in assessment.insights:
        print(f"  * {line}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="DrinkMate: estimate BAC and drinking risk from logged drinks")
    parser.add_argument("--weight", type=float, default=75.0, help="Body weight (kg)")
    parser.add_argument("--sex", type=int, default=0, choices=(0, 1, 2), help="0 male, 1 female, 2 other")
    parser.add_argument("--search", type=str, metavar="QUERY", help="Fuzzy-search the drink catalog")
    parser.add_argument("--demo", action="store_true", help="Log a sample night of drinks before the summary")
    parser.add_argument("--log-level", type=str, default="", help="Logging level (default: LOG_LEVEL or INFO)")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    if args.weight <= 0:
        print("--weight must be positive", file=sys.stderr)
        return 1

    if args.search is not None:
        run_search(args.search)
        return 0

    now = datetime.now(timezone.utc)
    session = Session(weight_kg=args.weight, sex_index=args.sex)
    if args.demo:
        session = log_demo_drinks(session, now)
        print("Demo session: 5 drinks over the last 100 minutes")
    print(f"Weight: {session.weight_kg} kg, r = {session.r}")
    print_summary(session, now)
    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
