"""DrinkMate Flask app.

Run from project root:
    python app.py
"""

import logging
import math
import os
from datetime import timedelta
from functools import lru_cache
from typing import Any, List

from flask import Flask, jsonify, request, session as flask_session

from drinkmate import catalog
from drinkmate.app_logging import configure_logging
from drinkmate.calculations import SEX_MALE, SEX_OTHER
from drinkmate.catalog import CatalogEntry
from drinkmate.risk import classify
from drinkmate.session import DEFAULT_WEIGHT_KG, DrinkEvent, Session
from drinkmate.status import format_hours_minutes, recent_drinks, status_text

configure_logging()
logger = logging.getLogger("drinkmate.app")

app = Flask(__name__)
app.config["SECRET_KEY"] = os.environ.get("APP_SECRET_KEY", "dev-only-change-me")
app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
app.config["SESSION_COOKIE_HTTPONLY"] = True
app.config["SESSION_COOKIE_SECURE"] = os.environ.get("SESSION_COOKIE_SECURE", "0") == "1"
app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(days=30)

MIN_WEIGHT_KG = 30.0
MAX_WEIGHT_KG = 250.0
MIN_AMOUNT = 0.5
MAX_AMOUNT = 10.0
AMOUNT_STEP = 0.5
SESSION_KEY = "drink_session"


def _catalog_path() -> str:
    return os.environ.get("CATALOG_PATH", "")


@lru_cache(maxsize=4)
def _load_catalog(path: str) -> List[CatalogEntry]:
    return catalog.load_catalog(path)


def _catalog() -> List[CatalogEntry]:
    path = _catalog_path()
    return _load_catalog(path) if path else catalog.CATALOG


def _parse_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1", "yes", "y", "double"}:
            return True
        if lowered in {"false", "0", "no", "n", "single"}:
            return False
    if isinstance(value, (int, float)):
        return bool(value)
    return default


def _clamp_float(value: Any, default: float, min_value: float, max_value: float) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        parsed = default
    if parsed != parsed:  # NaN
        parsed = default
    return max(min_value, min(max_value, parsed))


def _parse_sex_index(value: Any) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return SEX_MALE
    return parsed if SEX_MALE <= parsed <= SEX_OTHER else SEX_OTHER


def _snap_amount(value: Any) -> float:
    amount = _clamp_float(value, 1.0, MIN_AMOUNT, MAX_AMOUNT)
    # Halves round up: 1.25 -> 1.5, 1.75 -> 2.0.
    return math.floor(amount / AMOUNT_STEP + 0.5) * AMOUNT_STEP


def _empty_state() -> dict[str, Any]:
    return {
        "configured": False,
        "bac_now": 0,
        "time_until_safe_hours": 0,
        "time_until_safe": "00:00",
        "status": status_text(0.0),
        "drink_count": 0,
        "events": [],
        "recent_drinks": [],
        "risk": None,
    }


def _session_to_cookie(model: Session) -> dict[str, Any]:
    return {
        "weight_kg": model.weight_kg,
        "sex_index": model.sex_index,
        "events": [e.to_dict() for e in model.events],
    }


def _session_from_cookie(raw: Any) -> Session | None:
    if not isinstance(raw, dict):
        return None

    weight = _clamp_float(raw.get("weight_kg"), DEFAULT_WEIGHT_KG, MIN_WEIGHT_KG, MAX_WEIGHT_KG)
    sex_index = _parse_sex_index(raw.get("sex_index"))
    events: List[DrinkEvent] = []
    events_raw = raw.get("events", [])
    if isinstance(events_raw, list):
        for item in events_raw:
            if not isinstance(item, dict):
                continue
            try:
                event = DrinkEvent.from_dict(item)
            except (KeyError, TypeError, ValueError):
                logger.warning("Dropping malformed drink event from session cookie")
                continue
            if event.amount > 0 and event.bac >= 0:
                events.append(event)
    return Session.from_events(weight, sex_index, events)


def get_session() -> Session | None:
    return _session_from_cookie(flask_session.get(SESSION_KEY))


def set_session(model: Session | None):
    if model is None:
        flask_session.pop(SESSION_KEY, None)
        return
    flask_session.permanent = True
    flask_session[SESSION_KEY] = _session_to_cookie(model)


def _aggregate(model: Session) -> dict[str, Any]:
    return {
        "bac_now": round(model.bac, 4),
        "time_until_safe_hours": round(model.time_until_safe_hours, 2),
        "time_until_safe": format_hours_minutes(model.time_until_safe_hours),
        "status": status_text(model.bac),
        "drink_count": model.drink_count,
    }


@app.route("/healthz")
def healthz():
    return jsonify({"ok": True})


@app.route("/api/catalog")
def api_catalog():
    entries = _catalog()
    query = request.args.get("q", "", type=str)
    if query.strip():
        flat = [e.to_dict() for e in catalog.search(query, entries)]
    else:
        flat = catalog.list_all_flat(entries)
    return jsonify({"by_category": catalog.list_by_category(entries), "flat": flat, "query": query})


@app.route("/api/setup", methods=["POST"])
def api_setup():
    data = request.get_json(silent=True) or {}
    weight = _clamp_float(data.get("weight_kg"), DEFAULT_WEIGHT_KG, MIN_WEIGHT_KG, MAX_WEIGHT_KG)
    sex_index = _parse_sex_index(data.get("sex_index"))

    model = get_session()
    model = Session(weight_kg=weight, sex_index=sex_index) if model is None else model.with_profile(weight, sex_index)
    set_session(model)
    return jsonify({"ok": True, "weight_kg": weight, "sex_index": sex_index})


@app.route("/api/drink", methods=["POST"])
def api_drink():
    model = get_session()
    if model is None:
        return jsonify({"error": "Set weight and sex first"}), 400

    data = request.get_json(silent=True) or {}
    name = str(data.get("name", "")).strip()
    if not name:
        return jsonify({"error": "name is required"}), 400
    entry = catalog.get_entry(name, _catalog())
    if entry is None:
        return jsonify({"error": f"Unknown drink: {name}"}), 400

    event_id = data.get("id")
    if event_id is not None:
        event_id = str(event_id)
        if model.find(event_id) is None:
            return jsonify({"error": "Drink not found"}), 404

    amount = _snap_amount(data.get("amount"))
    is_double = _parse_bool(data.get("is_double"), default=False)
    model, event = model.log_drink(entry, amount, is_double, event_id=event_id)
    set_session(model)
    logger.info("%s drink %s (%s x%.1f, double=%s)", "Edited" if event_id else "Logged", event.id, event.name, amount, is_double)
    return jsonify({"ok": True, "event": event.to_dict(), **_aggregate(model)})


@app.route("/api/drink/<event_id>", methods=["DELETE"])
def api_drink_delete(event_id: str):
    model = get_session()
    if model is None or model.find(event_id) is None:
        return jsonify({"error": "Drink not found"}), 404

    model = model.remove_event(event_id)
    set_session(model)
    logger.info("Deleted drink %s", event_id)
    return jsonify({"ok": True, **_aggregate(model)})


@app.route("/api/state")
def api_state():
    model = get_session()
    if model is None:
        return jsonify(_empty_state())

    assessment = classify(model.events, model.bac)
    return jsonify({
        "configured": True,
        "weight_kg": model.weight_kg,
        "sex_index": model.sex_index,
        **_aggregate(model),
        "events": [e.to_dict() for e in model.events],
        "recent_drinks": recent_drinks(model),
        "risk": assessment.to_dict(),
    })


@app.route("/api/reset", methods=["POST"])
def api_reset():
    model = get_session()
    if model is None:
        return jsonify({"ok": True})
    set_session(model.reset())
    return jsonify({"ok": True})


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=os.environ.get("FLASK_DEBUG", "0") == "1")
