"""BAC estimator Flask API.

Stateless: every request carries the profile and drink history it wants
estimated. Run from project root:
    python app.py
"""

import logging
import math
import os
from datetime import datetime, timezone
from typing import Any

from flask import Flask, jsonify, request

from bac_estimator.calculations import Profile, Sex, hours_until_sober
from bac_estimator.catalog import list_beverage_types, parse_beverage_type
from bac_estimator.drinks import DrinkEvent
from bac_estimator.estimate import estimate
from bac_estimator.graph import curve_data

logger = logging.getLogger(__name__)

app = Flask(__name__)

MIN_STEP_HOURS = 0.05
DEFAULT_MAX_DRINKS = 200
DEFAULT_MAX_CURVE_HOURS = 48.0


class RequestError(ValueError):
    """Client sent a body we cannot estimate from."""


def _log_level() -> str:
    return os.environ.get("BAC_LOG_LEVEL", "INFO").upper()


def _max_drinks() -> int:
    try:
        return int(os.environ.get("BAC_MAX_DRINKS", DEFAULT_MAX_DRINKS))
    except ValueError:
        return DEFAULT_MAX_DRINKS


def _max_curve_hours() -> float:
    return _clamp_float(os.environ.get("BAC_MAX_CURVE_HOURS"), DEFAULT_MAX_CURVE_HOURS, 1.0, 168.0)


def _clamp_float(value: Any, default: float, min_value: float, max_value: float) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError, OverflowError):
        parsed = default
    if not math.isfinite(parsed):
        parsed = default
    return max(min_value, min(max_value, parsed))


def _optional_float(value: Any, field: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise RequestError(f"{field} must be a number")
    try:
        parsed = float(value)
    except (TypeError, ValueError, OverflowError):
        raise RequestError(f"{field} must be a number")
    if not math.isfinite(parsed):
        raise RequestError(f"{field} must be a finite number")
    return parsed


def _parse_instant(value: Any, field: str) -> datetime:
    if not isinstance(value, str) or not value.strip():
        raise RequestError(f"{field} must be an ISO 8601 timestamp")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise RequestError(f"{field} must be an ISO 8601 timestamp")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _profile_from_body(data: dict[str, Any]) -> Profile:
    raw = data.get("profile")
    if not isinstance(raw, dict):
        raise RequestError("profile is required")
    return Profile(
        weight_kg=_optional_float(raw.get("weight_kg"), "profile.weight_kg"),
        sex=Sex.parse(raw.get("sex")),
    )


def _drinks_from_body(data: dict[str, Any]) -> list[DrinkEvent]:
    raw = data.get("drinks", [])
    if not isinstance(raw, list):
        raise RequestError("drinks must be a list")
    if len(raw) > _max_drinks():
        raise RequestError(f"At most {_max_drinks()} drinks per request")

    drinks: list[DrinkEvent] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise RequestError(f"drinks[{i}] must be an object")
        drinks.append(
            DrinkEvent(
                volume_ml=_optional_float(item.get("volume_ml"), f"drinks[{i}].volume_ml"),
                beverage_type=parse_beverage_type(item.get("type")),
                occurred_at=_parse_instant(item.get("occurred_at"), f"drinks[{i}].occurred_at"),
            )
        )
    return drinks


def _observed_at_from_body(data: dict[str, Any]) -> datetime:
    if data.get("observed_at") is None:
        return datetime.now(timezone.utc)
    return _parse_instant(data.get("observed_at"), "observed_at")


def _parse_body() -> tuple[list[DrinkEvent], Profile, datetime]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise RequestError("JSON object body is required")
    return _drinks_from_body(data), _profile_from_body(data), _observed_at_from_body(data)


@app.errorhandler(RequestError)
def _request_error(exc: RequestError):
    logger.info("rejected %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 400


@app.route("/healthz")
def healthz():
    return jsonify({"ok": True})


@app.route("/api/beverage-types")
def api_beverage_types():
    items = [{"key": key, "name": name, "abv": abv} for key, name, abv in list_beverage_types()]
    return jsonify({"items": items})


@app.route("/api/bac", methods=["POST"])
def api_bac():
    drinks, profile, observed_at = _parse_body()
    result = estimate(drinks, profile, observed_at)
    payload = result.to_dict()
    payload["hours_until_sober"] = round(hours_until_sober(drinks, profile, observed_at), 2)
    payload["drink_count"] = len(drinks)
    payload["observed_at"] = observed_at.isoformat()
    logger.debug("estimate for %d drinks: %s", len(drinks), payload)
    return jsonify(payload)


@app.route("/api/curve", methods=["POST"])
def api_curve():
    drinks, profile, observed_at = _parse_body()
    data = request.get_json(silent=True) or {}
    max_hours = _max_curve_hours()
    step_hours = _clamp_float(data.get("step_hours"), 0.25, MIN_STEP_HOURS, max_hours)
    window = _clamp_float(data.get("max_hours"), 12.0, step_hours, max_hours)
    points = curve_data(drinks, profile, observed_at, step_hours=step_hours, max_hours=window)
    return jsonify({
        "points": [{"t": t.isoformat(), "bac": round(bac, 4)} for t, bac in points],
        "step_hours": step_hours,
        "max_hours": window,
    })


if __name__ == "__main__":
    logging.basicConfig(level=_log_level())
    port = int(os.environ.get("PORT", "5000"))
    app.run(host="0.0.0.0", port=port, debug=os.environ.get("FLASK_DEBUG", "0") == "1")
