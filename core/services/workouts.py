from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any, Optional

from core.schedule import occurs_other_day, occurs_tomorrow, sort_workouts
from core.services.locations import get_location_by_name, list_locations
from core.store import DocumentStore

logger = logging.getLogger(__name__)


def list_workouts(store: DocumentStore) -> list[dict[str, Any]]:
    """All workouts in store order; callers sort with ``core.schedule``."""
    return store.workouts.find_all()


def workouts_for_location(store: DocumentStore, location_id: str) -> list[dict[str, Any]]:
    return sort_workouts(store.workouts.find({"locationId": location_id}))


def parse_attendance(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


def to_card(workout: dict[str, Any], locations_by_id: dict[str, dict[str, Any]]) -> dict[str, Any]:
    location = locations_by_id.get(workout.get("locationId") or "", {})
    return {
        "_id": workout.get("_id"),
        "locationId": workout.get("locationId"),
        "ao": location.get("name") or "Unknown Location",
        "mapLink": location.get("mapLink") or "",
        "style": workout.get("style") or "",
        "day": workout.get("day") or "",
        "time": workout.get("time") or "",
        "q": workout.get("q") or "",
        "avgAttendance": parse_attendance(workout.get("avgAttendance")),
    }


def schedule_view(store: DocumentStore, today: int, on_date: Optional[date] = None) -> dict[str, list[dict[str, Any]]]:
    """Workout finder payload: cards for tomorrow and for every other day.

    ``today`` is 0=Sunday..6=Saturday; ``on_date`` (tomorrow's date) turns on
    calendar checks for the irregular recurrences.
    """
    locations_by_id = {loc["_id"]: loc for loc in list_locations(store)}
    cards = [to_card(w, locations_by_id) for w in list_workouts(store)]
    tomorrow = occurs_tomorrow(cards, today, on_date=on_date)
    other = occurs_other_day(cards, today, on_date=on_date)
    logger.debug("schedule_view", extra={"tomorrow": len(tomorrow), "other": len(other)})
    return {"tomorrow": tomorrow, "other": other}


def location_workout_cards(store: DocumentStore, name: str) -> Optional[list[dict[str, Any]]]:
    """Canonically ordered workout cards for the location called ``name``.

    None when no such location exists.
    """
    location = get_location_by_name(store, name)
    if location is None:
        return None
    workouts = workouts_for_location(store, location["_id"])
    return [to_card(w, {location["_id"]: location}) for w in workouts]
