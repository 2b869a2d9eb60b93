from __future__ import annotations

import logging
from typing import Any, Optional

from core.config import get_settings
from core.models import Location
from core.store import DocumentStore

logger = logging.getLogger(__name__)

LOCATION_FIELDS: tuple[str, ...] = tuple(Location.__document_fields__)

MOCK_LOCATIONS: list[dict[str, Any]] = [
    {
        "_id": "mock-location-1",
        "name": "Mock Location Alpha",
        "mapLink": "https://maps.example.com/mockalpha",
        "address": "123 Mock St, Mockville, MS",
        "description": "This is a mock location for Alpha.",
        "q": "MockQ Alpha",
        "embedMapLink": "",
        "imageUrl": "https://placehold.co/150x150/png?text=AO+Logo",
        "paxImageUrl": "https://placehold.co/150x150/png?text=PAX+Image",
    },
    {
        "_id": "mock-location-2",
        "name": "Mock Location Bravo",
        "mapLink": "https://maps.example.com/mockbravo",
        "address": "456 Mock Ave, Mocktown, MS",
        "description": "This is a mock location for Bravo.",
        "q": "MockQ Bravo",
        "embedMapLink": "",
        "imageUrl": "https://placehold.co/150x150/png?text=AO+Logo",
        "paxImageUrl": "https://placehold.co/150x150/png?text=PAX+Image",
    },
]


def normalize_location(doc: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {"_id": str(doc.get("_id") or "")}
    for key in LOCATION_FIELDS:
        out[key] = doc.get(key) or ""
    if not out["name"]:
        out["name"] = "Unnamed Location"
    return out


def list_locations(store: DocumentStore) -> list[dict[str, Any]]:
    if get_settings().mock_data:
        logger.debug("locations_mock_data")
        return [dict(loc) for loc in MOCK_LOCATIONS]
    return [normalize_location(doc) for doc in store.locations.find_all() if doc.get("_id")]


def get_location_by_name(store: DocumentStore, name: str) -> Optional[dict[str, Any]]:
    if get_settings().mock_data:
        return next((dict(loc) for loc in MOCK_LOCATIONS if loc["name"] == name), None)
    doc = store.locations.find_one({"name": name})
    return normalize_location(doc) if doc is not None else None
