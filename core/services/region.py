from __future__ import annotations

import logging
from typing import Any, Optional

from core.errors import ConfigUnavailable, DuplicateError, StoreUnavailable
from core.models import Region
from core.store import DocumentStore

logger = logging.getLogger(__name__)

REGION_FIELDS: tuple[str, ...] = tuple(Region.__document_fields__)
_NUMERIC_FIELDS = {"region_map_lat", "region_map_lon", "region_map_zoom"}

DEFAULT_REGION: dict[str, Any] = {
    **{key: "" for key in REGION_FIELDS if key not in _NUMERIC_FIELDS},
    "region_map_lat": 0.0,
    "region_map_lon": 0.0,
    "region_map_zoom": 12,
}

MOCK_REGION: dict[str, Any] = {
    **DEFAULT_REGION,
    "region_name": "Mock Region (Fallback)",
    "meta_description": "This is a mock meta description for the region.",
    "hero_title": "Welcome to the Mock Region",
    "hero_subtitle": "The gloom of the morning will be mocked!",
    "region_city": "Mockville",
    "region_state": "MS",
    "region_facebook": "https://facebook.com/mockregion",
    "region_map_lat": 30.123,
    "region_map_lon": -90.123,
    "region_logo_url": "/logo-white.png",
    "region_hero_img_url": "/hero.png",
}


def normalize_region(doc: dict[str, Any]) -> dict[str, Any]:
    """Public region shape: every field present, None replaced by its default."""
    out: dict[str, Any] = {"_id": str(doc.get("_id") or "")}
    for key in REGION_FIELDS:
        value = doc.get(key)
        out[key] = DEFAULT_REGION[key] if value is None else value
    return out


def mock_region_payload() -> dict[str, Any]:
    return {"_id": "", **MOCK_REGION, "is_mock": True}


def get_region(store: DocumentStore) -> dict[str, Any]:
    """Return the singleton region, creating the default record on first read."""
    try:
        region = store.regions.find_one()
        if region is None:
            try:
                region = store.regions.create(dict(DEFAULT_REGION))
                logger.warning("region_default_created", extra={"region_id": region["_id"]})
            except DuplicateError:
                region = store.regions.find_one()
                if region is None:
                    raise ConfigUnavailable("Region configuration is unavailable.") from None
    except StoreUnavailable as exc:
        raise ConfigUnavailable("Region configuration is unavailable.") from exc
    return normalize_region(region)


def read_public_region(store: DocumentStore) -> dict[str, Any]:
    """Open read: the stored region, or the marked mock payload when none exists."""
    region: Optional[dict[str, Any]] = store.regions.find_one()
    if region is None:
        logger.info("region_missing_serving_mock")
        return mock_region_payload()
    return normalize_region(region)


def region_for_display(store: DocumentStore) -> dict[str, Any]:
    """Region for page rendering; never raises on infrastructure failure."""
    try:
        return get_region(store)
    except ConfigUnavailable:
        logger.exception("region_unavailable_using_fallback")
        return mock_region_payload()
