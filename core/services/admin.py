"""Password-gated mutations for locations, workouts and the region record.

Every function here assumes the caller has already passed ``check_secret``;
the HTTP layer applies it as a dependency before any store access.
"""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from typing import Any, Optional

from core.errors import ConfigUnavailable, DuplicateError, Forbidden, NotFoundError, RegionSiteError, ValidationError
from core.store import Collections, DocumentStore
from core.validators import LocationInput, LocationPatch, RegionInput, WorkoutInput, parse_input

logger = logging.getLogger(__name__)


def check_secret(
    provided: Optional[str],
    expected: Optional[str],
    denied: type[RegionSiteError] = Forbidden,
) -> None:
    if not expected:
        raise ConfigUnavailable("Server configuration error: Admin password missing.")
    if not provided or not hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8")):
        raise denied()


def create_location(store: DocumentStore, data: Any) -> dict[str, Any]:
    body = parse_input(LocationInput, data)
    try:
        created = store.locations.create(body.model_dump())
    except DuplicateError:
        raise DuplicateError("A location with this name already exists.") from None
    logger.info("location_created", extra={"location_id": created["_id"], "location_name": created["name"]})
    return created


def update_location(store: DocumentStore, location_id: Optional[str], data: Any) -> dict[str, Any]:
    if not location_id:
        raise ValidationError("Location ID is required for update.")
    body = parse_input(LocationPatch, data)
    fields = body.model_dump(exclude_unset=True)
    try:
        updated = store.locations.update_by_id(location_id, fields)
    except DuplicateError:
        raise DuplicateError("A location with this name already exists.") from None
    if updated is None:
        raise NotFoundError("Location not found for update.")
    logger.info("location_updated", extra={"location_id": location_id, "fields": sorted(fields)})
    return updated


@dataclass(frozen=True)
class CascadeDeleteResult:
    location: dict[str, Any]
    workouts_deleted: int


def delete_location(store: DocumentStore, location_id: Optional[str]) -> CascadeDeleteResult:
    """Delete a location and all of its workouts as one transaction."""
    if not location_id:
        raise ValidationError("Location ID is required for deletion.")

    def _cascade(tx: Collections) -> CascadeDeleteResult:
        removed = tx.workouts.delete_many({"locationId": location_id})
        location = tx.locations.delete_by_id(location_id)
        if location is None:
            # raising rolls back the workout deletes above
            raise NotFoundError("Location not found for deletion.")
        return CascadeDeleteResult(location=location, workouts_deleted=removed)

    result = store.with_transaction(_cascade)
    logger.info(
        "location_deleted",
        extra={"location_id": location_id, "workouts_deleted": result.workouts_deleted},
    )
    return result


@dataclass(frozen=True)
class RegionUpsertResult:
    id: str
    created: bool


def upsert_region(store: DocumentStore, data: Any) -> RegionUpsertResult:
    """Merge ``data`` into the singleton region, or create it when absent.

    Fields missing from ``data`` are left untouched on update.
    """
    body = parse_input(RegionInput, data)
    fields = body.model_dump(exclude_unset=True)

    def _upsert(tx: Collections) -> RegionUpsertResult:
        existing = tx.regions.find_one()
        if existing is None:
            created = tx.regions.create(fields)
            return RegionUpsertResult(id=created["_id"], created=True)
        tx.regions.update_by_id(existing["_id"], fields)
        return RegionUpsertResult(id=existing["_id"], created=False)

    try:
        result = store.with_transaction(_upsert)
    except DuplicateError:
        # another writer created the region between our read and insert
        logger.info("region_upsert_retry")
        result = store.with_transaction(_upsert)
    logger.info("region_upserted", extra={"region_id": result.id, "was_created": result.created})
    return result


def replace_all_workouts(store: DocumentStore, items: Any) -> list[dict[str, Any]]:
    """Overwrite the whole workout set with ``items``."""
    if not isinstance(items, list):
        raise ValidationError("Invalid data format. Expected an array of workouts.")
    docs = []
    for idx, item in enumerate(items):
        try:
            docs.append(parse_input(WorkoutInput, item).model_dump())
        except ValidationError as exc:
            raise ValidationError(f"Workout #{idx + 1}: {exc.message}") from exc

    def _replace(tx: Collections) -> list[dict[str, Any]]:
        removed = tx.workouts.delete_many()
        created = [tx.workouts.create(doc) for doc in docs]
        logger.debug("workouts_replace_tx", extra={"removed": removed, "created_count": len(created)})
        return created

    created = store.with_transaction(_replace)
    logger.info("workouts_replaced", extra={"count": len(created)})
    return created
