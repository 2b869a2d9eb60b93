import logging
from datetime import date, timedelta
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status

from api.auth import require_admin_forbidden, require_admin_unauthorized
from api.deps import get_store
from api.ratelimit import admin_rate_limit, limiter
from api.schemas import (
    HealthOut,
    LocationDeleteOut,
    LocationMutationOut,
    LocationOut,
    RegionOut,
    RegionUpsertOut,
    ScheduleOut,
    WorkoutCardOut,
    WorkoutOut,
    WorkoutsReplacedOut,
)
from core import db
from core.errors import NotFoundError, ValidationError
from core.schedule import weekday_index
from core.services import admin
from core.services.locations import get_location_by_name, list_locations, normalize_location
from core.services.region import read_public_region
from core.services.workouts import list_workouts, location_workout_cards, schedule_view
from core.store import DocumentStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api")

Store = Annotated[DocumentStore, Depends(get_store)]


@router.get("/health", response_model=HealthOut, tags=["health"])
def health():
    try:
        db.ping()
        store_status = "ok"
    except Exception as exc:
        logger.warning("health_store_unreachable", extra={"error": str(exc)})
        store_status = "unavailable"
    return HealthOut(status="ok", store=store_status)


# -- Region --


@router.get("/region", response_model=RegionOut, tags=["region"])
def get_region(store: Store):
    return read_public_region(store)


@router.put(
    "/region",
    response_model=RegionUpsertOut,
    dependencies=[Depends(require_admin_unauthorized)],
    tags=["region"],
)
@limiter.limit(admin_rate_limit)
def put_region(request: Request, response: Response, store: Store, body: Any = Body(default=None)):
    result = admin.upsert_region(store, body)
    if result.created:
        response.status_code = status.HTTP_201_CREATED
        return RegionUpsertOut(message="Success: Region configuration created successfully!", id=result.id)
    return RegionUpsertOut(message="Success: Region configuration updated successfully.", id=result.id)


# -- Locations --


@router.get("/locations", response_model=list[LocationOut], tags=["locations"])
def get_locations(store: Store):
    return list_locations(store)


@router.get("/locations/{name}", response_model=LocationOut, tags=["locations"])
def get_location(name: str, store: Store):
    location = get_location_by_name(store, name)
    if location is None:
        raise NotFoundError("Location not found.")
    return location


@router.get("/locations/{name}/workouts", response_model=list[WorkoutCardOut], tags=["locations"])
def get_location_workouts(name: str, store: Store):
    cards = location_workout_cards(store, name)
    if cards is None:
        raise NotFoundError("Location not found.")
    return cards


@router.post(
    "/locations",
    response_model=LocationMutationOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin_forbidden)],
    tags=["locations"],
)
@limiter.limit(admin_rate_limit)
def post_location(request: Request, response: Response, store: Store, body: Any = Body(default=None)):
    location_id = body.get("_id") if isinstance(body, dict) else None
    if location_id:
        updated = admin.update_location(store, location_id, body)
        response.status_code = status.HTTP_200_OK
        return LocationMutationOut(message="Success: Location updated successfully.", location=normalize_location(updated))
    created = admin.create_location(store, body)
    return LocationMutationOut(message="Success: Location added successfully.", location=normalize_location(created))


@router.put(
    "/locations",
    response_model=LocationMutationOut,
    dependencies=[Depends(require_admin_forbidden)],
    tags=["locations"],
)
@limiter.limit(admin_rate_limit)
def put_location(request: Request, store: Store, body: Any = Body(default=None)):
    location_id = body.get("_id") if isinstance(body, dict) else None
    updated = admin.update_location(store, location_id, body)
    return LocationMutationOut(message="Success: Location updated successfully.", location=normalize_location(updated))


@router.delete(
    "/locations",
    response_model=LocationDeleteOut,
    dependencies=[Depends(require_admin_forbidden)],
    tags=["locations"],
)
@limiter.limit(admin_rate_limit)
def delete_location(request: Request, store: Store, location_id: Optional[str] = Query(default=None, alias="id")):
    result = admin.delete_location(store, location_id)
    return LocationDeleteOut(
        message="Success: Location and its associated workouts deleted successfully.",
        workoutsDeleted=result.workouts_deleted,
    )


# -- Workouts --


@router.get(
    "/workouts",
    response_model=list[WorkoutOut],
    dependencies=[Depends(require_admin_forbidden)],
    tags=["workouts"],
)
def get_workouts(store: Store):
    return list_workouts(store)


@router.post(
    "/workouts",
    response_model=WorkoutsReplacedOut,
    dependencies=[Depends(require_admin_forbidden)],
    tags=["workouts"],
)
@limiter.limit(admin_rate_limit)
def post_workouts(request: Request, store: Store, body: Any = Body(default=None)):
    created = admin.replace_all_workouts(store, body)
    return WorkoutsReplacedOut(message="Success: Workouts saved successfully.", count=len(created))


@router.get("/schedule", response_model=ScheduleOut, tags=["workouts"])
def get_schedule(
    store: Store,
    today: Optional[int] = Query(default=None, ge=0, le=6),
    on: Optional[date] = Query(default=None, alias="date"),
):
    if on is not None:
        if today is not None and today != weekday_index(on):
            raise ValidationError("today does not match the weekday of date.")
        return schedule_view(store, weekday_index(on), on_date=on + timedelta(days=1))
    if today is None:
        today = weekday_index(date.today())
    return schedule_view(store, today)
