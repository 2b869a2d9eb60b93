"""Pydantic validation models for all admin data entry points."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from core.errors import ValidationError


def _strip(v):
    return v.strip() if isinstance(v, str) else v


def _require_text(v, field_name: str):
    if not isinstance(v, str) or not v.strip():
        raise ValueError(f"{field_name} is required")
    return v.strip()


def _require_url(v, field_name: str):
    v = _require_text(v, field_name)
    if not (v.startswith("http://") or v.startswith("https://")):
        raise ValueError(f"{field_name} must be an http(s) URL")
    return v


class LocationInput(BaseModel):
    """Full location payload used on create; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    name: str
    mapLink: str
    address: Optional[str] = None
    description: Optional[str] = None
    q: Optional[str] = None
    embedMapLink: Optional[str] = None
    imageUrl: Optional[str] = None
    paxImageUrl: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def name_required(cls, v):
        return _require_text(v, "name")

    @field_validator("mapLink", mode="before")
    @classmethod
    def map_link_is_url(cls, v):
        return _require_url(v, "mapLink")

    @field_validator("address", "description", "q", "embedMapLink", "imageUrl", "paxImageUrl", mode="before")
    @classmethod
    def strip_optional(cls, v):
        return _strip(v)


class LocationPatch(BaseModel):
    """Partial update: only fields present in the payload are applied."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    mapLink: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None
    q: Optional[str] = None
    embedMapLink: Optional[str] = None
    imageUrl: Optional[str] = None
    paxImageUrl: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def name_not_blank(cls, v):
        return _require_text(v, "name")

    @field_validator("mapLink", mode="before")
    @classmethod
    def map_link_is_url(cls, v):
        return _require_url(v, "mapLink")

    @field_validator("address", "description", "q", "embedMapLink", "imageUrl", "paxImageUrl", mode="before")
    @classmethod
    def strip_optional(cls, v):
        return _strip(v)


class RegionInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    region_name: str
    meta_description: Optional[str] = None
    hero_title: Optional[str] = None
    hero_subtitle: Optional[str] = None
    region_city: Optional[str] = None
    region_state: Optional[str] = None
    region_facebook: Optional[str] = None
    region_instagram: Optional[str] = None
    region_linkedin: Optional[str] = None
    region_x_twitter: Optional[str] = None
    region_map_lat: Optional[float] = None
    region_map_lon: Optional[float] = None
    region_map_zoom: Optional[int] = Field(default=None, ge=0)
    region_map_embed_link: Optional[str] = None
    region_logo_url: Optional[str] = None
    region_hero_img_url: Optional[str] = None
    contact_form_url: Optional[str] = None
    fng_form_url: Optional[str] = None

    @field_validator("region_name", mode="before")
    @classmethod
    def region_name_required(cls, v):
        return _require_text(v, "region_name")


class WorkoutInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    locationId: str
    style: Optional[str] = None
    day: str
    time: str
    q: Optional[str] = None
    avgAttendance: Optional[str] = None

    @field_validator("locationId", "day", "time", mode="before")
    @classmethod
    def required_text(cls, v, info):
        return _require_text(v, info.field_name)

    @field_validator("avgAttendance", mode="before")
    @classmethod
    def attendance_as_text(cls, v):
        if v is None or isinstance(v, bool):
            return None if v is None else str(v)
        if isinstance(v, (int, float)):
            return str(v)
        return _strip(v)


def _first_message(exc: PydanticValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid data format."
    err = errors[0]
    loc = ".".join(str(p) for p in err.get("loc", ()))
    msg = str(err.get("msg", "invalid value")).removeprefix("Value error, ")
    return f"Invalid data format. {loc}: {msg}" if loc else f"Invalid data format. {msg}"


def parse_input(model: type[BaseModel], data: Any) -> BaseModel:
    """Validate ``data`` against ``model``, raising the domain ValidationError."""
    if not isinstance(data, dict):
        raise ValidationError("Invalid data format. Expected a JSON object.")
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(_first_message(exc)) from exc
