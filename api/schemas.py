from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LocationOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    name: str
    mapLink: str = ""
    address: str = ""
    description: str = ""
    q: str = ""
    embedMapLink: str = ""
    imageUrl: str = ""
    paxImageUrl: str = ""


class LocationMutationOut(BaseModel):
    message: str
    location: LocationOut


class LocationDeleteOut(BaseModel):
    message: str
    workoutsDeleted: int


class WorkoutOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    locationId: str
    style: Optional[str] = None
    day: str
    time: str
    q: Optional[str] = None
    avgAttendance: Optional[str] = None


class WorkoutsReplacedOut(BaseModel):
    message: str
    count: int


class WorkoutCardOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    locationId: Optional[str] = None
    ao: str
    mapLink: str = ""
    style: str = ""
    day: str = ""
    time: str = ""
    q: str = ""
    avgAttendance: Optional[float] = None


class ScheduleOut(BaseModel):
    tomorrow: list[WorkoutCardOut]
    other: list[WorkoutCardOut]


class RegionOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default="", alias="_id")
    region_name: str = ""
    meta_description: str = ""
    hero_title: str = ""
    hero_subtitle: str = ""
    region_city: str = ""
    region_state: str = ""
    region_facebook: str = ""
    region_instagram: str = ""
    region_linkedin: str = ""
    region_x_twitter: str = ""
    region_map_lat: float = 0.0
    region_map_lon: float = 0.0
    region_map_zoom: int = 12
    region_map_embed_link: str = ""
    region_logo_url: str = ""
    region_hero_img_url: str = ""
    contact_form_url: str = ""
    fng_form_url: str = ""
    is_mock: bool = False


class RegionUpsertOut(BaseModel):
    message: str
    id: str


class HealthOut(BaseModel):
    status: str
    store: str
