from __future__ import annotations

import datetime as dt
from uuid import uuid4

from sqlalchemy import DateTime, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def new_id() -> str:
    return uuid4().hex


class Base(DeclarativeBase):
    pass


class Document:
    """Columns shared by every collection.

    ``__document_fields__`` maps the public document key to the mapped
    attribute; keys missing from it never reach or leave the store.
    """

    __document_fields__: dict[str, str] = {}

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)


class Region(Document, Base):
    __tablename__ = "regions"
    __document_fields__ = {
        "region_name": "region_name",
        "meta_description": "meta_description",
        "hero_title": "hero_title",
        "hero_subtitle": "hero_subtitle",
        "region_city": "region_city",
        "region_state": "region_state",
        "region_facebook": "region_facebook",
        "region_instagram": "region_instagram",
        "region_linkedin": "region_linkedin",
        "region_x_twitter": "region_x_twitter",
        "region_map_lat": "region_map_lat",
        "region_map_lon": "region_map_lon",
        "region_map_zoom": "region_map_zoom",
        "region_map_embed_link": "region_map_embed_link",
        "region_logo_url": "region_logo_url",
        "region_hero_img_url": "region_hero_img_url",
        "contact_form_url": "contact_form_url",
        "fng_form_url": "fng_form_url",
    }

    region_name: Mapped[str | None] = mapped_column(String(160))
    meta_description: Mapped[str | None] = mapped_column(Text)
    hero_title: Mapped[str | None] = mapped_column(String(200))
    hero_subtitle: Mapped[str | None] = mapped_column(String(300))
    region_city: Mapped[str | None] = mapped_column(String(120))
    region_state: Mapped[str | None] = mapped_column(String(60))
    region_facebook: Mapped[str | None] = mapped_column(String(500))
    region_instagram: Mapped[str | None] = mapped_column(String(500))
    region_linkedin: Mapped[str | None] = mapped_column(String(500))
    region_x_twitter: Mapped[str | None] = mapped_column(String(500))
    region_map_lat: Mapped[float | None] = mapped_column(Float)
    region_map_lon: Mapped[float | None] = mapped_column(Float)
    region_map_zoom: Mapped[int | None] = mapped_column(Integer)
    region_map_embed_link: Mapped[str | None] = mapped_column(Text)
    region_logo_url: Mapped[str | None] = mapped_column(String(500))
    region_hero_img_url: Mapped[str | None] = mapped_column(String(500))
    contact_form_url: Mapped[str | None] = mapped_column(String(500))
    fng_form_url: Mapped[str | None] = mapped_column(String(500))
    # constant 1 under a unique key: the table holds at most one row
    singleton: Mapped[int] = mapped_column(Integer, default=1, server_default="1", unique=True)


class Location(Document, Base):
    __tablename__ = "locations"
    __document_fields__ = {
        "name": "name",
        "mapLink": "map_link",
        "address": "address",
        "description": "description",
        "q": "q",
        "embedMapLink": "embed_map_link",
        "imageUrl": "image_url",
        "paxImageUrl": "pax_image_url",
    }

    name: Mapped[str] = mapped_column(String(160), unique=True)
    map_link: Mapped[str] = mapped_column(String(500))
    address: Mapped[str | None] = mapped_column(String(300))
    description: Mapped[str | None] = mapped_column(Text)
    q: Mapped[str | None] = mapped_column(String(120))
    embed_map_link: Mapped[str | None] = mapped_column(Text)
    image_url: Mapped[str | None] = mapped_column(String(500))
    pax_image_url: Mapped[str | None] = mapped_column(String(500))


class Workout(Document, Base):
    __tablename__ = "workouts"
    __document_fields__ = {
        "locationId": "location_id",
        "style": "style",
        "day": "day",
        "time": "time",
        "q": "q",
        "avgAttendance": "avg_attendance",
    }

    # Plain reference: deleting a location cascades in core.services.admin, not in the schema
    location_id: Mapped[str] = mapped_column(String(32), index=True)
    style: Mapped[str | None] = mapped_column(String(80))
    day: Mapped[str] = mapped_column(String(80))
    time: Mapped[str] = mapped_column(String(40))
    q: Mapped[str | None] = mapped_column(String(120))
    avg_attendance: Mapped[str | None] = mapped_column(String(20))
