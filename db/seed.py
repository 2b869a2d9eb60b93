"""Demo data seeder.

Brings the schema to head and fills an empty store with a region record,
two locations and a week of workouts so the public pages have something
to render. Safe to run repeatedly: each step is skipped once its
collection holds data.
"""
from __future__ import annotations

from typing import Any

from alembic import command
from alembic.config import Config

from core.services.admin import create_location, replace_all_workouts, upsert_region
from core.store import DocumentStore

SEED_REGION: dict[str, Any] = {
    "region_name": "Demo Region",
    "meta_description": "Free, peer-led outdoor workouts for men. Rain or shine, heat or cold.",
    "hero_title": "Fitness. Fellowship. Faith.",
    "hero_subtitle": "Find a workout near you and just show up.",
    "region_city": "Columbia",
    "region_state": "TN",
    "region_map_lat": 35.6151,
    "region_map_lon": -87.0353,
    "region_map_zoom": 12,
}

SEED_LOCATIONS: list[dict[str, Any]] = [
    {
        "name": "The Boneyard",
        "mapLink": "https://maps.google.com/?q=Riverwalk+Park",
        "address": "102 Riverside Dr",
        "description": "Open field bootcamp along the river.",
        "q": "Tinman",
    },
    {
        "name": "The Forge",
        "mapLink": "https://maps.google.com/?q=Maury+County+Park",
        "address": "1018 Maury County Park Dr",
        "description": "Track, hills and the occasional coupon.",
        "q": "Sparky",
    },
]

# (location name, day, time, style)
SEED_WORKOUTS: list[tuple[str, str, str, str]] = [
    ("The Boneyard", "Monday", "05:30 AM–6:15 AM", "Bootcamp"),
    ("The Forge", "Tuesday", "05:15 AM–6:00 AM", "Run"),
    ("The Boneyard", "Wednesday", "05:30 AM–6:15 AM", "Bootcamp"),
    ("The Forge", "Thursday", "05:30 AM–6:15 AM", "Ruck"),
    ("The Boneyard", "Friday", "05:30 AM–6:15 AM", "Bootcamp"),
    ("The Forge", "Every Third Friday", "05:45 AM–6:30 AM", "Murph"),
    ("The Boneyard", "All Saturdays Except the Last of the Month", "06:30 AM–7:30 AM", "Bootcamp"),
    ("The Forge", "Saturday", "07:00 AM–8:00 AM", "Ruck"),
]


def run_migrations() -> None:
    cfg = Config("alembic.ini")
    command.upgrade(cfg, "head")


def seed_region(store: DocumentStore) -> bool:
    if store.regions.count():
        return False
    upsert_region(store, dict(SEED_REGION))
    return True


def seed_locations(store: DocumentStore) -> bool:
    if store.locations.count():
        return False
    for loc in SEED_LOCATIONS:
        create_location(store, dict(loc))
    return True


def seed_workouts(store: DocumentStore) -> bool:
    if store.workouts.count():
        return False
    ids = {loc["name"]: loc["_id"] for loc in store.locations.find_all()}
    items = [
        {"locationId": ids[name], "day": day, "time": time, "style": style}
        for name, day, time, style in SEED_WORKOUTS
        if name in ids
    ]
    replace_all_workouts(store, items)
    return True


def main() -> None:
    run_migrations()
    store = DocumentStore()
    seed_region(store)
    seed_locations(store)
    seed_workouts(store)
    print("Seeding complete")


if __name__ == "__main__":
    main()
