"""Tests for Pydantic input validation models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.errors import ValidationError as InputError
from core.validators import LocationInput, LocationPatch, RegionInput, WorkoutInput, parse_input


# --- LocationInput ---

def test_location_valid_strips_text():
    loc = LocationInput(name="  The Pit ", mapLink=" https://maps.example.com/pit ", address=" 1 Main ")
    assert loc.name == "The Pit"
    assert loc.mapLink == "https://maps.example.com/pit"
    assert loc.address == "1 Main"


def test_location_rejects_non_http_map_link():
    with pytest.raises(ValidationError):
        LocationInput(name="Pit", mapLink="ftp://maps")


def test_location_ignores_unknown_keys():
    loc = LocationInput.model_validate({"name": "Pit", "mapLink": "http://x", "_id": "abc", "extra": 1})
    assert "extra" not in loc.model_dump()


# --- LocationPatch ---

def test_patch_keeps_only_provided_fields():
    patch = LocationPatch.model_validate({"q": "Tinman"})
    assert patch.model_dump(exclude_unset=True) == {"q": "Tinman"}


def test_patch_rejects_blank_name():
    with pytest.raises(ValidationError):
        LocationPatch.model_validate({"name": ""})


# --- RegionInput ---

def test_region_requires_name_and_non_negative_zoom():
    assert RegionInput(region_name="Muletown", region_map_zoom=0).region_map_zoom == 0
    with pytest.raises(ValidationError):
        RegionInput(region_name="Muletown", region_map_zoom=-3)
    with pytest.raises(ValidationError):
        RegionInput.model_validate({"region_city": "Columbia"})


def test_region_coerces_numeric_strings():
    region = RegionInput.model_validate({"region_name": "X", "region_map_lat": "35.6", "region_map_zoom": "11"})
    assert region.region_map_lat == 35.6
    assert region.region_map_zoom == 11


# --- WorkoutInput ---

def test_workout_attendance_becomes_text():
    assert WorkoutInput(locationId="l1", day="Monday", time="0530", avgAttendance=12).avgAttendance == "12"
    assert WorkoutInput(locationId="l1", day="Monday", time="0530", avgAttendance=" 8 ").avgAttendance == "8"
    assert WorkoutInput(locationId="l1", day="Monday", time="0530").avgAttendance is None


def test_workout_allows_values_outside_vocabulary():
    w = WorkoutInput(locationId="l1", day="Someday", time="noon")
    assert w.day == "Someday"


def test_workout_requires_location_day_and_time():
    with pytest.raises(ValidationError):
        WorkoutInput.model_validate({"day": "Monday", "time": "0530"})
    with pytest.raises(ValidationError):
        WorkoutInput.model_validate({"locationId": "l1", "day": " ", "time": "0530"})


# --- parse_input ---

def test_parse_input_wraps_errors_with_field_location():
    with pytest.raises(InputError) as exc_info:
        parse_input(LocationInput, {"name": "Pit"})
    assert exc_info.value.message.startswith("Invalid data format. mapLink:")
    assert exc_info.value.status_code == 400


def test_parse_input_requires_an_object():
    with pytest.raises(InputError):
        parse_input(RegionInput, "region")
