from __future__ import annotations

from conftest import ADMIN_PW


def _pw(value: str = ADMIN_PW) -> dict[str, str]:
    return {"pw": value}


def _add_location(client, name: str = "The Pit", **extra) -> dict:
    res = client.post(
        "/api/locations",
        params=_pw(),
        json={"name": name, "mapLink": f"https://maps.example.com/{name.lower().replace(' ', '-')}", **extra},
    )
    assert res.status_code == 201, res.text
    return res.json()["location"]


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok", "store": "ok"}


def test_request_id_header_is_echoed_or_generated(client):
    res = client.get("/api/health", headers={"X-Request-ID": "req-123"})
    assert res.headers["X-Request-ID"] == "req-123"
    generated = client.get("/api/health").headers["X-Request-ID"]
    assert generated and generated != "req-123"


# -- Region --


def test_region_read_serves_marked_mock_when_absent(client):
    res = client.get("/api/region")
    assert res.status_code == 200
    body = res.json()
    assert body["is_mock"] is True
    assert body["region_name"] == "Mock Region (Fallback)"


def test_region_put_requires_password_with_401(client):
    res = client.put("/api/region", params=_pw("nope"), json={"region_name": "X"})
    assert res.status_code == 401
    assert res.json()["message"].startswith("Error: ")
    assert client.put("/api/region", json={"region_name": "X"}).status_code == 401


def test_region_put_creates_then_updates_single_record(client):
    first = client.put("/api/region", params=_pw(), json={"region_name": "Muletown", "region_city": "Columbia"})
    assert first.status_code == 201
    assert first.json()["message"] == "Success: Region configuration created successfully!"

    second = client.put("/api/region", params=_pw(), json={"region_name": "Muletown South"})
    assert second.status_code == 200
    assert second.json()["id"] == first.json()["id"]

    region = client.get("/api/region").json()
    assert region["region_name"] == "Muletown South"
    assert region["region_city"] == "Columbia"
    assert region["is_mock"] is False
    assert region["_id"] == first.json()["id"]


def test_region_put_validation(client):
    res = client.put("/api/region", params=_pw(), json={"hero_title": "missing name"})
    assert res.status_code == 400
    assert "region_name" in res.json()["message"]


# -- Locations --


def test_locations_listing_is_open(client):
    assert client.get("/api/locations").json() == []
    loc = _add_location(client, address="1 Main St")
    listed = client.get("/api/locations").json()
    assert [item["_id"] for item in listed] == [loc["_id"]]
    assert listed[0]["address"] == "1 Main St"
    assert listed[0]["description"] == ""


def test_location_by_name(client):
    _add_location(client, "The Forge")
    assert client.get("/api/locations/The Forge").json()["name"] == "The Forge"
    missing = client.get("/api/locations/Nowhere")
    assert missing.status_code == 404
    assert missing.json() == {"message": "Error: Location not found."}


def test_location_workouts_are_sorted_cards(client):
    forge = _add_location(client, "The Forge")
    other = _add_location(client, "Elsewhere")
    client.post(
        "/api/workouts",
        params=_pw(),
        json=[
            {"locationId": forge["_id"], "day": "Saturday", "time": "0700", "avgAttendance": "9"},
            {"locationId": other["_id"], "day": "Monday", "time": "0530"},
            {"locationId": forge["_id"], "day": "Tuesday", "time": "0600"},
            {"locationId": forge["_id"], "day": "Tuesday", "time": "0515"},
        ],
    )

    res = client.get("/api/locations/The Forge/workouts")
    assert res.status_code == 200
    cards = res.json()
    assert [(c["day"], c["time"]) for c in cards] == [("Tuesday", "0515"), ("Tuesday", "0600"), ("Saturday", "0700")]
    assert {c["ao"] for c in cards} == {"The Forge"}
    assert cards[2]["avgAttendance"] == 9.0
    assert cards[0]["mapLink"] == forge["mapLink"]

    assert client.get("/api/locations/Nowhere/workouts").status_code == 404


def test_location_mutations_require_password_with_403(client):
    assert client.post("/api/locations", json={"name": "X", "mapLink": "https://x"}).status_code == 403
    assert client.put("/api/locations", params=_pw("bad"), json={"_id": "x"}).status_code == 403
    assert client.delete("/api/locations", params={"id": "x", "pw": "bad"}).status_code == 403
    assert client.get("/api/locations").json() == []


def test_location_create_validation_and_duplicates(client):
    res = client.post("/api/locations", params=_pw(), json={"name": "No Map"})
    assert res.status_code == 400
    assert res.json()["message"].startswith("Error: Invalid data format.")

    _add_location(client, "Same")
    dup = client.post("/api/locations", params=_pw(), json={"name": "Same", "mapLink": "https://x"})
    assert dup.status_code == 409
    assert dup.json()["message"] == "Error: A location with this name already exists."


def test_location_update_paths(client):
    loc = _add_location(client, description="flat")

    assert client.put("/api/locations", params=_pw(), json={"description": "x"}).status_code == 400
    assert client.put("/api/locations", params=_pw(), json={"_id": "missing", "description": "x"}).status_code == 404

    res = client.put("/api/locations", params=_pw(), json={"_id": loc["_id"], "description": "hills"})
    assert res.status_code == 200
    assert res.json()["location"]["description"] == "hills"
    assert res.json()["location"]["name"] == loc["name"]

    # POST carrying an _id is an update
    res = client.post("/api/locations", params=_pw(), json={"_id": loc["_id"], "q": "Tinman"})
    assert res.status_code == 200
    assert res.json()["message"] == "Success: Location updated successfully."
    assert res.json()["location"]["q"] == "Tinman"


def test_location_delete_cascades(client):
    keep = _add_location(client, "Keep")
    drop = _add_location(client, "Drop")
    saved = client.post(
        "/api/workouts",
        params=_pw(),
        json=[
            {"locationId": drop["_id"], "day": "Monday", "time": "05:30 AM–6:15 AM"},
            {"locationId": drop["_id"], "day": "Friday", "time": "06:00 AM–7:00 AM"},
            {"locationId": keep["_id"], "day": "Saturday", "time": "07:00 AM–8:00 AM"},
        ],
    )
    assert saved.status_code == 200

    assert client.delete("/api/locations", params=_pw()).status_code == 400
    assert client.delete("/api/locations", params={"id": "ghost", "pw": ADMIN_PW}).status_code == 404

    res = client.delete("/api/locations", params={"id": drop["_id"], "pw": ADMIN_PW})
    assert res.status_code == 200
    assert res.json()["workoutsDeleted"] == 2

    remaining = client.get("/api/workouts", params=_pw()).json()
    assert [w["locationId"] for w in remaining] == [keep["_id"]]
    assert [loc["name"] for loc in client.get("/api/locations").json()] == ["Keep"]


# -- Workouts --


def test_workouts_listing_is_gated(client):
    assert client.get("/api/workouts").status_code == 403
    assert client.get("/api/workouts", params=_pw()).json() == []


def test_workouts_replace_all(client):
    loc = _add_location(client)
    assert client.post("/api/workouts", params=_pw(), json={"day": "Monday"}).status_code == 400

    first = client.post(
        "/api/workouts",
        params=_pw(),
        json=[{"locationId": loc["_id"], "day": "Monday", "time": "0530", "avgAttendance": 11}],
    )
    assert first.status_code == 200
    assert first.json()["count"] == 1

    second = client.post(
        "/api/workouts",
        params=_pw(),
        json=[
            {"locationId": loc["_id"], "day": "Tuesday", "time": "0600", "style": "Run"},
            {"locationId": loc["_id"], "day": "Thursday", "time": "0600"},
        ],
    )
    assert second.json()["count"] == 2
    workouts = client.get("/api/workouts", params=_pw()).json()
    assert sorted(w["day"] for w in workouts) == ["Thursday", "Tuesday"]

    bad = client.post("/api/workouts", params=_pw(), json=[{"locationId": loc["_id"], "day": "Friday"}])
    assert bad.status_code == 400
    assert "Workout #1" in bad.json()["message"]
    assert len(client.get("/api/workouts", params=_pw()).json()) == 2


# -- Schedule --


def test_schedule_splits_tomorrow_from_other_days(client):
    loc = _add_location(client)
    client.post(
        "/api/workouts",
        params=_pw(),
        json=[
            {"locationId": loc["_id"], "day": "Saturday", "time": "0700", "avgAttendance": "20"},
            {"locationId": loc["_id"], "day": "Every Third Friday", "time": "0545"},
            {"locationId": loc["_id"], "day": "Friday", "time": "0530"},
            {"locationId": loc["_id"], "day": "Monday", "time": "0600"},
        ],
    )

    res = client.get("/api/schedule", params={"today": 4})
    assert res.status_code == 200
    body = res.json()
    assert [c["day"] for c in body["tomorrow"]] == ["Friday", "Every Third Friday"]
    assert [c["day"] for c in body["other"]] == ["Monday", "Saturday"]
    assert body["other"][1]["ao"] == "The Pit"
    assert body["other"][1]["avgAttendance"] == 20.0


def test_schedule_with_calendar_date(client):
    loc = _add_location(client)
    client.post(
        "/api/workouts",
        params=_pw(),
        json=[
            {"locationId": loc["_id"], "day": "Every Third Friday", "time": "0545"},
            {"locationId": loc["_id"], "day": "Friday", "time": "0530"},
        ],
    )
    # Thursday 2026-10-15 -> Friday the 16th is the third Friday
    body = client.get("/api/schedule", params={"date": "2026-10-15"}).json()
    assert [c["day"] for c in body["tomorrow"]] == ["Friday", "Every Third Friday"]

    # Thursday 2026-10-22 -> Friday the 23rd is not
    body = client.get("/api/schedule", params={"date": "2026-10-22"}).json()
    assert [c["day"] for c in body["tomorrow"]] == ["Friday"]


def test_schedule_rejects_bad_weekday(client):
    assert client.get("/api/schedule", params={"today": 7}).status_code == 400
    mismatch = client.get("/api/schedule", params={"today": 1, "date": "2026-10-22"})
    assert mismatch.status_code == 400


# -- Configuration and limits --


def test_missing_admin_password_is_server_error(build_client):
    with build_client({"ADMIN_PASSWORD": ""}) as client:
        res = client.post("/api/locations", params=_pw(), json={"name": "X", "mapLink": "https://x"})
        assert res.status_code == 500
        assert res.json() == {"message": "Error: Server configuration error: Admin password missing."}
        assert client.get("/api/locations").status_code == 200


def test_admin_routes_are_rate_limited(build_client):
    env = {"APP_ENV": "dev", "RATE_LIMIT_ENABLED": "true", "ADMIN_RATE_LIMIT": "2/minute"}
    with build_client(env) as client:
        params = {"id": "ghost", "pw": ADMIN_PW}
        assert client.delete("/api/locations", params=params).status_code == 404
        assert client.delete("/api/locations", params=params).status_code == 404
        limited = client.delete("/api/locations", params=params)
        assert limited.status_code == 429
        assert limited.json()["detail"]["code"] == "RATE_LIMITED"


def test_interactive_docs_hidden_in_production(build_client):
    with build_client({"APP_ENV": "production"}) as client:
        assert client.get("/docs").status_code == 404
        assert client.get("/openapi.json").status_code == 404
        assert client.get("/api/health").status_code == 200


def test_interactive_docs_served_outside_production(client):
    assert client.get("/openapi.json").status_code == 200
