from __future__ import annotations

import importlib
import io
from datetime import datetime

import pytest

from event_checkin.core.constants import XLSX_MIMETYPE


@pytest.mark.parametrize("path", ["/", "/registrants", "/check-in", "/import-registrants", "/export"])
def test_pages_render(client, add_registrant, path):
    add_registrant("Asha Menon", days={1: datetime(2024, 3, 1, 9, 0)})

    resp = client.get(path)

    assert resp.status_code == 200
    assert b"Test Event" in resp.data


def test_dashboard_api(client, add_registrant):
    add_registrant("Asha Menon", days={2: datetime(2024, 3, 2, 9, 0)})
    add_registrant("Rahul Nair", phone="9000000001")

    body = client.get("/api/dashboard").get_json()

    assert body["totalRegistrants"] == 2
    assert body["checkedIn"] == 1
    assert body["percentage"] == 50
    assert body["dailyStats"]["day2"] == {"checkedIn": 1, "percentage": 50}


def test_check_in_then_repeat_is_rejected(client, add_registrant):
    rid = add_registrant("Asha Menon")

    first = client.post("/api/check-in", json={"registrantId": rid, "day": 2})
    assert first.status_code == 200
    body = first.get_json()
    assert body["checkedIn"] is True
    assert body["dailyCheckIns"]["day2"]["checkedIn"] is True
    assert body["dailyCheckIns"]["day2"]["method"] == "ID"
    assert body["dailyCheckIns"]["day1"]["checkedIn"] is False

    again = client.post("/api/check-in", json={"registrantId": rid, "day": 2})
    assert again.status_code == 400
    assert again.get_json() == {"message": "Registrant already checked in"}


def test_check_in_by_email_and_unknown_registrant(client, add_registrant):
    add_registrant("Asha Menon", email="asha@example.org")

    ok = client.post("/api/check-in", json={"email": "ASHA@example.org", "day": 1})
    assert ok.status_code == 200
    assert ok.get_json()["dailyCheckIns"]["day1"]["method"] == "EMAIL"

    missing = client.post("/api/check-in", json={"registrantId": 999, "day": 1})
    assert missing.status_code == 404
    assert missing.get_json()["message"] == "Registrant not found"


def test_check_in_rejects_day_outside_event(client, add_registrant):
    rid = add_registrant("Asha Menon")

    resp = client.post("/api/check-in", json={"registrantId": rid, "day": 4})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Event day must be between 1 and 3"


def test_undo_check_in(client, add_registrant):
    rid = add_registrant("Asha Menon", days={1: datetime(2024, 3, 1, 9, 0)})

    resp = client.post("/api/check-in/undo", json={"registrantId": rid, "day": 1})
    assert resp.status_code == 200
    assert resp.get_json()["checkedIn"] is False

    again = client.post("/api/check-in/undo", json={"registrantId": rid, "day": 1})
    assert again.status_code == 400
    assert again.get_json()["message"] == "Registrant is not checked in"


def test_undo_requires_registrant_id(client):
    resp = client.post("/api/check-in/undo", json={"day": 1})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "registrantId is required"


def test_desk_form_checks_in_by_phone(client, registrants_repo, add_registrant):
    rid = add_registrant("Asha Menon", phone="9876500001")

    resp = client.post("/check-in", data={"identifier": "9876500001", "day": "1"})

    assert resp.status_code == 302
    assert registrants_repo.get_by_id(rid).checked_in_on(1)


def test_create_registrant_api(client, registrants_repo):
    payload = {
        "fullName": "Meera Pillai",
        "email": "Meera@Example.org",
        "phone": "9876500003",
        "type": "interactor",
        "clubName": "IC Ernakulam",
    }

    resp = client.post("/api/registrants", json=payload)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["email"] == "meera@example.org"
    assert body["type"] == "Interactor"
    assert body["checkedIn"] is False

    dup = client.post("/api/registrants", json=payload)
    assert dup.status_code == 400
    assert "already registered" in dup.get_json()["message"]
    assert len(registrants_repo.rows) == 1


def test_list_registrants_api_filters(client, add_registrant):
    add_registrant("Asha Menon", club_name="RC Cochin", days={1: datetime(2024, 3, 1, 9, 0)})
    add_registrant("Rahul Nair", phone="9000000001", club_name="RAC Cochin")

    names = [r["fullName"] for r in client.get("/api/registrants?day=1&status=not_checked_in").get_json()]
    assert names == ["Rahul Nair"]

    bad = client.get("/api/registrants?status=maybe")
    assert bad.status_code == 400


def test_import_from_csv_data(client, registrants_repo):
    csv_text = "Full Name,Phone,Type,Club Name\nAsha Menon,9876500001,Rotarian,RC Cochin\n"

    resp = client.post("/api/import-registrants", json={"csvData": csv_text})

    assert resp.status_code == 200
    assert resp.get_json() == {
        "success": True,
        "imported": 1,
        "skipped": 0,
        "errors": [],
        "logs": ["Successfully imported: Asha Menon"],
    }
    assert len(registrants_repo.rows) == 1


def test_import_from_uploaded_file(client, registrants_repo):
    data = {
        "file": (
            io.BytesIO("\ufeffName,Mobile,Type,Club\nRahul Nair,9876500002,Rotaractor,RAC Cochin\n".encode("utf-8")),
            "registrants.csv",
        )
    }

    resp = client.post("/api/import-registrants", data=data, content_type="multipart/form-data")

    assert resp.status_code == 200
    assert resp.get_json()["imported"] == 1
    assert registrants_repo.find_by_phone("9876500002")[0].full_name == "Rahul Nair"


def test_import_missing_columns_is_an_error(client):
    resp = client.post("/api/import-registrants", json={"csvData": "Name,Email\nA,a@b.co\n"})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Missing required column(s): Phone, Type, Club Name"


def test_export_download(client, add_registrant):
    add_registrant("Asha Menon", days={1: datetime(2024, 3, 1, 9, 0)})

    resp = client.get("/api/export")

    assert resp.status_code == 200
    assert resp.mimetype == XLSX_MIMETYPE
    assert "event-data.xlsx" in resp.headers["Content-Disposition"]
    assert resp.data[:2] == b"PK"


def test_badge_png(client, add_registrant):
    rid = add_registrant("Asha Menon")

    resp = client.get(f"/registrants/{rid}/badge.png")

    assert resp.status_code == 200
    assert resp.mimetype == "image/png"
    assert resp.data[:8] == b"\x89PNG\r\n\x1a\n"
    assert client.get("/registrants/999/badge.png").status_code == 404


def test_unknown_api_route_is_json(client):
    resp = client.get("/api/nothing-here")

    assert resp.status_code == 404
    assert resp.get_json() == {"message": "Not found"}


@pytest.mark.parametrize("target", ["//evil.example/x", "/\\evil.example/x", "https://evil.example/x", "evil.example"])
def test_desk_form_does_not_redirect_off_site(client, add_registrant, target):
    add_registrant("Asha Menon", phone="9876500001")

    resp = client.post("/check-in", data={"identifier": "9876500001", "day": "1", "next": target})

    assert resp.status_code == 302
    assert "evil.example" not in resp.headers["Location"]
    assert resp.headers["Location"].endswith("/check-in?day=1")


def test_desk_form_follows_local_next(client, add_registrant):
    add_registrant("Asha Menon", phone="9876500001")

    resp = client.post("/check-in", data={"identifier": "9876500001", "day": "1", "next": "/registrants?day=1"})

    assert resp.headers["Location"].endswith("/registrants?day=1")


def test_startup_prepares_the_container_connection(monkeypatch, event, registrants_repo, checkins_repo):
    from event_checkin import main
    from event_checkin.container import build_services

    conn = object()
    prepared = []
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(
        main,
        "build_container",
        lambda **_: build_services(event=event, registrants_repo=registrants_repo, checkins_repo=checkins_repo, conn=conn),
    )
    monkeypatch.setattr(main, "_prepare_database", lambda settings, c, database: prepared.append((c, database)))

    main.create_app()

    settings = importlib.import_module("config.testing")
    assert prepared == [(conn, settings.DB_CONFIG["database"])]
