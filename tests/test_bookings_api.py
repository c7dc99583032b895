"""
Tests for the booking endpoints.
"""

import json
from datetime import timedelta
from urllib.parse import unquote

from sqlalchemy.exc import SQLAlchemyError

from salon_booking.domain.bookings.availability import ExistingBooking
from salon_booking.domain.bookings.repository import BookingRepository
from salon_booking.domain.bookings.service import business_today
from salon_booking.models import Booking


def booking_payload(day, time="09:00", **overrides):
    payload = {
        "userInfo": {"name": "Ana Souza", "phone": "(73) 98106-7554"},
        "selectedDate": day.isoformat(),
        "selectedTime": time,
        "totalDuration": 60,
        "serviceNames": ["Manicure"],
        "totalCost": 20,
    }
    payload.update(overrides)
    return payload


def post_booking(client, payload, files=None):
    return client.post("/api/bookings", data={"bookingData": json.dumps(payload)}, files=files)


def add_booking(db, day, start_time, duration_minutes=60):
    db.add(
        Booking(
            booking_date=day,
            start_time=start_time,
            duration_minutes=duration_minutes,
            client_name="Maria",
            client_phone="+5573999990000",
            services=["Manicure"],
            total_cost=20.0,
        )
    )
    db.commit()


class TestListBookings:
    def test_requires_date(self, client):
        response = client.get("/api/bookings")
        assert response.status_code == 400
        assert response.json()["detail"] == "Date parameter is required"

    def test_invalid_date(self, client):
        response = client.get("/api/bookings", params={"date": "2030-13-01"})
        assert response.status_code == 400

    def test_returns_busy_intervals_only(self, client, db_session, open_day):
        add_booking(db_session, open_day, "10:00", 120)
        add_booking(db_session, open_day + timedelta(days=1), "08:00")

        response = client.get("/api/bookings", params={"date": open_day.isoformat()})

        assert response.status_code == 200
        assert response.json() == [{"start_time": "10:00", "duration_minutes": 120}]


def test_busy_intervals_come_back_as_existing_bookings(db_session, open_day):
    add_booking(db_session, open_day, "09:00")

    busy = BookingRepository.get_busy_intervals(db_session, open_day)

    assert busy == [ExistingBooking("09:00", 60, open_day)]


class TestAvailability:
    def test_by_duration(self, client, db_session, open_day):
        add_booking(db_session, open_day, "09:00")

        response = client.get(
            "/api/bookings/availability", params={"date": open_day.isoformat(), "duration": 60}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["closed"] is False
        assert data["duration_minutes"] == 60
        assert "09:00" not in data["slots"]
        assert "09:30" not in data["slots"]
        assert "08:00" in data["slots"]
        assert "10:00" in data["slots"]
        assert data["slots"][-1] == "17:00"

    def test_by_services(self, client, open_day):
        response = client.get(
            "/api/bookings/availability",
            params={"date": open_day.isoformat(), "services": "manicure,spa"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["duration_minutes"] == 120
        assert data["slots"][-1] == "16:00"

    def test_requires_duration_or_services(self, client, open_day):
        response = client.get("/api/bookings/availability", params={"date": open_day.isoformat()})
        assert response.status_code == 400

    def test_unknown_service(self, client, open_day):
        response = client.get(
            "/api/bookings/availability",
            params={"date": open_day.isoformat(), "services": "gel_nails"},
        )
        assert response.status_code == 400

    def test_closed_weekday(self, client, sunday):
        response = client.get(
            "/api/bookings/availability", params={"date": sunday.isoformat(), "duration": 60}
        )

        assert response.status_code == 200
        assert response.json()["closed"] is True
        assert response.json()["slots"] == []

    def test_past_date(self, client):
        yesterday = business_today() - timedelta(days=1)

        response = client.get(
            "/api/bookings/availability", params={"date": yesterday.isoformat(), "duration": 60}
        )

        assert response.json()["closed"] is True
        assert response.json()["slots"] == []


class TestCreateBooking:
    def test_success(self, client, db_session, open_day):
        response = post_booking(client, booking_payload(open_day))

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Booking created successfully"
        assert data["inspirationUrl"] is None
        assert data["booking"]["clientPhone"] == "+5573981067554"
        assert data["booking"]["startTime"] == "09:00"
        assert data["booking"]["services"] == ["Manicure"]

        assert data["whatsappUrl"].startswith("https://wa.me/")
        text = unquote(data["whatsappUrl"].split("?text=", 1)[1])
        assert "*Cliente:* Ana Souza" in text
        assert "*Horário:* 09:00" in text

        assert db_session.query(Booking).count() == 1

    def test_with_inspiration_file(self, client, s3_client, open_day):
        files = {"inspirationFile": ("minha foto.png", b"\x89PNG fake", "image/png")}

        response = post_booking(client, booking_payload(open_day), files=files)

        assert response.status_code == 201
        url = response.json()["inspirationUrl"]
        assert url.startswith("https://media.example.com/inspirations/")
        assert url.endswith("-minha-foto.png")
        assert len(s3_client.objects) == 1

    def test_empty_file_is_ignored(self, client, s3_client, open_day):
        files = {"inspirationFile": ("empty.png", b"", "image/png")}

        response = post_booking(client, booking_payload(open_day), files=files)

        assert response.status_code == 201
        assert response.json()["inspirationUrl"] is None
        assert s3_client.objects == {}

    def test_missing_booking_data(self, client):
        response = client.post("/api/bookings", data={})
        assert response.status_code == 400
        assert response.json()["detail"] == "bookingData field is missing"

    def test_booking_data_not_json(self, client):
        response = client.post("/api/bookings", data={"bookingData": "{not json"})
        assert response.status_code == 400
        assert response.json()["detail"] == "bookingData is not valid JSON"

    def test_invalid_fields(self, client, open_day):
        payload = booking_payload(open_day, time="9am")
        payload["userInfo"]["phone"] = "123"

        response = post_booking(client, payload)

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["message"] == "Missing or invalid booking data"
        assert len(detail["errors"]) == 2

    def test_totals_must_match_catalog(self, client, db_session, open_day):
        response = post_booking(client, booking_payload(open_day, totalCost=5))

        assert response.status_code == 400
        assert db_session.query(Booking).count() == 0

    def test_non_image_inspiration_rejected(self, client, s3_client, open_day):
        files = {"inspirationFile": ("notes.pdf", b"%PDF-1.4", "application/pdf")}

        response = post_booking(client, booking_payload(open_day), files=files)

        assert response.status_code == 400
        assert s3_client.objects == {}

    def test_svg_inspiration_rejected(self, client, s3_client, db_session, open_day):
        svg = b'<svg xmlns="http://www.w3.org/2000/svg"><script>alert(1)</script></svg>'
        files = {"inspirationFile": ("x.svg", svg, "image/svg+xml")}

        response = post_booking(client, booking_payload(open_day), files=files)

        assert response.status_code == 400
        assert s3_client.objects == {}
        assert db_session.query(Booking).count() == 0

    def test_inspiration_key_extension_follows_content_type(self, client, s3_client, open_day):
        files = {"inspirationFile": ("x.html", b"\x89PNG fake", "image/png")}

        response = post_booking(client, booking_payload(open_day), files=files)

        assert response.status_code == 201
        assert response.json()["inspirationUrl"].endswith("-x.png")
        [key] = s3_client.objects
        assert s3_client.objects[key]["ContentType"] == "image/png"

    def test_non_finite_cost_rejected(self, client, db_session, open_day):
        response = post_booking(client, booking_payload(open_day, totalCost=float("nan")))

        assert response.status_code == 400
        assert db_session.query(Booking).count() == 0

    def test_closed_day_rejected(self, client, sunday):
        response = post_booking(client, booking_payload(sunday))
        assert response.status_code == 400

    def test_overlapping_booking_conflicts(self, client, db_session, open_day):
        add_booking(db_session, open_day, "09:00")

        response = post_booking(client, booking_payload(open_day, time="09:30"))

        assert response.status_code == 409
        assert db_session.query(Booking).count() == 1

    def test_back_to_back_booking_allowed(self, client, db_session, open_day):
        add_booking(db_session, open_day, "09:00")

        response = post_booking(client, booking_payload(open_day, time="10:00"))

        assert response.status_code == 201

    def test_off_grid_time_conflicts(self, client, open_day):
        response = post_booking(client, booking_payload(open_day, time="09:15"))
        assert response.status_code == 409

    def test_combo_must_end_by_closing(self, client, open_day):
        combo = {"serviceNames": ["Manicure + Pedicure"], "totalDuration": 120, "totalCost": 40}

        assert post_booking(client, booking_payload(open_day, time="16:30", **combo)).status_code == 409
        assert post_booking(client, booking_payload(open_day, time="16:00", **combo)).status_code == 201

    def test_upload_failure_writes_nothing(self, client, s3_client, db_session, open_day):
        s3_client.fail_put = True
        files = {"inspirationFile": ("nails.jpg", b"jpeg", "image/jpeg")}

        response = post_booking(client, booking_payload(open_day), files=files)

        assert response.status_code == 500
        assert db_session.query(Booking).count() == 0

    def test_database_failure_removes_upload(self, client, s3_client, open_day, monkeypatch):
        def fail(db, **data):
            raise SQLAlchemyError("disk full")

        monkeypatch.setattr(BookingRepository, "create_booking", staticmethod(fail))
        files = {"inspirationFile": ("nails.jpg", b"jpeg", "image/jpeg")}

        response = post_booking(client, booking_payload(open_day), files=files)

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to create booking"
        assert s3_client.objects == {}


class TestAdminBookings:
    def test_requires_token(self, client, open_day):
        response = client.get("/api/bookings/admin", params={"date": open_day.isoformat()})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_rejects_non_bearer_scheme(self, client, open_day):
        response = client.get(
            "/api/bookings/admin",
            params={"date": open_day.isoformat()},
            headers={"Authorization": "Basic dGVzdDp0ZXN0"},
        )
        assert response.status_code == 401

    def test_rejects_wrong_token(self, client, open_day):
        response = client.get(
            "/api/bookings/admin",
            params={"date": open_day.isoformat()},
            headers={"Authorization": "Bearer nope"},
        )
        assert response.status_code == 401

    def test_lists_full_records_escaped(self, client, admin_headers, open_day):
        payload = booking_payload(open_day, time="11:00")
        payload["userInfo"]["name"] = "<b>Ana</b>"
        assert post_booking(client, payload).status_code == 201

        response = client.get(
            "/api/bookings/admin", params={"date": open_day.isoformat()}, headers=admin_headers
        )

        assert response.status_code == 200
        records = response.json()
        assert len(records) == 1
        assert records[0]["clientName"] == "&lt;b&gt;Ana&lt;/b&gt;"
        assert records[0]["clientPhone"] == "+5573981067554"
        assert records[0]["totalCost"] == 20.0
