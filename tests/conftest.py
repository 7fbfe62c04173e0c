"""Shared pytest fixtures for the dashboard tests."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from app.models.record_model import Course, Enrollment, Instructor, Participant, Room

COURSE_URL = "https://my.living-apps.de/rest/apps/6996d3982375c8c0e6b353df/records/"


@pytest.fixture
def make_course():
    """Returns a builder for Course records."""
    def _make(record_id, start_date=None, price=None, title=None):
        return Course(
            record_id=record_id,
            createdat="2026-01-01T00:00:00",
            fields={
                "titel": title or f"Course {record_id}",
                "startdatum": start_date,
                "preis": Decimal(price) if price is not None else None,
            },
        )
    return _make


@pytest.fixture
def make_enrollment():
    """Returns a builder for Enrollment records referencing a course by URL."""
    def _make(record_id, course_id=None, paid=None, course_ref=None):
        reference = course_ref if course_ref is not None else (COURSE_URL + course_id if course_id else None)
        return Enrollment(
            record_id=record_id,
            createdat="2026-01-01T00:00:00",
            fields={"kurs": reference, "bezahlt": paid},
        )
    return _make


@pytest.fixture
def small_roster():
    """Two instructors, three participants and one room."""
    return {
        "instructors": [
            Instructor(record_id="doz1", createdat="2026-01-01", fields={"name": "Anna"}),
            Instructor(record_id="doz2", createdat="2026-01-01", fields={"name": "Markus"}),
        ],
        "participants": [
            Participant(record_id=f"tn{i}", createdat="2026-01-01") for i in range(3)
        ],
        "rooms": [Room(record_id="raum1", createdat="2026-01-01", fields={"kapazitaet": 20})],
    }


@pytest.fixture
def mock_record_service(small_roster):
    """A MagicMock standing in for RecordService, preloaded with the small roster."""
    service = MagicMock()
    service.get_all_instructors.return_value = small_roster["instructors"]
    service.get_all_participants.return_value = small_roster["participants"]
    service.get_all_rooms.return_value = small_roster["rooms"]
    service.get_all_courses.return_value = []
    service.get_all_enrollments.return_value = []
    return service
