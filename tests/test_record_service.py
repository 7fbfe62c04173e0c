# /tests/test_record_service.py

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from app.models.record_model import Course, Enrollment
from app.services import record_service
from app.services.record_helpers.base_repository import RecordSourceError
from app.services.record_helpers.livingapps_repository import LivingAppsRepository
from app.services.record_helpers.local_csv_repository import LocalCsvRepository
from app.services.record_service import RecordService

APP_IDS = {
    "dozenten": "app_doz",
    "teilnehmer": "app_tn",
    "raeume": "app_raum",
    "kurse": "app_kurs",
    "anmeldungen": "app_anm",
}


# --- Fixtures ---

@pytest.fixture
def repo():
    return LivingAppsRepository(base_url="https://records.example/rest/", api_key="secret", app_ids=APP_IDS, timeout=5)


def _response(payload, status_code=200):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Server Error")
    return resp


@pytest.fixture
def data_dir(tmp_path):
    """A snapshot directory with courses and enrollments only."""
    (tmp_path / "kurse.csv").write_text(
        "record_id,createdat,updatedat,titel,startdatum,preis,max_teilnehmer\n"
        "k1,2026-01-01T10:00:00,,Python,2026-11-02,120.50,12\n"
        "k2,2026-01-02T10:00:00,2026-02-01T10:00:00,Excel,,,\n",
        encoding="utf-8",
    )
    (tmp_path / "anmeldungen.csv").write_text(
        "record_id,createdat,updatedat,kurs,bezahlt\n"
        "a1,2026-01-05T10:00:00,,https://records.example/rest/apps/app_kurs/records/k1,true\n"
        "a2,2026-01-06T10:00:00,,https://records.example/rest/apps/app_kurs/records/k2,false\n"
        "a3,2026-01-07T10:00:00,,,\n",
        encoding="utf-8",
    )
    return tmp_path


# --- Remote Repository ---

def test_remote_reads_keyed_payload(mocker, repo):
    """
    GIVEN: The service answers with an object keyed by record id.
    WHEN:  The courses collection is read.
    THEN:  The ids are injected and the wire names map to the model fields.
    """
    payload = {
        "k1": {"createdat": "2026-01-01T10:00:00", "updatedat": None,
               "fields": {"titel": "Python", "preis": 120.5, "startdatum": "2026-11-02"}},
    }
    mock_get = mocker.patch("app.services.record_helpers.livingapps_repository.requests.get",
                            return_value=_response(payload))

    courses = repo.get_collection("kurse")

    assert len(courses) == 1
    assert isinstance(courses[0], Course)
    assert courses[0].record_id == "k1"
    assert courses[0].fields.title == "Python"
    assert courses[0].fields.price == Decimal("120.5")
    mock_get.assert_called_once_with(
        "https://records.example/rest/apps/app_kurs/records",
        headers={"Accept": "application/json", "X-API-Key": "secret"},
        timeout=5,
    )


def test_remote_reads_list_payload(mocker, repo):
    payload = [{"record_id": "a1", "createdat": "2026-01-01", "fields": {"bezahlt": True}}]
    mocker.patch("app.services.record_helpers.livingapps_repository.requests.get",
                 return_value=_response(payload))

    enrollments = repo.get_collection("anmeldungen")

    assert isinstance(enrollments[0], Enrollment)
    assert enrollments[0].fields.paid is True


def test_remote_http_error_raises_record_source_error(mocker, repo):
    mocker.patch("app.services.record_helpers.livingapps_repository.requests.get",
                 return_value=_response({}, status_code=503))
    with pytest.raises(RecordSourceError) as exc_info:
        repo.get_collection("raeume")
    assert exc_info.value.collection == "raeume"


def test_remote_connection_error_raises_record_source_error(mocker, repo):
    mocker.patch("app.services.record_helpers.livingapps_repository.requests.get",
                 side_effect=requests.ConnectionError("connection refused"))
    with pytest.raises(RecordSourceError, match="connection refused"):
        repo.get_collection("dozenten")


def test_remote_malformed_record_raises_record_source_error(mocker, repo):
    # `createdat` is required by the envelope.
    mocker.patch("app.services.record_helpers.livingapps_repository.requests.get",
                 return_value=_response([{"record_id": "x", "fields": {}}]))
    with pytest.raises(RecordSourceError, match="malformed"):
        repo.get_collection("teilnehmer")


def test_remote_unexpected_payload_type(mocker, repo):
    mocker.patch("app.services.record_helpers.livingapps_repository.requests.get",
                 return_value=_response("nope"))
    with pytest.raises(RecordSourceError, match="unexpected payload"):
        repo.get_collection("kurse")


# --- Local CSV Repository ---

def test_local_reads_courses(data_dir):
    courses = LocalCsvRepository(data_dir=str(data_dir)).get_collection("kurse")

    assert [c.record_id for c in courses] == ["k1", "k2"]
    assert courses[0].fields.price == Decimal("120.50")
    assert courses[0].fields.max_participants == 12
    assert courses[1].fields.start_date is None
    assert courses[1].fields.price is None
    assert courses[1].updatedat == "2026-02-01T10:00:00"


def test_local_empty_cells_are_absent(data_dir):
    enrollments = LocalCsvRepository(data_dir=str(data_dir)).get_collection("anmeldungen")

    assert [e.fields.paid for e in enrollments] == [True, False, None]
    assert enrollments[2].fields.course is None


def test_local_missing_file_is_an_empty_collection(data_dir):
    assert LocalCsvRepository(data_dir=str(data_dir)).get_collection("raeume") == []


def test_local_missing_envelope_columns(tmp_path):
    (tmp_path / "raeume.csv").write_text("raumname,kapazitaet\nA,10\n", encoding="utf-8")
    with pytest.raises(RecordSourceError, match="missing columns"):
        LocalCsvRepository(data_dir=str(tmp_path)).get_collection("raeume")


# --- RecordService ---

def test_record_service_delegates_each_collection(data_dir):
    service = RecordService(repository=LocalCsvRepository(data_dir=str(data_dir)))
    assert len(service.get_all_courses()) == 2
    assert len(service.get_all_enrollments()) == 3
    assert service.get_all_instructors() == []
    assert service.get_all_participants() == []
    assert service.get_all_rooms() == []


def test_record_service_selects_repository_from_config(mocker):
    mocker.patch.object(record_service.config, "RECORD_SOURCE", "local")
    assert isinstance(RecordService().repo, LocalCsvRepository)

    mocker.patch.object(record_service.config, "RECORD_SOURCE", "remote")
    assert isinstance(RecordService().repo, LivingAppsRepository)


def test_record_service_rejects_unknown_source(mocker):
    mocker.patch.object(record_service.config, "RECORD_SOURCE", "ftp")
    with pytest.raises(ValueError, match="Unsupported RECORD_SOURCE"):
        RecordService()


def test_local_payment_flags_follow_the_wire_booleans(tmp_path):
    """CSV text "true"/"false" become booleans; anything else is an unpaid enrollment."""
    (tmp_path / "anmeldungen.csv").write_text(
        "record_id,createdat,updatedat,kurs,bezahlt\n"
        "a1,2026-01-05,,k1,TRUE\n"
        "a2,2026-01-05,,k1,false\n"
        "a3,2026-01-05,,k1,1\n"
        "a4,2026-01-05,,k1,pending\n",
        encoding="utf-8",
    )
    enrollments = LocalCsvRepository(data_dir=str(tmp_path)).get_collection("anmeldungen")

    assert [e.fields.paid for e in enrollments] == [True, False, None, None]
