# /app/services/record_service.py

"""
The data source adapter for the dashboard.

`RecordService` exposes exactly one read per record collection. It decides
once, at construction time, whether to read from the remote record-storage
service or from local CSV snapshots, and then simply delegates.
"""

from typing import Generator, List, Optional

from ..core import config
from ..models.record_model import Course, Enrollment, Instructor, Participant, Room
from .record_helpers.base_repository import BaseRecordRepository
from .record_helpers.livingapps_repository import LivingAppsRepository
from .record_helpers.local_csv_repository import LocalCsvRepository


class RecordService:
    def __init__(self, repository: Optional[BaseRecordRepository] = None):
        """
        Initializes the RecordService.
        An explicit repository wins; otherwise RECORD_SOURCE picks between the
        remote service and the local CSV snapshots.
        """
        if repository is not None:
            self.repo = repository
        elif config.RECORD_SOURCE == "local":
            self.repo = LocalCsvRepository()
        elif config.RECORD_SOURCE == "remote":
            self.repo = LivingAppsRepository()
        else:
            raise ValueError(f"Unsupported RECORD_SOURCE '{config.RECORD_SOURCE}', expected 'remote' or 'local'.")

    # --- COLLECTION READS (DELEGATED) ---
    def get_all_instructors(self) -> List[Instructor]: return self.repo.get_collection("dozenten")
    def get_all_participants(self) -> List[Participant]: return self.repo.get_collection("teilnehmer")
    def get_all_rooms(self) -> List[Room]: return self.repo.get_collection("raeume")
    def get_all_courses(self) -> List[Course]: return self.repo.get_collection("kurse")
    def get_all_enrollments(self) -> List[Enrollment]: return self.repo.get_collection("anmeldungen")


# --- DEPENDENCY PROVIDER ---
def get_record_service() -> Generator[RecordService, None, None]:
    """FastAPI dependency that provides a RecordService for the configured source."""
    yield RecordService()
