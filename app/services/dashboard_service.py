# /app/services/dashboard_service.py

# --- Core Imports ---
import asyncio
import logging
from datetime import date, datetime, timezone
from typing import List, NamedTuple, Optional

# Import the Pydantic models to ensure our output matches the data contract.
from ..models.dashboard_model import (
    DashboardCharts,
    DashboardStatus,
    DashboardSummary,
    EntityCount,
    PaymentSlice,
)
from ..models.record_model import Course, Enrollment, Instructor, Participant, Room
# Import the RecordService that performs the actual reads.
from .record_service import RecordService
from .record_helpers.base_repository import RecordSourceError
from .dashboard_helpers.statistics import build_summary

logger = logging.getLogger(__name__)


class DashboardFetchError(Exception):
    """Raised when any one of the five collection reads fails."""


class RecordCollections(NamedTuple):
    instructors: List[Instructor]
    participants: List[Participant]
    rooms: List[Room]
    courses: List[Course]
    enrollments: List[Enrollment]


# --- Core Public Functions ---

async def fetch_collections(records: RecordService) -> RecordCollections:
    """
    Reads all five collections concurrently and returns them together.

    The reads are blocking HTTP/file calls, so each runs in a worker thread.
    The first failure aborts the whole fetch; results of reads that already
    completed are discarded.
    """
    try:
        results = await asyncio.gather(
            asyncio.to_thread(records.get_all_instructors),
            asyncio.to_thread(records.get_all_participants),
            asyncio.to_thread(records.get_all_rooms),
            asyncio.to_thread(records.get_all_courses),
            asyncio.to_thread(records.get_all_enrollments),
        )
    except RecordSourceError as e:
        raise DashboardFetchError(str(e)) from e
    except Exception as e:
        raise DashboardFetchError(f"Unexpected error while reading records: {e}") from e
    return RecordCollections(*results)


async def compute_summary(records: RecordService, today: Optional[date] = None) -> DashboardSummary:
    """Fetches the collections and aggregates them. Raises DashboardFetchError."""
    collections = await fetch_collections(records)
    summary = build_summary(
        collections.instructors,
        collections.participants,
        collections.rooms,
        collections.courses,
        collections.enrollments,
        today=today,
    )
    logger.info(
        f"Dashboard summary computed: {summary.courseCount} courses, "
        f"{summary.enrollmentCount} enrollments ({summary.paidCount} paid), revenue {summary.revenue}"
    )
    return summary


async def load_summary(records: RecordService, today: Optional[date] = None) -> Optional[DashboardSummary]:
    """
    Same as `compute_summary`, but a failed fetch is logged and reported as
    None instead of being raised.
    """
    try:
        return await compute_summary(records, today=today)
    except DashboardFetchError as e:
        logger.error(f"Failed to load dashboard summary: {e}")
        return None


def build_charts(summary: DashboardSummary) -> DashboardCharts:
    """Derives the bar chart (one bar per collection) and the payment pie from a summary."""
    entity_counts = [
        EntityCount(name="Instructors", count=summary.instructorCount),
        EntityCount(name="Participants", count=summary.participantCount),
        EntityCount(name="Rooms", count=summary.roomCount),
        EntityCount(name="Courses", count=summary.courseCount),
        EntityCount(name="Enrollments", count=summary.enrollmentCount),
    ]
    payment_status = []
    if summary.enrollmentCount > 0:
        payment_status = [
            PaymentSlice(name="Paid", value=summary.paidCount),
            PaymentSlice(name="Outstanding", value=summary.unpaidCount),
        ]
    return DashboardCharts(entityCounts=entity_counts, paymentStatus=payment_status)


# --- Process-Local Dashboard State ---

class DashboardState:
    """
    Holds the outcome of the most recent aggregation run for the API.

    Nothing is cached between runs: every refresh repeats the full fan-out.
    While a run is in flight the view reports `loading` and the empty summary,
    but the stored result is only replaced once the run finishes, and only by
    the most recently issued run when refreshes overlap.
    """

    def __init__(self):
        self.summary: Optional[DashboardSummary] = None
        self.error: Optional[str] = None
        self.last_updated: Optional[datetime] = None
        self._in_flight = 0
        self._started = False
        # Sequence number of the most recently issued run.
        self._generation = 0

    @property
    def loading(self) -> bool:
        # Before the first run starts there is nothing to show yet either.
        return self._in_flight > 0 or not self._started

    async def refresh(self, records: RecordService, today: Optional[date] = None) -> DashboardStatus:
        self._started = True
        self._in_flight += 1
        self._generation += 1
        generation = self._generation
        try:
            summary = await compute_summary(records, today=today)
            if generation == self._generation:
                self.summary = summary
                self.error = None
                self.last_updated = datetime.now(timezone.utc)
            else:
                logger.info(f"Discarding dashboard run {generation}, run {self._generation} was issued after it.")
        except DashboardFetchError as e:
            logger.error(f"Failed to load dashboard summary: {e}")
            # A stale failure must not wipe the result of a newer run.
            if generation == self._generation:
                self.summary = None
                self.error = "The dashboard data could not be loaded. Please try again later."
        finally:
            self._in_flight -= 1
        return self.snapshot()

    def snapshot(self) -> DashboardStatus:
        """The presentation view: zeros while loading or when no summary is available."""
        loading = self.loading
        display = self.summary if (self.summary is not None and not loading) else DashboardSummary.empty()
        return DashboardStatus(
            loading=loading,
            error=None if loading else self.error,
            lastUpdated=self.last_updated.isoformat() if self.last_updated else None,
            summary=display,
        )


# A single state object per process, shared by the lifespan task and the router.
dashboard_state = DashboardState()


def get_dashboard_state() -> DashboardState:
    """FastAPI dependency that provides the process-wide dashboard state."""
    return dashboard_state
