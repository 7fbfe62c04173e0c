# /app/models/dashboard_model.py

# --- Core Imports ---
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

# --- Model Definitions ---

class UpcomingCourse(BaseModel):
    """A course starting today or later, shaped for the "Upcoming Courses" list."""

    recordId: str
    title: Optional[str] = None
    description: Optional[str] = None
    startDate: str = Field(..., description="The raw start date as stored, e.g. 2026-11-02.")
    formattedStartDate: str = Field(..., examples=["02. Nov. 2026"])
    price: Optional[Decimal] = None
    formattedPrice: Optional[str] = Field(default=None, examples=["150,00 €"])


class DashboardSummary(BaseModel):
    """
    Defines the data contract for the dashboard summary. This is the single
    value the aggregation produces from the five record collections.
    """

    instructorCount: int = Field(default=0, description="Number of instructor records.", examples=[6])
    participantCount: int = Field(default=0, description="Number of participant records.", examples=[84])
    roomCount: int = Field(default=0, description="Number of room records.", examples=[4])
    courseCount: int = Field(default=0, description="Number of course records.", examples=[12])
    enrollmentCount: int = Field(default=0, description="Number of enrollment records.", examples=[97])

    paidCount: int = Field(default=0, description="Enrollments whose paid flag is exactly true.", examples=[71])
    unpaidCount: int = Field(default=0, description="Enrollments that are not marked as paid.", examples=[26])

    revenue: Decimal = Field(
        default=Decimal("0"),
        description="Sum of the course prices of all paid enrollments with a resolvable course.",
        examples=["8520.00"]
    )
    formattedRevenue: str = Field(default="0,00 €", examples=["8.520,00 €"])

    paymentRatio: Optional[int] = Field(
        default=None,
        description="Paid enrollments as a whole percentage. Null when there are no enrollments.",
        examples=[73]
    )
    formattedPaymentRatio: str = Field(default="—", examples=["73 %"])

    upcomingCourses: List[UpcomingCourse] = Field(
        default_factory=list,
        description="Up to five courses starting today or later, earliest first."
    )

    @classmethod
    def empty(cls) -> "DashboardSummary":
        """The all-zero value shown while no real summary is available."""
        return cls()


class DashboardStatus(BaseModel):
    """
    The view of the dashboard as the presentation layer consumes it.
    `summary` is always populated: while loading, or when the last run failed,
    it carries the empty summary instead of the last real result.
    """

    loading: bool
    error: Optional[str] = Field(default=None, description="Why the last aggregation run produced no summary.")
    lastUpdated: Optional[str] = Field(default=None, description="ISO timestamp of the last successful run.")
    summary: DashboardSummary


class EntityCount(BaseModel):
    name: str
    count: int


class PaymentSlice(BaseModel):
    name: str
    value: int


class DashboardCharts(BaseModel):
    """Chart series derived from the summary: a bar per collection and a payment pie."""

    entityCounts: List[EntityCount]
    paymentStatus: List[PaymentSlice] = Field(
        default_factory=list,
        description="Empty when there are no enrollments to chart."
    )
