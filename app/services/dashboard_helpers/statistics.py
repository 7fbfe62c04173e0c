# /app/services/dashboard_helpers/statistics.py

"""
The pure aggregation logic behind the dashboard summary.

Nothing in this module performs I/O: every function receives the already
fetched record collections and returns plain values, which keeps the
calculations trivially testable.
"""

import math
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

from ...core.config import UPCOMING_COURSES_LIMIT
from ...models.dashboard_model import DashboardSummary, UpcomingCourse
from ...models.record_model import (
    Course,
    Enrollment,
    Instructor,
    Participant,
    Room,
    extract_record_id,
)
from .formatting import format_course_date, format_currency, format_payment_ratio


def _is_paid(enrollment: Enrollment) -> bool:
    # Only an explicit `true` counts; `false` and an absent flag are unpaid.
    return enrollment.fields.paid is True


def count_payments(enrollments: Sequence[Enrollment]) -> Tuple[int, int]:
    """Returns (paid, unpaid). The two counts always add up to len(enrollments)."""
    paid = sum(1 for e in enrollments if _is_paid(e))
    return paid, len(enrollments) - paid


def index_courses(courses: Sequence[Course]) -> Dict[str, Course]:
    """Maps record_id to course, keeping the first course for a duplicated id."""
    index: Dict[str, Course] = {}
    for course in courses:
        index.setdefault(course.record_id, course)
    return index


def resolve_course(reference: Optional[str], course_index: Dict[str, Course]) -> Optional[Course]:
    """Returns the referenced course, or None if the reference is absent, malformed or dangling."""
    course_id = extract_record_id(reference)
    if course_id is None:
        return None
    return course_index.get(course_id)


def calculate_revenue(enrollments: Sequence[Enrollment], courses: Sequence[Course]) -> Decimal:
    """
    Sums the price of the referenced course over every paid enrollment.
    Enrollments whose course cannot be resolved, or whose course has no
    price, contribute nothing.
    """
    course_index = index_courses(courses)
    revenue = Decimal("0")
    for enrollment in enrollments:
        if not _is_paid(enrollment):
            continue
        course = resolve_course(enrollment.fields.course, course_index)
        if course is not None and course.fields.price is not None:
            revenue += course.fields.price
    return revenue


def calculate_payment_ratio(paid: int, total: int) -> Optional[int]:
    """Paid share as a whole percent, rounded half up. None when there is nothing to divide."""
    if total == 0:
        return None
    return math.floor(paid / total * 100 + 0.5)


def select_upcoming_courses(
    courses: Sequence[Course],
    today: Optional[date] = None,
    limit: int = UPCOMING_COURSES_LIMIT
) -> List[Course]:
    """
    Returns at most `limit` courses starting today or later, earliest first.

    Start dates are compared as ISO strings, which orders them chronologically.
    Courses without a start date are excluded, not sorted last.
    """
    today_str = (today or date.today()).isoformat()
    upcoming = [
        c for c in courses
        if c.fields.start_date and c.fields.start_date >= today_str
    ]
    upcoming.sort(key=lambda c: c.fields.start_date)
    return upcoming[:limit]


def _to_upcoming_course(course: Course) -> UpcomingCourse:
    price = course.fields.price
    return UpcomingCourse(
        recordId=course.record_id,
        title=course.fields.title,
        description=course.fields.description,
        startDate=course.fields.start_date,
        formattedStartDate=format_course_date(course.fields.start_date),
        price=price,
        formattedPrice=format_currency(price) if price is not None else None,
    )


def build_summary(
    instructors: Sequence[Instructor],
    participants: Sequence[Participant],
    rooms: Sequence[Room],
    courses: Sequence[Course],
    enrollments: Sequence[Enrollment],
    today: Optional[date] = None
) -> DashboardSummary:
    """Combines the five collections into the dashboard summary."""
    paid, unpaid = count_payments(enrollments)
    revenue = calculate_revenue(enrollments, courses)
    ratio = calculate_payment_ratio(paid, len(enrollments))
    upcoming = select_upcoming_courses(courses, today=today)

    return DashboardSummary(
        instructorCount=len(instructors),
        participantCount=len(participants),
        roomCount=len(rooms),
        courseCount=len(courses),
        enrollmentCount=len(enrollments),
        paidCount=paid,
        unpaidCount=unpaid,
        revenue=revenue,
        formattedRevenue=format_currency(revenue),
        paymentRatio=ratio,
        formattedPaymentRatio=format_payment_ratio(ratio),
        upcomingCourses=[_to_upcoming_course(c) for c in upcoming],
    )
