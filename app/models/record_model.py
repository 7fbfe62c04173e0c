# /app/models/record_model.py

"""
Pydantic models for the records served by the remote record-storage service.

Every record shares the same envelope (`record_id`, `createdat`, `updatedat`,
`fields`). The attribute names inside `fields` are English; the wire names
used by the storage service are declared as aliases so the models validate
raw payloads directly while still accepting the Python names.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Field Bags ---

class _FieldBag(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class InstructorFields(_FieldBag):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = Field(default=None, alias="telefon")
    specialty: Optional[str] = Field(default=None, alias="fachgebiet")


class ParticipantFields(_FieldBag):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = Field(default=None, alias="telefon")
    birth_date: Optional[str] = Field(default=None, alias="geburtsdatum", description="YYYY-MM-DD or an ISO string.")


class RoomFields(_FieldBag):
    name: Optional[str] = Field(default=None, alias="raumname")
    building: Optional[str] = Field(default=None, alias="gebaeude")
    capacity: Optional[int] = Field(default=None, alias="kapazitaet")


class CourseFields(_FieldBag):
    title: Optional[str] = Field(default=None, alias="titel")
    description: Optional[str] = Field(default=None, alias="beschreibung")
    start_date: Optional[str] = Field(default=None, alias="startdatum", description="YYYY-MM-DD or an ISO string.")
    end_date: Optional[str] = Field(default=None, alias="enddatum", description="YYYY-MM-DD or an ISO string.")
    max_participants: Optional[int] = Field(default=None, alias="max_teilnehmer")
    price: Optional[Decimal] = Field(default=None, alias="preis")
    # URL references to an instructor and a room record.
    instructor: Optional[str] = Field(default=None, alias="dozent")
    room: Optional[str] = Field(default=None, alias="raum")


class EnrollmentFields(_FieldBag):
    # URL references to a participant and a course record.
    participant: Optional[str] = Field(default=None, alias="teilnehmer")
    course: Optional[str] = Field(default=None, alias="kurs")
    enrollment_date: Optional[str] = Field(default=None, alias="anmeldedatum")
    paid: Optional[bool] = Field(default=None, alias="bezahlt")

    @field_validator("paid", mode="before")
    @classmethod
    def _only_real_booleans(cls, value):
        # Only a JSON boolean is a payment flag; 1, "yes", "pending" etc. count as unpaid.
        if value is True or value is False:
            return value
        return None


# --- Record Envelopes ---

class RecordBase(BaseModel):
    """The envelope shared by all five record types."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    record_id: str = Field(..., description="Unique within its own collection only.")
    createdat: str
    updatedat: Optional[str] = None


class Instructor(RecordBase):
    fields: InstructorFields = Field(default_factory=InstructorFields)


class Participant(RecordBase):
    fields: ParticipantFields = Field(default_factory=ParticipantFields)


class Room(RecordBase):
    fields: RoomFields = Field(default_factory=RoomFields)


class Course(RecordBase):
    fields: CourseFields = Field(default_factory=CourseFields)


class Enrollment(RecordBase):
    fields: EnrollmentFields = Field(default_factory=EnrollmentFields)


# --- Reference Helpers ---

def extract_record_id(reference: Optional[str]) -> Optional[str]:
    """
    Returns the record id encoded in a URL reference (its final path segment),
    or None when the reference is absent or ends without a segment.
    """
    if not reference:
        return None
    candidate = reference.rsplit("/", 1)[-1]
    return candidate or None
