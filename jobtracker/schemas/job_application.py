from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from typing import Optional, List

from jobtracker.models.job_application import ApplicationStatus

REQUIRED_MESSAGES = {
    "title": "Job title is required",
    "company": "Company name is required",
    "applied_date": "Applied date is required",
    "status": "Status is required",
}

INVALID_MESSAGES = {
    "applied_date": "Applied date must be a valid date",
    "deadline": "Deadline must be a valid date",
    "status": "Status is invalid",
}


def _clean_required(value, field: str):
    if value is None:
        raise ValueError(REQUIRED_MESSAGES[field])
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError(REQUIRED_MESSAGES[field])
    return value


def _clean_notes(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def messages_by_field(exc: ValidationError) -> dict[str, str]:
    """First error per field, worded for a person rather than a parser."""
    out: dict[str, str] = {}
    for err in exc.errors():
        loc = err.get("loc") or ()
        field = str(loc[-1]) if loc else ""
        if field in out:
            continue
        if err.get("type") == "missing":
            out[field] = REQUIRED_MESSAGES.get(field, str(err.get("msg")))
        elif err.get("type") == "value_error":
            out[field] = str(err.get("msg")).removeprefix("Value error, ")
        else:
            out[field] = INVALID_MESSAGES.get(field, str(err.get("msg")))
    return out


class JobApplicationCreate(BaseModel):
    title: str = Field(max_length=255)
    company: str = Field(max_length=255)
    status: ApplicationStatus = ApplicationStatus.APPLIED
    applied_date: date
    deadline: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("title", "company")
    @classmethod
    def _required_text(cls, v, info):
        return _clean_required(v, info.field_name)

    # Runs before date parsing so a blank value reads as missing, not malformed.
    @field_validator("applied_date", mode="before")
    @classmethod
    def _required_date(cls, v, info):
        return _clean_required(v, info.field_name)

    @field_validator("notes")
    @classmethod
    def _notes(cls, v):
        return _clean_notes(v)


class JobApplicationUpdate(BaseModel):
    """Partial update: only the fields present in the payload are applied."""

    title: Optional[str] = Field(default=None, max_length=255)
    company: Optional[str] = Field(default=None, max_length=255)
    status: Optional[ApplicationStatus] = None
    applied_date: Optional[date] = None
    deadline: Optional[date] = None
    notes: Optional[str] = None

    # Validators only run for values that were sent, so an explicit null is a
    # request to clear the field, which required fields don't allow.
    @field_validator("title", "company", "applied_date")
    @classmethod
    def _required(cls, v, info):
        return _clean_required(v, info.field_name)

    @field_validator("status")
    @classmethod
    def _status(cls, v):
        if v is None:
            raise ValueError(REQUIRED_MESSAGES["status"])
        return v

    @field_validator("notes")
    @classmethod
    def _notes(cls, v):
        return _clean_notes(v)


class JobApplicationOut(BaseModel):
    id: int
    title: str
    company: str
    status: ApplicationStatus
    applied_date: date
    deadline: Optional[date] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class JobApplicationPage(BaseModel):
    content: List[JobApplicationOut]
    page_number: int
    page_size: int
    total_elements: int
    total_pages: int
    last: bool


class JobApplicationStats(BaseModel):
    total: int = 0
    applied: int = 0
    screening: int = 0
    interview: int = 0
    offer: int = 0
    accepted: int = 0
    rejected: int = 0
    withdrawn: int = 0


class ApiMessageOut(BaseModel):
    success: bool
    message: str
