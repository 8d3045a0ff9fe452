from __future__ import annotations

from datetime import date
from typing import Any, Mapping

from pydantic import BaseModel, ValidationError, field_validator

from jobtracker.models.job_application import ApplicationStatus
from jobtracker.schemas.job_application import JobApplicationCreate, messages_by_field


class JobForm(BaseModel):
    """
    Create/edit form values as entered.

    Everything stays text so a rejected submission can be shown back unchanged;
    `validation_errors` checks the values against the same schema the API uses.
    """

    title: str = ""
    company: str = ""
    status: str = ApplicationStatus.APPLIED.value
    applied_date: str = ""
    deadline: str = ""
    notes: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _as_text(cls, v):
        return "" if v is None else str(v)

    @field_validator("status")
    @classmethod
    def _default_status(cls, v):
        return v or ApplicationStatus.APPLIED.value

    @classmethod
    def blank(cls, today: date | None = None) -> "JobForm":
        return cls(applied_date=(today or date.today()).isoformat())

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "JobForm":
        return cls.model_validate(dict(data))

    def validation_errors(self) -> dict[str, str]:
        try:
            JobApplicationCreate.model_validate(self.to_payload())
        except ValidationError as exc:
            return messages_by_field(exc)
        return {}

    def to_payload(self) -> dict[str, Any]:
        return {
            "title": self.title.strip(),
            "company": self.company.strip(),
            "status": self.status.strip().upper(),
            "applied_date": self.applied_date.strip(),
            "deadline": self.deadline.strip() or None,
            "notes": self.notes.strip() or None,
        }
