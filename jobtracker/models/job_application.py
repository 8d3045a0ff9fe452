from enum import Enum

from sqlalchemy import Column, Integer, String, Text, Date, DateTime
from sqlalchemy.sql import func

from jobtracker.core.base import Base


class ApplicationStatus(str, Enum):
    """Stages of an application: applied -> screening -> interview -> offer/accepted,
    or rejected/withdrawn at any point."""

    APPLIED = "APPLIED"
    SCREENING = "SCREENING"
    INTERVIEW = "INTERVIEW"
    OFFER = "OFFER"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"


class JobApplication(Base):
    __tablename__ = "job_applications"

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String(255), nullable=False)
    company = Column(String(255), nullable=False)

    status = Column(
        String(50),
        nullable=False,
        default=ApplicationStatus.APPLIED.value,
        server_default=ApplicationStatus.APPLIED.value,
        index=True,
    )
    applied_date = Column(Date, nullable=False, index=True)
    deadline = Column(Date, nullable=True)

    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
