from __future__ import annotations

import logging
import random
from datetime import date, timedelta

from sqlalchemy.orm import Session

from jobtracker.models.job_application import ApplicationStatus, JobApplication

logger = logging.getLogger(__name__)

_TITLES = [
    "Backend Engineer",
    "Frontend Developer",
    "Data Engineer",
    "Site Reliability Engineer",
    "Product Designer",
    "Engineering Manager",
]
_COMPANIES = ["Acme", "Globex", "Initech", "Umbrella", "Hooli", "Stark Industries", "Wayne Enterprises"]


def clear_job_applications(db: Session) -> int:
    deleted = db.query(JobApplication).delete(synchronize_session=False)
    db.commit()
    logger.info("Deleted %s job applications", deleted)
    return deleted


def seed_job_applications(db: Session, count: int, *, today: date | None = None, seed: int | None = None) -> list[JobApplication]:
    rng = random.Random(seed)
    today = today or date.today()
    statuses = list(ApplicationStatus)

    jobs: list[JobApplication] = []
    for _ in range(count):
        applied = today - timedelta(days=rng.randint(0, 90))
        deadline = applied + timedelta(days=rng.randint(7, 30)) if rng.random() < 0.5 else None
        jobs.append(
            JobApplication(
                title=rng.choice(_TITLES),
                company=rng.choice(_COMPANIES),
                status=rng.choice(statuses).value,
                applied_date=applied,
                deadline=deadline,
            )
        )
    db.add_all(jobs)
    db.commit()
    logger.info("Seeded %s job applications", len(jobs))
    return jobs
