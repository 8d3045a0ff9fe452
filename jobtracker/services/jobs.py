from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any

from fastapi import HTTPException
from sqlalchemy import asc, desc, func, or_
from sqlalchemy.orm import Query, Session

from jobtracker.models.job_application import ApplicationStatus, JobApplication

logger = logging.getLogger(__name__)

SORT_FIELDS = {
    "applied_date": JobApplication.applied_date,
    "created_at": JobApplication.created_at,
    "updated_at": JobApplication.updated_at,
    "title": JobApplication.title,
    "company": JobApplication.company,
    "status": JobApplication.status,
    "deadline": JobApplication.deadline,
}


def get_job_or_404(db: Session, job_id: int) -> JobApplication:
    job = db.query(JobApplication).filter(JobApplication.id == job_id).first()
    if not job:
        raise HTTPException(status_code=404, detail=f"Job application not found with id: {job_id}")
    return job


def filter_jobs(
    qry: Query,
    *,
    status: ApplicationStatus | None = None,
    keyword: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> Query:
    if status:
        qry = qry.filter(JobApplication.status == ApplicationStatus(status).value)

    # Text search (title/company)
    if keyword:
        term = str(keyword).strip()
        if term:
            like = f"%{term}%"
            qry = qry.filter(
                or_(
                    JobApplication.title.ilike(like),
                    JobApplication.company.ilike(like),
                )
            )

    if start_date:
        qry = qry.filter(JobApplication.applied_date >= start_date)
    if end_date:
        qry = qry.filter(JobApplication.applied_date <= end_date)

    return qry


def list_jobs_page(
    db: Session,
    *,
    page: int = 0,
    size: int = 10,
    sort_by: str = "applied_date",
    sort_dir: str = "desc",
    **filters: Any,
) -> dict[str, Any]:
    qry = filter_jobs(db.query(JobApplication), **filters)

    total = qry.count()
    total_pages = math.ceil(total / size) if total else 0

    order = asc if str(sort_dir).lower() == "asc" else desc
    column = SORT_FIELDS.get(sort_by, JobApplication.applied_date)
    # id breaks ties so paging is stable when the sort column repeats
    rows = (
        qry.order_by(order(column), order(JobApplication.id))
        .offset(page * size)
        .limit(size)
        .all()
    )

    return {
        "content": rows,
        "page_number": page,
        "page_size": size,
        "total_elements": total,
        "total_pages": total_pages,
        "last": page + 1 >= total_pages,
    }


def job_stats(db: Session) -> dict[str, int]:
    counts = dict(
        db.query(JobApplication.status, func.count(JobApplication.id))
        .group_by(JobApplication.status)
        .all()
    )
    out: dict[str, int] = {"total": sum(counts.values())}
    for status in ApplicationStatus:
        out[status.value.lower()] = int(counts.get(status.value, 0))
    return out


def _column_values(data: dict[str, Any]) -> dict[str, Any]:
    out = dict(data)
    if isinstance(out.get("status"), ApplicationStatus):
        out["status"] = out["status"].value
    return out


def create_job(db: Session, data: dict[str, Any]) -> JobApplication:
    job = JobApplication(**_column_values(data))
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info("Created job application %s (%s at %s)", job.id, job.title, job.company)
    return job


def update_job(db: Session, job: JobApplication, data: dict[str, Any]) -> JobApplication:
    values = _column_values(data)
    if not values:
        return job

    prev_status = job.status
    for k, v in values.items():
        setattr(job, k, v)

    db.commit()
    db.refresh(job)

    if "status" in values and values["status"] != prev_status:
        logger.info("Job application %s status changed %s -> %s", job.id, prev_status, job.status)
    else:
        logger.info("Updated job application %s", job.id)
    return job


def delete_job(db: Session, job: JobApplication) -> None:
    job_id = job.id
    db.delete(job)
    db.commit()
    logger.info("Deleted job application %s", job_id)
