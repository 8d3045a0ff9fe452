from datetime import date
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from jobtracker.core.config import settings
from jobtracker.core.database import get_db
from jobtracker.models.job_application import ApplicationStatus
from jobtracker.services import jobs as jobs_service
from jobtracker.schemas.job_application import (
    ApiMessageOut,
    JobApplicationCreate,
    JobApplicationOut,
    JobApplicationPage,
    JobApplicationStats,
    JobApplicationUpdate,
)

router = APIRouter(prefix="/api/jobs", tags=["jobs"])

SortField = Literal["applied_date", "created_at", "updated_at", "title", "company", "status", "deadline"]
# Ids are 64-bit integers; anything larger never reaches the driver.
JobId = Annotated[int, Path(ge=1, le=2**63 - 1)]


@router.post("", response_model=JobApplicationOut, status_code=201)
def create_job(
    payload: JobApplicationCreate,
    db: Session = Depends(get_db),
):
    return jobs_service.create_job(db, payload.model_dump())


@router.get("", response_model=JobApplicationPage)
def list_jobs(
    page: int = Query(default=0, ge=0),
    size: int | None = Query(default=None, ge=1),
    sort_by: SortField = "applied_date",
    sort_dir: Literal["asc", "desc"] = "desc",
    status: ApplicationStatus | None = None,
    keyword: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
):
    size = min(size or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
    return jobs_service.list_jobs_page(
        db,
        page=page,
        size=size,
        sort_by=sort_by,
        sort_dir=sort_dir,
        status=status,
        keyword=keyword,
        start_date=start_date,
        end_date=end_date,
    )


# Declared before "/{job_id}" so "stats" isn't parsed as an id.
@router.get("/stats", response_model=JobApplicationStats)
def get_stats(db: Session = Depends(get_db)):
    return jobs_service.job_stats(db)


@router.get("/{job_id}", response_model=JobApplicationOut)
def get_job(
    job_id: JobId,
    db: Session = Depends(get_db),
):
    return jobs_service.get_job_or_404(db, job_id)


@router.put("/{job_id}", response_model=JobApplicationOut)
def replace_job(
    job_id: JobId,
    payload: JobApplicationCreate,
    db: Session = Depends(get_db),
):
    job = jobs_service.get_job_or_404(db, job_id)
    return jobs_service.update_job(db, job, payload.model_dump())


@router.patch("/{job_id}", response_model=JobApplicationOut)
def update_job(
    job_id: JobId,
    payload: JobApplicationUpdate,
    db: Session = Depends(get_db),
):
    job = jobs_service.get_job_or_404(db, job_id)
    return jobs_service.update_job(db, job, payload.model_dump(exclude_unset=True))


@router.delete("/{job_id}", response_model=ApiMessageOut)
def delete_job(
    job_id: JobId,
    db: Session = Depends(get_db),
):
    job = jobs_service.get_job_or_404(db, job_id)
    jobs_service.delete_job(db, job)
    return {"success": True, "message": "Job application deleted successfully"}
