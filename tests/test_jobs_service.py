from datetime import date

import pytest
from fastapi import HTTPException

from jobtracker.models.job_application import ApplicationStatus
from jobtracker.services import jobs as jobs_service


def _add(db, title="Engineer", company="Acme", status=ApplicationStatus.APPLIED, applied=date(2026, 1, 1)):
    return jobs_service.create_job(
        db,
        {"title": title, "company": company, "status": status, "applied_date": applied},
    )


def test_create_job_stores_status_value(db_session):
    job = _add(db_session, status=ApplicationStatus.OFFER)
    assert job.status == "OFFER"
    assert job.id is not None


def test_get_job_or_404(db_session):
    job = _add(db_session)
    assert jobs_service.get_job_or_404(db_session, job.id).id == job.id

    with pytest.raises(HTTPException) as exc:
        jobs_service.get_job_or_404(db_session, job.id + 100)
    assert exc.value.status_code == 404


def test_list_jobs_page_ties_broken_by_id(db_session):
    same_day = date(2026, 3, 1)
    jobs = [_add(db_session, title=f"Role {i}", applied=same_day) for i in range(4)]

    page = jobs_service.list_jobs_page(db_session, page=0, size=10, sort_by="applied_date", sort_dir="asc")
    assert [j.id for j in page["content"]] == [j.id for j in jobs]

    page_desc = jobs_service.list_jobs_page(db_session, page=0, size=10, sort_by="applied_date", sort_dir="desc")
    assert [j.id for j in page_desc["content"]] == [j.id for j in reversed(jobs)]


def test_list_jobs_page_beyond_end_is_last(db_session):
    _add(db_session)
    page = jobs_service.list_jobs_page(db_session, page=5, size=10)
    assert page["content"] == []
    assert page["total_pages"] == 1
    assert page["last"] is True


def test_job_stats_includes_every_status(db_session):
    _add(db_session, status=ApplicationStatus.WITHDRAWN)
    _add(db_session, status=ApplicationStatus.WITHDRAWN)
    stats = jobs_service.job_stats(db_session)
    assert stats["total"] == 2
    assert stats["withdrawn"] == 2
    assert set(stats) == {"total"} | {s.value.lower() for s in ApplicationStatus}


def test_update_job_logs_status_change(db_session, caplog):
    job = _add(db_session)
    caplog.set_level("INFO", logger="jobtracker.services.jobs")

    jobs_service.update_job(db_session, job, {"status": ApplicationStatus.INTERVIEW})

    assert job.status == "INTERVIEW"
    assert any("APPLIED -> INTERVIEW" in r.getMessage() for r in caplog.records)


def test_delete_job(db_session):
    job = _add(db_session)
    jobs_service.delete_job(db_session, job)
    assert jobs_service.job_stats(db_session)["total"] == 0
