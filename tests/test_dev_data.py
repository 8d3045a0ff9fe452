from datetime import date

from jobtracker.models.job_application import ApplicationStatus, JobApplication
from jobtracker.services.dev_data import clear_job_applications, seed_job_applications


def test_seed_then_clear(db_session):
    jobs = seed_job_applications(db_session, 12, today=date(2026, 10, 19), seed=7)
    assert len(jobs) == 12
    assert db_session.query(JobApplication).count() == 12

    statuses = {s.value for s in ApplicationStatus}
    for job in jobs:
        assert job.status in statuses
        assert job.applied_date <= date(2026, 10, 19)
        assert job.deadline is None or job.deadline > job.applied_date

    assert clear_job_applications(db_session) == 12
    assert db_session.query(JobApplication).count() == 0


def test_seed_is_reproducible(db_session):
    a = [(j.title, j.company, j.status) for j in seed_job_applications(db_session, 5, seed=1)]
    clear_job_applications(db_session)
    b = [(j.title, j.company, j.status) for j in seed_job_applications(db_session, 5, seed=1)]
    assert a == b
