from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse

from jobtracker.client import ApiError, JobsClient
from jobtracker.core.config import settings
from jobtracker.dependencies.api_client import get_jobs_client
from jobtracker.models.job_application import ApplicationStatus
from jobtracker.web.filters import ListFilters
from jobtracker.web.flash import flash
from jobtracker.web.forms import JobForm
from jobtracker.web.status import status_label, summarize_stats
from jobtracker.web.templating import render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"], include_in_schema=False)

RECENT_LIMIT = 5
EMPTY_PAGE = {"content": [], "page_number": 0, "total_elements": 0, "total_pages": 0, "last": True}


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=303)


def _back_to_list(request: Request, exc: ApiError) -> RedirectResponse:
    flash(request, exc.message if not exc.is_not_found else "Job application not found", "error")
    return _redirect("/jobs")


@router.get("/")
def dashboard(request: Request, client: JobsClient = Depends(get_jobs_client)):
    stats: dict = {}
    recent: list = []
    error = None
    try:
        stats = client.stats()
        recent = client.list(page=0, size=RECENT_LIMIT, sort_by="created_at", sort_dir="desc")["content"]
    except ApiError as exc:
        error = exc.message

    return render(
        request,
        "dashboard.html",
        {
            "stats": stats,
            "summary": summarize_stats(stats),
            "recent": recent,
            "error": error,
        },
    )


@router.get("/jobs")
def job_list(request: Request, client: JobsClient = Depends(get_jobs_client)):
    filters = ListFilters.from_query(
        request.query_params,
        default_size=settings.DEFAULT_PAGE_SIZE,
        max_size=settings.MAX_PAGE_SIZE,
    )
    page = EMPTY_PAGE
    error = None
    try:
        page = client.list(**filters.to_api_params())
    except ApiError as exc:
        error = exc.message

    return render(request, "jobs/list.html", {"filters": filters, "page": page, "error": error})


def _render_form(
    request: Request,
    form: JobForm,
    *,
    job_id: int | None = None,
    errors: dict | None = None,
    form_error: str | None = None,
    status_code: int = 200,
):
    return render(
        request,
        "jobs/form.html",
        {
            "form": form,
            "job_id": job_id,
            "is_edit": job_id is not None,
            "errors": errors or {},
            "form_error": form_error,
        },
        status_code=status_code,
    )


def _submit_form(request: Request, form: JobForm, submit, *, job_id: int | None = None):
    errors = form.validation_errors()
    if errors:
        return _render_form(request, form, job_id=job_id, errors=errors, status_code=400)

    try:
        submit(form.to_payload())
    except ApiError as exc:
        if exc.is_not_found:
            return _back_to_list(request, exc)
        return _render_form(
            request,
            form,
            job_id=job_id,
            errors=exc.field_errors(),
            form_error=exc.message,
            status_code=exc.status_code,
        )

    flash(request, "Application updated" if job_id is not None else "Application added")
    return _redirect("/jobs")


@router.get("/jobs/new")
def new_job_form(request: Request):
    return _render_form(request, JobForm.blank())


@router.post("/jobs/new")
def create_job(
    request: Request,
    title: str = Form(""),
    company: str = Form(""),
    status: str = Form(ApplicationStatus.APPLIED.value),
    applied_date: str = Form(""),
    deadline: str = Form(""),
    notes: str = Form(""),
    client: JobsClient = Depends(get_jobs_client),
):
    form = JobForm(
        title=title,
        company=company,
        status=status,
        applied_date=applied_date,
        deadline=deadline,
        notes=notes,
    )
    return _submit_form(request, form, client.create)


@router.get("/jobs/{job_id}")
def job_detail(job_id: int, request: Request, client: JobsClient = Depends(get_jobs_client)):
    try:
        job = client.get(job_id)
    except ApiError as exc:
        return _back_to_list(request, exc)
    return render(request, "jobs/detail.html", {"job": job})


@router.get("/jobs/{job_id}/edit")
def edit_job_form(job_id: int, request: Request, client: JobsClient = Depends(get_jobs_client)):
    try:
        job = client.get(job_id)
    except ApiError as exc:
        return _back_to_list(request, exc)
    return _render_form(request, JobForm.from_mapping(job), job_id=job_id)


@router.post("/jobs/{job_id}/edit")
def update_job(
    job_id: int,
    request: Request,
    title: str = Form(""),
    company: str = Form(""),
    status: str = Form(ApplicationStatus.APPLIED.value),
    applied_date: str = Form(""),
    deadline: str = Form(""),
    notes: str = Form(""),
    client: JobsClient = Depends(get_jobs_client),
):
    form = JobForm(
        title=title,
        company=company,
        status=status,
        applied_date=applied_date,
        deadline=deadline,
        notes=notes,
    )
    return _submit_form(request, form, lambda payload: client.update(job_id, payload), job_id=job_id)


@router.post("/jobs/{job_id}/status")
def change_status(
    job_id: int,
    request: Request,
    status: str = Form(""),
    client: JobsClient = Depends(get_jobs_client),
):
    next_status = status.strip().upper()
    if next_status not in {s.value for s in ApplicationStatus}:
        flash(request, "Status is invalid", "error")
        return _redirect(f"/jobs/{job_id}")

    try:
        client.set_status(job_id, next_status)
    except ApiError as exc:
        if exc.is_not_found:
            return _back_to_list(request, exc)
        flash(request, exc.message, "error")
        return _redirect(f"/jobs/{job_id}")

    flash(request, f"Status changed to {status_label(next_status)}")
    return _redirect(f"/jobs/{job_id}")


@router.get("/jobs/{job_id}/delete")
def confirm_delete(job_id: int, request: Request, client: JobsClient = Depends(get_jobs_client)):
    try:
        job = client.get(job_id)
    except ApiError as exc:
        return _back_to_list(request, exc)
    return render(request, "jobs/confirm_delete.html", {"job": job})


@router.post("/jobs/{job_id}/delete")
def delete_job(job_id: int, request: Request, client: JobsClient = Depends(get_jobs_client)):
    try:
        result = client.delete(job_id)
    except ApiError as exc:
        return _back_to_list(request, exc)

    logger.info("Deleted job application %s from the browser client", job_id)
    flash(request, result.get("message") or "Job application deleted")
    return _redirect("/jobs")
