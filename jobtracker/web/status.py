from __future__ import annotations

from typing import Any, Mapping

from jobtracker.models.job_application import ApplicationStatus

DEFAULT_STATUS_COLOR = "bg-gray-100 text-gray-800"

STATUS_COLORS: dict[str, str] = {
    ApplicationStatus.APPLIED.value: "bg-blue-100 text-blue-800",
    ApplicationStatus.SCREENING.value: "bg-yellow-100 text-yellow-800",
    ApplicationStatus.INTERVIEW.value: "bg-purple-100 text-purple-800",
    ApplicationStatus.OFFER.value: "bg-green-100 text-green-800",
    ApplicationStatus.ACCEPTED.value: "bg-green-200 text-green-900",
    ApplicationStatus.REJECTED.value: "bg-red-100 text-red-800",
    ApplicationStatus.WITHDRAWN.value: "bg-gray-100 text-gray-800",
}

# (value, label) pairs in lifecycle order, for <select> options.
STATUS_OPTIONS: list[tuple[str, str]] = [(s.value, s.value.title()) for s in ApplicationStatus]


def status_color(status: Any) -> str:
    if isinstance(status, ApplicationStatus):
        status = status.value
    return STATUS_COLORS.get(str(status or "").upper(), DEFAULT_STATUS_COLOR)


def status_label(status: Any) -> str:
    if isinstance(status, ApplicationStatus):
        status = status.value
    return str(status or "").replace("_", " ").title()


def summarize_stats(stats: Mapping[str, Any] | None) -> dict[str, int]:
    """Dashboard card totals derived from the per-status counts."""
    s = {k: int(v or 0) for k, v in (stats or {}).items()}
    return {
        "total": s.get("total", 0),
        "in_progress": s.get("applied", 0) + s.get("screening", 0) + s.get("interview", 0),
        "offers": s.get("offer", 0) + s.get("accepted", 0),
        "rejected": s.get("rejected", 0),
    }
