from __future__ import annotations

from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates

from jobtracker.web.filters import SORT_DIRECTIONS, SORT_OPTIONS
from jobtracker.web.flash import pop_flash
from jobtracker.web.status import STATUS_OPTIONS, status_color, status_label

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

NAV_ITEMS: list[tuple[str, str]] = [
    ("/", "Dashboard"),
    ("/jobs", "Applications"),
]

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def _as_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _as_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def short_date(value: Any, default: str = "-") -> str:
    d = _as_date(value)
    if d is None:
        return default
    return f"{d.month}/{d.day}/{d.year}"


def long_date(value: Any, default: str = "Not specified") -> str:
    d = _as_date(value)
    if d is None:
        return default
    return f"{d.strftime('%B')} {d.day}, {d.year}"


def format_datetime(value: Any, default: str = "-") -> str:
    dt = _as_datetime(value)
    if dt is None:
        return default
    # Naive values come from SQLite, which stores UTC without an offset.
    dt = dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt.astimezone(timezone.utc)
    hour = dt.hour % 12 or 12
    suffix = "AM" if dt.hour < 12 else "PM"
    return f"{dt.month}/{dt.day}/{dt.year}, {hour}:{dt.minute:02d}:{dt.second:02d} {suffix} UTC"


def is_active(link: str, current_path: str) -> bool:
    if link == "/":
        return current_path == "/"
    return current_path == link or current_path.startswith(link + "/")


templates.env.filters["short_date"] = short_date
templates.env.filters["long_date"] = long_date
templates.env.filters["datetime"] = format_datetime
templates.env.globals.update(
    status_color=status_color,
    status_label=status_label,
    STATUS_OPTIONS=STATUS_OPTIONS,
    SORT_OPTIONS=SORT_OPTIONS,
    SORT_DIRECTIONS=SORT_DIRECTIONS,
    NAV_ITEMS=NAV_ITEMS,
    is_active=is_active,
)


def render(request: Request, name: str, context: dict[str, Any] | None = None, status_code: int = 200):
    ctx = dict(context or {})
    ctx.setdefault("flash", pop_flash(request))
    return templates.TemplateResponse(request, name, ctx, status_code=status_code)
