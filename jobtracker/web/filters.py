from __future__ import annotations

from datetime import date
from typing import Any, Literal, Mapping, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from jobtracker.models.job_application import ApplicationStatus

SORT_OPTIONS: list[tuple[str, str]] = [
    ("applied_date", "Applied Date"),
    ("created_at", "Created Date"),
    ("title", "Title"),
    ("company", "Company"),
    ("status", "Status"),
]
SORT_DIRECTIONS: list[tuple[str, str]] = [("desc", "Descending"), ("asc", "Ascending")]

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class ListFilters(BaseModel):
    """
    State of the list view: filters, sort order and the current page.

    Lives in the page's query string and is handed to the list endpoint
    unchanged. Anything unusable in the query string falls back to its default
    instead of failing the page. The filter form carries no `page`, so
    submitting it starts again at the first page; the paging links keep
    everything else.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    keyword: str = ""
    status: Optional[ApplicationStatus] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    sort_by: Literal["applied_date", "created_at", "title", "company", "status"] = "applied_date"
    sort_dir: Literal["desc", "asc"] = "desc"
    page: int = Field(default=0, ge=0)
    size: Optional[int] = Field(default=None, validate_default=True)

    @field_validator("keyword", "status", "start_date", "end_date", "sort_by", "sort_dir", "page", mode="wrap")
    @classmethod
    def _fallback_to_default(cls, value, handler, info):
        if isinstance(value, str):
            value = value.strip()
            if info.field_name == "status":
                value = value.upper()
            elif info.field_name == "sort_dir":
                value = value.lower()
        try:
            return handler(value)
        except ValidationError:
            return cls.model_fields[info.field_name].default

    @field_validator("size", mode="wrap")
    @classmethod
    def _size_within_bounds(cls, value, handler, info):
        ctx = info.context or {}
        default = ctx.get("default_size", DEFAULT_PAGE_SIZE)
        try:
            size = handler(value)
        except ValidationError:
            return default
        if size is None or not (1 <= size <= ctx.get("max_size", MAX_PAGE_SIZE)):
            return default
        return size

    @classmethod
    def from_query(
        cls,
        params: Mapping[str, Any],
        *,
        default_size: int = DEFAULT_PAGE_SIZE,
        max_size: int = MAX_PAGE_SIZE,
    ) -> "ListFilters":
        return cls.model_validate(
            dict(params),
            context={"default_size": default_size, "max_size": max_size},
        )

    def with_page(self, page: int) -> "ListFilters":
        return self.model_copy(update={"page": max(0, int(page))})

    def to_api_params(self) -> dict[str, Any]:
        return {k: v for k, v in self.model_dump(mode="json").items() if v not in ("", None)}

    def query_string(self) -> str:
        return urlencode(self.to_api_params())

    def url(self, path: str = "/jobs") -> str:
        return f"{path}?{self.query_string()}"

    def page_url(self, page: int, path: str = "/jobs") -> str:
        return self.with_page(page).url(path)
