from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

JOBS_PATH = "/api/jobs"


class ApiError(Exception):
    """Raised when the jobs API answers with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        error: str = "HTTP_ERROR",
        details: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details or {}

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    def field_errors(self) -> dict[str, str]:
        """
        Map request validation errors onto form field names.

        Only the last element of each error's `loc` is used, so
        ("body", "title") becomes "title".
        """
        out: dict[str, str] = {}
        for err in self.details.get("errors") or []:
            loc = err.get("loc") or []
            if not loc:
                continue
            field = str(loc[-1])
            msg = str(err.get("msg") or "Invalid value")
            # pydantic prefixes ValueError messages raised from validators
            out.setdefault(field, msg.removeprefix("Value error, "))
        return out


class ApiUnavailableError(ApiError):
    """Raised when the jobs API can't be reached at all."""

    def __init__(self, message: str = "Job applications service is unavailable") -> None:
        super().__init__(503, message, error="SERVICE_UNAVAILABLE")


def clean_params(params: dict[str, Any]) -> dict[str, Any]:
    """Drop unset filters so the API applies its own defaults."""
    out: dict[str, Any] = {}
    for k, v in params.items():
        if v is None:
            continue
        if isinstance(v, str) and not v.strip():
            continue
        out[k] = v
    return out


class JobsClient:
    """
    Thin client for the job applications REST API.

    Every method returns the decoded JSON body. Non-2xx responses raise
    ApiError built from the API's error envelope; transport failures raise
    ApiUnavailableError.
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        timeout: float = 10.0,
        request_id: str | None = None,
        http: httpx.Client | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if request_id:
            headers["X-Request-ID"] = request_id
        self.request_id = request_id
        self._owns_http = http is None
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self._headers = headers

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "JobsClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._http.request(method, path, headers=self._headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("Jobs API %s %s failed (request_id=%s): %s", method, path, self.request_id, exc)
            raise ApiUnavailableError() from exc

        if response.is_success:
            return response.json()

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        message = payload.get("message")
        if not isinstance(message, str) or not message:
            message = f"Request failed with status {response.status_code}"
        details = payload.get("details")

        logger.warning(
            "Jobs API %s %s returned %s (request_id=%s): %s",
            method,
            path,
            response.status_code,
            self.request_id,
            message,
        )
        raise ApiError(
            response.status_code,
            message,
            error=str(payload.get("error") or "HTTP_ERROR"),
            details=details if isinstance(details, dict) else None,
        )

    def list(self, **params: Any) -> dict[str, Any]:
        return self._request("GET", JOBS_PATH, params=clean_params(params))

    def get(self, job_id: int) -> dict[str, Any]:
        return self._request("GET", f"{JOBS_PATH}/{job_id}")

    def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", JOBS_PATH, json=payload)

    def update(self, job_id: int, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"{JOBS_PATH}/{job_id}", json=payload)

    def set_status(self, job_id: int, status: str) -> dict[str, Any]:
        return self._request("PATCH", f"{JOBS_PATH}/{job_id}", json={"status": status})

    def delete(self, job_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"{JOBS_PATH}/{job_id}")

    def stats(self) -> dict[str, Any]:
        return self._request("GET", f"{JOBS_PATH}/stats")
