from __future__ import annotations

from typing import Generator

from fastapi import Depends

from jobtracker.client import JobsClient
from jobtracker.core.config import settings
from jobtracker.dependencies.request_id import get_correlation_id


def get_jobs_client(
    correlation_id: str = Depends(get_correlation_id),
) -> Generator[JobsClient, None, None]:
    client = JobsClient(
        settings.API_BASE_URL,
        timeout=settings.API_TIMEOUT_SECONDS,
        request_id=correlation_id,
    )
    try:
        yield client
    finally:
        client.close()
