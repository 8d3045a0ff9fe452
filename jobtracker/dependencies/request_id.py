from __future__ import annotations

import uuid

from fastapi import Header


def generate_correlation_id(existing: str | None = None) -> str:
    if existing and existing.strip():
        return existing.strip()
    return uuid.uuid4().hex


def get_correlation_id(x_request_id: str | None = Header(None)) -> str:
    return generate_correlation_id(x_request_id)
