from __future__ import annotations

from fastapi import Request

_SESSION_KEY = "_flash"


def flash(request: Request, message: str, category: str = "success") -> None:
    request.session[_SESSION_KEY] = {"message": message, "category": category}


def pop_flash(request: Request) -> dict | None:
    return request.session.pop(_SESSION_KEY, None)
