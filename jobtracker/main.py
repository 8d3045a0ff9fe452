import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.sessions import SessionMiddleware

from jobtracker.core.config import settings
from jobtracker.core.database import create_tables, ping_db
from jobtracker.routes.job_applications import router as jobs_router
from jobtracker.routes.pages import router as pages_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: ARG001
    if settings.DB_AUTO_CREATE:
        create_tables()
    yield


app = FastAPI(title="Job Application Tracker", lifespan=lifespan)
logger.info(
    "Startup config: ENV=%s API_BASE_URL=%s database=%s DB_AUTO_CREATE=%s",
    settings.ENV,
    settings.API_BASE_URL,
    "sqlite" if settings.is_sqlite else "server",
    settings.DB_AUTO_CREATE,
)

_ERROR_CODE_BY_STATUS: dict[int, str] = {
    400: "VALIDATION_ERROR",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
    500: "INTERNAL_ERROR",
    503: "SERVICE_UNAVAILABLE",
}


def _error_code(status_code: int) -> str:
    return _ERROR_CODE_BY_STATUS.get(int(status_code), "HTTP_ERROR")


@app.exception_handler(HTTPException)
def http_exception_handler(request: Request, exc: HTTPException):  # noqa: ARG001
    detail = exc.detail
    message: str
    details: dict | None = None

    if isinstance(detail, str):
        message = detail
    elif isinstance(detail, dict):
        msg = detail.get("message")
        message = msg if isinstance(msg, str) and msg else "Request failed"
        det = detail.get("details")
        details = det if isinstance(det, dict) else None
    else:
        message = str(detail) if detail is not None else "Request failed"

    payload: dict = {"error": _error_code(exc.status_code), "message": message}
    if details:
        payload["details"] = details
    return JSONResponse(status_code=exc.status_code, content=payload, headers=exc.headers)


@app.exception_handler(RequestValidationError)
def validation_exception_handler(request: Request, exc: RequestValidationError):  # noqa: ARG001
    errors = exc.errors()
    # First validator message doubles as the human-readable summary.
    first = errors[0].get("msg") if errors else None
    message = str(first).removeprefix("Value error, ") if first else "Invalid request payload"
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": message,
            "details": {"errors": _jsonable_errors(errors)},
        },
    )


def _jsonable_errors(errors) -> list[dict]:
    # `ctx` may carry the raw ValueError, which JSONResponse can't encode.
    out = []
    for err in errors:
        e = dict(err)
        if "ctx" in e:
            e["ctx"] = {k: str(v) for k, v in (e.get("ctx") or {}).items()}
        e.pop("url", None)
        out.append(e)
    return out


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    session_cookie=settings.SESSION_COOKIE_NAME,
    https_only=settings.is_prod,
)

app.include_router(jobs_router)
app.include_router(pages_router)


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/health/db")
def db_health_check():
    try:
        ping_db()
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        raise HTTPException(status_code=503, detail="Database unavailable")
    return {"status": "ok"}
