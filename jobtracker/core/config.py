# jobtracker/core/config.py
import os

from dotenv import load_dotenv


def str_to_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [v.strip() for v in value.split(",") if v.strip()]


def merge_unique(items: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for v in items:
        if v in seen:
            continue
        seen.add(v)
        out.append(v)
    return out


class Settings:
    def __init__(self) -> None:
        self.ENV = os.getenv("ENV", "dev").strip().lower()  # dev | prod
        if self.ENV != "prod":
            # Load .env only for non-prod so prod can't be accidentally influenced by local files.
            load_dotenv()

        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()

        # ----------------------------
        # Database
        # ----------------------------
        if self.ENV == "prod":
            self.DATABASE_URL = os.getenv("DATABASE_URL", "").strip()
        else:
            self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./jobtracker.db").strip()
        self.DB_AUTO_CREATE = str_to_bool(os.getenv("DB_AUTO_CREATE"), default=self.ENV != "prod")

        # ----------------------------
        # REST client (used by the HTML pages)
        # ----------------------------
        if self.ENV == "prod":
            self.API_BASE_URL = os.getenv("API_BASE_URL", "").strip().rstrip("/")
        else:
            self.API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000").strip().rstrip("/")
        self.API_TIMEOUT_SECONDS = float(os.getenv("API_TIMEOUT_SECONDS", "10"))

        # ----------------------------
        # Listing
        # ----------------------------
        self.DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
        self.MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))

        # ----------------------------
        # CORS
        # ----------------------------
        dev_defaults = [
            "http://localhost:8000",
            "http://127.0.0.1:8000",
        ]

        cors_from_env = parse_csv(os.getenv("CORS_ORIGINS"))
        if self.ENV == "prod":
            # In prod: ONLY allow what you explicitly configure
            self.CORS_ORIGINS = merge_unique(cors_from_env)
        else:
            self.CORS_ORIGINS = merge_unique(cors_from_env + dev_defaults)

        # ----------------------------
        # Sessions (flash messages)
        # ----------------------------
        if self.ENV == "prod":
            self.SESSION_SECRET = os.getenv("SESSION_SECRET", "")
        else:
            self.SESSION_SECRET = os.getenv("SESSION_SECRET", "dev-session-secret")
        self.SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "jobtracker_session")

        # Final: fail fast in prod
        self._validate_prod()

    def _validate_prod(self) -> None:
        if self.ENV != "prod":
            return

        missing: list[str] = []

        if not self.DATABASE_URL:
            missing.append("DATABASE_URL")
        if not self.API_BASE_URL:
            missing.append("API_BASE_URL")
        if not self.SESSION_SECRET:
            missing.append("SESSION_SECRET")

        if self.DATABASE_URL.startswith("sqlite"):
            raise RuntimeError("DATABASE_URL must not point at SQLite in prod")

        if self.API_BASE_URL and not self.API_BASE_URL.startswith("https://"):
            raise RuntimeError("API_BASE_URL should be https://... in prod")

        cors_joined = ",".join(self.CORS_ORIGINS)
        if "localhost" in cors_joined or "127.0.0.1" in cors_joined:
            raise RuntimeError("CORS_ORIGINS contains localhost/dev origins in prod")

        if self.MAX_PAGE_SIZE < 1 or not (1 <= self.DEFAULT_PAGE_SIZE <= self.MAX_PAGE_SIZE):
            raise RuntimeError("DEFAULT_PAGE_SIZE must be between 1 and MAX_PAGE_SIZE")

        if missing:
            raise RuntimeError(f"Missing required prod env vars: {', '.join(missing)}")

    @property
    def is_prod(self) -> bool:
        return self.ENV == "prod"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


settings = Settings()
