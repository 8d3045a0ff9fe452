from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from typing import Generator
from sqlalchemy.orm import Session
from jobtracker.core.base import Base
from jobtracker.core.config import settings

# SQLite connections are bound to the creating thread unless told otherwise;
# FastAPI runs sync routes in a threadpool.
_connect_args = {"check_same_thread": False} if settings.is_sqlite else {}

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,   # checks stale connections
    connect_args=_connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def ping_db() -> None:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))

def create_tables() -> None:
    # Import models so they register with SQLAlchemy metadata.
    from jobtracker.models.job_application import JobApplication  # noqa: F401

    Base.metadata.create_all(bind=engine)

def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
