import os
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

# Explicitly load .env from project root (parent of app/)
ENV_PATH = Path(__file__).parent.parent / ".env"
load_dotenv(ENV_PATH)
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
STORE_TIMEOUT_SECONDS = int(os.getenv("STORE_TIMEOUT_SECONDS", 30))

def make_engine(database_url: str):
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            # needed for SQLite + FastAPI; timeout is the busy wait on a locked db
            connect_args={"check_same_thread": False, "timeout": STORE_TIMEOUT_SECONDS},
        )
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        pool_timeout=STORE_TIMEOUT_SECONDS,
        pool_recycle=1800,
    )

# Dev: SQLite (zero config), Prod: PostgreSQL
if ENVIRONMENT == "prod":
    DATABASE_URL = os.getenv("DATABASE_URL")
    if not DATABASE_URL:
        raise RuntimeError("DATABASE_URL must be set in production")
else:
    # SQLite for local dev, stored next to the app folder
    DB_PATH = Path(__file__).parent.parent / "tinylink_dev.db"
    DATABASE_URL = os.getenv("DATABASE_URL") or f"sqlite:///{DB_PATH}"

engine = make_engine(DATABASE_URL)

# expire_on_commit=False: crud commits after every call and hands the loaded
# rows back to the web layer
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
Base = declarative_base()

def init_db() -> None:
    # models registers the links table on Base.metadata
    import models  # noqa: F401
    Base.metadata.create_all(bind=engine)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
