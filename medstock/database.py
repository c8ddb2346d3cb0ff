"""
Database configuration for the snapshot source.
- SQLite gets check_same_thread=False
- pool_pre_ping for server databases
- Fail-safe connection test used by the startup preflight and /health
"""
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool
from dotenv import load_dotenv
import logging
from typing import Generator
import time

from medstock.config import settings

# .env is optional; pydantic-settings also reads it for Settings fields
load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL

if DATABASE_URL.startswith("sqlite"):
    # SQLite: NullPool keeps file handles short-lived across threads
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=NullPool,
    )
else:
    engine = create_engine(
        DATABASE_URL,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        pool_recycle=300,
        pool_timeout=30,
        echo=False,
    )

logger.info("Database connection configured")

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False
)

# Declarative base for models
Base = declarative_base()

def get_db() -> Generator:
    """Yield a session for one request; always closed afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def test_connection(retries: int = 2) -> tuple[bool, str]:
    """Test database connection with retry"""
    for attempt in range(retries + 1):
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True, "Database connection successful"
        except OperationalError as e:
            if attempt == retries:
                return False, f"Database connection failed: {str(e)}"
            logger.warning(f"Database connection attempt {attempt + 1} failed, retrying...")
            time.sleep(1)
    return False, "Database connection test failed"
