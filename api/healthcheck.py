import logging
import os
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type, before_sleep_log

from database import get_db
from utils.logger_factory import new_logger

health_retry_logger = new_logger("health_check_retry")

router = APIRouter()


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type(OperationalError),
    before_sleep=before_sleep_log(health_retry_logger, logging.WARNING),
    reraise=True,
)
def ping_store(db: Session) -> float:
    """Round-trip a trivial query; returns the latency in milliseconds."""
    started = time.perf_counter()
    try:
        db.execute(text("SELECT 1")).scalar_one()
    except OperationalError:
        db.rollback()
        raise
    return round((time.perf_counter() - started) * 1000, 2)


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    200 with the store latency when the database answers, 503 otherwise,
    in the same {success, error} shape the other endpoints use for outages.
    """
    log = new_logger("health_check")
    environment = os.environ.get("APP_ENV", "production").lower()
    try:
        latency_ms = ping_store(db)
    except SQLAlchemyError as e:
        log.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={"success": False, "status": "unhealthy", "database": "disconnected",
                     "environment": environment, "error": "Storage backend unavailable. Please try again later."},
        )
    log.info(f"Health check passed in {latency_ms}ms")
    return {"success": True, "status": "healthy", "database": "connected",
            "environment": environment, "latencyMs": latency_ms}
