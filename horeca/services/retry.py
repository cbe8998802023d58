# HORECA/backend/horeca/services/retry.py : retry helpers for flaky I/O

import logging
import time
from typing import Callable, TypeVar

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

logger = logging.getLogger(__name__)

T = TypeVar("T")

def fetch_with_retry(operation: Callable[[], T], max_retries: int = 3, base_delay: float = 1.0) -> T:
    """
    Call `operation`, retrying up to `max_retries` times with exponential
    backoff (base_delay * 2**attempt). The last error is re-raised.
    """
    last_error = None
    for attempt in range(max_retries + 1):
        try:
            return operation()
        except Exception as e:
            last_error = e
            logger.warning(f"⚠️ Attempt {attempt + 1}/{max_retries + 1} failed: {e}")
            if attempt < max_retries:
                delay = base_delay * (2 ** attempt)
                logger.info(f"Retrying in {delay}s...")
                time.sleep(delay)
    raise last_error

def run_with_retry(db: Session, func: Callable[[], T], attempts: int = 3, backoff_base: float = 0.1) -> T:
    """
    Run `func` (which stages changes on `db`) and commit. On lock/deadlock or
    stale-data errors the session is rolled back and `func` runs again.
    """
    for attempt in range(attempts):
        try:
            result = func()
            db.commit()
            return result
        except (OperationalError, StaleDataError) as e:
            db.rollback()
            logger.warning(f"⚠️ Commit attempt {attempt + 1}/{attempts} failed: {e}")
            if attempt >= attempts - 1:
                raise
            time.sleep(backoff_base * (2 ** attempt))
