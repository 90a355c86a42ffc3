import time
from typing import Any, Callable

from sqlalchemy import insert
from sqlalchemy.orm import Session

import app.models  # noqa: F401  registers tables on Base.metadata
from app.database import Base
from app.logging_config import get_logger

logger = get_logger("durable_write")

MAX_ATTEMPTS = 3
BACKOFF_SECONDS = 0.4


class DurableWriteRetrier:
    """Insert a row with bounded, linearly backed-off retries.

    Never raises. A write that exhausts its attempts is logged once and
    reported as False, so callers on the reply path can ignore it.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        max_attempts: int = MAX_ATTEMPTS,
        backoff_seconds: float = BACKOFF_SECONDS,
        sleep: Callable[[float], Any] = time.sleep,
    ):
        self.session_factory = session_factory
        self.max_attempts = max(1, max_attempts)
        self.backoff_seconds = backoff_seconds
        self.sleep = sleep

    def _insert_once(self, table: str, payload: dict) -> None:
        sa_table = Base.metadata.tables.get(table)
        if sa_table is None:
            raise KeyError(f"unknown table: {table}")

        db = self.session_factory()
        try:
            db.execute(insert(sa_table).values(**payload))
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def write(self, table: str, payload: dict) -> bool:
        last_error = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                self._insert_once(table, payload)
                return True
            except Exception as e:
                last_error = e
                logger.debug(f"Insert into {table} failed (attempt {attempt}): {e}")
                if attempt < self.max_attempts:
                    self.sleep(self.backoff_seconds * attempt)

        logger.error(
            f"Durable insert failed: {table}",
            extra={"context": {"table": table, "attempts": self.max_attempts, "error": str(last_error)}},
        )
        return False
