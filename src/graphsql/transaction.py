"""Units of work over a shared DB-API connection.

Every Store operation runs inside a :class:`UnitOfWork`: it holds the
store's lock, gets a fresh cursor, commits on success and rolls back on any
failure.  Driver errors that are not handled by the caller are re-raised as
:class:`~graphsql.exceptions.BackendError`.

Public API:
    UnitOfWork: Lock + cursor + commit/rollback around a block.
    driver_exceptions: The ``Error`` and ``IntegrityError`` classes of a connection.
"""

from __future__ import annotations

import logging
import sys
import threading
from contextlib import contextmanager
from typing import Any, ContextManager, Iterator

from .exceptions import BackendError, GraphStoreError

logger = logging.getLogger(__name__)


def driver_exceptions(connection: Any) -> tuple[type[BaseException], type[BaseException]]:
    """Return ``(Error, IntegrityError)`` for *connection*'s driver.

    PEP 249 drivers usually expose their exception classes on the
    connection object; otherwise they are taken from the driver module.
    """
    error = getattr(connection, "Error", None)
    integrity_error = getattr(connection, "IntegrityError", None)
    if error is None or integrity_error is None:
        root = (type(connection).__module__ or "").split(".")[0]
        module = sys.modules.get(root)
        error = error or getattr(module, "Error", None) or Exception
        integrity_error = integrity_error or getattr(module, "IntegrityError", None) or error
    return error, integrity_error


class UnitOfWork:
    """Serialize and transact statements issued on one connection.

    Args:
        connection: An open DB-API 2.0 connection.  Not owned; never closed here.
        lock: Context manager guarding the connection.  Defaults to a
            reentrant lock so nested units of work on one thread are fine.
    """

    def __init__(self, connection: Any, lock: ContextManager | None = None) -> None:
        self._conn = connection
        self._lock = lock if lock is not None else threading.RLock()
        self.error, self.integrity_error = driver_exceptions(connection)

    @property
    def connection(self) -> Any:
        return self._conn

    @contextmanager
    def __call__(self, operation: str) -> Iterator[Any]:
        """Yield a cursor; commit when the block exits cleanly.

        Args:
            operation: Short description used in logs and error messages.
        """
        with self._lock:
            cur = self._conn.cursor()
            try:
                yield cur
                self._conn.commit()
            except GraphStoreError:
                self._rollback()
                raise
            except self.error as exc:
                self._rollback()
                logger.error("%s failed: %s", operation, exc)
                raise BackendError(f"{operation} failed: {exc}") from exc
            except BaseException:
                self._rollback()
                raise
            finally:
                cur.close()

    def _rollback(self) -> None:
        try:
            self._conn.rollback()
        except self.error as exc:
            logger.warning("Rollback failed: %s", exc)


__all__ = ["UnitOfWork", "driver_exceptions"]
