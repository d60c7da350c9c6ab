"""Translation of database driver errors into domain store errors."""

from collections.abc import Iterator
from contextlib import contextmanager

import logfire
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError, SQLAlchemyError

from club.domain.error import StoreError, TransientStoreError


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Re-raise SQLAlchemy errors as StoreError or TransientStoreError.

    Lost connections and timeouts are transient; everything else the
    database rejects is a plain StoreError.

    Args:
        operation: Name of the repository operation, for logs
    """
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        logfire.warn("Store temporarily unavailable", operation=operation, error=str(e))
        raise TransientStoreError(f"{operation} failed: {e}") from e
    except DBAPIError as e:
        if e.connection_invalidated:
            logfire.warn("Store connection invalidated", operation=operation)
            raise TransientStoreError(f"{operation} failed: {e}") from e
        logfire.error("Store rejected operation", operation=operation, error=str(e))
        raise StoreError(f"{operation} failed: {e}") from e
    except SQLAlchemyError as e:
        logfire.error("Store rejected operation", operation=operation, error=str(e))
        raise StoreError(f"{operation} failed: {e}") from e
