"""Dialect-specific statement builders."""

from typing import Any

from sqlalchemy import Table
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from club.util.error import ConfigurationError


def insert_ignoring_conflicts(
    session: AsyncSession,
    table: Table,
    values: dict[str, Any],
    index_elements: list[str],
):
    """Build INSERT ... ON CONFLICT DO NOTHING for the session's dialect.

    The insert is atomic with respect to the unique index on index_elements,
    so concurrent writers of the same key never both succeed. A result
    rowcount of 0 means the row already existed.

    Raises:
        ConfigurationError: If the database dialect is not supported
    """
    dialect = session.bind.dialect.name
    if dialect == "postgresql":
        stmt = postgresql.insert(table)
    elif dialect == "sqlite":
        stmt = sqlite.insert(table)
    else:
        raise ConfigurationError(f"Unsupported database dialect: {dialect}")
    return stmt.values(**values).on_conflict_do_nothing(index_elements=index_elements)
