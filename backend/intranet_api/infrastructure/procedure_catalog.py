"""Procedure Catalog — startup discovery of gateway procedures on the backing store.

Invariants:
    - Read-only: one catalog query per startup, never per request
    - Returned names start with the requested prefix (LIKE wildcards re-checked in Python)
    - PostgreSQL: only plain functions (prokind = 'f'); procedures cannot be called via SELECT
    - Unsupported dialects return an empty list (declared commands still apply)
"""

import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

_CATALOG_QUERIES = {
    "postgresql": (
        "SELECT p.proname FROM pg_catalog.pg_proc p "
        "JOIN pg_catalog.pg_namespace n ON n.oid = p.pronamespace "
        "WHERE n.nspname NOT IN ('pg_catalog', 'information_schema') "
        "AND p.prokind = 'f' AND p.proname LIKE :pattern"
    ),
    "mssql": "SELECT name FROM sys.procedures WHERE name LIKE :pattern",
}


class SqlProcedureCatalog:
    """Lists procedures via the dialect's system catalog."""

    def __init__(self, engine: AsyncEngine):
        self._engine = engine

    async def list_procedures(self, prefix: str) -> list[str]:
        query = _CATALOG_QUERIES.get(self._engine.dialect.name)
        if query is None:
            logger.warning(
                f"No procedure catalog for dialect {self._engine.dialect.name}",
            )
            return []
        async with self._engine.connect() as conn:
            result = await conn.execute(text(query), {"pattern": f"{prefix}%"})
            names = [row[0] for row in result]
        return sorted({n for n in names if n.startswith(prefix)})
