"""Procedure Executor — runs one gateway command and returns its scalar JSON string.

Invariants:
    - One scoped connection per call, released before returning (pooling is the engine's job)
    - Exactly one remote invocation per call; never retried
    - The payload is bound as the single parameter, never interpolated into SQL
    - Null, empty, or row-less result -> EMPTY_RESULT ("[]"), never None
    - "Procedure does not exist" -> TargetNotFoundError; every other driver
      failure -> BackingStoreError
    - Transaction committed after the scalar is read (procedures may write)

Design Decisions:
    - Not-found classified by structured driver codes: PostgreSQL SQLSTATE 42883
      (undefined_function) and SQL Server native error 2812. For pyodbc the native
      code is only available inside the message text as "(2812)", so that one
      driver still parses the message.
    - Procedure names quoted by the dialect's identifier preparer: "P_X" keeps its
      case on PostgreSQL, [P_X] on SQL Server
"""

import json
import logging
import re

from sqlalchemy import text
from sqlalchemy.engine import Dialect
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql.elements import TextClause

from intranet_api.core.domain_types import (
    CommandDescriptor, EMPTY_RESULT, PROCEDURE_PARAMETER,
)
from intranet_api.core.errors import (
    BackingStoreError, ErrorContext, TargetNotFoundError,
)

logger = logging.getLogger(__name__)

_CALL_TEMPLATES = {
    "postgresql": "SELECT {name}(:{param})",
    "mssql": "EXEC {name} @{param} = :{param}",
}

PG_UNDEFINED_FUNCTION = "42883"
MSSQL_PROCEDURE_NOT_FOUND = 2812
_NATIVE_CODE = re.compile(r"\((\d+)\)")


def supports_dialect(dialect_name: str) -> bool:
    return dialect_name in _CALL_TEMPLATES


def build_call_statement(target_name: str, dialect: Dialect) -> TextClause:
    """Build the dialect-specific call with one bound :param."""
    template = _CALL_TEMPLATES.get(dialect.name)
    if template is None:
        raise ValueError(
            f"Stored-procedure gateway does not support dialect '{dialect.name}'",
        )
    quoted = dialect.identifier_preparer.quote_identifier(target_name)
    return text(template.format(name=quoted, param=PROCEDURE_PARAMETER))


def is_procedure_not_found(error: DBAPIError) -> bool:
    """True if the driver error means the named procedure does not exist."""
    orig = error.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        sqlstate = (
            getattr(candidate, "sqlstate", None)
            or getattr(candidate, "pgcode", None)
        )
        if sqlstate == PG_UNDEFINED_FUNCTION:
            return True
    return _mssql_native_code(orig) == MSSQL_PROCEDURE_NOT_FOUND


def _mssql_native_code(orig: object) -> int | None:
    args = getattr(orig, "args", ())
    if not args:
        return None
    # pymssql: (number, message)
    if isinstance(args[0], int):
        return args[0]
    # pyodbc / aioodbc: (sqlstate, "... (2812) (SQLExecDirectW)")
    if len(args) >= 2 and isinstance(args[1], str):
        codes = _NATIVE_CODE.findall(args[1])
        if codes:
            return int(codes[0])
    return None


def normalize_scalar(value: object) -> str:
    """Coerce the scalar result to the JSON string handed back to the caller."""
    if value is None:
        return EMPTY_RESULT
    if isinstance(value, (bytes, bytearray, memoryview)):
        value = bytes(value).decode("utf-8")
    elif not isinstance(value, str):
        value = json.dumps(value, default=str)
    return value if value.strip() else EMPTY_RESULT


class ProcedureExecutor:
    """Executes CommandDescriptors against the backing store."""

    def __init__(self, engine: AsyncEngine):
        if not supports_dialect(engine.dialect.name):
            raise ValueError(
                f"Stored-procedure gateway does not support dialect "
                f"'{engine.dialect.name}'",
            )
        self._engine = engine

    async def execute(self, descriptor: CommandDescriptor) -> str:
        """Invoke the procedure once and return its JSON string result."""
        statement = build_call_statement(
            descriptor.target_name, self._engine.dialect,
        )
        logger.info(
            f"Executing stored procedure {descriptor.target_name}",
            extra={"target_name": descriptor.target_name},
        )
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(
                    statement, {PROCEDURE_PARAMETER: descriptor.raw_payload},
                )
                value = result.scalar() if result.returns_rows else None
                await conn.commit()
        except DBAPIError as e:
            ctx = self._context(descriptor, e)
            if is_procedure_not_found(e):
                raise TargetNotFoundError(descriptor.target_name, ctx) from e
            raise BackingStoreError("execute", ctx) from e
        except SQLAlchemyError as e:
            raise BackingStoreError("execute", self._context(descriptor, e)) from e
        except OSError as e:
            raise BackingStoreError("connect", self._context(descriptor, e)) from e

        if value is None:
            logger.warning(
                f"Stored procedure {descriptor.target_name} returned no value",
                extra={"target_name": descriptor.target_name},
            )
        return normalize_scalar(value)

    @staticmethod
    def _context(descriptor: CommandDescriptor, error: Exception) -> ErrorContext:
        return ErrorContext(
            routing_value=descriptor.routing_value,
            target_name=descriptor.target_name,
            debug_info={"driver_error": type(error).__name__},
        )
