"""Procedure Executor — verifies the call statement, scalar normalization and error classification.

Tests:
    - One call per execute(), payload bound as :param, procedure name quoted per dialect
    - Null / empty / row-less scalar -> "[]"
    - Not-found driver codes (SQLSTATE 42883, SQL Server 2812) -> TargetNotFoundError
    - Any other driver failure -> BackingStoreError (never retried)
"""

import pytest
from sqlalchemy.dialects.postgresql.base import PGDialect
from sqlalchemy.dialects.sqlite.base import SQLiteDialect
from sqlalchemy.exc import OperationalError

from intranet_api.core.domain_types import CommandDescriptor
from intranet_api.core.errors import BackingStoreError, TargetNotFoundError
from intranet_api.infrastructure.procedure_executor import (
    ProcedureExecutor, build_call_statement, is_procedure_not_found,
    normalize_scalar, supports_dialect,
)
from tests.fake_backing_store import (
    FakeBackingStore, mssql_store, pg_error, pg_wrapped_error, pymssql_error,
    pyodbc_error,
)


def _descriptor(target="P_PING", payload='{"FromApi":"ping"}', routing="ping"):
    return CommandDescriptor(
        target_name=target, raw_payload=payload, routing_value=routing,
    )


# -- Statement building -------------------------------------------------------


def test_postgres_statement_quotes_name_and_binds_param():
    sql = str(build_call_statement("P_PING", PGDialect()))
    assert sql == 'SELECT "P_PING"(:param)'


def test_mssql_statement_uses_exec_with_named_param():
    sql = str(build_call_statement("P_PING", mssql_store().dialect))
    assert sql == "EXEC [P_PING] @param = :param"


def test_unsupported_dialect_rejected():
    assert not supports_dialect("sqlite")
    with pytest.raises(ValueError, match="sqlite"):
        build_call_statement("P_PING", SQLiteDialect())
    with pytest.raises(ValueError):
        ProcedureExecutor(FakeBackingStore(dialect=SQLiteDialect()))


# -- Execution ----------------------------------------------------------------


async def test_execute_passes_exact_payload_once():
    store = FakeBackingStore(value='[{"pong":true}]')
    payload = '{"FromApi":"ping",  "x": [1, 2]}'

    result = await ProcedureExecutor(store).execute(_descriptor(payload=payload))

    assert result == '[{"pong":true}]'
    assert store.calls == [('SELECT "P_PING"(:param)', {"param": payload})]
    assert store.commits == 1


@pytest.mark.parametrize("value", [None, "", "   "])
async def test_execute_empty_scalar_returns_empty_array(value):
    store = FakeBackingStore(value=value)
    assert await ProcedureExecutor(store).execute(_descriptor()) == "[]"


async def test_execute_without_result_set_returns_empty_array():
    store = FakeBackingStore(value="ignored", returns_rows=False)
    assert await ProcedureExecutor(store).execute(_descriptor()) == "[]"


@pytest.mark.parametrize("error", [
    pg_error("42883", 'function "P_FOOBAR"(unknown) does not exist'),
    pg_wrapped_error("42883"),
])
async def test_postgres_undefined_function_is_target_not_found(error):
    store = FakeBackingStore()
    store.error = error

    with pytest.raises(TargetNotFoundError) as exc_info:
        await ProcedureExecutor(store).execute(
            _descriptor(target="P_FOOBAR", routing="FooBar"),
        )

    assert "P_FOOBAR" in exc_info.value.message
    assert exc_info.value.context.routing_value == "FooBar"
    assert len(store.calls) == 1


@pytest.mark.parametrize("error", [pymssql_error(2812), pyodbc_error(2812)])
async def test_mssql_procedure_missing_is_target_not_found(error):
    store = mssql_store()
    store.error = error

    with pytest.raises(TargetNotFoundError):
        await ProcedureExecutor(store).execute(_descriptor(target="P_FOOBAR"))


@pytest.mark.parametrize("error", [
    pg_error("42P01", 'relation "orders" does not exist'),
    pg_error("57014", "canceling statement due to statement timeout"),
    pymssql_error(547),
    pyodbc_error(8114),
])
async def test_other_driver_failures_are_backing_store_errors(error):
    store = FakeBackingStore()
    store.error = error

    with pytest.raises(BackingStoreError) as exc_info:
        await ProcedureExecutor(store).execute(_descriptor())

    assert exc_info.value.http_status == 500
    assert len(store.calls) == 1


async def test_not_found_text_without_code_is_backing_store_error():
    """Message wording alone never classifies an error as not-found."""
    store = FakeBackingStore()
    store.error = pg_error("XX000", "could not find stored procedure P_X")
    with pytest.raises(BackingStoreError):
        await ProcedureExecutor(store).execute(_descriptor())


async def test_connect_failure_is_backing_store_error():
    store = FakeBackingStore()
    store.connect_error = ConnectionRefusedError("connection refused")

    with pytest.raises(BackingStoreError) as exc_info:
        await ProcedureExecutor(store).execute(_descriptor())

    assert exc_info.value.operation == "connect"
    assert store.calls == []


async def test_operational_error_is_backing_store_error():
    store = FakeBackingStore()
    store.connect_error = OperationalError("connect", {}, Exception("timeout"))
    with pytest.raises(BackingStoreError):
        await ProcedureExecutor(store).execute(_descriptor())


# -- Helpers ------------------------------------------------------------------


def test_is_procedure_not_found_on_codes():
    assert is_procedure_not_found(pg_error("42883"))
    assert is_procedure_not_found(pyodbc_error(2812))
    assert not is_procedure_not_found(pg_error("42P01"))
    assert not is_procedure_not_found(pymssql_error(208))


@pytest.mark.parametrize("value, expected", [
    (None, "[]"),
    ("", "[]"),
    ("\n\t ", "[]"),
    ('[{"id":1}]', '[{"id":1}]'),
    (b'[{"id":1}]', '[{"id":1}]'),
    ([{"id": 1}], '[{"id": 1}]'),
])
def test_normalize_scalar(value, expected):
    assert normalize_scalar(value) == expected
