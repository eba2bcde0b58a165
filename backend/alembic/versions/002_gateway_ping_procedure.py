"""Gateway sample procedure — P_PING echoes its parameter.

Revision ID: 002_gateway_ping
Revises: 001_intranet_schema
Create Date: 2026-10-16

Reachable as {"FromApi": "ping", ...} through POST /Common/CallSP.
Only installed on backends with a procedure call form (PostgreSQL, SQL Server).
"""
from typing import Sequence, Union

from alembic import op

revision: str = "002_gateway_ping"
down_revision: Union[str, None] = "001_intranet_schema"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_POSTGRES_CREATE = """
CREATE OR REPLACE FUNCTION "P_PING"(param text) RETURNS text
LANGUAGE sql STABLE AS $$
    SELECT json_build_array(
        json_build_object('pong', true, 'request', param::json)
    )::text
$$
"""

_MSSQL_CREATE = """
CREATE OR ALTER PROCEDURE [P_PING] @param NVARCHAR(MAX)
AS
BEGIN
    SET NOCOUNT ON;
    SELECT CAST(1 AS BIT) AS pong, JSON_QUERY(@param) AS request
    FOR JSON PATH;
END
"""


def upgrade() -> None:
    dialect = op.get_bind().dialect.name
    if dialect == "postgresql":
        op.execute(_POSTGRES_CREATE)
    elif dialect == "mssql":
        op.execute(_MSSQL_CREATE)


def downgrade() -> None:
    dialect = op.get_bind().dialect.name
    if dialect == "postgresql":
        op.execute('DROP FUNCTION IF EXISTS "P_PING"(text)')
    elif dialect == "mssql":
        op.execute("DROP PROCEDURE IF EXISTS [P_PING]")
