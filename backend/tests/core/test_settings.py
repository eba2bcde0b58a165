"""Settings — verifies environment parsing for the database URL and gateway commands."""

import pytest

from intranet_api.config import Settings


def test_postgres_url_converted_to_asyncpg(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@host:5432/db")
    assert Settings().database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_gateway_defaults(monkeypatch):
    monkeypatch.delenv("GATEWAY_COMMANDS", raising=False)
    settings = Settings(_env_file=None)
    assert settings.gateway_routing_field == "FromApi"
    assert settings.gateway_procedure_prefix == "P_"
    assert settings.gateway_commands == []
    assert settings.gateway_strict_commands is True


@pytest.mark.parametrize("raw, expected", [
    ("GetOrders,ping", ["GetOrders", "ping"]),
    (" GetOrders , ping ,", ["GetOrders", "ping"]),
    ('["GetOrders", "ping"]', ["GetOrders", "ping"]),
    ("", []),
])
def test_gateway_commands_from_env(monkeypatch, raw, expected):
    monkeypatch.setenv("GATEWAY_COMMANDS", raw)
    assert Settings(_env_file=None).gateway_commands == expected


def test_strict_mode_can_be_disabled(monkeypatch):
    monkeypatch.setenv("GATEWAY_STRICT_COMMANDS", "false")
    assert Settings(_env_file=None).gateway_strict_commands is False
