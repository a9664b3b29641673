"""
Tests for application startup and shutdown.

Validates:
- Tables are only created at startup in debug mode
- Outside debug mode the schema is left to Alembic
"""
import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from jobboard import database
from jobboard.config import settings
from jobboard.main import app, lifespan


@pytest.fixture
def startup_calls(monkeypatch):
    """Record init_models calls and give the lifespan a throwaway engine to dispose."""
    calls = []

    async def fake_init_models():
        calls.append("init_models")

    monkeypatch.setattr(database, "init_models", fake_init_models)
    monkeypatch.setattr(database, "engine", create_async_engine("sqlite+aiosqlite:///:memory:"))
    return calls


@pytest.mark.asyncio
async def test_startup_leaves_schema_to_alembic(startup_calls, monkeypatch):
    monkeypatch.setattr(settings, "debug", False)

    async with lifespan(app):
        pass

    assert startup_calls == []


@pytest.mark.asyncio
async def test_debug_startup_creates_tables(startup_calls, monkeypatch):
    monkeypatch.setattr(settings, "debug", True)

    async with lifespan(app):
        pass

    assert startup_calls == ["init_models"]
