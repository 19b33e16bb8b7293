"""
taskcore Test Suite — Shared fixtures and configuration.

Run:  pytest tests/ -v
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from taskcore.engine.clock import fixed_clock

# Every date-sensitive test runs "at" this instant.
NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)
TODAY = date(2026, 3, 15)


@pytest.fixture(autouse=True)
def _isolate_globals():
    """Reset global singletons between tests."""
    import taskcore.engine.config as cfg_mod
    from taskcore.engine.context import clear_execution_context
    from taskcore.engine.logging import shutdown_logging

    cfg_mod._config = None
    clear_execution_context()
    yield
    shutdown_logging()
    cfg_mod._config = None
    clear_execution_context()


@pytest.fixture
def clock():
    return fixed_clock(NOW)


@pytest.fixture
def config():
    from taskcore.engine.config import LoggingConfig, TaskCoreConfig

    return TaskCoreConfig(logging=LoggingConfig(enabled=False))


@pytest.fixture
def store(clock):
    from taskcore.db.task_store import TaskStore

    return TaskStore(clock=clock)


@pytest.fixture
def service(store, clock):
    from taskcore.processes.create_task import TaskCreationService

    return TaskCreationService(store=store, zone=timezone.utc, clock=clock)


@pytest.fixture
def app(config, store, clock):
    from taskcore.web_apis.server import create_app

    return create_app(config=config, store=store, clock=clock)


@pytest.fixture
def http(app):
    from fastapi.testclient import TestClient

    return TestClient(app)


@pytest.fixture
def valid_fields():
    return {
        "titulo": "Buy milk",
        "descricao": None,
        "data_vencimento": None,
        "prioridade": "alta",
    }
