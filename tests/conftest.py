"""Shared pytest fixtures for portfolio dashboard tests."""

import random
from datetime import date

import pytest

import portfolio_dashboard.core.config as configmod
import portfolio_dashboard.data.database as dbmod
from portfolio_dashboard.cli import state
from portfolio_dashboard.core.store import PortfolioStore
from portfolio_dashboard.data.database import get_db, set_db_path

FIXED_TODAY = date(2024, 3, 15)


@pytest.fixture(autouse=True)
def isolated_db(tmp_path):
    """Each test gets a fresh temp DB. Resets the global singleton after."""
    db_path = tmp_path / "test.db"
    set_db_path(str(db_path))
    db = get_db()
    yield db
    db.conn.close()
    dbmod._db = None


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config.json at a temp path and clear cached config and CLI store."""
    config_path = tmp_path / "config.json"
    monkeypatch.setattr(configmod, "_config_path", lambda: config_path)
    configmod.reset_config_cache()
    state.configure(None)
    yield config_path
    configmod.reset_config_cache()
    state.configure(None)


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def clock():
    return lambda: FIXED_TODAY


@pytest.fixture
def store(rng, clock):
    """Empty store with deterministic history generation."""
    return PortfolioStore(rng=rng, clock=clock)


@pytest.fixture
def demo_store(rng, clock):
    return PortfolioStore.with_demo_assets(rng=rng, clock=clock)
