"""
Pytest configuration and fixtures for tests
"""
import os
import sys
import tempfile

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Throwaway database, must be set before peoria.db is imported
_tmp_dir = tempfile.mkdtemp(prefix="peoria-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_tmp_dir, "test.db")

from fastapi.testclient import TestClient

from peoria.main import app
from peoria.db import SessionLocal
from peoria import models
from peoria.schemas import DEFAULT_CONFIG, CompetitionConfig, Limits, Player


@pytest.fixture(autouse=True)
def clean_db():
    """Empty the saved state table around every test"""
    db = SessionLocal()
    try:
        db.query(models.SavedState).delete()
        db.commit()
        yield
        db.query(models.SavedState).delete()
        db.commit()
    finally:
        db.close()


@pytest.fixture
def client():
    """Create FastAPI test client"""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def default_config():
    return DEFAULT_CONFIG


@pytest.fixture
def flat_config():
    """Par 4 on every hole (course par 72), unlimited handicap"""
    return CompetitionConfig(
        par=[4] * 18,
        hidden_holes=list(DEFAULT_CONFIG.hidden_holes),
        hidden_weight=1.5,
        multiplier=0.8,
        limits=Limits(double_par_cut=True, max_hdcp=999),
        rounding_mode="round",
    )


@pytest.fixture
def make_player():
    def _make(name, scores, id=None, age=None):
        return Player(id=id or name, name=name, scores=list(scores), age=age)
    return _make
