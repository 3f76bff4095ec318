# tests/conftest.py
"""Shared fixtures: in-memory storage and a manager whose storage is mocked."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# keep test runs off the real log file and API key
os.environ["LOG_DIR"] = ""
os.environ.pop("API_KEY", None)

import pytest
from unittest.mock import AsyncMock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from parking_manager.database import create_tables
from parking_manager.services.parking_manager import ParkingManager
from parking_manager.services.storage_service import StorageService


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def storage(session_factory):
    return StorageService(session_factory, key="test-data")


@pytest.fixture
def mock_storage():
    storage = AsyncMock(spec=StorageService)
    storage.save.side_effect = lambda document: document
    return storage


@pytest.fixture
def manager(mock_storage):
    return ParkingManager(mock_storage)
