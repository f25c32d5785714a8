"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Shared helpers for API test modules.
"""
# pylint: disable=redefined-outer-name

import pytest
from fastapi.testclient import TestClient

from dashboard.app import updates
from dashboard.app.core.config import settings
from dashboard.app.database import set_store
from dashboard.app.database.store import MemoryStore
from dashboard.app.main import app
from dashboard.app.updates import UpdateState

API_KEY = "test-api-key"
ADMIN_API_KEY = "test-admin-api-key"

TEST_SETTINGS = {
    "env": "production",
    "api_key": API_KEY,
    "admin_api_key": ADMIN_API_KEY,
    "anonymous_org_id": 0,
    "app_sub_url": "",
    "allow_user_org_create": True,
    "build_version": "4.0.0",
    "build_commit": "abc1234",
    "build_stamp": 1480000000,
    "plugins_path": None,
    "config_file": None,
    "check_for_updates": False,
    "db_username": None,
    "db_password": None,
    "db_dsn": None,
}


@pytest.fixture
def app_client(monkeypatch):
    """A TestClient with lifespan run against test settings and an in-memory store."""
    for key, value in TEST_SETTINGS.items():
        monkeypatch.setattr(settings, key, value)
    monkeypatch.setitem(updates._UPDATE_STATE, "value", UpdateState())  # pylint: disable=protected-access

    with TestClient(app) as client:
        yield client


@pytest.fixture
def seed_store(app_client):
    """Replace the active store with one holding the given records and settings."""
    del app_client

    def _seed(records=(), plugin_settings=()):
        return set_store(MemoryStore(records=records, plugin_settings=plugin_settings))

    return _seed


@pytest.fixture
def auth_headers():
    """Headers for a signed-in user of the default organization."""
    return {"X-API-Key": API_KEY}


@pytest.fixture
def admin_headers():
    """Headers for a server administrator."""
    return {"X-API-Key": ADMIN_API_KEY}
