"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Shared fixtures for dashboard tests.
"""
# pylint: disable=redefined-outer-name

import itertools
from unittest.mock import AsyncMock, MagicMock

import pytest

from dashboard.app.datasources.schemas import DataSourceRecord
from dashboard.app.frontend.config import FrontendConfig
from dashboard.app.plugins import registry


@pytest.fixture
def make_record():
    """Factory fixture to create DataSourceRecord objects with increasing ids."""

    ids = itertools.count(1)

    def _make_record(
        name: str = "test-ds",
        ds_type: str = "graphite",
        access: str = "proxy",
        **kwargs,
    ) -> DataSourceRecord:
        kwargs.setdefault("id", next(ids))
        kwargs.setdefault("org_id", 1)
        kwargs.setdefault("url", "http://localhost:8080")
        return DataSourceRecord(name=name, type=ds_type, access=access, **kwargs)

    return _make_record


@pytest.fixture
def default_plugins():
    """Populate the plugin registry with the built-in plugins for one test."""

    registry.clear_plugin_registry()
    registry.load_default_plugins()
    yield registry
    registry.clear_plugin_registry()


@pytest.fixture
def frontend_config():
    """A fixed frontend configuration snapshot."""

    return FrontendConfig(
        app_sub_url="/grafana",
        allow_user_org_create=True,
        auth_proxy_enabled=False,
        ldap_enabled=True,
        alerting_enabled=False,
        build_version="4.0.0",
        build_commit="abc1234",
        build_stamp=1480000000,
        env="production",
    )


@pytest.fixture
def mock_pool():
    """An oracledb-like async pool whose cursor returns ``mock_pool.rows``.

    ``mock_pool.cursor`` records executed statements; ``mock_pool.conn`` is
    the acquired connection.
    """

    cursor = MagicMock()
    cursor.execute = AsyncMock()
    cursor.description = None
    cursor.fetchall = AsyncMock(return_value=[])
    cursor.__aenter__ = AsyncMock(return_value=cursor)
    cursor.__aexit__ = AsyncMock(return_value=False)

    conn = MagicMock()
    conn.cursor = MagicMock(return_value=cursor)
    conn.commit = AsyncMock()
    conn.rollback = AsyncMock()

    acquired = MagicMock()
    acquired.__aenter__ = AsyncMock(return_value=conn)
    acquired.__aexit__ = AsyncMock(return_value=False)

    pool = MagicMock()
    pool.acquire = MagicMock(return_value=acquired)
    pool.close = AsyncMock()
    pool.cursor = cursor
    pool.conn = conn
    return pool
