"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Tests for frontend settings assembly.
"""
# spell-checker: disable
# pylint: disable=redefined-outer-name

import dataclasses
import logging
from unittest.mock import AsyncMock

import pytest

from dashboard.app.database.store import MemoryStore, QueryError
from dashboard.app.frontend.descriptors import get_basic_auth_header
from dashboard.app.frontend.settings import (
    GRAFANA_DATASOURCE,
    MIXED_DATASOURCE,
    SessionContext,
    assemble_frontend_settings,
    get_frontend_settings,
)
from dashboard.app.plugins.registry import PluginLookupError
from dashboard.app.plugins.schemas import PanelPluginMeta, PluginSetting
from dashboard.app.updates import UpdateState

pytestmark = pytest.mark.unit

SIGNED_IN = SessionContext(org_id=1, is_signed_in=True)


@pytest.fixture
def assemble(default_plugins, frontend_config):
    """Assemble settings against the built-in plugins."""

    def _assemble(records=(), session=SIGNED_IN, config=frontend_config, updates=UpdateState()):
        return assemble_frontend_settings(session, list(records), default_plugins.get_all_plugins(), config, updates)

    return _assemble


# ---------------------------------------------------------------------------
# assemble_frontend_settings
# ---------------------------------------------------------------------------


def test_no_records(assemble):
    """Only the synthetic entries are present and the built-in source is default."""
    result = assemble()

    assert set(result["datasources"]) == {GRAFANA_DATASOURCE, MIXED_DATASOURCE}
    assert result["defaultDatasource"] == GRAFANA_DATASOURCE


def test_synthetic_entries(assemble):
    """The built-in entry carries a name; the mixed entry does not."""
    result = assemble()
    grafana = result["datasources"][GRAFANA_DATASOURCE]
    mixed = result["datasources"][MIXED_DATASOURCE]

    assert grafana["type"] == "grafana"
    assert grafana["name"] == GRAFANA_DATASOURCE
    assert grafana["meta"]["id"] == "grafana"
    assert grafana["meta"]["builtIn"] is True
    assert mixed["type"] == "mixed"
    assert "name" not in mixed
    assert mixed["meta"]["mixed"] is True
    assert "url" not in grafana
    assert "url" not in mixed


def test_synthetic_entries_without_registry(frontend_config, default_plugins):
    """Synthetic entries get empty metadata when the built-ins are not registered."""
    default_plugins.clear_plugin_registry()
    result = assemble_frontend_settings(
        SIGNED_IN, [], default_plugins.get_all_plugins(), frontend_config, UpdateState()
    )
    assert result["datasources"][GRAFANA_DATASOURCE]["meta"]["id"] == ""
    assert result["datasources"][MIXED_DATASOURCE]["meta"]["id"] == ""


def test_proxy_record(assemble, make_record):
    """A proxy record gets the proxy URL for its id."""
    record = make_record(name="metrics", id=5, access="proxy", url="http://graphite:8080")
    result = assemble([record])

    assert result["datasources"]["metrics"]["url"] == "/api/datasources/proxy/5"
    assert result["datasources"]["metrics"]["meta"]["id"] == "graphite"


def test_direct_basic_auth(assemble, make_record):
    """A direct record with basic auth exposes the header."""
    record = make_record(name="metrics", access="direct", basic_auth=True, basic_auth_user="u", basic_auth_password="p")
    result = assemble([record])

    assert result["datasources"]["metrics"]["basicAuth"] == get_basic_auth_header("u", "p")


def test_influxdb_08_direct(assemble, make_record):
    """Legacy InfluxDB direct gets the database path and credentials."""
    record = make_record(
        name="legacy", ds_type="influxdb_08", access="direct", url="http://x", database="d", user="u", password="p"
    )
    descriptor = assemble([record])["datasources"]["legacy"]

    assert descriptor["url"] == "http://x/db/d"
    assert descriptor["username"] == "u"
    assert descriptor["password"] == "p"


@pytest.mark.parametrize("access", ["proxy", "direct"])
def test_influxdb_database(assemble, make_record, access):
    """Current InfluxDB always carries database; username only when direct."""
    record = make_record(name="influx", ds_type="influxdb", access=access, database="site", user="u", password="p")
    descriptor = assemble([record])["datasources"]["influx"]

    assert descriptor["database"] == "site"
    assert ("username" in descriptor) is (access == "direct")


def test_missing_plugin_skipped(assemble, make_record, caplog):
    """A record whose type has no plugin is left out and logged at ERROR."""
    records = [
        make_record(name="ok", ds_type="graphite"),
        make_record(name="mystery", ds_type="kairosdb", is_default=True),
    ]
    with caplog.at_level(logging.ERROR, logger="dashboard.app.frontend.settings"):
        result = assemble(records)

    assert "mystery" not in result["datasources"]
    assert "ok" in result["datasources"]
    assert result["defaultDatasource"] == GRAFANA_DATASOURCE
    assert any("kairosdb" in rec.getMessage() and rec.levelno == logging.ERROR for rec in caplog.records)


def test_disabled_plugin_skipped(default_plugins, frontend_config, make_record):
    """Records are skipped when their plugin is absent from the enabled set."""
    plugins = default_plugins.get_all_plugins()
    del plugins.datasources["prometheus"]
    record = make_record(name="prom", ds_type="prometheus")

    result = assemble_frontend_settings(SIGNED_IN, [record], plugins, frontend_config, UpdateState())
    assert "prom" not in result["datasources"]


def test_panels(assemble):
    """Panels are keyed by id with their sort rank."""
    panels = assemble()["panels"]

    assert panels["graph"]["sort"] == 1
    assert panels["table"]["sort"] == 3
    assert panels["pluginlist"]["sort"] == 100
    assert panels["graph"]["module"] == "app/plugins/panel/graph/module"
    assert panels["graph"]["baseUrl"] == "public/app/plugins/panel/graph"


def test_unlisted_panel_sort(default_plugins, frontend_config):
    """A panel outside the fixed table sorts at 100."""
    default_plugins.register_plugin(PanelPluginMeta(id="heatmap", name="Heatmap"))
    result = assemble_frontend_settings(
        SIGNED_IN, [], default_plugins.get_all_plugins(), frontend_config, UpdateState()
    )
    assert result["panels"]["heatmap"]["sort"] == 100


def test_single_default(assemble, make_record):
    """The record flagged default is selected."""
    records = [make_record(name="a"), make_record(name="b", is_default=True), make_record(name="c")]
    assert assemble(records)["defaultDatasource"] == "b"


def test_no_default(assemble, make_record):
    """Without a flagged record the built-in source is default."""
    records = [make_record(name="a"), make_record(name="b")]
    assert assemble(records)["defaultDatasource"] == GRAFANA_DATASOURCE


def test_multiple_defaults_last_wins(assemble, make_record):
    """With several flagged records the last in order wins."""
    records = [
        make_record(name="a", is_default=True),
        make_record(name="b"),
        make_record(name="c", is_default=True),
    ]
    assert assemble(records)["defaultDatasource"] == "c"


def test_name_collision_last_wins(assemble, make_record):
    """A later record with the same name replaces the earlier descriptor."""
    records = [
        make_record(name="dup", id=1, url="http://first"),
        make_record(name="dup", id=2, url="http://second"),
    ]
    assert assemble(records)["datasources"]["dup"]["url"] == "/api/datasources/proxy/2"


def test_name_collision_with_synthetic(assemble, make_record):
    """A record named like the built-in entry is replaced by it."""
    record = make_record(name=GRAFANA_DATASOURCE, ds_type="graphite")
    descriptor = assemble([record])["datasources"][GRAFANA_DATASOURCE]
    assert descriptor["type"] == "grafana"


@pytest.mark.parametrize(
    "allow, signed_in, admin, expected",
    [
        (True, True, False, True),
        (True, False, False, False),
        (False, True, False, False),
        (False, False, True, True),
        (False, True, True, True),
    ],
)
def test_allow_org_create(assemble, frontend_config, allow, signed_in, admin, expected):
    """allowOrgCreate is (flag and signed in) or admin."""
    config = dataclasses.replace(frontend_config, allow_user_org_create=allow)
    session = SessionContext(org_id=1, is_signed_in=signed_in, is_grafana_admin=admin)
    assert assemble(session=session, config=config)["allowOrgCreate"] is expected


def test_flags_and_build_info(assemble):
    """Process flags and build info come from the config and update state."""
    result = assemble(updates=UpdateState(latest_version="4.1.0", has_update=True))

    assert result["appSubUrl"] == "/grafana"
    assert result["authProxyEnabled"] is False
    assert result["ldapEnabled"] is True
    assert result["alertingEnabled"] is False
    assert result["buildInfo"] == {
        "version": "4.0.0",
        "commit": "abc1234",
        "buildstamp": 1480000000,
        "latestVersion": "4.1.0",
        "hasUpdate": True,
        "env": "production",
    }


def test_top_level_keys(assemble):
    """The document has exactly the documented top-level keys."""
    assert set(assemble()) == {
        "defaultDatasource",
        "datasources",
        "panels",
        "appSubUrl",
        "allowOrgCreate",
        "authProxyEnabled",
        "ldapEnabled",
        "alertingEnabled",
        "buildInfo",
    }


# ---------------------------------------------------------------------------
# get_frontend_settings
# ---------------------------------------------------------------------------


@pytest.mark.anyio
async def test_get_frontend_settings(default_plugins, frontend_config, make_record):
    """Records come from the store for the session's organization."""
    del default_plugins
    store = MemoryStore(
        records=[
            make_record(name="mine", org_id=1, is_default=True),
            make_record(name="theirs", org_id=2),
        ]
    )
    result = await get_frontend_settings(SIGNED_IN, store, frontend_config, UpdateState())

    assert "mine" in result["datasources"]
    assert "theirs" not in result["datasources"]
    assert result["defaultDatasource"] == "mine"


@pytest.mark.anyio
async def test_get_frontend_settings_anonymous_org(default_plugins, frontend_config, make_record):
    """The sentinel organization sees only the synthetic entries."""
    del default_plugins
    store = MemoryStore(records=[make_record(name="mine", org_id=1)])
    result = await get_frontend_settings(SessionContext(org_id=0), store, frontend_config, UpdateState())

    assert set(result["datasources"]) == {GRAFANA_DATASOURCE, MIXED_DATASOURCE}
    assert result["allowOrgCreate"] is False


@pytest.mark.anyio
async def test_get_frontend_settings_disabled_plugin(default_plugins, frontend_config, make_record):
    """A plugin disabled for the organization hides its data sources and panels."""
    del default_plugins
    store = MemoryStore(
        records=[make_record(name="prom", ds_type="prometheus")],
        plugin_settings=[
            PluginSetting(org_id=1, plugin_id="prometheus", enabled=False),
            PluginSetting(org_id=1, plugin_id="table", enabled=False),
        ],
    )
    result = await get_frontend_settings(SIGNED_IN, store, frontend_config, UpdateState())

    assert "prom" not in result["datasources"]
    assert "table" not in result["panels"]
    assert "graph" in result["panels"]


@pytest.mark.anyio
async def test_get_frontend_settings_query_error(default_plugins, frontend_config):
    """A failing data-source lookup propagates QueryError."""
    del default_plugins
    store = MemoryStore()
    store.fetch_data_sources = AsyncMock(side_effect=QueryError("boom"))

    with pytest.raises(QueryError):
        await get_frontend_settings(SIGNED_IN, store, frontend_config, UpdateState())


@pytest.mark.anyio
async def test_get_frontend_settings_plugin_error(default_plugins, frontend_config):
    """A failing plugin-settings lookup propagates PluginLookupError."""
    del default_plugins
    store = MemoryStore()
    store.fetch_plugin_settings = AsyncMock(side_effect=QueryError("boom"))

    with pytest.raises(PluginLookupError):
        await get_frontend_settings(SIGNED_IN, store, frontend_config, UpdateState())
