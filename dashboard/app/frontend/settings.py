"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Assembles the settings document the web client loads on startup.
"""

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from dashboard.app.database.store import Store
from dashboard.app.datasources.schemas import DataSourceRecord
from dashboard.app.plugins.registry import get_datasource_meta, get_enabled_plugins
from dashboard.app.plugins.schemas import PluginSet
from dashboard.app.updates import UpdateState

from .config import FrontendConfig
from .descriptors import build_datasource_descriptor, build_panel_descriptor

LOGGER = logging.getLogger(__name__)

GRAFANA_DATASOURCE = "-- Grafana --"
MIXED_DATASOURCE = "-- Mixed --"


@dataclass(frozen=True)
class SessionContext:
    """The caller's identity as far as settings assembly is concerned."""

    org_id: int
    is_signed_in: bool = False
    is_grafana_admin: bool = False


def assemble_frontend_settings(
    session: SessionContext,
    records: Sequence[DataSourceRecord],
    plugins: PluginSet,
    config: FrontendConfig,
    updates: UpdateState,
) -> dict[str, Any]:
    """Join data-source records with plugin metadata into the settings document.

    Records are processed in order: a later default or a later record with the
    same name replaces an earlier one.
    """
    datasources: dict[str, Any] = {}
    default_datasource = ""

    for record in records:
        meta = plugins.datasources.get(record.type)
        if meta is None:
            # TODO: surface skipped data sources to admins instead of only logging them
            LOGGER.error(
                "Could not find plugin definition for data source: %s (name=%s, org=%s)",
                record.type,
                record.name,
                record.org_id,
            )
            continue

        if record.is_default:
            default_datasource = record.name

        datasources[record.name] = build_datasource_descriptor(record, meta)

    datasources[GRAFANA_DATASOURCE] = {
        "type": "grafana",
        "name": GRAFANA_DATASOURCE,
        "meta": get_datasource_meta("grafana").model_dump(by_alias=True),
    }
    datasources[MIXED_DATASOURCE] = {
        "type": "mixed",
        "meta": get_datasource_meta("mixed").model_dump(by_alias=True),
    }

    if not default_datasource:
        default_datasource = GRAFANA_DATASOURCE

    panels = {panel.id: build_panel_descriptor(panel) for panel in plugins.panels.values()}

    return {
        "defaultDatasource": default_datasource,
        "datasources": datasources,
        "panels": panels,
        "appSubUrl": config.app_sub_url,
        "allowOrgCreate": (config.allow_user_org_create and session.is_signed_in) or session.is_grafana_admin,
        "authProxyEnabled": config.auth_proxy_enabled,
        "ldapEnabled": config.ldap_enabled,
        "alertingEnabled": config.alerting_enabled,
        "buildInfo": {
            "version": config.build_version,
            "commit": config.build_commit,
            "buildstamp": config.build_stamp,
            "latestVersion": updates.latest_version,
            "hasUpdate": updates.has_update,
            "env": config.env,
        },
    }


async def get_frontend_settings(
    session: SessionContext,
    store: Store,
    config: FrontendConfig,
    updates: UpdateState,
) -> dict[str, Any]:
    """Collect the caller's data sources and enabled plugins, then assemble settings.

    Raises:
        QueryError: the data-source lookup failed.
        PluginLookupError: the enabled plugins could not be determined.
    """
    records = await store.fetch_data_sources(session.org_id)
    plugins = await get_enabled_plugins(session.org_id, store)
    return assemble_frontend_settings(session, records, plugins, config, updates)
