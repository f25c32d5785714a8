"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Per-datasource and per-panel descriptors sent to the web client.

Descriptors are plain dicts built field by field; keys are only present when
the record's type and access mode call for them.
"""
# spell-checker:ignore singlestat alertlist dashlist

import base64
from typing import Any

from dashboard.app.datasources.schemas import (
    ACCESS_DIRECT,
    ACCESS_PROXY,
    DS_ES,
    DS_INFLUXDB,
    DS_INFLUXDB_08,
    DS_PROMETHEUS,
    DataSourceRecord,
)
from dashboard.app.plugins.schemas import DataSourcePluginMeta, PanelPluginMeta

DEFAULT_PANEL_SORT = 100

PANEL_SORT_ORDER: dict[str, int] = {
    "graph": 1,
    "singlestat": 2,
    "table": 3,
    "text": 4,
    "alertlist": 5,
    "dashlist": 6,
}


def get_panel_sort(panel_id: str) -> int:
    """Return the display rank for a panel type."""

    return PANEL_SORT_ORDER.get(panel_id, DEFAULT_PANEL_SORT)


def get_basic_auth_header(user: str, password: str) -> str:
    """Return the HTTP Basic ``Authorization`` header value for *user* and *password*."""

    credentials = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {credentials}"


def proxy_url(ds_id: int) -> str:
    """Return the server-side proxy path for a data source."""

    return f"/api/datasources/proxy/{ds_id}"


def build_datasource_descriptor(record: DataSourceRecord, meta: DataSourcePluginMeta) -> dict[str, Any]:
    """Build the client descriptor for one data source."""

    url = record.url
    if record.access == ACCESS_PROXY:
        url = proxy_url(record.id)

    descriptor: dict[str, Any] = {
        "type": record.type,
        "name": record.name,
        "url": url,
        "meta": meta.model_dump(by_alias=True),
    }

    if record.json_data:
        descriptor["jsonData"] = record.json_data

    if record.access == ACCESS_DIRECT:
        if record.basic_auth:
            descriptor["basicAuth"] = get_basic_auth_header(record.basic_auth_user, record.basic_auth_password)
        if record.with_credentials:
            descriptor["withCredentials"] = record.with_credentials

        if record.type == DS_INFLUXDB_08:
            descriptor["username"] = record.user
            descriptor["password"] = record.password
            descriptor["url"] = f"{url}/db/{record.database}"

        if record.type == DS_INFLUXDB:
            descriptor["username"] = record.user
            descriptor["password"] = record.password
            descriptor["database"] = record.database

    if record.type == DS_ES:
        descriptor["index"] = record.database

    if record.type == DS_INFLUXDB:
        descriptor["database"] = record.database

    if record.type == DS_PROMETHEUS:
        # unproxied URL so the client can link to the Prometheus web UI
        descriptor["directUrl"] = record.url

    return descriptor


def build_panel_descriptor(meta: PanelPluginMeta) -> dict[str, Any]:
    """Build the client descriptor for one panel type."""

    return {
        "module": meta.module,
        "baseUrl": meta.base_url,
        "name": meta.name,
        "id": meta.id,
        "info": meta.info.model_dump(by_alias=True),
        "hideFromList": meta.hide_from_list,
        "sort": get_panel_sort(meta.id),
    }
