"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Plugin registry and startup lifecycle.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Union

from pydantic import ValidationError

from dashboard.app.database.store import QueryError, Store
from .defaults import DEFAULT_DATASOURCE_PLUGINS, DEFAULT_PANEL_PLUGINS, builtin_paths, external_paths
from .schemas import DataSourcePluginMeta, PanelPluginMeta, PluginSet

LOGGER = logging.getLogger(__name__)

PLUGIN_MANIFEST = 'plugin.json'

_DATASOURCES: Dict[str, DataSourcePluginMeta] = {}
_PANELS: Dict[str, PanelPluginMeta] = {}


class PluginLookupError(Exception):
    """Raised when the enabled plugins for an organization cannot be determined."""


def clear_plugin_registry() -> None:
    """Remove all registered plugins."""

    _DATASOURCES.clear()
    _PANELS.clear()


def register_plugin(meta: Union[DataSourcePluginMeta, PanelPluginMeta]) -> None:
    """Store plugin metadata by id (last-write wins)."""

    if isinstance(meta, PanelPluginMeta):
        _PANELS[meta.id] = meta
    else:
        _DATASOURCES[meta.id] = meta


def is_registered(plugin_id: str) -> bool:
    """Return True when *plugin_id* names a known data-source or panel plugin."""

    return plugin_id in _DATASOURCES or plugin_id in _PANELS


def get_datasource_meta(plugin_id: str) -> DataSourcePluginMeta:
    """Return metadata for a data-source type, or an empty meta when unknown."""

    return _DATASOURCES.get(plugin_id) or DataSourcePluginMeta()


def get_all_plugins() -> PluginSet:
    """Return every registered plugin regardless of enablement."""

    return PluginSet(datasources=dict(_DATASOURCES), panels=dict(_PANELS))


def load_default_plugins() -> None:
    """Startup entry point: register the plugins shipped with the server."""

    for entry in DEFAULT_DATASOURCE_PLUGINS:
        register_plugin(DataSourcePluginMeta(**builtin_paths('datasource', entry['id']), **entry))
    for entry in DEFAULT_PANEL_PLUGINS:
        register_plugin(PanelPluginMeta(**builtin_paths('panel', entry['id']), **entry))

    LOGGER.info('Loaded %d data-source and %d panel plugin(s)', len(_DATASOURCES), len(_PANELS))


def _load_manifest(manifest: Path) -> Union[DataSourcePluginMeta, PanelPluginMeta, None]:
    """Parse one ``plugin.json``; returns None for unsupported or invalid manifests."""

    try:
        data = json.loads(manifest.read_text(encoding='utf-8'))
    except (OSError, json.JSONDecodeError) as exc:
        LOGGER.warning('Failed to read plugin manifest %s: %s', manifest, exc)
        return None

    if not isinstance(data, dict) or not data.get('id'):
        LOGGER.warning('Plugin manifest %s has no id', manifest)
        return None

    paths = external_paths(data['id'])
    try:
        if data.get('type') == 'datasource':
            return DataSourcePluginMeta.model_validate({**data, 'module': paths['module'], 'baseUrl': paths['base_url']})
        if data.get('type') == 'panel':
            return PanelPluginMeta.model_validate({**data, 'module': paths['module'], 'baseUrl': paths['base_url']})
    except ValidationError as exc:
        LOGGER.warning('Invalid plugin manifest %s: %s', manifest, exc)
        return None

    LOGGER.info('Ignoring plugin %s of unsupported type %r', data['id'], data.get('type'))
    return None


def scan_plugins(path: Path) -> int:
    """Register every data-source and panel plugin found below *path*.

    Returns the number of plugins registered. A missing directory is logged
    and treated as empty.
    """
    if not path.is_dir():
        LOGGER.info('Plugin directory not found: %s', path)
        return 0

    count = 0
    for manifest in sorted(path.rglob(PLUGIN_MANIFEST)):
        meta = _load_manifest(manifest)
        if meta is None:
            continue
        register_plugin(meta)
        count += 1

    LOGGER.info('Registered %d plugin(s) from %s', count, path)
    return count


async def get_enabled_plugins(org_id: int, store: Store) -> PluginSet:
    """Return the plugins enabled for *org_id*.

    Each plugin's own ``enabled`` flag is the default; a stored per-organization
    setting overrides it.
    """
    try:
        org_settings = await store.fetch_plugin_settings(org_id)
    except QueryError as exc:
        raise PluginLookupError(f'Failed to load plugin settings for org {org_id}') from exc

    overrides = {setting.plugin_id: setting.enabled for setting in org_settings}
    return PluginSet(
        datasources={pid: meta for pid, meta in _DATASOURCES.items() if overrides.get(pid, meta.enabled)},
        panels={pid: meta for pid, meta in _PANELS.items() if overrides.get(pid, meta.enabled)},
    )
