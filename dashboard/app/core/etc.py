"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Data sources and plugin settings provisioned from a JSON configuration file.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from dashboard.app.database.store import DataSourceExistsError, Store
from dashboard.app.datasources.schemas import DEFAULT_ORG_ID, DataSourceCreate
from dashboard.app.plugins.schemas import PluginSetting

LOGGER = logging.getLogger(__name__)


class DataSourceProvision(DataSourceCreate):
    """A data source declared in the configuration file."""

    org_id: int = DEFAULT_ORG_ID


class ProvisioningConfig(BaseModel):
    """Top-level structure of the configuration file."""

    datasources: list[DataSourceProvision] = []
    plugin_settings: list[PluginSetting] = []


def load_config_file(path: Optional[Path]) -> Optional[ProvisioningConfig]:
    """Load and validate the configuration file.

    Returns None if no path is given or the file is missing, unreadable, or
    contains invalid data.
    """
    if path is None:
        return None
    if not path.is_file():
        LOGGER.info("Configuration file not found: %s", path)
        return None

    try:
        raw = path.read_text(encoding="utf-8")
        data = json.loads(raw)
        return ProvisioningConfig.model_validate(data)
    except (OSError, json.JSONDecodeError, ValueError) as exc:
        LOGGER.warning("Failed to load configuration file %s: %s", path, exc)
        return None


async def provision(store: Store, config: ProvisioningConfig) -> int:
    """Add provisioned data sources and plugin settings to *store*.

    Data sources whose name already exists in their organization are left
    untouched. Returns the number of data sources added.
    """
    added = 0
    for entry in config.datasources:
        payload = DataSourceCreate.model_validate(entry.model_dump(exclude={"org_id"}))
        try:
            await store.add_data_source(entry.org_id, payload)
        except DataSourceExistsError:
            LOGGER.debug("Data source %s already exists in org %d", entry.name, entry.org_id)
            continue
        added += 1

    for setting in config.plugin_settings:
        await store.set_plugin_setting(setting)

    LOGGER.info(
        "Provisioned %d data source(s) and %d plugin setting(s)", added, len(config.plugin_settings)
    )
    return added
