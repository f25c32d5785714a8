"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Pydantic models for plugin metadata.

Field names follow Python conventions; serialization uses the camelCase keys
found in ``plugin.json`` and expected by the web client.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _PluginModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PluginInfo(_PluginModel):
    """Descriptive information shown in plugin listings."""

    author: dict[str, Any] = {}
    description: str = ""
    links: list[dict[str, Any]] = []
    logos: dict[str, str] = {}
    version: str = ""
    updated: str = ""


class _PluginBase(_PluginModel):
    id: str = ""
    name: str = ""
    module: str = ""
    base_url: str = ""
    info: PluginInfo = PluginInfo()
    enabled: bool = True


class DataSourcePluginMeta(_PluginBase):
    """Metadata for a data-source plugin type."""

    type: Literal["datasource"] = "datasource"
    metrics: bool = False
    annotations: bool = False
    built_in: bool = False
    mixed: bool = False


class PanelPluginMeta(_PluginBase):
    """Metadata for a panel plugin type."""

    type: Literal["panel"] = "panel"
    hide_from_list: bool = False


class PluginSet(_PluginModel):
    """Plugins enabled for one organization."""

    datasources: dict[str, DataSourcePluginMeta] = {}
    panels: dict[str, PanelPluginMeta] = {}


class PluginSetting(_PluginModel):
    """Per-organization override of a plugin's enabled flag."""

    org_id: int
    plugin_id: str
    enabled: bool


class PluginSettingUpdate(_PluginModel):
    """Payload for enabling or disabling a plugin for the caller's organization."""

    enabled: bool
