"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Endpoints for listing plugins and toggling them per organization.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from dashboard.app.api.deps import get_session
from dashboard.app.database import get_store
from dashboard.app.database.store import QueryError
from dashboard.app.frontend.settings import SessionContext
from dashboard.app.plugins.registry import PluginLookupError, get_enabled_plugins, is_registered
from dashboard.app.plugins.schemas import PluginSet, PluginSetting, PluginSettingUpdate

LOGGER = logging.getLogger(__name__)

auth = APIRouter(prefix="/plugins")


@auth.get("", response_model=PluginSet)
async def list_plugins(session: SessionContext = Depends(get_session)):
    """Return the plugins enabled for the caller's organization."""
    try:
        return await get_enabled_plugins(session.org_id, get_store())
    except PluginLookupError as exc:
        LOGGER.exception("Failed to list plugins for org=%s", session.org_id)
        raise HTTPException(status_code=400, detail="Failed to get plugins") from exc


@auth.put("/{plugin_id}/settings", response_model=PluginSetting)
async def update_plugin_setting(
    plugin_id: str,
    body: PluginSettingUpdate,
    session: SessionContext = Depends(get_session),
):
    """Enable or disable a plugin for the caller's organization."""
    if not is_registered(plugin_id):
        raise HTTPException(status_code=404, detail=f"Plugin not found: {plugin_id}")
    setting = PluginSetting(org_id=session.org_id, plugin_id=plugin_id, enabled=body.enabled)
    try:
        return await get_store().set_plugin_setting(setting)
    except QueryError as exc:
        LOGGER.error("Plugin setting update failed: %s", exc)
        raise HTTPException(status_code=400, detail="Failed to update plugin setting") from exc
