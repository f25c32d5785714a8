"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Endpoint serving the web client's startup settings.
"""
# spell-checker:ignore noauth

import logging

from fastapi import APIRouter, Depends, HTTPException

from dashboard.app.api.deps import get_session
from dashboard.app.database import get_store
from dashboard.app.database.store import QueryError
from dashboard.app.frontend.config import get_frontend_config
from dashboard.app.frontend.settings import SessionContext, get_frontend_settings
from dashboard.app.plugins.registry import PluginLookupError
from dashboard.app.updates import get_update_state

LOGGER = logging.getLogger(__name__)

noauth = APIRouter(prefix="/frontend")


@noauth.get("/settings")
async def frontend_settings(session: SessionContext = Depends(get_session)):
    """Return data sources, panels and build info for the caller's organization."""
    try:
        return await get_frontend_settings(session, get_store(), get_frontend_config(), get_update_state())
    except (QueryError, PluginLookupError) as exc:
        LOGGER.exception("Failed to get frontend settings for org=%s", session.org_id)
        raise HTTPException(status_code=400, detail="Failed to get frontend settings") from exc
