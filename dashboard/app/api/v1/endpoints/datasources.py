"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Endpoints for managing the caller's organization data sources.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from dashboard.app.api.deps import get_session
from dashboard.app.database import get_store
from dashboard.app.database.store import DataSourceExistsError, QueryError
from dashboard.app.datasources.schemas import DataSourceCreate, DataSourceRecord, DataSourceSensitive
from dashboard.app.frontend.settings import SessionContext
from dashboard.app.plugins.registry import get_all_plugins

LOGGER = logging.getLogger(__name__)

auth = APIRouter(prefix="/datasources")

SENSITIVE_FIELDS = set(DataSourceSensitive.model_fields.keys())


def _query_failed(exc: QueryError) -> HTTPException:
    LOGGER.error("Data source query failed: %s", exc)
    return HTTPException(status_code=400, detail="Failed to query data sources")


@auth.get("", response_model=list[DataSourceRecord], response_model_exclude_unset=True)
async def list_data_sources(
    session: SessionContext = Depends(get_session),
    include_sensitive: bool = Query(default=False),
):
    """Return the organization's data sources in creation order."""
    try:
        records = await get_store().fetch_data_sources(session.org_id)
    except QueryError as exc:
        raise _query_failed(exc) from exc
    exclude = None if include_sensitive else SENSITIVE_FIELDS
    return [record.model_dump(exclude=exclude) for record in records]


@auth.get("/{ds_id}", response_model=DataSourceRecord, response_model_exclude_unset=True)
async def get_data_source(
    ds_id: int,
    session: SessionContext = Depends(get_session),
    include_sensitive: bool = Query(default=False),
):
    """Return a single data source by id."""
    try:
        record = await get_store().get_data_source(session.org_id, ds_id)
    except QueryError as exc:
        raise _query_failed(exc) from exc
    if record is None:
        raise HTTPException(status_code=404, detail=f"Data source not found: {ds_id}")
    exclude = None if include_sensitive else SENSITIVE_FIELDS
    return record.model_dump(exclude=exclude)


@auth.post("", response_model=DataSourceRecord, status_code=201, response_model_exclude_unset=True)
async def create_data_source(body: DataSourceCreate, session: SessionContext = Depends(get_session)):
    """Add a data source to the organization."""
    if body.type not in get_all_plugins().datasources:
        LOGGER.warning("Creating data source %s with unregistered type %s", body.name, body.type)
    try:
        record = await get_store().add_data_source(session.org_id, body)
    except DataSourceExistsError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except QueryError as exc:
        raise _query_failed(exc) from exc
    return record.model_dump(exclude=SENSITIVE_FIELDS)


@auth.delete("/{ds_id}", status_code=204)
async def delete_data_source(ds_id: int, session: SessionContext = Depends(get_session)):
    """Remove a data source from the organization."""
    try:
        deleted = await get_store().delete_data_source(session.org_id, ds_id)
    except QueryError as exc:
        raise _query_failed(exc) from exc
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Data source not found: {ds_id}")
