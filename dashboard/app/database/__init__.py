"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Data-source store selection and startup lifecycle.
"""

import logging
from typing import Dict, Optional

import oracledb

from .config import DatabaseSettings, close_pool, create_pool, get_database_settings
from .schema import SCHEMA_DDL
from .sql import DDL_IGNORED_CODES, execute_sql
from .store import MemoryStore, OracleStore, QueryError, Store

LOGGER = logging.getLogger(__name__)

_STORE: Dict[str, Store] = {"value": MemoryStore()}

__all__ = ["QueryError", "Store", "close_store", "get_store", "init_store", "set_store"]


def get_store() -> Store:
    """Return the active data-source store."""

    return _STORE["value"]


def set_store(store: Store) -> Store:
    """Replace the active data-source store."""

    _STORE["value"] = store
    return store


async def _open_oracle_store(db_settings: DatabaseSettings) -> Optional[OracleStore]:
    pool = None
    try:
        pool = await create_pool(db_settings)
        async with pool.acquire() as conn:
            await execute_sql(conn, "SELECT 1 FROM DUAL")
            for ddl in SCHEMA_DDL:
                await execute_sql(conn, ddl, ignore_codes=DDL_IGNORED_CODES)
        LOGGER.info("Data-source schema initialized")
        return OracleStore(pool)
    except oracledb.Error as exc:
        LOGGER.warning("Data-source schema initialization failed")
        LOGGER.warning("Database error: %s", exc)
        await close_pool(pool)
        return None


async def init_store(db_settings: DatabaseSettings | None = None) -> Store:
    """Select the data-source store for this process.

    Uses the Oracle-backed store when credentials are configured and the
    connectivity check succeeds; otherwise falls back to an empty in-memory
    store so the server still starts.
    """
    if db_settings is None:
        db_settings = get_database_settings()
    store: Optional[Store] = None
    if db_settings.has_credentials():
        store = await _open_oracle_store(db_settings)
    else:
        LOGGER.info("Skipping database initialization: missing credentials.")
    if store is None:
        LOGGER.info("Using in-memory data-source store")
        store = MemoryStore()
    return set_store(store)


async def close_store() -> None:
    """Close the active store and reset to an empty in-memory one."""

    await get_store().close()
    set_store(MemoryStore())
