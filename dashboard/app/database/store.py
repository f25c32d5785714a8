"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Organization-scoped storage for data sources and plugin settings.

Records are always returned in ascending ``id`` order (creation order).
Callers rely on that ordering: when several records are flagged default, or
two share a name, the later record wins.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional

import oracledb

from dashboard.app.datasources.schemas import NO_ORG_ID, DataSourceCreate, DataSourceRecord
from dashboard.app.plugins.schemas import PluginSetting

from .config import close_pool
from .sql import execute_sql, ora_code

LOGGER = logging.getLogger(__name__)

# ORA-00001: unique constraint violated
_UNIQUE_VIOLATION = 1


class QueryError(Exception):
    """Raised when the backing store cannot answer a lookup."""


class DataSourceExistsError(ValueError):
    """Raised when a data-source name is already taken within an organization."""


class Store(ABC):
    """Persistence contract for data sources and per-organization plugin settings."""

    @abstractmethod
    async def fetch_data_sources(self, org_id: int) -> list[DataSourceRecord]:
        """Return the organization's data sources; empty when *org_id* is ``NO_ORG_ID``."""

    @abstractmethod
    async def get_data_source(self, org_id: int, ds_id: int) -> Optional[DataSourceRecord]:
        """Return a single data source, or None when it does not belong to *org_id*."""

    @abstractmethod
    async def add_data_source(self, org_id: int, payload: DataSourceCreate) -> DataSourceRecord:
        """Store a new data source and return it with its assigned id."""

    @abstractmethod
    async def delete_data_source(self, org_id: int, ds_id: int) -> bool:
        """Remove a data source. Returns True if it existed."""

    @abstractmethod
    async def fetch_plugin_settings(self, org_id: int) -> list[PluginSetting]:
        """Return the organization's plugin overrides."""

    @abstractmethod
    async def set_plugin_setting(self, setting: PluginSetting) -> PluginSetting:
        """Insert or replace a plugin override."""

    async def close(self) -> None:
        """Release resources held by the store."""


class MemoryStore(Store):
    """In-process store used when no database is configured."""

    def __init__(
        self,
        records: Iterable[DataSourceRecord] = (),
        plugin_settings: Iterable[PluginSetting] = (),
    ) -> None:
        self._records: dict[int, DataSourceRecord] = {}
        self._plugin_settings: dict[tuple[int, str], PluginSetting] = {}
        self._next_id = 1
        for record in records:
            self._records[record.id] = record
            self._next_id = max(self._next_id, record.id + 1)
        for setting in plugin_settings:
            self._plugin_settings[(setting.org_id, setting.plugin_id)] = setting

    async def fetch_data_sources(self, org_id: int) -> list[DataSourceRecord]:
        if org_id == NO_ORG_ID:
            return []
        return sorted(
            (record for record in self._records.values() if record.org_id == org_id),
            key=lambda record: record.id,
        )

    async def get_data_source(self, org_id: int, ds_id: int) -> Optional[DataSourceRecord]:
        record = self._records.get(ds_id)
        if record is None or record.org_id != org_id:
            return None
        return record

    async def add_data_source(self, org_id: int, payload: DataSourceCreate) -> DataSourceRecord:
        existing = await self.fetch_data_sources(org_id)
        if any(record.name == payload.name for record in existing):
            raise DataSourceExistsError(f"Data source already exists: {payload.name}")
        if payload.is_default:
            for record in existing:
                record.is_default = False
        record = DataSourceRecord(id=self._next_id, org_id=org_id, **payload.model_dump())
        self._records[record.id] = record
        self._next_id += 1
        return record

    async def delete_data_source(self, org_id: int, ds_id: int) -> bool:
        if await self.get_data_source(org_id, ds_id) is None:
            return False
        del self._records[ds_id]
        return True

    async def fetch_plugin_settings(self, org_id: int) -> list[PluginSetting]:
        if org_id == NO_ORG_ID:
            return []
        return [setting for (owner, _), setting in self._plugin_settings.items() if owner == org_id]

    async def set_plugin_setting(self, setting: PluginSetting) -> PluginSetting:
        self._plugin_settings[(setting.org_id, setting.plugin_id)] = setting
        return setting


_SELECT_DATA_SOURCES = """
    SELECT id, org_id, name, type, access_mode, url, is_default,
           basic_auth, basic_auth_user, basic_auth_password, with_credentials,
           json_data, user_name, password, database_name
      FROM dash_data_source
"""

_INSERT_DATA_SOURCE = """
    INSERT INTO dash_data_source (
        org_id, name, type, access_mode, url, is_default,
        basic_auth, basic_auth_user, basic_auth_password, with_credentials,
        json_data, user_name, password, database_name
    ) VALUES (
        :org_id, :name, :type, :access_mode, :url, :is_default,
        :basic_auth, :basic_auth_user, :basic_auth_password, :with_credentials,
        :json_data, :user_name, :password, :database_name
    )
"""


def _insert_binds(org_id: int, payload: DataSourceCreate) -> dict:
    return {
        "org_id": org_id,
        "name": payload.name,
        "type": payload.type,
        "access_mode": payload.access,
        "url": payload.url,
        "is_default": int(payload.is_default),
        "basic_auth": int(payload.basic_auth),
        "basic_auth_user": payload.basic_auth_user,
        "basic_auth_password": payload.basic_auth_password,
        "with_credentials": int(payload.with_credentials),
        "json_data": json.dumps(payload.json_data) if payload.json_data else None,
        "user_name": payload.user,
        "password": payload.password,
        "database_name": payload.database,
    }


def _row_to_record(row: tuple) -> DataSourceRecord:
    """Map a ``dash_data_source`` row to a record."""

    (ds_id, org_id, name, ds_type, access, url, is_default, basic_auth, basic_auth_user,
     basic_auth_password, with_credentials, json_data, user, password, database) = row
    if isinstance(json_data, (str, bytes)):
        json_data = json.loads(json_data)
    return DataSourceRecord(
        id=ds_id,
        org_id=org_id,
        name=name,
        type=ds_type,
        access=access,
        url=url or "",
        is_default=bool(is_default),
        basic_auth=bool(basic_auth),
        basic_auth_user=basic_auth_user or "",
        basic_auth_password=basic_auth_password or "",
        with_credentials=bool(with_credentials),
        json_data=json_data or None,
        user=user or "",
        password=password or "",
        database=database or "",
    )


class OracleStore(Store):
    """Store backed by the ``dash_data_source`` and ``dash_plugin_setting`` tables."""

    def __init__(self, pool: oracledb.AsyncConnectionPool) -> None:
        self.pool = pool

    async def _execute(self, sql: str, binds: Optional[dict] = None, commit: bool = False) -> Optional[list]:
        try:
            async with self.pool.acquire() as conn:
                rows = await execute_sql(conn, sql, binds)
                if commit:
                    await conn.commit()
                return rows
        except oracledb.Error as exc:
            raise QueryError(str(exc)) from exc

    async def fetch_data_sources(self, org_id: int) -> list[DataSourceRecord]:
        if org_id == NO_ORG_ID:
            return []
        rows = await self._execute(
            _SELECT_DATA_SOURCES + " WHERE org_id = :org_id ORDER BY id",
            {"org_id": org_id},
        )
        return [_row_to_record(row) for row in rows or []]

    async def get_data_source(self, org_id: int, ds_id: int) -> Optional[DataSourceRecord]:
        rows = await self._execute(
            _SELECT_DATA_SOURCES + " WHERE org_id = :org_id AND id = :id",
            {"org_id": org_id, "id": ds_id},
        )
        return _row_to_record(rows[0]) if rows else None

    async def _get_by_name(self, org_id: int, name: str) -> Optional[DataSourceRecord]:
        rows = await self._execute(
            _SELECT_DATA_SOURCES + " WHERE org_id = :org_id AND name = :name",
            {"org_id": org_id, "name": name},
        )
        return _row_to_record(rows[0]) if rows else None

    async def add_data_source(self, org_id: int, payload: DataSourceCreate) -> DataSourceRecord:
        """Clear the org's default flag (when needed) and insert in one transaction."""
        if await self._get_by_name(org_id, payload.name) is not None:
            raise DataSourceExistsError(f"Data source already exists: {payload.name}")
        try:
            async with self.pool.acquire() as conn:
                try:
                    if payload.is_default:
                        await execute_sql(
                            conn,
                            "UPDATE dash_data_source SET is_default = 0 WHERE org_id = :org_id",
                            {"org_id": org_id},
                        )
                    await execute_sql(conn, _INSERT_DATA_SOURCE, _insert_binds(org_id, payload))
                    await conn.commit()
                except oracledb.Error:
                    await conn.rollback()
                    raise
        except oracledb.IntegrityError as exc:
            if ora_code(exc) != _UNIQUE_VIOLATION:
                raise QueryError(str(exc)) from exc
            raise DataSourceExistsError(f"Data source already exists: {payload.name}") from exc
        except oracledb.Error as exc:
            raise QueryError(str(exc)) from exc
        record = await self._get_by_name(org_id, payload.name)
        if record is None:
            raise QueryError(f"Data source {payload.name} not found after insert")
        return record

    async def delete_data_source(self, org_id: int, ds_id: int) -> bool:
        if await self.get_data_source(org_id, ds_id) is None:
            return False
        await self._execute(
            "DELETE FROM dash_data_source WHERE org_id = :org_id AND id = :id",
            {"org_id": org_id, "id": ds_id},
            commit=True,
        )
        return True

    async def fetch_plugin_settings(self, org_id: int) -> list[PluginSetting]:
        if org_id == NO_ORG_ID:
            return []
        rows = await self._execute(
            "SELECT org_id, plugin_id, enabled FROM dash_plugin_setting WHERE org_id = :org_id",
            {"org_id": org_id},
        )
        return [
            PluginSetting(org_id=owner, plugin_id=plugin_id, enabled=bool(enabled))
            for owner, plugin_id, enabled in rows or []
        ]

    async def set_plugin_setting(self, setting: PluginSetting) -> PluginSetting:
        await self._execute(
            """
            MERGE INTO dash_plugin_setting dst
            USING (SELECT :org_id AS org_id, :plugin_id AS plugin_id FROM DUAL) src
            ON (dst.org_id = src.org_id AND dst.plugin_id = src.plugin_id)
            WHEN MATCHED THEN
                UPDATE SET enabled = :enabled, updated = SYSTIMESTAMP
            WHEN NOT MATCHED THEN
                INSERT (org_id, plugin_id, enabled, updated)
                VALUES (:org_id, :plugin_id, :enabled, SYSTIMESTAMP)
            """,
            {"org_id": setting.org_id, "plugin_id": setting.plugin_id, "enabled": int(setting.enabled)},
            commit=True,
        )
        return setting

    async def close(self) -> None:
        await close_pool(self.pool)
