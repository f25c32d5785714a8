"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Pydantic models for persisted data-source definitions.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

NO_ORG_ID = 0
DEFAULT_ORG_ID = 1

ACCESS_PROXY = "proxy"
ACCESS_DIRECT = "direct"

DS_GRAPHITE = "graphite"
DS_INFLUXDB = "influxdb"
DS_INFLUXDB_08 = "influxdb_08"
DS_ES = "elasticsearch"
DS_PROMETHEUS = "prometheus"

AccessMode = Literal["proxy", "direct"]

# Width of the VARCHAR2 columns in dash_data_source
NAME_MAX_LENGTH = 190
COLUMN_MAX_LENGTH = 255


class DataSourceSensitive(BaseModel):
    """Sensitive data-source fields excluded from default API responses."""

    password: str = Field(default="", max_length=COLUMN_MAX_LENGTH)
    basic_auth_password: str = Field(default="", max_length=COLUMN_MAX_LENGTH)


class _DataSourceFields(DataSourceSensitive):
    """Fields shared by stored records and creation payloads."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    type: str = Field(..., min_length=1, max_length=COLUMN_MAX_LENGTH, examples=[DS_GRAPHITE, DS_PROMETHEUS, DS_INFLUXDB])
    access: AccessMode = ACCESS_PROXY
    url: str = Field(default="", max_length=COLUMN_MAX_LENGTH)
    is_default: bool = False
    basic_auth: bool = False
    basic_auth_user: str = Field(default="", max_length=COLUMN_MAX_LENGTH)
    with_credentials: bool = False
    json_data: Optional[dict[str, Any]] = None
    user: str = Field(default="", max_length=COLUMN_MAX_LENGTH)
    database: str = Field(default="", max_length=COLUMN_MAX_LENGTH)


class DataSourceCreate(_DataSourceFields):
    """Payload for adding a data source to the caller's organization."""


class DataSourceRecord(_DataSourceFields):
    """A data source as stored for one organization."""

    id: int
    org_id: int
