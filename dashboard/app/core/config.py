"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Server settings read from `DASH_*` environment variables and the `.env.<env>` file.
"""

import os
import secrets
from typing import Optional

from pydantic import PrivateAttr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dashboard._version import __version__
from dashboard.app.core.paths import PROJECT_ROOT

DEFAULT_UPDATE_CHECK_URL = "https://raw.githubusercontent.com/grafana/grafana/main/latest.json"


class Settings(BaseSettings):
    """Every server knob, one field per `DASH_*` variable."""

    model_config = SettingsConfigDict(
        env_prefix="DASH_",
        env_file=PROJECT_ROOT / f".env.{os.getenv('DASH_ENV', 'dev')}",
        env_file_encoding="utf-8",
        extra="forbid",
    )

    # Server
    env: str = "production"
    url_prefix: str = ""
    port: int = 8000
    log_level: str = "INFO"

    # Auth
    api_key: Optional[str] = None
    admin_api_key: Optional[str] = None
    anonymous_org_id: int = 0

    # Frontend
    app_sub_url: str = ""
    allow_user_org_create: bool = True
    auth_proxy_enabled: bool = False
    ldap_enabled: bool = False
    alerting_enabled: bool = False

    # Build
    build_version: str = __version__
    build_commit: str = "NA"
    build_stamp: int = 0

    # Plugins / provisioning
    plugins_path: Optional[str] = None
    config_file: Optional[str] = None

    # Updates
    check_for_updates: bool = False
    update_check_url: str = DEFAULT_UPDATE_CHECK_URL

    # Database
    db_username: Optional[str] = None
    db_password: Optional[str] = None
    db_dsn: Optional[str] = None
    db_wallet_password: Optional[str] = None
    db_wallet_location: Optional[str] = None

    _key_generated: bool = PrivateAttr(default=False)

    @model_validator(mode="after")
    def _ensure_api_key(self) -> "Settings":
        self._key_generated = self.api_key is None
        if self._key_generated:
            self.api_key = secrets.token_urlsafe(32)
        return self

    @property
    def api_key_generated(self) -> bool:
        """True when no `DASH_API_KEY` was configured and one was minted at startup."""
        return self._key_generated


settings = Settings()
