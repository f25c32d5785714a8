"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Process-wide flags and build information exposed to the web client.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from dashboard.app.core.config import Settings, settings


@dataclass(frozen=True)
class FrontendConfig:
    """Immutable snapshot of the settings the frontend assembler reads."""

    app_sub_url: str = ""
    allow_user_org_create: bool = True
    auth_proxy_enabled: bool = False
    ldap_enabled: bool = False
    alerting_enabled: bool = False
    build_version: str = ""
    build_commit: str = ""
    build_stamp: int = 0
    env: str = "production"

    @classmethod
    def from_settings(cls, source: Settings) -> "FrontendConfig":
        """Build the snapshot from application settings."""

        return cls(
            app_sub_url=source.app_sub_url,
            allow_user_org_create=source.allow_user_org_create,
            auth_proxy_enabled=source.auth_proxy_enabled,
            ldap_enabled=source.ldap_enabled,
            alerting_enabled=source.alerting_enabled,
            build_version=source.build_version,
            build_commit=source.build_commit,
            build_stamp=source.build_stamp,
            env=source.env,
        )


_FRONTEND_CONFIG: Dict[str, FrontendConfig] = {}


def init_frontend_config(config: Optional[FrontendConfig] = None) -> FrontendConfig:
    """Store the snapshot used for every request; built from settings when omitted."""

    _FRONTEND_CONFIG["value"] = config or FrontendConfig.from_settings(settings)
    return _FRONTEND_CONFIG["value"]


def get_frontend_config() -> FrontendConfig:
    """Return the startup snapshot, creating it on first use."""

    if "value" not in _FRONTEND_CONFIG:
        return init_frontend_config()
    return _FRONTEND_CONFIG["value"]
