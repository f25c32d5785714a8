"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Shared FastAPI dependencies.
"""

import hmac
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import APIKeyHeader

from dashboard.app.core.config import settings
from dashboard.app.datasources.schemas import DEFAULT_ORG_ID
from dashboard.app.frontend.settings import SessionContext

_api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def _matches(api_key: str, configured_key: Optional[str]) -> bool:
    return configured_key is not None and hmac.compare_digest(api_key, configured_key)


async def verify_api_key(
    api_key: str | None = Depends(_api_key_header),
) -> str:
    """Validate the X-API-Key header against the configured user or admin key.

    Rejects all requests when no API key is configured (fail-secure).
    """
    if api_key is None or not (_matches(api_key, settings.api_key) or _matches(api_key, settings.admin_api_key)):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return api_key


async def get_session(
    api_key: str | None = Depends(_api_key_header),
    org_id: int | None = Header(default=None, alias="X-Grafana-Org-Id"),
) -> SessionContext:
    """Derive the caller's session from request headers.

    Without an API key the caller is anonymous and scoped to the configured
    anonymous organization. A valid key signs the caller in to the org named
    by ``X-Grafana-Org-Id`` (default org otherwise); the admin key also grants
    admin rights. An invalid key is rejected.

    Keys are not bound to organizations: every holder of the user key is
    trusted with every org, including ``include_sensitive`` data-source
    reads. Deployments that need tenant isolation must run one server (and
    one key pair) per organization.
    """
    if api_key is None:
        return SessionContext(org_id=settings.anonymous_org_id)

    is_admin = _matches(api_key, settings.admin_api_key)
    if not is_admin and not _matches(api_key, settings.api_key):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    return SessionContext(
        org_id=org_id if org_id is not None else DEFAULT_ORG_ID,
        is_signed_in=True,
        is_grafana_admin=is_admin,
    )
