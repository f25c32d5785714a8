"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Connection settings and pool lifecycle for the Oracle data-source store.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Optional

import oracledb

from dashboard.app.core.config import settings
from dashboard.app.core.paths import PROJECT_ROOT

LOGGER = logging.getLogger(__name__)

_DEFAULT_TNS_ADMIN = PROJECT_ROOT / "tns_admin"
POOL_MIN = 1
POOL_MAX = 5


@dataclass(frozen=True)
class WalletConfig:
    """Wallet used for mTLS connections (Autonomous Database)."""

    password: Optional[str] = None
    location: Optional[str] = None


@dataclass(frozen=True)
class DatabaseSettings:
    """Where the data-source tables live and how to reach them."""

    username: Optional[str] = None
    password: Optional[str] = None
    dsn: Optional[str] = None
    wallet: WalletConfig = field(default_factory=WalletConfig)
    config_dir: Optional[str] = None
    tcp_connect_timeout: int = 10

    def has_credentials(self) -> bool:
        """True when username, password and dsn are all set."""

        return bool(self.username and self.password and self.dsn)

    def connect_args(self) -> dict[str, Any]:
        """Keyword arguments for ``oracledb.create_pool_async``.

        The TNS directory falls back to ``TNS_ADMIN`` and then the project's
        ``tns_admin``. A wallet password with no location reads the wallet
        from that directory.
        """
        config_dir = self.config_dir or os.environ.get("TNS_ADMIN") or str(_DEFAULT_TNS_ADMIN)
        args: dict[str, Any] = {
            "user": self.username,
            "password": self.password,
            "dsn": self.dsn,
            "config_dir": config_dir,
            "tcp_connect_timeout": self.tcp_connect_timeout,
        }
        if self.wallet.password:
            args["wallet_password"] = self.wallet.password
            args["wallet_location"] = self.wallet.location or config_dir
        elif self.wallet.location:
            args["wallet_location"] = self.wallet.location
        return args


def get_database_settings() -> DatabaseSettings:
    """Database settings from the ``DASH_DB_*`` environment."""

    return DatabaseSettings(
        username=settings.db_username,
        password=settings.db_password,
        dsn=settings.db_dsn,
        wallet=WalletConfig(
            password=settings.db_wallet_password,
            location=settings.db_wallet_location,
        ),
    )


async def create_pool(db_settings: DatabaseSettings) -> oracledb.AsyncConnectionPool:
    """Open the async connection pool backing the store."""

    if not db_settings.has_credentials():
        raise ValueError("Database settings missing credentials")

    LOGGER.info("Connecting to data-source database dsn=%s", db_settings.dsn)
    return oracledb.create_pool_async(**db_settings.connect_args(), min=POOL_MIN, max=POOL_MAX, increment=1)


async def close_pool(pool: Optional[oracledb.AsyncConnectionPool]) -> None:
    """Close *pool* if one was opened; failures are logged, not raised."""

    if pool is None:
        return
    try:
        await pool.close()
    except oracledb.Error as exc:
        LOGGER.warning("Failed to close database pool: %s", exc)
