"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

FastAPI application entrypoint.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from dashboard._version import __version__
from dashboard.app.api.v1.router import router as v1_router
from dashboard.app.core.config import settings
from dashboard.app.core.etc import load_config_file, provision
from dashboard.app.database import close_store, init_store
from dashboard.app.frontend.config import FrontendConfig, init_frontend_config
from dashboard.app.plugins.registry import load_default_plugins, scan_plugins
from dashboard.app.updates import check_for_updates

LOGGER = logging.getLogger(__name__)
#############################################################################
# APP FACTORY
#############################################################################


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """FastAPI Lifespan"""
    if settings.api_key_generated:
        LOGGER.warning("DASH_API_KEY not set, using generated key: %s", settings.api_key)

    store = await init_store()
    config_source = load_config_file(Path(settings.config_file) if settings.config_file else None)
    if config_source is not None:
        await provision(store, config_source)

    load_default_plugins()
    if settings.plugins_path:
        scan_plugins(Path(settings.plugins_path))

    frontend_config = init_frontend_config(FrontendConfig.from_settings(settings))
    if settings.check_for_updates:
        await check_for_updates(frontend_config.build_version, settings.update_check_url)

    try:
        yield
    finally:
        await close_store()


API_PREFIX = "/v1"

BASE_PATH = settings.url_prefix.strip("/")
BASE_PATH = f"/{BASE_PATH}" if BASE_PATH else ""

app = FastAPI(
    title="Dashboard Server",
    version=__version__,
    docs_url=f"{API_PREFIX}/docs",
    openapi_url=f"{API_PREFIX}/openapi.json",
    root_path=BASE_PATH,
    lifespan=lifespan,
    license_info={
        "name": "Universal Permissive License",
        "url": "http://oss.oracle.com/licenses/upl",
    },
)

app.include_router(v1_router, prefix=API_PREFIX)
