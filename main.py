"""
FastAPI application entrypoint for the turnout data service.

Serves the prebuilt statistics and county boundary files the map
fetches at startup.
"""
import logging
from typing import Optional

from fastapi import FastAPI

import config
from routers import router


def create_app(data_dir: Optional[str] = None) -> FastAPI:
    app = FastAPI(title="Turnout Change Data API", version="0.1.0")
    app.state.data_dir = data_dir or config.DATA_DIR

    # Routers
    app.include_router(router, prefix="", tags=["data"])

    return app


logging.basicConfig(level=config.LOG_LEVEL)
app = create_app()
