"""
FastAPI application serving the dashboard's JSON contract over HTTP.

``/config/symbols.json``, ``/data/summary.json`` and ``/data/<symbol>.json``
are served straight from disk, so a dashboard started with
``dashboard.data_source: http://host:port`` reads exactly what the fetcher
wrote.

Usage:
    python main.py serve --host 127.0.0.1 --port 8000
"""

from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
import uvicorn

from tickerboard.utils.config import AppConfig
from tickerboard.utils.logger import get_logger

logger = get_logger(__name__)


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """
    Build the API app for the configured symbol file and data directory.

    Args:
        config (AppConfig, optional): Application config; defaults when omitted.

    Returns:
        FastAPI: App with ``/health`` and the two static mounts.
    """
    config = config or AppConfig()
    config_dir = Path(config.paths.symbols_file).parent
    data_dir = Path(config.paths.data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)

    app = FastAPI(title="Tickerboard Data API")

    @app.get("/health")
    async def health_check():
        """
        Health check endpoint to verify if the API server is running.

        Returns:
            dict: A simple JSON response with status 'ok'
        """
        logger.info("Health check requested")
        return {"status": "ok"}

    app.mount("/config", StaticFiles(directory=str(config_dir)), name="config")
    app.mount("/data", StaticFiles(directory=str(data_dir)), name="data")
    return app


def start_api(host: str = "127.0.0.1", port: int = 8000, config: Optional[AppConfig] = None):
    """
    Starts the data API using Uvicorn.

    Args:
        host (str): Host address to bind.
        port (int): Port number to listen on (default 8000).
        config (AppConfig, optional): Application config.
    """
    logger.info(f"Starting data API on {host}:{port}")
    uvicorn.run(create_app(config), host=host, port=port)
