"""
Central CLI entrypoint for Tickerboard.

Usage:
    python main.py <command> [--config CONFIG_PATH]

Supported commands:
    fetch           Download prices for every configured symbol and write the JSON files
    dashboard       Launch the Streamlit dashboard
    serve           Serve config/ and data/ over HTTP

Examples:
    python main.py fetch --config config/app_config.yaml
    python main.py dashboard --config config/app_config.yaml
    python main.py serve --host 127.0.0.1 --port 8000

Exit status is 0 when a fetch run completes, even if some symbols were
skipped, and 1 when the run fails as a whole (unreadable symbol list,
unwritable data directory, invalid config).
"""

import argparse
import os
import subprocess
import sys
from typing import List, Optional

from tickerboard.api.main import start_api
from tickerboard.pipeline.fetch_pipeline import run_fetch
from tickerboard.utils.config import load_typed_config
from tickerboard.utils.logger import configure_root_logging, get_logger

logger = get_logger("tickerboard.cli")

DASHBOARD_APP = os.path.join(os.path.dirname(os.path.abspath(__file__)), "tickerboard", "dashboard", "app.py")


def validate_config_path(config_path: Optional[str]) -> None:
    """
    Validates whether the given config path exists and is a file.

    Args:
        config_path (str): Path to the config file. None means built-in defaults.

    Raises:
        FileNotFoundError: If the config file does not exist.
    """
    if config_path is not None and not os.path.isfile(config_path):
        logger.error(f"Config file not found: {config_path}")
        raise FileNotFoundError(f"Config file not found: {config_path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tickerboard CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- Fetch ---
    fetch_parser = subparsers.add_parser("fetch", help="Fetch prices and write JSON files")
    fetch_parser.add_argument("--config", "-c", default=None, help="Path to app config YAML")

    # --- Dashboard ---
    dash_parser = subparsers.add_parser("dashboard", help="Launch the Streamlit dashboard")
    dash_parser.add_argument("--config", "-c", default=None, help="Path to app config YAML")
    dash_parser.add_argument("--port", type=int, default=8501, help="Port for Streamlit")

    # --- Serve ---
    serve_parser = subparsers.add_parser("serve", help="Serve config/ and data/ over HTTP")
    serve_parser.add_argument("--config", "-c", default=None, help="Path to app config YAML")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind the server")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port for the API")

    return parser


def launch_dashboard(config_path: Optional[str], port: int) -> int:
    command = [sys.executable, "-m", "streamlit", "run", DASHBOARD_APP, "--server.port", str(port)]
    if config_path:
        command += ["--", "--config", config_path]
    logger.info(f"Launching dashboard: {' '.join(command)}")
    return subprocess.call(command)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse CLI arguments and dispatch the command.

    Returns:
        int: Process exit status.
    """
    args = build_parser().parse_args(argv)

    try:
        validate_config_path(args.config)
        config = load_typed_config(args.config)
        configure_root_logging(config.logging.level, config.logging.file)

        if args.command == "fetch":
            report = run_fetch(config)
            logger.info(
                f"Fetch finished: {len(report.processed)} written, {len(report.skipped)} skipped"
            )
            return 0

        if args.command == "dashboard":
            return launch_dashboard(args.config, args.port)

        if args.command == "serve":
            start_api(host=args.host, port=args.port, config=config)
            return 0

    except Exception as e:
        logger.exception(f"Command '{args.command}' failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
