"""
Start the inventory API server.

Usage:
    inventory-service --host 0.0.0.0 --port 3000 --cache ./cache
"""
import argparse
import logging
import os

import uvicorn

from inventory_service.config.settings import get_settings
from inventory_service.core.logging_config import setup_logging

logger = logging.getLogger("inventory_service.cli")


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Inventory catalog HTTP service")
    parser.add_argument("--host", default=settings.app_host, help="Server host (APP_HOST)")
    parser.add_argument("--port", type=int, default=settings.app_port, help="Server port (APP_PORT)")
    parser.add_argument("--cache", default=settings.cache_dir, help="Photo cache directory (CACHE_DIR)")
    parser.add_argument("--log-level", default=settings.log_level, help="Log level (LOG_LEVEL)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # The app reads its settings from the environment, in this process and in reload workers
    os.environ["CACHE_DIR"] = args.cache
    os.environ["LOG_LEVEL"] = args.log_level
    get_settings.cache_clear()

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_dir, settings.log_format)
    logger.info(f"🚀 Server running at http://{args.host}:{args.port}")
    logger.info(f"📚 API Docs available at http://{args.host}:{args.port}/docs")

    uvicorn.run(
        "inventory_service.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
