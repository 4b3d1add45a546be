"""
Web Server Entry Point
======================

Standalone entry point for running the Morse service.

Usage:
    python -m dotdash.web
    python -m dotdash.web --port 8080
    python -m dotdash.web --host 0.0.0.0 --port 8080 --debug
"""

import argparse
import logging
import os
import sys
from typing import Optional

from dotdash.config import load_config
from dotdash.config.defaults import CONFIG_PATH_ENV


def setup_logging(level: str = "info"):
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the Dotdash Morse service")
    parser.add_argument("--host", default=None, help="Host to bind to (default: from config)")
    parser.add_argument("--port", "-p", type=int, default=None, help="Port to bind to (default: from config)")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload (development)")
    parser.add_argument("--workers", "-w", type=int, default=None, help="Number of workers")
    parser.add_argument("--config", "-c", default=None, help="Path to config file")
    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    return serve(
        host=args.host,
        port=args.port,
        debug=args.debug,
        reload=args.reload,
        workers=args.workers,
        config_path=args.config,
    )


def serve(
    host: Optional[str] = None,
    port: Optional[int] = None,
    debug: bool = False,
    reload: bool = False,
    workers: Optional[int] = None,
    config_path: Optional[str] = None,
) -> int:
    """Run the service under uvicorn. Returns a process exit code."""
    if config_path:
        # Worker processes build the app themselves and read the path from here
        os.environ[CONFIG_PATH_ENV] = config_path
    config = load_config(config_path)
    level = "debug" if debug else config.logging.level
    setup_logging(level)

    logger = logging.getLogger(__name__)

    host = host or config.server.host
    port = port or config.server.port
    workers = workers or config.server.workers

    try:
        import uvicorn

        logger.info(f"Starting Dotdash Morse service on http://{host}:{port}")
        logger.info("Press Ctrl+C to stop.")

        uvicorn.run(
            "dotdash.web.api:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            workers=workers if not reload else 1,
            log_level=level,
        )
    except KeyboardInterrupt:
        logger.info("Server stopped by user.")
        return 0
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
