#!/usr/bin/env python3
"""
BootstrapCDN Site

Main entry point. Loads configuration (fatal on failure, before any socket
is bound), then serves the site until SIGINT/SIGTERM.
"""

import asyncio
import logging
import signal
import sys

from bootstrapcdn.config import Config, ConfigLoadError, Settings
from bootstrapcdn.logs import configure_logging
from bootstrapcdn.web.server import WebServer

logger = logging.getLogger("bootstrapcdn")


def load_or_exit(settings: Settings) -> Config:
    """Load the YAML config or terminate the process with status 1."""
    try:
        config = Config.load(settings.config_path)
    except ConfigLoadError as e:
        logger.error(str(e))
        sys.exit(1)
    logger.info(
        f"Config loaded: {settings.config_path} "
        f"({len(config.bootstrap)} bootstrap, {len(config.fontawesome)} fontawesome versions)"
    )
    return config


async def main(settings: Settings | None = None) -> None:
    """Main application entry point."""
    if settings is None:
        settings = Settings.from_env()
    configure_logging(settings.mode)
    logger.info(f"BootstrapCDN site starting ({settings.mode.value})")

    config = load_or_exit(settings)
    web_server = WebServer(config=config, settings=settings)

    # Set up graceful shutdown
    shutdown_event = asyncio.Event()

    def handle_shutdown(sig: signal.Signals) -> None:
        logger.info(f"Received {sig.name}, initiating shutdown...")
        shutdown_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, handle_shutdown, sig)

    try:
        await web_server.start()
        logger.info("Press Ctrl+C to stop")
        await shutdown_event.wait()
    finally:
        await web_server.stop()
        logger.info("BootstrapCDN site stopped.")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
