#!/usr/bin/env python3
"""
Command line entry point: connect to every configured server and log
notifications until interrupted.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .config.loader import ConfigLoader
from .constants import IRC_CONF_FILE, IRC_CONNECT_TIMEOUT_MS
from .errors.handling import log_error
from .errors.internal import ConfigError
from .irc import notifications as nt
from .irc.manager import ConnectionManager
from .logging_config import LoggerConfigurator
from .logs.logger import logger
from .registry import ConnectionRegistry


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ircconnect", description="Per-server IRC connection manager"
    )
    parser.add_argument(
        "--config",
        default=IRC_CONF_FILE,
        help=f"JSON server list (default: {IRC_CONF_FILE})",
    )
    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=IRC_CONNECT_TIMEOUT_MS,
        help="connection attempt timeout in milliseconds",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="validate the configuration and exit",
    )
    return parser


class LoggingConsumer(ConnectionRegistry):
    """Registry that also writes chat traffic to the log."""

    def apply(self, notification: nt.Notification) -> None:
        super().apply(notification)
        if isinstance(notification, nt.ChannelMessageReceived | nt.ActionReceived):
            logging.info(f"{notification.channel} <{notification.sender}> {notification.message}")
        elif isinstance(notification, nt.DirectMessageReceived):
            logging.info(f"*{notification.sender}* {notification.message}")
        elif isinstance(notification, nt.NoticeReceived):
            logging.info(f"-{notification.sender}:{notification.to}- {notification.message}")
        elif isinstance(notification, nt.ConnectionError | nt.ProtocolError):
            logging.warning(f"{notification.kind}: {notification}")


def check_configuration(path: str) -> int:
    try:
        servers = ConfigLoader(path).load_credentials()
    except ConfigError as e:
        logger.log_event("app", "config_check_failed", level=logging.ERROR, error=str(e))
        return 1
    logger.log_event("app", "config_check_passed", count=len(servers))
    return 0


async def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.check:
        return check_configuration(args.config)

    logger.log_event("app", "start")
    try:
        servers = ConfigLoader(args.config).load_credentials()
    except ConfigError as e:
        log_error("Unable to start", e)
        return 1

    registry = LoggingConsumer()
    manager = ConnectionManager(
        registry, registry, registry.lookup, timeout_ms=args.timeout_ms
    )
    try:
        for credentials in servers:
            await manager.connect(credentials)
        # Sessions run until their transports close; reconnecting is up to the operator.
        while manager.active_sessions:
            await asyncio.sleep(1)
    finally:
        await manager.shutdown()
        logger.log_event("app", "shutdown")
    return 0


def run() -> None:
    """Synchronous entry point for the application."""
    LoggerConfigurator().configure()
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        sys.exit(0)
    except asyncio.CancelledError:
        sys.exit(0)


if __name__ == "__main__":
    run()
