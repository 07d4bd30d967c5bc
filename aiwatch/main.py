#!/usr/bin/env python3
"""
AI Comment Watcher - запуск наблюдения за директорией из командной строки
"""
import argparse
import signal
import sys
import time
from typing import List, Optional

from aiwatch.application.comments import WatchSession
from aiwatch.infrastructure.notifiers import WatchdogNotifier
from aiwatch.logging_config import get_logger, setup_logging
from aiwatch.settings import settings

logger = get_logger("aiwatch")

# Флаг для graceful shutdown
shutdown_requested = False


def signal_handler(signum, frame):
    """Обработчик сигналов для graceful shutdown"""
    global shutdown_requested
    logger.info(f"Received signal {signum}, initiating graceful shutdown...")
    shutdown_requested = True


def print_message(message: str) -> None:
    """Хост по умолчанию: сообщение для агента печатается в stdout"""
    print(message, flush=True)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="aiwatch",
        description="Watch a directory for AI comments and print collected instructions on AI!",
    )
    parser.add_argument("path", nargs="?", default=settings.WATCH_PATH, help="directory to watch")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """Главный цикл watcher'а"""
    global shutdown_requested
    args = parse_args(argv)

    setup_logging()

    # Регистрируем обработчики сигналов
    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    logger.info("=" * 60)
    logger.info(f"{settings.APP_NAME} v{settings.VERSION} Starting")
    logger.info("=" * 60)
    logger.info(f"Watched path: {args.path}")
    logger.info(f"Ignored patterns: {settings.IGNORED_PATTERNS}")
    logger.info(f"Ignore initial files: {settings.IGNORE_INITIAL}")
    logger.info(f"Stability threshold: {settings.STABILITY_THRESHOLD_MS}ms, poll: {settings.POLL_INTERVAL_MS}ms")
    logger.info("=" * 60)

    session = WatchSession(notifier=WatchdogNotifier(), deliver=print_message)
    try:
        session.start(args.path)
    except Exception as e:
        logger.error(f"❌ Failed to start watching {args.path}: {e}", exc_info=True)
        sys.exit(1)

    while not shutdown_requested:
        try:
            time.sleep(0.5)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
            break

    session.shutdown()

    logger.info("=" * 60)
    logger.info(f"{settings.APP_NAME} Stopped")
    logger.info("=" * 60)


if __name__ == "__main__":
    main()
