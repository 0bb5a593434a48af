"""Command-line entry point: runs the subscription checker and the Telegram bot."""

from __future__ import annotations

import argparse
import logging
import os
import signal
import sqlite3
import threading
from typing import Protocol, Sequence

from dotenv import load_dotenv

from cetatenie.bot import Bot
from cetatenie.checker import SubscriptionChecker
from cetatenie.database import SubscriptionStore, init_db
from cetatenie.processor import DecreeProcessor
from cetatenie.telegram import TelegramApi

log = logging.getLogger(__name__)

CHECK_INTERVAL = 24 * 60 * 60
SHUTDOWN_GRACE = 1.0
TOKEN_VARIABLE = "TELEGRAM_BOT_TOKEN"


class _Checker(Protocol):
    def check_all_subscriptions(self) -> None: ...


def run_checker(
    checker: _Checker, stop_event: threading.Event, interval: float = CHECK_INTERVAL
) -> None:
    """Check subscriptions now and then every ``interval`` seconds until stopped."""
    first = True
    while True:
        try:
            checker.check_all_subscriptions()
        except Exception as exc:
            if first:
                log.error("Error in initial subscription check: %s", exc)
            else:
                log.error("Error checking subscriptions: %s", exc)
        first = False
        if stop_event.wait(interval):
            return


def _install_signal_handlers(stop_event: threading.Event) -> None:
    if threading.current_thread() is not threading.main_thread():
        return

    def handler(signum: int, _frame: object) -> None:
        print(f"Received signal: {signal.Signals(signum).name}")
        stop_event.set()

    signal.signal(signal.SIGINT, handler)
    signal.signal(signal.SIGTERM, handler)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cetatenie",
        description="Telegram bot that tracks Romanian citizenship decree files.",
    )
    parser.add_argument("--db", default="./data.db", help="path of the SQLite database")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the bot and the daily checker until a signal or a bot failure."""
    args = _parse_args(argv)
    load_dotenv(".env")
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    print("Starting application...")

    try:
        connection = init_db(args.db)
    except sqlite3.Error as exc:
        print(f"Failed to initialize database: {exc}")
        return 1

    store = SubscriptionStore(connection)
    token = os.environ.get(TOKEN_VARIABLE, "")
    if not token:
        print(
            "Bot error: failed to start bot: "
            f"variabila de mediu {TOKEN_VARIABLE} nu este setată"
        )
        store.close()
        return 1

    processor = DecreeProcessor()
    bot = Bot(TelegramApi(token), store, processor)
    checker = SubscriptionChecker(store, processor, bot)

    stop_event = threading.Event()
    _install_signal_handlers(stop_event)
    bot_errors: list[BaseException] = []

    def run_bot() -> None:
        try:
            bot.run(stop_event)
        except Exception as exc:
            bot_errors.append(exc)
            stop_event.set()

    print("Starting subscription checker...")
    checker_thread = threading.Thread(
        target=run_checker, args=(checker, stop_event), name="checker", daemon=True
    )
    checker_thread.start()

    print("Starting Telegram bot...")
    bot_thread = threading.Thread(target=run_bot, name="bot", daemon=True)
    bot_thread.start()

    stop_event.wait()
    for thread in (bot_thread, checker_thread):
        thread.join(SHUTDOWN_GRACE)

    if bot_errors:
        print(f"Bot error: failed to start bot: {bot_errors[0]}")
        return 1
    return 0