"""The Telegram bot: commands, decree lookups and subscription buttons."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Protocol

from cetatenie.database import SubscriptionExistsError
from cetatenie.decree import FindState
from cetatenie.messages import (
    ERROR_MESSAGE,
    HELP_MESSAGE,
    INVALID_FORMAT,
    SEARCHING,
    START_MESSAGE,
    is_decree_number,
    result_message,
)
from cetatenie.telegram import TelegramError
from cetatenie.timer import TimeReport

log = logging.getLogger(__name__)

CMD_START = "/start"
CMD_HELP = "/ajutor"
CMD_MY_SUBSCRIPTIONS = "/abonamente"
CMD_ADD_SUBSCRIPTION = "/adauga"
CMD_REMOVE_SUBSCRIPTION = "/sterge"
CMD_REMOVE_ALL_SUBSCRIPTIONS = "/sterge_toate"

BOT_COMMANDS = [
    {"command": CMD_START.lstrip("/"), "description": "Pornire bot și mesaj de bun venit"},
    {"command": CMD_HELP.lstrip("/"), "description": "Ajutor și informații despre comenzi"},
    {"command": CMD_MY_SUBSCRIPTIONS.lstrip("/"), "description": "Listează toate abonamentele tale"},
    {"command": CMD_ADD_SUBSCRIPTION.lstrip("/"), "description": "Adaugă un abonament la un dosar"},
    {"command": CMD_REMOVE_SUBSCRIPTION.lstrip("/"), "description": "Șterge un abonament la un dosar"},
    {"command": CMD_REMOVE_ALL_SUBSCRIPTIONS.lstrip("/"), "description": "Șterge toate abonamentele"},
]

SUBSCRIBE_BUTTON = "Adaugă la notificări"
POLL_TIMEOUT = 30
RETRY_DELAY = 5.0

MISSING_NUMBER = "❌ Te rog specifică numărul dosarului"
ALREADY_SUBSCRIBED = "ℹ️ Ești deja abonat la dosarul `{}`"
ADD_FAILED = "❌ Eroare la adăugarea abonamentului"
ADDED = "✅ Abonament adăugat pentru dosarul `{}`"
REMOVE_FAILED = "❌ Eroare la ștergerea abonamentului"
REMOVED = "✅ Abonament șters pentru dosarul `{}`"
REMOVE_ALL_FAILED = "❌ Eroare la ștergerea abonamentelor"
REMOVED_ALL = "✅ Toate abonamentele au fost șterse"
LIST_FAILED = "❌ Eroare la obținerea abonamentelor"
NO_SUBSCRIPTIONS = "📭 Nu ai niciun abonament activ"
LIST_HEADER = "📋 *Abonamentele tale:*\n\n"
LIST_ITEM = "• Dosar: `{}`\n"


class _Api(Protocol):
    def send_message(self, chat_id: int, text: str, reply_markup: dict | None = None) -> Any: ...

    def set_my_commands(self, commands: list[dict[str, str]], language_code: str = "") -> Any: ...

    def get_updates(self, offset: int | None = None, timeout: int = 30) -> list[dict]: ...

    def answer_callback_query(self, callback_query_id: str) -> Any: ...


class _Subscriptions(Protocol):
    def create_subscription(self, chat_id: int, decree_number: str) -> None: ...

    def delete_subscription(self, chat_id: int, decree_number: str) -> None: ...

    def delete_all_subscriptions(self, chat_id: int) -> None: ...

    def get_subscriptions(self, chat_id: int) -> list[str]: ...


class _Processor(Protocol):
    def handle(self, search: str) -> tuple[FindState, TimeReport]: ...


class Bot:
    """Answers chat messages and sends notifications."""

    def __init__(self, api: _Api, subscriptions: _Subscriptions, processor: _Processor) -> None:
        self._api = api
        self._subscriptions = subscriptions
        self._processor = processor
        self.poll_timeout = POLL_TIMEOUT
        self._exact: dict[str, Callable[[int, str], None]] = {
            CMD_START: self._start_command,
            CMD_HELP: self._help_command,
            CMD_MY_SUBSCRIPTIONS: self._list_subscriptions_command,
            CMD_REMOVE_ALL_SUBSCRIPTIONS: self._remove_all_subscriptions_command,
        }
        self._prefixed: tuple[tuple[str, Callable[[int, str], None]], ...] = (
            (CMD_ADD_SUBSCRIPTION, self._add_subscription_command),
            (CMD_REMOVE_SUBSCRIPTION, self._remove_subscription_command),
        )

    def register_commands(self) -> None:
        """Publish the command list in Romanian."""
        try:
            self._api.set_my_commands(BOT_COMMANDS, "ro")
        except TelegramError as exc:
            raise TelegramError(
                f"eroare la setarea comenzilor botului: {exc}", exc.error_code
            ) from exc

    def send_message(self, chat_id: int, text: str) -> None:
        try:
            self._api.send_message(chat_id, text)
        except TelegramError as exc:
            raise TelegramError(f"error sending message: {exc}", exc.error_code) from exc

    def send_message_with_subscribe(self, chat_id: int, text: str, decree_number: str) -> None:
        """Send ``text`` with a button that subscribes the chat to ``decree_number``."""
        markup = {
            "inline_keyboard": [[{
                "text": SUBSCRIBE_BUTTON,
                "callback_data": f"{CMD_ADD_SUBSCRIPTION} {decree_number}",
            }]]
        }
        try:
            self._api.send_message(chat_id, text, markup)
        except TelegramError as exc:
            raise TelegramError(f"error sending message: {exc}", exc.error_code) from exc

    def handle_update(self, update: dict[str, Any]) -> None:
        """Dispatch one update to the matching command or to the decree lookup."""
        callback = update.get("callback_query")
        if callback is not None:
            self._handle_callback(callback)
            return
        message = update.get("message")
        if message is None:
            return
        chat_id = message["chat"]["id"]
        text = message.get("text", "")
        handler = self._exact.get(text)
        if handler is None:
            handler = next(
                (h for prefix, h in self._prefixed if text.startswith(prefix)),
                self._default_handler,
            )
        handler(chat_id, text)

    def run(self, stop_event: threading.Event) -> None:
        """Register commands, then poll and handle updates until ``stop_event`` is set."""
        self.register_commands()
        log.info("🤖 Pornire bot Telegram...")
        offset: int | None = None
        while not stop_event.is_set():
            try:
                updates = self._api.get_updates(offset, self.poll_timeout)
            except TelegramError as exc:
                log.error("Error fetching updates: %s", exc)
                stop_event.wait(RETRY_DELAY)
                continue
            for update in updates:
                offset = update["update_id"] + 1
                try:
                    self.handle_update(update)
                except Exception:
                    log.exception("Error handling update %s", update.get("update_id"))

    def _reply(self, chat_id: int, text: str) -> None:
        try:
            self.send_message(chat_id, text)
        except Exception as exc:
            log.error("%s", exc)

    def _default_handler(self, chat_id: int, text: str) -> None:
        if not is_decree_number(text):
            self._reply(chat_id, INVALID_FORMAT)
            return
        self._handle_decree_request(chat_id, text)

    def _handle_decree_request(self, chat_id: int, text: str) -> None:
        decree_number = text.strip()
        try:
            self.send_message(chat_id, SEARCHING.format(decree_number))
        except Exception as exc:
            log.error("Error sending searching message: %s", exc)
            return

        try:
            state, report = self._processor.handle(decree_number)
        except Exception as exc:
            self._reply(chat_id, ERROR_MESSAGE.format(exc))
            return

        response = result_message(state, decree_number, report)
        if state is FindState.FOUND_BUT_NOT_RESOLVED:
            try:
                self.send_message_with_subscribe(chat_id, response, decree_number)
            except Exception as exc:
                log.error("Error sending message with subscribe: %s", exc)
            return
        self._reply(chat_id, response)

    def _start_command(self, chat_id: int, text: str) -> None:
        self._reply(chat_id, START_MESSAGE)

    def _help_command(self, chat_id: int, text: str) -> None:
        self._reply(chat_id, HELP_MESSAGE)

    def _list_subscriptions_command(self, chat_id: int, text: str) -> None:
        try:
            numbers = self._subscriptions.get_subscriptions(chat_id)
        except Exception:
            self._reply(chat_id, LIST_FAILED)
            return
        if not numbers:
            self._reply(chat_id, NO_SUBSCRIPTIONS)
            return
        self._reply(chat_id, LIST_HEADER + "".join(LIST_ITEM.format(n) for n in numbers))

    def _subscribe(self, chat_id: int, decree_number: str) -> None:
        try:
            self._subscriptions.create_subscription(chat_id, decree_number)
        except SubscriptionExistsError:
            self._reply(chat_id, ALREADY_SUBSCRIBED.format(decree_number))
            return
        except Exception:
            self._reply(chat_id, ADD_FAILED)
            return
        self._reply(chat_id, ADDED.format(decree_number))

    def _add_subscription_command(self, chat_id: int, text: str) -> None:
        args = text.split()
        if len(args) < 2:
            self._reply(chat_id, MISSING_NUMBER)
            return
        self._subscribe(chat_id, args[1])

    def _remove_subscription_command(self, chat_id: int, text: str) -> None:
        args = text.split()
        if len(args) < 2:
            self._reply(chat_id, MISSING_NUMBER)
            return
        decree_number = args[1]
        try:
            self._subscriptions.delete_subscription(chat_id, decree_number)
        except Exception:
            self._reply(chat_id, REMOVE_FAILED)
            return
        self._reply(chat_id, REMOVED.format(decree_number))

    def _remove_all_subscriptions_command(self, chat_id: int, text: str) -> None:
        try:
            self._subscriptions.delete_all_subscriptions(chat_id)
        except Exception:
            self._reply(chat_id, REMOVE_ALL_FAILED)
            return
        self._reply(chat_id, REMOVED_ALL)

    def _handle_callback(self, callback: dict[str, Any]) -> None:
        try:
            self._api.answer_callback_query(callback["id"])
        except Exception as exc:
            log.error("Error answering callback query: %s", exc)
        data = callback.get("data", "")
        message = callback.get("message")
        if CMD_ADD_SUBSCRIPTION not in data or message is None:
            return
        decree_number = data.split(CMD_ADD_SUBSCRIPTION)[1].strip(" ")
        self._subscribe(message["chat"]["id"], decree_number)