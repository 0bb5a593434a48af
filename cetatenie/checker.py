"""Periodic check of every subscription, notifying chats about changes."""

from __future__ import annotations

import logging
from typing import Protocol

from cetatenie.database import Subscription
from cetatenie.decree import FindState
from cetatenie.timer import TimeReport

log = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = (
    "⚠️ <b>Notificare</b>\n\nDosarul <code>{}</code> <b>nu a fost găsit</b>.\n\n"
    "Te rugăm să verifici numărul și anul, sau să contactezi autoritățile competente."
)
RESOLVED_MESSAGE = (
    "🎉 <b>Notificare</b>\n\nDosarul <code>{}</code> <b>a fost găsit și rezolvat</b>!\n\n"
    "Acest abonament va fi șters automat."
)


class _Subscriptions(Protocol):
    def get_all_subscriptions(self) -> list[Subscription]: ...

    def delete_subscription(self, chat_id: int, decree_number: str) -> None: ...


class _Processor(Protocol):
    def handle(self, search: str) -> tuple[FindState, TimeReport]: ...


class _Sender(Protocol):
    def send_message(self, chat_id: int, text: str) -> None: ...


class SubscriptionChecker:
    """Checks every subscribed decree and notifies its chat."""

    def __init__(self, subscriptions: _Subscriptions, processor: _Processor, bot: _Sender) -> None:
        self._subscriptions = subscriptions
        self._processor = processor
        self._bot = bot

    def check_all_subscriptions(self) -> None:
        """Check all subscriptions; a failure on one is logged and the rest go on."""
        subscriptions = self._subscriptions.get_all_subscriptions()
        if not subscriptions:
            return
        log.info("Found %d subscriptions to check", len(subscriptions))
        for sub in subscriptions:
            try:
                self._process(sub)
            except Exception as exc:
                log.error("Error processing subscription %s: %s", sub.decree_number, exc)

    def _process(self, sub: Subscription) -> None:
        state, _ = self._processor.handle(sub.decree_number)
        if state is FindState.NOT_FOUND:
            self._notify(sub, NOT_FOUND_MESSAGE.format(sub.decree_number))
        elif state is FindState.FOUND_AND_RESOLVED:
            self._notify(sub, RESOLVED_MESSAGE.format(sub.decree_number))
            self._subscriptions.delete_subscription(sub.chat_id, sub.decree_number)
            log.info("Successfully removed subscription for decree %s", sub.decree_number)

    def _notify(self, sub: Subscription, text: str) -> None:
        self._bot.send_message(sub.chat_id, text)
        log.info(
            "Successfully sent notification to chat %d for decree %s",
            sub.chat_id,
            sub.decree_number,
        )