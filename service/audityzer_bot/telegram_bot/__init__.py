"""
Telegram Bot module for Audityzer.

ARCHITECTURE: Thin front controller - no audit logic here!
- Receives webhook updates from Telegram
- Classifies them (message / command / button tap)
- Replies to built-in commands via the Bot API
- Emits domain events for the audit and stats engines

Subscribe to events on `event_bus`:

    from audityzer_bot.telegram_bot import event_bus, AuditRequestEvent
    event_bus.subscribe(AuditRequestEvent, on_audit_request)
"""

from .bot import event_bus, get_dispatcher, handle_telegram_update, initialize_bot, shutdown_bot
from .dispatcher import UpdateDispatcher
from .events import (
    AuditRequestEvent,
    CallbackEvent,
    ErrorEvent,
    EventBus,
    MessageEvent,
    StatsRequestEvent,
)
from .telegram_api import TelegramAPIError, TelegramClient

__all__ = [
    "event_bus",
    "get_dispatcher",
    "handle_telegram_update",
    "initialize_bot",
    "shutdown_bot",
    "UpdateDispatcher",
    "EventBus",
    "MessageEvent",
    "CallbackEvent",
    "AuditRequestEvent",
    "StatsRequestEvent",
    "ErrorEvent",
    "TelegramClient",
    "TelegramAPIError",
]
