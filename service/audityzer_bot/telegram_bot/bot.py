"""
Main Telegram bot wiring.

Builds one TelegramClient, EventBus and UpdateDispatcher per process and
exposes the entry points used by the FastAPI app.
"""

from pydantic import ValidationError

from audityzer_bot.config import get_settings
from .dispatcher import UpdateDispatcher
from .events import EventBus
from .logging_config import bot_logger as logger
from .telegram_api import TelegramClient
from .updates import decode_update


# Global dispatcher instance (initialized once)
_dispatcher: UpdateDispatcher | None = None

# Subscribers attach here; shared by every dispatcher built in this process
event_bus = EventBus()


def get_dispatcher() -> UpdateDispatcher:
    """Get or create the update dispatcher."""
    global _dispatcher

    if _dispatcher is None:
        settings = get_settings()

        client = TelegramClient(
            bot_token=settings.telegram_bot_token,
            api_base_url=settings.telegram_api_base_url,
            timeout=settings.telegram_request_timeout,
        )
        _dispatcher = UpdateDispatcher(
            client=client,
            events=event_bus,
            webhook_url=settings.telegram_webhook_url,
            webhook_secret=settings.telegram_webhook_secret,
        )

    return _dispatcher


async def handle_telegram_update(update_data: dict) -> None:
    """
    Process incoming webhook update from Telegram.

    Called by the FastAPI webhook endpoint; never raises.
    """
    try:
        update = decode_update(update_data)
    except ValidationError as e:
        logger.warning(f"Received invalid update data: {e}")
        return

    await get_dispatcher().handle_update(update)


async def initialize_bot() -> None:
    """
    Initialize bot (call on startup). Raises if Telegram is unreachable or
    rejects the webhook.
    """
    await get_dispatcher().initialize()
    logger.info("Bot initialized successfully")


async def shutdown_bot() -> None:
    """
    Shutdown bot (call on shutdown).
    """
    global _dispatcher
    if _dispatcher:
        await _dispatcher.client.close()
        _dispatcher = None
        logger.info("Bot shut down")
