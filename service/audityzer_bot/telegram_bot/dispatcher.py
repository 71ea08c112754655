"""
Update dispatcher - classifies incoming updates and routes them.

    Update ─┬─ MessageUpdate ─┬─ "/..."  → command handler → reply (+ event)
            │                 └─ other   → MessageEvent
            ├─ CallbackUpdate → acknowledge → CallbackEvent
            └─ EmptyUpdate    → ignored

handle_update() never raises: routing failures become an ErrorEvent so the
webhook can always answer 200 and Telegram does not redeliver.
"""

from typing import Awaitable, Callable, Dict

from .commands import (
    AUDIT_USAGE_TEXT,
    CANCEL_TEXT,
    HELP_TEXT,
    SETTINGS_KEYBOARD,
    SETTINGS_TEXT,
    STATS_TEXT,
    WELCOME_TEXT,
    Command,
    audit_started_text,
    parse_command,
    unknown_command_text,
)
from .events import (
    AuditRequestEvent,
    CallbackEvent,
    ErrorEvent,
    EventBus,
    MessageEvent,
    StatsRequestEvent,
)
from .logging_config import bot_logger as logger
from .telegram_api import TelegramClient
from .updates import (
    CallbackInteraction,
    CallbackUpdate,
    EmptyUpdate,
    Message,
    MessageUpdate,
    Update,
)


CommandHandler = Callable[[Message, Command], Awaitable[None]]


class UpdateDispatcher:
    """Routes one update at a time; keeps no per-update state."""

    def __init__(self, client: TelegramClient, events: EventBus, webhook_url: str, webhook_secret: str = ""):
        self.client = client
        self.events = events
        self.webhook_url = webhook_url
        self.webhook_secret = webhook_secret
        self.bot_username = ""

        self._commands: Dict[str, CommandHandler] = {
            "/start": self._handle_start,
            "/help": self._handle_help,
            "/audit": self._handle_audit,
            "/stats": self._handle_stats,
            "/settings": self._handle_settings,
            "/cancel": self._handle_cancel,
        }

    async def initialize(self) -> None:
        """
        Fetch bot identity and register the webhook.

        Failures propagate: the bot must not serve updates without a webhook.
        """
        try:
            identity = await self.client.get_me()
            self.bot_username = identity.username
            logger.info(f"Bot initialized: @{self.bot_username}")

            await self.client.set_webhook(self.webhook_url, secret_token=self.webhook_secret or None)
            logger.info(f"Webhook set to: {self.webhook_url}")
        except Exception as e:
            logger.error(f"Failed to initialize bot: {e}")
            raise

    async def handle_update(self, update: Update) -> None:
        """Process one update. Never raises."""
        try:
            await self._route(update)
        except Exception as e:
            logger.error(f"Error handling update {getattr(update, 'update_id', None)}: {e}", exc_info=True)
            await self.events.emit(ErrorEvent(cause=e))

    async def _route(self, update: Update) -> None:
        if isinstance(update, MessageUpdate):
            await self._handle_message(update.message)
        elif isinstance(update, CallbackUpdate):
            await self._handle_callback(update.interaction)
        elif isinstance(update, EmptyUpdate):
            logger.debug(f"Ignoring update {update.update_id}")
        else:
            raise TypeError(f"Unsupported update type: {type(update).__name__}")

    async def _handle_message(self, message: Message) -> None:
        logger.info(f"Message from @{message.sender_username}: {message.text}")

        if message.text.startswith("/"):
            await self._handle_command(message)
            return

        await self.events.emit(MessageEvent(
            chat_id=message.chat_id,
            text=message.text,
            user_id=message.sender_user_id,
            username=message.sender_username,
        ))

    async def _handle_command(self, message: Message) -> None:
        command = parse_command(message.text, self.bot_username)
        handler = self._commands.get(command.name)

        if handler is None:
            await self.client.send_message(message.chat_id, unknown_command_text(command.name))
            return

        await handler(message, command)

    async def _handle_callback(self, interaction: CallbackInteraction) -> None:
        # Best-effort: a failed ack is logged by the client and not escalated
        await self.client.answer_callback_query(interaction.interaction_id)

        await self.events.emit(CallbackEvent(
            chat_id=interaction.origin_chat_id,
            data=interaction.payload,
            user_id=interaction.sender_user_id,
        ))

    # =========================================================================
    # COMMANDS
    # =========================================================================

    async def _handle_start(self, message: Message, command: Command) -> None:
        await self.client.send_message(message.chat_id, WELCOME_TEXT)

    async def _handle_help(self, message: Message, command: Command) -> None:
        await self.client.send_message(message.chat_id, HELP_TEXT)

    async def _handle_audit(self, message: Message, command: Command) -> None:
        if not command.argument:
            await self.client.send_message(message.chat_id, AUDIT_USAGE_TEXT)
            return

        await self.client.send_message(message.chat_id, audit_started_text(command.argument))
        await self.events.emit(AuditRequestEvent(
            chat_id=message.chat_id,
            contract_address=command.argument,
        ))

    async def _handle_stats(self, message: Message, command: Command) -> None:
        await self.client.send_message(message.chat_id, STATS_TEXT)
        await self.events.emit(StatsRequestEvent(
            chat_id=message.chat_id,
            user_id=message.sender_user_id,
        ))

    async def _handle_settings(self, message: Message, command: Command) -> None:
        await self.client.send_message(message.chat_id, SETTINGS_TEXT, keyboard=SETTINGS_KEYBOARD)

    async def _handle_cancel(self, message: Message, command: Command) -> None:
        await self.client.send_message(message.chat_id, CANCEL_TEXT)
