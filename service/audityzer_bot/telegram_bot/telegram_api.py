"""
Telegram Bot API client.

Thin wrapper over the four Bot API methods the bot uses. Every call is one
HTTP request; failures are raised as TelegramAPIError, except callback
acknowledgements which are best-effort.
"""

import httpx
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from .logging_config import bot_logger as logger


DEFAULT_API_BASE_URL = "https://api.telegram.org"


class TelegramAPIError(Exception):
    """A Bot API call failed (network error, HTTP error or ok=false)."""

    def __init__(
        self,
        method: str,
        description: str,
        status_code: Optional[int] = None
    ):
        self.method = method
        self.description = description
        self.status_code = status_code
        super().__init__(f"{method} failed: {description}")


@dataclass(frozen=True)
class BotIdentity:
    id: int
    username: str


@dataclass(frozen=True)
class KeyboardChoice:
    """One inline keyboard button; `payload` comes back as callback data."""
    label: str
    payload: str


def build_inline_keyboard(choices: Sequence[KeyboardChoice]) -> dict:
    """One button per row, in the given order."""
    return {
        "inline_keyboard": [
            [{"text": choice.label, "callback_data": choice.payload}]
            for choice in choices
        ]
    }


class TelegramClient:
    """
    Client for the Telegram Bot API.

    Holds only the token, base URL and a pooled HTTP client, so one instance
    can be shared by all concurrently processed updates.
    """

    def __init__(
        self,
        bot_token: str,
        api_base_url: Optional[str] = None,
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self.bot_token = bot_token
        self.api_base_url = (api_base_url or DEFAULT_API_BASE_URL).rstrip("/")
        self.client = http_client or httpx.AsyncClient(timeout=timeout)

    def _method_url(self, method: str) -> str:
        return f"{self.api_base_url}/bot{self.bot_token}/{method}"

    async def _call(self, method: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        """POST a Bot API method and return its `result` field."""
        try:
            response = await self.client.post(self._method_url(method), json=payload or {})
        except httpx.HTTPError as e:
            logger.error(f"Error calling {method}: {e}")
            raise TelegramAPIError(method, str(e) or type(e).__name__) from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        # Bot API replies are always objects; anything else is a failed call
        if not isinstance(body, dict):
            body = {}

        if response.is_error or not body.get("ok", False):
            description = body.get("description") or f"HTTP {response.status_code}"
            logger.error(f"Error calling {method}: {description}")
            raise TelegramAPIError(method, description, status_code=response.status_code)

        return body.get("result")

    async def get_me(self) -> BotIdentity:
        """Call getMe and return the bot's own identity."""
        result = await self._call("getMe")
        return BotIdentity(id=result["id"], username=result.get("username", ""))

    async def set_webhook(self, url: str, secret_token: Optional[str] = None) -> None:
        """
        Call setWebhook.

        Telegram treats repeated registration of the same URL as a no-op.
        """
        payload = {"url": url}
        if secret_token:
            payload["secret_token"] = secret_token
        await self._call("setWebhook", payload)

    async def send_message(
        self,
        chat_id: int,
        text: str,
        keyboard: Optional[Sequence[KeyboardChoice]] = None
    ) -> dict:
        """
        Send an HTML-formatted message, optionally with an inline keyboard.

        Returns the sent Message object.
        """
        if not text:
            raise ValueError("Message text must be non-empty")

        payload = {
            "chat_id": chat_id,
            "text": text,
            "parse_mode": "HTML"
        }

        if keyboard:
            payload["reply_markup"] = build_inline_keyboard(keyboard)

        return await self._call("sendMessage", payload)

    async def answer_callback_query(self, callback_query_id: str, text: Optional[str] = None) -> bool:
        """
        Acknowledge an inline button tap.

        Never raises; returns False when Telegram could not be reached or
        rejected the acknowledgement.
        """
        payload = {"callback_query_id": callback_query_id}
        if text:
            payload["text"] = text
            payload["show_alert"] = False

        try:
            await self._call("answerCallbackQuery", payload)
            return True
        except TelegramAPIError as e:
            logger.warning(f"Callback query {callback_query_id} not acknowledged: {e}")
            return False

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()
