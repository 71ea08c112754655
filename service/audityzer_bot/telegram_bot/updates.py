"""
Inbound update model.

Wire models mirror the subset of the Telegram Bot API update payload the bot
reads. `decode_update` turns them into one of three variants:

- MessageUpdate: a text message from a user
- CallbackUpdate: a tap on an inline keyboard button
- EmptyUpdate: anything else (photos, edits, channel posts, ...)
"""

from dataclasses import dataclass
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# WIRE MODELS (Bot API JSON)
# =============================================================================

class TelegramChat(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int


class TelegramUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    username: Optional[str] = None


class TelegramMessage(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    message_id: Optional[int] = None
    chat: TelegramChat
    from_user: Optional[TelegramUser] = Field(default=None, alias="from")
    text: Optional[str] = None


class TelegramCallbackQuery(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    from_user: TelegramUser = Field(alias="from")
    message: Optional[TelegramMessage] = None
    data: Optional[str] = None


class TelegramUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    update_id: int
    message: Optional[TelegramMessage] = None
    callback_query: Optional[TelegramCallbackQuery] = None


# =============================================================================
# DOMAIN VARIANTS
# =============================================================================

@dataclass(frozen=True)
class Message:
    chat_id: int
    sender_user_id: int
    text: str
    sender_username: Optional[str] = None


@dataclass(frozen=True)
class CallbackInteraction:
    interaction_id: str
    origin_chat_id: int
    sender_user_id: int
    payload: str


@dataclass(frozen=True)
class MessageUpdate:
    update_id: int
    message: Message


@dataclass(frozen=True)
class CallbackUpdate:
    update_id: int
    interaction: CallbackInteraction


@dataclass(frozen=True)
class EmptyUpdate:
    update_id: int


Update = Union[MessageUpdate, CallbackUpdate, EmptyUpdate]


def decode_update(data: dict) -> Update:
    """
    Validate a webhook body and convert it into an Update variant.

    Raises pydantic.ValidationError for bodies that are not Telegram updates.
    """
    raw = TelegramUpdate.model_validate(data)

    if raw.message is not None:
        msg = raw.message
        # Non-text messages and anonymous channel posts carry no command
        if msg.text is None or msg.from_user is None:
            return EmptyUpdate(update_id=raw.update_id)
        return MessageUpdate(
            update_id=raw.update_id,
            message=Message(
                chat_id=msg.chat.id,
                sender_user_id=msg.from_user.id,
                sender_username=msg.from_user.username,
                text=msg.text,
            ),
        )

    if raw.callback_query is not None:
        query = raw.callback_query
        # Inline-mode callbacks have no origin chat
        if query.message is None:
            return EmptyUpdate(update_id=raw.update_id)
        return CallbackUpdate(
            update_id=raw.update_id,
            interaction=CallbackInteraction(
                interaction_id=query.id,
                origin_chat_id=query.message.chat.id,
                sender_user_id=query.from_user.id,
                payload=query.data or "",
            ),
        )

    return EmptyUpdate(update_id=raw.update_id)
