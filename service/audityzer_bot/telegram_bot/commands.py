"""
Bot command parsing and static reply texts.
"""

import html
from dataclasses import dataclass
from typing import Optional

from .telegram_api import KeyboardChoice


@dataclass(frozen=True)
class Command:
    name: str  # lowercased, with leading "/"
    argument: Optional[str] = None


def parse_command(text: str, bot_username: str = "") -> Command:
    """
    Split "/name rest of text" into a Command.

    "/name@BotUsername" (group chat addressing) resolves to "/name" when the
    suffix is this bot's username.
    """
    parts = text.strip().split(maxsplit=1)
    token = parts[0].lower() if parts else "/"
    argument = parts[1].strip() if len(parts) > 1 else ""

    name, _, addressee = token.partition("@")
    if addressee and bot_username and addressee == bot_username.lower():
        token = name

    return Command(name=token, argument=argument or None)


SETTINGS_KEYBOARD = (
    KeyboardChoice("Language", "set_lang"),
    KeyboardChoice("Notifications", "set_notif"),
    KeyboardChoice("Privacy", "set_privacy"),
)

WELCOME_TEXT = """Welcome to <b>Audityzer Bot</b> 🔍

I can help you:
• 🔒 Audit smart contracts
• 📊 View audit statistics
• ⚙️ Manage settings

Type /help for available commands."""

HELP_TEXT = """<b>Available Commands:</b>

/start - Start the bot
/audit &lt;address&gt; - Audit a smart contract
/stats - View your statistics
/settings - Manage preferences
/cancel - Cancel the current operation
/help - Show this message

<b>Examples:</b>
/audit 0x1234567890123456789012345678901234567890"""

AUDIT_USAGE_TEXT = "Please provide a contract address: /audit &lt;address&gt;"
STATS_TEXT = "📊 Fetching your statistics..."
SETTINGS_TEXT = "⚙️ Settings:"
CANCEL_TEXT = "Operation cancelled."


def audit_started_text(contract_address: str) -> str:
    return f"Starting audit for: <code>{html.escape(contract_address)}</code>\n⏳ Please wait..."


def unknown_command_text(name: str) -> str:
    return f"Unknown command: {html.escape(name)}\nType /help for available commands."
