"""
Shared fixtures for the bot tests.
"""

import pytest

from audityzer_bot.telegram_bot.events import EventBus

from fakes import EventRecorder, FakeTelegramClient


@pytest.fixture
def fake_client() -> FakeTelegramClient:
    return FakeTelegramClient()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def recorder(event_bus, fake_client) -> EventRecorder:
    return EventRecorder(event_bus, fake_client)
