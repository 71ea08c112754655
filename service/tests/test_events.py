"""
Tests for the in-process event bus.
"""

import pytest

from audityzer_bot.telegram_bot.events import (
    AuditRequestEvent,
    EventBus,
    StatsRequestEvent,
)


class TestEventBus:

    @pytest.mark.asyncio
    async def test_delivers_only_to_matching_type(self):
        """Subscribers only see their own event class."""
        bus = EventBus()
        audits, stats = [], []
        bus.subscribe(AuditRequestEvent, audits.append)
        bus.subscribe(StatsRequestEvent, stats.append)

        await bus.emit(AuditRequestEvent(chat_id=1, contract_address="0xABC"))

        assert audits == [AuditRequestEvent(chat_id=1, contract_address="0xABC")]
        assert stats == []

    @pytest.mark.asyncio
    async def test_async_subscriber_is_awaited(self):
        """Coroutine subscribers run before emit returns."""
        bus = EventBus()
        seen = []

        async def on_stats(event):
            seen.append(event.user_id)

        bus.subscribe(StatsRequestEvent, on_stats)
        await bus.emit(StatsRequestEvent(chat_id=1, user_id=9))

        assert seen == [9]

    @pytest.mark.asyncio
    async def test_failing_subscriber_does_not_block_others(self):
        """One broken subscriber does not stop the rest."""
        bus = EventBus()
        seen = []

        def broken(event):
            raise RuntimeError("audit engine down")

        bus.subscribe(AuditRequestEvent, broken)
        bus.subscribe(AuditRequestEvent, seen.append)

        await bus.emit(AuditRequestEvent(chat_id=1, contract_address="0x1"))

        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_unsubscribe(self):
        """Removed subscribers get nothing."""
        bus = EventBus()
        seen = []
        bus.subscribe(AuditRequestEvent, seen.append)
        bus.unsubscribe(AuditRequestEvent, seen.append)

        await bus.emit(AuditRequestEvent(chat_id=1, contract_address="0x1"))

        assert seen == []

    @pytest.mark.asyncio
    async def test_emit_without_subscribers(self):
        """Emitting into an empty bus is fine."""
        await EventBus().emit(StatsRequestEvent(chat_id=1, user_id=2))
