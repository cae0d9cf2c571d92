"""Tests for the name to session registry."""

import asyncio

from runtap.registry import SessionRegistry
from runtap.types import Session


class TestAcquire:
    async def test_creates_when_unknown(self, sessions):
        registry = SessionRegistry(sessions)
        session = await registry.acquire("dev", "/srv")
        assert sessions.created == [("dev", "/srv", None)]
        assert "dev" in registry
        assert registry.get("dev") == session

    async def test_returns_registered_without_listing(self, sessions):
        registry = SessionRegistry(sessions)
        first = await registry.acquire("dev")
        calls = sessions.list_calls
        assert await registry.acquire("dev") == first
        assert sessions.list_calls == calls

    async def test_adopts_open_session(self, sessions):
        existing = sessions.add_existing("dev")
        registry = SessionRegistry(sessions)
        assert await registry.acquire("dev") == existing
        assert sessions.created == []

    async def test_concurrent_acquire_creates_once(self, sessions):
        sessions.create_delay = 0.01
        registry = SessionRegistry(sessions)
        a, b = await asyncio.gather(registry.acquire("dev"), registry.acquire("dev"))
        assert a == b
        assert len(sessions.created) == 1


class TestClose:
    async def test_close_drops_entry(self, sessions):
        registry = SessionRegistry(sessions)
        session = await registry.acquire("dev")
        sessions.close(session)
        assert "dev" not in registry

    async def test_close_of_replaced_session_keeps_new_one(self, sessions):
        registry = SessionRegistry(sessions)
        old = await registry.acquire("dev")
        new = sessions.add_existing("dev")
        await registry.register("dev", new)
        sessions.close(old)
        assert registry.get("dev") == new

    async def test_identity_is_pane_not_name(self):
        assert Session(pane_id="%1", name="a") == Session(pane_id="%1", name="b")
        assert Session(pane_id="%1", name="a") != Session(pane_id="%2", name="a")


class TestClear:
    async def test_clear_stops_listening(self, sessions):
        registry = SessionRegistry(sessions)
        session = await registry.acquire("dev")
        snapshot = registry.snapshot()
        registry.clear()
        assert len(registry) == 0
        assert snapshot == {"dev": session}
        assert sessions._listeners == []
        assert session.pane_id in sessions.open
