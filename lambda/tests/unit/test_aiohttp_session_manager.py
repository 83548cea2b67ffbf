"""Testes para AiohttpSessionManager"""
import asyncio

import pytest

from shared.config.aiohttp_session_manager import AiohttpSessionManager


@pytest.mark.asyncio
async def test_session_is_reused_within_loop():
    manager = AiohttpSessionManager(total_timeout=5)

    first = await manager.get_session()
    second = await manager.get_session()

    assert first is second
    assert first.timeout.total == 5
    await manager.cleanup()
    assert manager.has_open_session is False


@pytest.mark.asyncio
async def test_closed_session_is_recreated():
    manager = AiohttpSessionManager()

    first = await manager.get_session()
    await first.close()
    second = await manager.get_session()

    assert second is not first
    await manager.cleanup()


def test_new_event_loop_gets_new_session():
    manager = AiohttpSessionManager()
    loop_a = asyncio.new_event_loop()
    loop_b = asyncio.new_event_loop()
    try:
        first = loop_a.run_until_complete(manager.get_session())
        second = loop_b.run_until_complete(manager.get_session())

        assert second is not first
        loop_b.run_until_complete(manager.cleanup())
    finally:
        loop_a.close()
        loop_b.close()


def test_singleton():
    AiohttpSessionManager.reset_instance()
    try:
        assert AiohttpSessionManager.get_instance(limit=10) is AiohttpSessionManager.get_instance()
        assert AiohttpSessionManager.get_instance().limit == 10
    finally:
        AiohttpSessionManager.reset_instance()
