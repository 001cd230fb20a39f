"""
能力注册表测试
"""

import asyncio

import pytest

from markframe.infrastructure.capability import CapabilityStatus


def test_entry_created_idle_on_first_access(registry):
    assert registry.status("parser") is CapabilityStatus.IDLE
    assert not registry.is_ready("parser")


def test_request_transitions_to_ready(registry):
    async def scenario():
        seen = []
        registry.subscribe("parser", lambda c: seen.append(c.status))

        async def loader():
            return "engine"

        registry.request("parser", loader)
        await registry.wait_settled("parser")
        return seen

    seen = asyncio.run(scenario())

    assert seen == [CapabilityStatus.LOADING, CapabilityStatus.READY]
    assert registry.value("parser") == "engine"


def test_failed_load_is_not_retried(registry):
    async def scenario():
        attempts = []

        async def loader():
            attempts.append(1)
            raise ImportError("no module")

        registry.request("typesetter", loader)
        await registry.wait_settled("typesetter")
        registry.request("typesetter", loader)
        await registry.wait_settled("typesetter")
        return attempts

    assert asyncio.run(scenario()) == [1]
    capability = registry.get("typesetter")
    assert capability.status is CapabilityStatus.ERROR
    assert isinstance(capability.error, ImportError)


def test_concurrent_requests_load_once(registry):
    async def scenario():
        attempts = []

        async def loader():
            attempts.append(1)
            await asyncio.sleep(0.01)
            return object()

        registry.request("highlighter", loader)
        registry.request("highlighter", loader)
        await registry.wait_settled("highlighter")
        return attempts

    assert asyncio.run(scenario()) == [1]


def test_unsubscribe_and_listener_errors(registry):
    seen = []

    def broken(capability):
        raise RuntimeError("listener bug")

    registry.subscribe("rasterizer", broken)
    unsubscribe = registry.subscribe("rasterizer", lambda c: seen.append(c.status))
    unsubscribe()

    registry.provide("rasterizer", object())

    assert seen == []
    assert registry.is_ready("rasterizer")


def test_wait_settled_times_out(registry):
    async def scenario():
        async def loader():
            await asyncio.sleep(10)

        registry.request("rasterizer", loader)
        await registry.wait_settled("rasterizer", timeout=0.05)

    with pytest.raises(asyncio.TimeoutError):
        asyncio.run(scenario())
