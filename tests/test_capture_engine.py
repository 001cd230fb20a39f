"""
截图导出测试
"""

import asyncio

import pytest

from conftest import FakeClipboard, FakeRasterizer, FakeDownloadSink, make_png
from markframe.application.capture_engine import (
    COPY_FAILED_MESSAGE,
    EXPORT_FAILED_MESSAGE,
    CaptureEngine,
    png_size,
)
from markframe.domain.errors import CapabilityNotReadyError, CaptureFailedError
from markframe.infrastructure.capability import RASTERIZER
from markframe.infrastructure.delivery import decode_data_url
from markframe.types import CaptureTarget, CardSnapshot, RenderConfig, Viewport

CLOCK = 1700000000123
SNAPSHOT = CardSnapshot(html="<div id='markframe-preview'></div>", viewport=Viewport(100, 50))


def _engine(registry, sink, clipboard, notifier, delay_ms=0):
    return CaptureEngine(
        registry,
        sink,
        clipboard,
        config=RenderConfig(capture_delay_ms=delay_ms),
        notifier=notifier,
        clock=lambda: CLOCK,
    )


def test_export_filename_and_scale(registry, rasterizer, sink, clipboard, notifier):
    registry.provide(RASTERIZER, rasterizer)
    engine = _engine(registry, sink, clipboard, notifier)

    outcome = asyncio.run(engine.export_file(lambda: SNAPSHOT))

    assert outcome.success
    assert outcome.target is CaptureTarget.FILE
    assert rasterizer.scales == [3]
    data_url, filename = sink.calls[0]
    assert filename == f"markframe-{CLOCK}.png"
    assert decode_data_url(data_url) == ("image/png", make_png(300, 150))


def test_clipboard_uses_scale_two(registry, rasterizer, sink, clipboard, notifier):
    registry.provide(RASTERIZER, rasterizer)
    engine = _engine(registry, sink, clipboard, notifier)

    outcome = asyncio.run(engine.copy_to_clipboard(lambda: SNAPSHOT))

    assert outcome.success
    assert rasterizer.scales == [2]
    assert clipboard.images == [make_png(200, 100)]
    assert sink.calls == []


def test_second_request_while_busy_is_ignored(registry, rasterizer, sink, clipboard, notifier):
    registry.provide(RASTERIZER, rasterizer)
    engine = _engine(registry, sink, clipboard, notifier, delay_ms=30)

    async def scenario():
        first = asyncio.create_task(engine.export_file(lambda: SNAPSHOT))
        await asyncio.sleep(0)
        assert engine.busy
        second = await engine.copy_to_clipboard(lambda: SNAPSHOT)
        return await first, second

    first, second = asyncio.run(scenario())

    assert first.success
    assert second is None
    assert rasterizer.scales == [3]
    assert not engine.busy


def test_snapshot_is_taken_while_busy(registry, rasterizer, sink, clipboard, notifier):
    registry.provide(RASTERIZER, rasterizer)
    engine = _engine(registry, sink, clipboard, notifier)
    seen = []

    def snapshot():
        seen.append(engine.busy)
        return SNAPSHOT

    asyncio.run(engine.export_file(snapshot))

    assert seen == [True]


def test_failure_alerts_and_clears_busy(registry, sink, clipboard, notifier):
    registry.provide(RASTERIZER, FakeRasterizer(fail=True))
    engine = _engine(registry, sink, clipboard, notifier)

    outcome = asyncio.run(engine.export_file(lambda: SNAPSHOT))

    assert not outcome.success
    assert "canvas tainted" in outcome.error_message
    assert notifier.messages == [EXPORT_FAILED_MESSAGE]
    assert not engine.busy
    assert sink.calls == []


class ReadOnlySink(FakeDownloadSink):
    def trigger(self, data_url, filename):
        raise PermissionError("read-only output dir")


def test_save_failure_alerts_and_clears_busy(registry, rasterizer, clipboard, notifier):
    registry.provide(RASTERIZER, rasterizer)
    engine = _engine(registry, ReadOnlySink(), clipboard, notifier)

    outcome = asyncio.run(engine.export_file(lambda: SNAPSHOT))

    assert not outcome.success
    assert "read-only" in outcome.error_message
    assert notifier.messages == [EXPORT_FAILED_MESSAGE]
    assert not engine.busy


def test_clipboard_failure(registry, rasterizer, sink, notifier):
    registry.provide(RASTERIZER, rasterizer)
    engine = _engine(registry, sink, FakeClipboard(fail=True), notifier)

    outcome = asyncio.run(engine.copy_to_clipboard(lambda: SNAPSHOT))

    assert not outcome.success
    assert notifier.messages == [COPY_FAILED_MESSAGE]
    assert not engine.busy


def test_not_ready_rasterizer(registry, sink, clipboard, notifier):
    engine = _engine(registry, sink, clipboard, notifier)

    with pytest.raises(CapabilityNotReadyError):
        asyncio.run(engine.export_file(lambda: SNAPSHOT))
    assert not engine.busy

    with pytest.raises(CapabilityNotReadyError):
        asyncio.run(engine.capture(SNAPSHOT, 3))


def test_png_size():
    assert png_size(make_png(640, 480)) == (640, 480)
    with pytest.raises(CaptureFailedError):
        png_size(b"GIF89a" + b"\x00" * 30)
