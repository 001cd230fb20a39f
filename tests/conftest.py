"""
测试公共夹具
"""

import struct
from pathlib import Path

import pytest

from markframe.domain.errors import ClipboardWriteFailedError, MathTypesetError
from markframe.infrastructure.capability import CapabilityRegistry

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def make_png(width: int, height: int) -> bytes:
    """只含 IHDR 的最小 PNG 头"""
    ihdr = struct.pack(">II", width, height) + b"\x08\x06\x00\x00\x00"
    return PNG_SIGNATURE + struct.pack(">I", 13) + b"IHDR" + ihdr + b"\x00" * 4


class FakeTypesetter:
    def __init__(self, failing=()):
        self.failing = set(failing)
        self.calls = []

    def typeset(self, tex, display, color):
        self.calls.append((tex, display, color))
        if tex in self.failing:
            raise MathTypesetError(tex, "bad input")
        kind = "display" if display else "inline"
        return f'<span class="fake-math {kind}">{tex}</span>'


class FakeRasterizer:
    def __init__(self, fail=False):
        self.fail = fail
        self.snapshots = []
        self.scales = []
        self.closed = False

    async def rasterize(self, snapshot, scale):
        self.snapshots.append(snapshot)
        self.scales.append(scale)
        if self.fail:
            raise RuntimeError("canvas tainted")
        return make_png(snapshot.viewport.width * scale, snapshot.viewport.height * scale)

    async def close(self):
        self.closed = True


class FakeDownloadSink:
    def __init__(self):
        self.calls = []

    def trigger(self, data_url, filename):
        self.calls.append((data_url, filename))
        return Path(filename)


class FakeClipboard:
    def __init__(self, fail=False):
        self.fail = fail
        self.images = []

    async def write_image(self, png):
        if self.fail:
            raise ClipboardWriteFailedError("permission denied")
        self.images.append(png)


class RecordingNotifier:
    def __init__(self):
        self.messages = []

    def alert(self, message):
        self.messages.append(message)


@pytest.fixture
def registry():
    return CapabilityRegistry()


@pytest.fixture
def typesetter():
    return FakeTypesetter()


@pytest.fixture
def rasterizer():
    return FakeRasterizer()


@pytest.fixture
def sink():
    return FakeDownloadSink()


@pytest.fixture
def clipboard():
    return FakeClipboard()


@pytest.fixture
def notifier():
    return RecordingNotifier()
