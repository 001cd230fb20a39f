"""
领域层 - 核心接口、模型和错误定义
"""

from .interfaces import (
    IMarkdownParser,
    IMathTypesetter,
    ICodeHighlighter,
    IRasterizer,
    IClipboardWriter,
    IDownloadSink,
    INotifier,
)
from .errors import (
    MarkFrameError,
    CapabilityNotReadyError,
    ShieldMismatchError,
    MathTypesetError,
    CaptureFailedError,
    ClipboardWriteFailedError,
    BrowserError,
    DependencyError,
    ConfigError,
)
from .models import (
    BackgroundType,
    StyleConfig,
    CanvasGeometry,
    SidebarGeometry,
    PointerEvent,
    ExportJob,
)

__all__ = [
    "IMarkdownParser",
    "IMathTypesetter",
    "ICodeHighlighter",
    "IRasterizer",
    "IClipboardWriter",
    "IDownloadSink",
    "INotifier",
    "MarkFrameError",
    "CapabilityNotReadyError",
    "ShieldMismatchError",
    "MathTypesetError",
    "CaptureFailedError",
    "ClipboardWriteFailedError",
    "BrowserError",
    "DependencyError",
    "ConfigError",
    "BackgroundType",
    "StyleConfig",
    "CanvasGeometry",
    "SidebarGeometry",
    "PointerEvent",
    "ExportJob",
]
