"""
MarkFrame 类型定义
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class CaptureTarget(Enum):
    """导出目标"""

    FILE = "file"  # 下载为 PNG 文件
    CLIPBOARD = "clipboard"  # 写入系统剪贴板


class ShieldKind(Enum):
    """公式保护类型"""

    BLOCK = "BLOCK"  # $$...$$
    INLINE = "INLINE"  # $...$


class ThemeMode(Enum):
    """卡片主题"""

    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class RenderConfig:
    """渲染配置（不可变）"""

    export_scale: int = 3
    clipboard_scale: int = 2
    capture_delay_ms: int = 100
    postprocess_debounce_ms: int = 50
    copy_feedback_ms: int = 2000
    load_timeout: int = 30000
    screenshot_timeout: int = 60000
    stage_padding: int = 32
    canvas_width: int = 800
    canvas_height: int = 600
    sidebar_width: int = 384
    light_code_theme: str = "default"
    dark_code_theme: str = "github-dark"
    output_dir: Path = field(default_factory=Path.cwd)


@dataclass(frozen=True)
class Viewport:
    """截图视口"""

    width: int
    height: int


@dataclass(frozen=True)
class CardSnapshot:
    """待截图的卡片（完整 HTML + 视口）"""

    html: str
    viewport: Viewport
    selector: str = "#markframe-preview"


@dataclass(frozen=True)
class CaptureResult:
    """截图结果"""

    png: bytes
    width: int
    height: int
    scale: int


@dataclass
class ExportOutcome:
    """导出结果（需要可变以设置 image_path）"""

    success: bool
    target: CaptureTarget
    image_path: Optional[Path] = None
    error_message: Optional[str] = None
