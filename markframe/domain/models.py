"""
领域层 - 数据模型
样式配置、画布几何、指针事件、导出任务
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from ..presets import FONTS, PRESET_GRADIENTS, FontPreset, GradientPreset
from ..types import CaptureTarget, ThemeMode

CANVAS_MIN_WIDTH = 300
CANVAS_MIN_HEIGHT = 200
SIDEBAR_MIN_WIDTH = 250
SIDEBAR_MAX_WIDTH = 800


class BackgroundType(Enum):
    """背景类型"""

    GRADIENT = "gradient"
    CUSTOM = "custom"
    IMAGE = "image"


@dataclass(frozen=True)
class StyleConfig:
    """卡片样式（不可变，修改时整体替换）"""

    background_type: BackgroundType = BackgroundType.GRADIENT
    gradient: GradientPreset = PRESET_GRADIENTS[0]
    custom_start: str = "#6366f1"
    custom_end: str = "#a855f7"
    custom_direction: str = "135deg"
    image_data_url: Optional[str] = None
    image_brightness: int = 100
    blur: int = 40
    opacity: int = 60
    padding: int = 64
    border_radius: int = 24
    theme_mode: ThemeMode = ThemeMode.LIGHT
    font: FontPreset = FONTS[0]
    font_size: int = 16
    text_color: str = "#1e293b"

    def with_changes(self, **changes) -> "StyleConfig":
        return replace(self, **changes)


@dataclass(frozen=True)
class CanvasGeometry:
    """输出卡片尺寸，始终满足 width >= 300, height >= 200"""

    width: int = 800
    height: int = 600

    def __post_init__(self):
        object.__setattr__(self, "width", max(CANVAS_MIN_WIDTH, int(self.width)))
        object.__setattr__(self, "height", max(CANVAS_MIN_HEIGHT, int(self.height)))


@dataclass(frozen=True)
class SidebarGeometry:
    """控制面板宽度，始终在 [250, 800] 内"""

    width: int = 384

    def __post_init__(self):
        clamped = min(SIDEBAR_MAX_WIDTH, max(SIDEBAR_MIN_WIDTH, int(self.width)))
        object.__setattr__(self, "width", clamped)


@dataclass(frozen=True)
class PointerEvent:
    """指针事件坐标"""

    x: float
    y: float


@dataclass
class ExportJob:
    """进行中的导出任务"""

    target: CaptureTarget
    scale: int
    busy: bool = field(default=True)
