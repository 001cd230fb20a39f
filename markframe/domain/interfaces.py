"""
领域层 - 核心接口定义
遵循依赖倒置原则(DIP)，定义抽象接口
"""

from pathlib import Path
from typing import Protocol, runtime_checkable

from ..types import CardSnapshot


@runtime_checkable
class IMarkdownParser(Protocol):
    """Markdown 解析器接口"""

    def convert(self, text: str) -> str:
        """将 Markdown 转换为 HTML 片段"""
        ...


@runtime_checkable
class IMathTypesetter(Protocol):
    """公式排版器接口"""

    def typeset(self, tex: str, display: bool, color: str) -> str:
        """将单个 TeX 公式排版为 HTML

        Raises:
            MathTypesetError: 公式无法排版
        """
        ...


@runtime_checkable
class ICodeHighlighter(Protocol):
    """代码高亮器接口"""

    def highlight(self, code: str, language: str = "") -> str:
        """返回高亮后的内联 HTML（不含外层 pre/code）"""
        ...

    def stylesheet(self, theme: str, scope: str) -> str:
        """生成指定主题的 CSS"""
        ...


@runtime_checkable
class IRasterizer(Protocol):
    """光栅化器接口"""

    async def rasterize(self, snapshot: CardSnapshot, scale: int) -> bytes:
        """按像素密度倍数截取卡片，返回 PNG 数据"""
        ...

    async def close(self) -> None:
        """释放资源"""
        ...


@runtime_checkable
class IClipboardWriter(Protocol):
    """剪贴板写入接口"""

    async def write_image(self, png: bytes) -> None:
        """写入一个 image/png 条目"""
        ...


@runtime_checkable
class IDownloadSink(Protocol):
    """下载接口"""

    def trigger(self, data_url: str, filename: str) -> Path:
        """保存 data URL 到文件"""
        ...


@runtime_checkable
class INotifier(Protocol):
    """用户提示接口"""

    def alert(self, message: str) -> None:
        """阻塞式提示"""
        ...


__all__ = [
    "IMarkdownParser",
    "IMathTypesetter",
    "ICodeHighlighter",
    "IRasterizer",
    "IClipboardWriter",
    "IDownloadSink",
    "INotifier",
]
