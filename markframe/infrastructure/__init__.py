"""
基础设施层
浏览器相关模块较重，按需从 infrastructure.browser 导入
"""
from .capability import CapabilityRegistry, get_registry
from .converter import CardTemplate, MarkdownConverter, MathShield
from .delivery import FileDownloadSink, ImageUploadInput, SystemClipboard

__all__ = [
    "CapabilityRegistry",
    "get_registry",
    "CardTemplate",
    "MarkdownConverter",
    "MathShield",
    "FileDownloadSink",
    "ImageUploadInput",
    "SystemClipboard",
]
