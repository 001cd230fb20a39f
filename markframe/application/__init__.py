"""
应用层
"""
from .capture_engine import CaptureEngine, LoggingNotifier
from .card_session import CardSession
from .geometry import CanvasResizeController, PointerEventHub, SidebarResizeController
from .mounted_content import MountedContent
from .post_processor import PostProcessor

__all__ = [
    "CaptureEngine",
    "LoggingNotifier",
    "CardSession",
    "CanvasResizeController",
    "PointerEventHub",
    "SidebarResizeController",
    "MountedContent",
    "PostProcessor",
]
