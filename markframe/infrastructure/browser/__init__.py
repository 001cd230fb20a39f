"""
基础设施层 - 浏览器模块
"""
from .dependency_installer import PlaywrightDependencyInstaller
from .browser_manager import BrowserManager
from .page_renderer import PageRenderer

__all__ = [
    "PlaywrightDependencyInstaller",
    "BrowserManager",
    "PageRenderer",
]
