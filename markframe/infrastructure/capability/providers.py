"""
能力加载器
在后台线程导入重量级模块，避免阻塞事件循环
"""

import asyncio
import importlib
from typing import Any

from ...domain.errors import DependencyError
from ...log import logger
from ...types import RenderConfig
from .registry import CapabilityRegistry

PARSER = "markdown-parser"
MATH_TYPESETTER = "math-typesetter"
MATH_AUTORENDER = "math-autorender"
HIGHLIGHTER = "code-highlighter"
RASTERIZER = "rasterizer"

ALL_CAPABILITIES = (PARSER, MATH_TYPESETTER, MATH_AUTORENDER, HIGHLIGHTER, RASTERIZER)

_ENGINES = "markframe.infrastructure.engines"


async def _import(module: str) -> Any:
    return await asyncio.to_thread(importlib.import_module, module)


async def load_markdown_parser():
    module = await _import(f"{_ENGINES}.markdown_parser")
    return module.MarkdownParser()


async def load_math_typesetter():
    module = await _import(f"{_ENGINES}.math_typesetter")
    return module.MathTypesetter()


async def load_math_autorender():
    module = await _import(f"{_ENGINES}.math_autorender")
    return module.MathAutoRender()


async def load_code_highlighter():
    module = await _import(f"{_ENGINES}.code_highlighter")
    return module.CodeHighlighter()


def rasterizer_loader(config: RenderConfig):
    """光栅化器需要先确认 Chromium 可用并启动浏览器"""

    async def load():
        browser = await _import("markframe.infrastructure.browser")
        installer = browser.PlaywrightDependencyInstaller()
        if not await installer.check_and_install():
            raise DependencyError(
                "Playwright系统依赖未安装",
                install_command="playwright install --with-deps chromium",
            )
        manager = browser.BrowserManager()
        await manager.get_browser()
        logger.debug("[MarkFrame] 光栅化器已启动")
        return browser.PageRenderer(
            manager,
            load_timeout=config.load_timeout,
            screenshot_timeout=config.screenshot_timeout,
        )

    return load


def request_all(
    registry: CapabilityRegistry, config: RenderConfig, rasterizer: bool = True
) -> None:
    """请求全部能力，已请求过的不会重复加载；仅预览时可跳过浏览器"""
    registry.request(PARSER, load_markdown_parser)
    registry.request(MATH_TYPESETTER, load_math_typesetter)
    registry.request(MATH_AUTORENDER, load_math_autorender)
    registry.request(HIGHLIGHTER, load_code_highlighter)
    if rasterizer:
        registry.request(RASTERIZER, rasterizer_loader(config))
