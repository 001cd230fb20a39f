"""
浏览器管理器
管理 Playwright 浏览器实例的生命周期，按截图倍率创建独立页面
"""

import asyncio
import traceback
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from playwright.async_api import Browser, Page, Playwright, async_playwright

from ...domain.errors import BrowserError
from ...log import logger
from ...types import Viewport


class BrowserManager:
    """浏览器管理器 - 复用同一个 Chromium 实例"""

    def __init__(self):
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._lock = asyncio.Lock()

    async def get_browser(self) -> Browser:
        """获取或创建浏览器实例（并发安全）"""
        async with self._lock:
            try:
                if self._browser is None or not self._browser.is_connected():
                    logger.info("[MarkFrame] 正在启动浏览器...")
                    if self._playwright is None:
                        self._playwright = await async_playwright().start()
                        logger.debug("[MarkFrame] Playwright 已启动")

                    self._browser = await self._playwright.chromium.launch(
                        headless=True,
                        args=["--allow-file-access-from-files", "--font-render-hinting=none"],
                    )
                    logger.info("[MarkFrame] 浏览器实例已创建")
                return self._browser

            except Exception as e:
                logger.error(f"[MarkFrame] 浏览器启动失败: {type(e).__name__}: {e}")
                logger.error(f"[MarkFrame] 堆栈信息:\n{traceback.format_exc()}")
                raise BrowserError(f"浏览器启动失败: {e}")

    @asynccontextmanager
    async def open_page(self, viewport: Viewport, scale: int) -> AsyncIterator[Page]:
        """打开指定像素密度的页面，退出时关闭所在上下文"""
        browser = await self.get_browser()
        context = await browser.new_context(
            viewport={"width": viewport.width, "height": viewport.height},
            device_scale_factor=scale,
        )
        try:
            page = await context.new_page()
            page.on("console", lambda msg: logger.debug(f"[Browser] {msg.type}: {msg.text}"))
            page.on("pageerror", lambda err: logger.error(f"[Browser Error] {err}"))
            yield page
        finally:
            await context.close()

    async def close(self) -> None:
        """关闭浏览器和Playwright"""
        async with self._lock:
            if self._browser:
                try:
                    await self._browser.close()
                except Exception as e:
                    logger.warning(f"[MarkFrame] 关闭浏览器时出错: {e}")
                finally:
                    self._browser = None

            if self._playwright:
                try:
                    await self._playwright.stop()
                except Exception as e:
                    logger.warning(f"[MarkFrame] 关闭Playwright时出错: {e}")
                finally:
                    self._playwright = None

            logger.info("[MarkFrame] 浏览器资源已释放")
