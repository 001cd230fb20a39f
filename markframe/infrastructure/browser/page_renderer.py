"""
页面渲染器
在无头 Chromium 中加载卡片 HTML，按像素密度倍数截取卡片元素

截图通过 device_scale_factor 放大而不是缩放 DOM，
模糊半径、圆角等 CSS 效果在高分辨率下保持正确比例。
"""

import traceback
from typing import TYPE_CHECKING

from ...domain.errors import CaptureFailedError
from ...log import logger
from ...types import CardSnapshot
from ...utils.decorators import log_execution, with_timeout

if TYPE_CHECKING:
    from .browser_manager import BrowserManager

# 单次截图的总时限
CAPTURE_TIMEOUT_MS = 120000


class PageRenderer:
    """页面渲染器 - 将卡片 HTML 截图为 PNG"""

    def __init__(
        self,
        browser_manager: "BrowserManager",
        load_timeout: int = 30000,
        screenshot_timeout: int = 60000,
    ):
        self._browser_manager = browser_manager
        self._load_timeout = load_timeout
        self._screenshot_timeout = screenshot_timeout

    @log_execution
    async def rasterize(self, snapshot: CardSnapshot, scale: int) -> bytes:
        """截取卡片元素，返回 PNG 数据"""
        try:
            return await self._capture(snapshot, scale)
        except Exception as e:
            logger.error(f"[MarkFrame] 截图失败: {type(e).__name__}: {e}")
            logger.error(f"[MarkFrame] 堆栈信息:\n{traceback.format_exc()}")
            raise CaptureFailedError(f"截图失败: {e}")

    @with_timeout(CAPTURE_TIMEOUT_MS)
    async def _capture(self, snapshot: CardSnapshot, scale: int) -> bytes:
        async with self._browser_manager.open_page(snapshot.viewport, scale) as page:
            await page.set_content(
                snapshot.html, wait_until="networkidle", timeout=self._load_timeout
            )
            await page.evaluate("() => document.fonts.ready.then(() => true)")

            element = page.locator(snapshot.selector)
            box = await element.bounding_box()
            if box:
                logger.info(
                    f"[MarkFrame] 截图中，元素尺寸: {box['width']:.0f}x{box['height']:.0f}，倍率: {scale}"
                )
            return await element.screenshot(
                type="png",
                animations="disabled",
                timeout=self._screenshot_timeout,
            )

    async def close(self) -> None:
        await self._browser_manager.close()
