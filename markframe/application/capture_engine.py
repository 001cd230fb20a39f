"""
截图导出引擎

Pipeline:
busy ──► 等待忙碌提示绘制 ──► 生成卡片快照 ──► 光栅化 ──► 下载 / 剪贴板 ──► 清除 busy

- 文件导出倍率 3，剪贴板复制倍率 2
- 两个目标共用一个 busy 标志，进行中时新的导出直接忽略
- busy 在 finally 中清除，失败不会让界面一直禁用
"""

import asyncio
import struct
import time
import traceback
from typing import Callable, Optional

from ..domain.errors import (
    CapabilityNotReadyError,
    CaptureFailedError,
    ClipboardWriteFailedError,
)
from ..domain.interfaces import IClipboardWriter, IDownloadSink, INotifier
from ..domain.models import ExportJob
from ..infrastructure.capability import RASTERIZER, CapabilityRegistry
from ..infrastructure.delivery.download import encode_data_url
from ..log import logger
from ..types import CaptureResult, CaptureTarget, CardSnapshot, ExportOutcome, RenderConfig

EXPORT_FAILED_MESSAGE = "导出失败，请尝试更简单的背景，或确认 Chromium 可以正常启动。"
COPY_FAILED_MESSAGE = "复制失败，请重试；若仍失败请改用导出文件。"


def png_size(png: bytes) -> tuple[int, int]:
    """从 PNG 的 IHDR 读取宽高"""
    if len(png) < 24 or png[:8] != b"\x89PNG\r\n\x1a\n":
        raise CaptureFailedError("光栅化结果不是 PNG")
    return struct.unpack(">II", png[16:24])


def epoch_millis() -> int:
    return int(time.time() * 1000)


class LoggingNotifier:
    """默认提示：写入错误日志"""

    def alert(self, message: str) -> None:
        logger.error(f"[MarkFrame] {message}")


class CaptureEngine:
    """截图导出引擎"""

    def __init__(
        self,
        registry: CapabilityRegistry,
        download_sink: IDownloadSink,
        clipboard: IClipboardWriter,
        config: Optional[RenderConfig] = None,
        notifier: Optional[INotifier] = None,
        clock: Callable[[], int] = epoch_millis,
    ):
        self._registry = registry
        self._download_sink = download_sink
        self._clipboard = clipboard
        self._config = config or RenderConfig()
        self._notifier = notifier or LoggingNotifier()
        self._clock = clock
        self._job: Optional[ExportJob] = None

    @property
    def busy(self) -> bool:
        return self._job is not None and self._job.busy

    @property
    def job(self) -> Optional[ExportJob]:
        return self._job

    async def capture(self, snapshot: CardSnapshot, scale: int) -> CaptureResult:
        """按倍率截取卡片

        Raises:
            CapabilityNotReadyError: 光栅化器未就绪
            CaptureFailedError: 光栅化失败
        """
        capability = self._registry.get(RASTERIZER)
        if not capability.ready:
            raise CapabilityNotReadyError(RASTERIZER)

        try:
            png = await capability.value.rasterize(snapshot, scale)
        except CaptureFailedError:
            raise
        except Exception as e:
            logger.error(f"[MarkFrame] 光栅化失败: {type(e).__name__}: {e}")
            logger.error(f"[MarkFrame] 堆栈信息:\n{traceback.format_exc()}")
            raise CaptureFailedError(f"光栅化失败: {e}")

        width, height = png_size(png)
        return CaptureResult(png=png, width=width, height=height, scale=scale)

    async def export_file(self, snapshot: Callable[[], CardSnapshot]) -> Optional[ExportOutcome]:
        """导出 PNG 文件；忙碌时返回 None"""
        return await self._run(CaptureTarget.FILE, self._config.export_scale, snapshot)

    async def copy_to_clipboard(self, snapshot: Callable[[], CardSnapshot]) -> Optional[ExportOutcome]:
        """复制到剪贴板；忙碌时返回 None"""
        return await self._run(CaptureTarget.CLIPBOARD, self._config.clipboard_scale, snapshot)

    async def _run(
        self,
        target: CaptureTarget,
        scale: int,
        snapshot: Callable[[], CardSnapshot],
    ) -> Optional[ExportOutcome]:
        if self.busy:
            logger.debug(f"[MarkFrame] 已有导出进行中 ({self._job.target.value})，忽略 {target.value}")
            return None
        if not self._registry.is_ready(RASTERIZER):
            raise CapabilityNotReadyError(RASTERIZER)

        self._job = ExportJob(target=target, scale=scale)
        try:
            # 让忙碌状态先生效，再开始耗时截图
            await asyncio.sleep(self._config.capture_delay_ms / 1000)
            result = await self.capture(snapshot(), scale)
            return await self._deliver(target, result)
        except CaptureFailedError as e:
            message = EXPORT_FAILED_MESSAGE if target is CaptureTarget.FILE else COPY_FAILED_MESSAGE
            self._notifier.alert(message)
            return ExportOutcome(success=False, target=target, error_message=str(e))
        except ClipboardWriteFailedError as e:
            self._notifier.alert(COPY_FAILED_MESSAGE)
            return ExportOutcome(success=False, target=target, error_message=str(e))
        finally:
            self._job = None

    async def _deliver(self, target: CaptureTarget, result: CaptureResult) -> ExportOutcome:
        if target is CaptureTarget.FILE:
            filename = f"markframe-{self._clock()}.png"
            try:
                path = self._download_sink.trigger(encode_data_url(result.png), filename)
            except OSError as e:
                logger.error(f"[MarkFrame] 保存图片失败: {type(e).__name__}: {e}")
                raise CaptureFailedError(f"保存图片失败: {e}")
            logger.info(f"[MarkFrame] 导出成功: {path} ({result.width}x{result.height})")
            return ExportOutcome(success=True, target=target, image_path=path)

        try:
            await self._clipboard.write_image(result.png)
        except ClipboardWriteFailedError:
            raise
        except Exception as e:
            raise ClipboardWriteFailedError(f"写入剪贴板失败: {e}")
        logger.info(f"[MarkFrame] 已复制到剪贴板 ({result.width}x{result.height})")
        return ExportOutcome(success=True, target=target)
