"""
卡片会话
编排文档、样式、几何尺寸与渲染/导出流程

Pipeline:
document ──► shield ──► markdown ──► mount ──► post-process ──► capture

- 文档变化或解析器就绪时重新渲染
- 渲染结果变化或排版/高亮能力就绪时去抖后处理
- 文字颜色变化时重新挂载上次结果并后处理（不重新解析）
"""

from pathlib import Path
from typing import Optional

from ..domain.errors import CapabilityNotReadyError
from ..domain.interfaces import IClipboardWriter, IDownloadSink, INotifier
from ..domain.models import BackgroundType, CanvasGeometry, SidebarGeometry, StyleConfig
from ..domain.style_compositor import compose_styles
from ..infrastructure.capability import (
    ALL_CAPABILITIES,
    HIGHLIGHTER,
    RASTERIZER,
    CapabilityRegistry,
    get_registry,
    request_all,
)
from ..infrastructure.converter import CardTemplate, MarkdownConverter
from ..infrastructure.delivery import FileDownloadSink, ImageUploadInput, SystemClipboard
from ..log import logger
from ..presets import (
    DEFAULT_MARKDOWN,
    GRADIENT_DIRECTIONS,
    LIGHT_TEXT_COLORS,
    find_font,
    find_gradient,
    find_text_preset,
)
from ..types import CaptureTarget, CardSnapshot, ExportOutcome, RenderConfig, ThemeMode, Viewport
from ..utils.scheduler import TaskScheduler
from .capture_engine import CaptureEngine
from .geometry import CanvasResizeController, PointerEventHub, SidebarResizeController
from .mounted_content import MountedContent
from .post_processor import PostProcessor

COPY_FEEDBACK_TASK = "copy-feedback"
CODE_SCOPE = ".markframe-content pre code"


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, int(value)))


class CardSession:
    """卡片会话"""

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        registry: Optional[CapabilityRegistry] = None,
        download_sink: Optional[IDownloadSink] = None,
        clipboard: Optional[IClipboardWriter] = None,
        notifier: Optional[INotifier] = None,
        clock=None,
        template: Optional[CardTemplate] = None,
    ):
        self.config = config or RenderConfig()
        self.registry = registry or get_registry()
        self.scheduler = TaskScheduler()
        self.template = template or CardTemplate()

        self.document = DEFAULT_MARKDOWN
        self.style = StyleConfig()
        self.copy_succeeded = False
        self.image_input = ImageUploadInput()

        self.pointer_hub = PointerEventHub()
        self.canvas_resizer = CanvasResizeController(
            self.pointer_hub,
            CanvasGeometry(self.config.canvas_width, self.config.canvas_height),
            enabled=lambda: self.handle_visible,
        )
        self.sidebar_resizer = SidebarResizeController(
            self.pointer_hub, SidebarGeometry(self.config.sidebar_width)
        )

        self.content = MountedContent()
        self.post_processor = PostProcessor(
            self.registry,
            self.scheduler,
            self.content,
            text_color=lambda: self.style.text_color,
            debounce_ms=self.config.postprocess_debounce_ms,
        )
        self.renderer = MarkdownConverter(self.registry, on_render=self._on_rendered)

        capture_kwargs = {"clock": clock} if clock else {}
        self.capture = CaptureEngine(
            self.registry,
            download_sink or FileDownloadSink(self.config.output_dir),
            clipboard or SystemClipboard(),
            config=self.config,
            notifier=notifier,
            **capture_kwargs,
        )

    # ------------------------------------------------------------------
    # 生命周期
    # ------------------------------------------------------------------

    def start(self, rasterizer: bool = True) -> None:
        """请求所有能力并渲染当前文档（需要在事件循环中调用）"""
        request_all(self.registry, self.config, rasterizer=rasterizer)
        self.renderer.render(self.document)

    async def settle(self, timeout: Optional[float] = None) -> None:
        """等待能力加载结束以及待执行的后处理完成"""
        await self.registry.wait_settled(*ALL_CAPABILITIES, timeout=timeout)
        await self.scheduler.wait_idle()

    async def close(self) -> None:
        """释放注册表订阅、待执行任务和浏览器"""
        self.renderer.detach()
        self.post_processor.detach()
        self.scheduler.cancel_all()
        rasterizer = self.registry.get(RASTERIZER)
        if rasterizer.ready:
            await rasterizer.value.close()
        logger.info("[MarkFrame] 会话资源已释放")

    # ------------------------------------------------------------------
    # 渲染
    # ------------------------------------------------------------------

    @property
    def rendered_html(self) -> str:
        return self.renderer.html

    def set_document(self, text: str) -> None:
        self.document = text
        self.renderer.render(text)

    def _on_rendered(self, html: str) -> None:
        self.content.mount(html)
        self.post_processor.request()

    # ------------------------------------------------------------------
    # 样式
    # ------------------------------------------------------------------

    def _update_style(self, **changes) -> None:
        self.style = self.style.with_changes(**changes)

    def select_gradient(self, name: str) -> None:
        self._update_style(gradient=find_gradient(name), background_type=BackgroundType.GRADIENT)

    def set_custom_gradient(self, start: str, end: str, direction: str = "135deg") -> None:
        direction = GRADIENT_DIRECTIONS.get(direction, direction)
        self._update_style(
            custom_start=start,
            custom_end=end,
            custom_direction=direction,
            background_type=BackgroundType.CUSTOM,
        )

    def upload_background(self, path: Path) -> None:
        self.image_input.select(path)
        data_url = self.image_input.read()
        self._update_style(image_data_url=data_url, background_type=BackgroundType.IMAGE)

    def set_brightness(self, value: int) -> None:
        self._update_style(image_brightness=_clamp(value, 0, 200))

    def set_font(self, name: str) -> None:
        self._update_style(font=find_font(name))

    def set_text_color(self, color: str) -> None:
        if color == self.style.text_color:
            return
        self._update_style(text_color=color)
        # 公式按文字颜色排版，需要在原始结果上重新处理
        self.content.remount()
        self.post_processor.request()

    def select_text_preset(self, name: str) -> None:
        color = find_text_preset(name).value
        self.set_theme_mode(ThemeMode.DARK if color in LIGHT_TEXT_COLORS else ThemeMode.LIGHT)
        self.set_text_color(color)

    def set_theme_mode(self, mode: ThemeMode) -> None:
        self._update_style(theme_mode=mode)

    def set_blur(self, value: int) -> None:
        self._update_style(blur=_clamp(value, 0, 60))

    def set_opacity(self, value: int) -> None:
        self._update_style(opacity=_clamp(value, 0, 100))

    def set_padding(self, value: int) -> None:
        self._update_style(padding=_clamp(value, 16, 128))

    def set_border_radius(self, value: int) -> None:
        self._update_style(border_radius=_clamp(value, 0, 48))

    # ------------------------------------------------------------------
    # 卡片
    # ------------------------------------------------------------------

    @property
    def canvas(self) -> CanvasGeometry:
        return self.canvas_resizer.geometry

    @property
    def sidebar(self) -> SidebarGeometry:
        return self.sidebar_resizer.geometry

    @property
    def handle_visible(self) -> bool:
        """导出进行中隐藏缩放手柄，截图中不会出现"""
        return not self.capture.busy

    def code_stylesheet(self) -> str:
        if not self.registry.is_ready(HIGHLIGHTER):
            return ""
        theme = (
            self.config.dark_code_theme
            if self.style.theme_mode is ThemeMode.DARK
            else self.config.light_code_theme
        )
        return self.registry.value(HIGHLIGHTER).stylesheet(theme, CODE_SCOPE)

    def card_html(self) -> str:
        return self.template.render(
            self.content.to_html(),
            self.style,
            compose_styles(self.style),
            self.canvas,
            code_css=self.code_stylesheet(),
            show_handle=self.handle_visible,
            stage_padding=self.config.stage_padding,
        )

    def snapshot(self) -> CardSnapshot:
        padding = self.config.stage_padding
        viewport = Viewport(
            width=self.canvas.width + 2 * padding,
            height=self.canvas.height + 2 * padding,
        )
        return CardSnapshot(html=self.card_html(), viewport=viewport)

    # ------------------------------------------------------------------
    # 导出
    # ------------------------------------------------------------------

    async def export_png(self) -> Optional[ExportOutcome]:
        """导出 PNG；光栅化器未就绪或已有导出进行中时不执行"""
        try:
            return await self.capture.export_file(self.snapshot)
        except CapabilityNotReadyError as e:
            logger.warning(f"[MarkFrame] {e}")
            return ExportOutcome(success=False, target=CaptureTarget.FILE, error_message=str(e))

    async def copy_to_clipboard(self) -> Optional[ExportOutcome]:
        try:
            outcome = await self.capture.copy_to_clipboard(self.snapshot)
        except CapabilityNotReadyError as e:
            logger.warning(f"[MarkFrame] {e}")
            return ExportOutcome(success=False, target=CaptureTarget.CLIPBOARD, error_message=str(e))

        if outcome is not None and outcome.success:
            self.copy_succeeded = True
            self.scheduler.schedule(
                COPY_FEEDBACK_TASK, self._clear_copy_feedback, self.config.copy_feedback_ms
            )
        return outcome

    def _clear_copy_feedback(self) -> None:
        self.copy_succeeded = False
