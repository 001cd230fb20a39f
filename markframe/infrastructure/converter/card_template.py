"""
卡片模板
把渲染后的内容和合成样式填入 HTML 模板
"""

import html
from pathlib import Path
from typing import Optional

from ...domain.style_compositor import CompositedStyle, css_declarations, css_value
from ...domain.models import CanvasGeometry, StyleConfig
from ...presets import FONTS

DEFAULT_TEMPLATE = Path(__file__).resolve().parent.parent.parent / "templates" / "card.html"

HANDLE_HTML = '<div class="markframe-handle" title="Drag to resize canvas"></div>'


class CardTemplate:
    """卡片模板"""

    def __init__(self, template_path: Path = DEFAULT_TEMPLATE):
        self._template_path = template_path
        self._template_cache: Optional[str] = None

    def render(
        self,
        content_html: str,
        style: StyleConfig,
        composited: CompositedStyle,
        canvas: CanvasGeometry,
        code_css: str = "",
        show_handle: bool = True,
        stage_padding: int = 32,
    ) -> str:
        """生成完整 HTML"""
        card_style = {
            "padding": f"{style.padding}px",
            "border-radius": f"{style.border_radius}px",
            "border": composited.card_border,
            "color": css_value(style.text_color),
            "font-family": f'"{css_value(style.font.name)}", sans-serif',
            "font-size": f"{style.font_size}px",
        }
        replacements = {
            "{{FONT_LINKS}}": self._font_links(),
            "{{STAGE_PADDING}}": str(stage_padding),
            "{{CANVAS_WIDTH}}": str(canvas.width),
            "{{CANVAS_HEIGHT}}": str(canvas.height),
            "{{BACKGROUND_STYLE}}": css_declarations(composited.background),
            "{{BLUR_STYLE}}": css_declarations(composited.blur_layer),
            "{{TINT_COLOR}}": composited.tint_color,
            "{{BORDER_RADIUS}}": str(style.border_radius),
            "{{CARD_STYLE}}": css_declarations(card_style),
            "{{TEXT_COLOR}}": css_value(style.text_color),
            "{{CODE_CSS}}": code_css,
            "{{HANDLE}}": HANDLE_HTML if show_handle else "",
        }

        full_html = self._load_template()
        for placeholder, value in replacements.items():
            full_html = full_html.replace(placeholder, value)
        # 内容最后填入，避免用户文本中的占位符被替换
        return full_html.replace("{{CONTENT}}", content_html)

    def _font_links(self) -> str:
        return "\n".join(
            f'<link rel="stylesheet" href="{html.escape(font.url, quote=True)}">'
            for font in FONTS
        )

    def _load_template(self) -> str:
        if self._template_cache is None:
            with open(self._template_path, "r", encoding="utf-8") as f:
                self._template_cache = f.read()
        return self._template_cache
