"""
公式排版器
使用 matplotlib mathtext 将 TeX 公式渲染为内联 SVG 图片，无需安装 TeX
"""

import base64
import html
import io
from functools import lru_cache

import matplotlib
from matplotlib.backends.backend_svg import FigureCanvasSVG
from matplotlib.figure import Figure

from ...domain.errors import MathTypesetError


@lru_cache(maxsize=512)
def _render_svg(tex: str, fontsize: int, color: str) -> str:
    """渲染单个公式，返回 base64 编码的 SVG"""
    with matplotlib.rc_context({"svg.hashsalt": "markframe"}):
        fig = Figure(figsize=(0.01, 0.01))
        fig.patch.set_alpha(0)
        FigureCanvasSVG(fig)
        fig.text(0, 0, f"${tex}$", fontsize=fontsize, color=color, math_fontfamily="cm")
        buf = io.BytesIO()
        fig.savefig(
            buf,
            format="svg",
            bbox_inches="tight",
            pad_inches=0.02,
            transparent=True,
            metadata={"Date": None},
        )
    return base64.b64encode(buf.getvalue()).decode("ascii")


class MathTypesetter:
    """公式排版器"""

    def __init__(self, inline_size: int = 16, display_size: int = 18):
        self._inline_size = inline_size
        self._display_size = display_size

    def typeset(self, tex: str, display: bool, color: str) -> str:
        """排版单个公式，失败时抛出 MathTypesetError"""
        expr = tex.strip()
        if not expr:
            raise MathTypesetError(tex, "空公式")

        size = self._display_size if display else self._inline_size
        try:
            b64 = _render_svg(expr, size, color)
        except Exception as e:
            raise MathTypesetError(tex, f"{type(e).__name__}: {e}") from e

        css_class = "math math-display" if display else "math math-inline"
        img = (
            f'<img class="{css_class}" '
            f'src="data:image/svg+xml;base64,{b64}" '
            f'alt="{html.escape(expr, quote=True)}">'
        )
        if display:
            return f'<span class="math-block">{img}</span>'
        return img
