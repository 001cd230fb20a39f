"""
Markdown转换器
保护公式 → 解析 Markdown → 还原公式

解析器能力未就绪时保留上一次的 HTML，就绪后立即用最新文档重新渲染。
"""

from typing import Callable, Optional

from ...log import logger
from ..capability.registry import Capability, CapabilityRegistry
from .math_shield import MathShield

from ..capability.providers import PARSER


class MarkdownConverter:
    """Markdown转换器"""

    def __init__(
        self,
        registry: CapabilityRegistry,
        on_render: Optional[Callable[[str], None]] = None,
        shield: Optional[MathShield] = None,
    ):
        self._registry = registry
        self._on_render = on_render
        self._shield = shield or MathShield()
        self._html = ""
        self._document: Optional[str] = None
        self._unsubscribe = self._registry.subscribe(PARSER, self._on_parser_status)

    @property
    def html(self) -> str:
        return self._html

    def render(self, document: str) -> str:
        """渲染文档；解析器未就绪时返回上一次结果"""
        self._document = document
        parser = self._registry.get(PARSER)
        if not parser.ready:
            logger.debug(f"[MarkFrame] 解析器状态 {parser.status.value}，保留上一次渲染结果")
            return self._html

        protected, table = self._shield.shield(document)
        html = parser.value.convert(protected)
        self._html = self._shield.unshield(html, table)
        logger.debug(f"[MarkFrame] Markdown转HTML完成，公式数: {len(table)}")

        if self._on_render:
            self._on_render(self._html)
        return self._html

    def detach(self) -> None:
        """取消对解析器状态的订阅"""
        self._unsubscribe()

    def _on_parser_status(self, capability: Capability) -> None:
        if capability.ready and self._document is not None:
            logger.debug("[MarkFrame] 解析器就绪，重新渲染")
            self.render(self._document)
