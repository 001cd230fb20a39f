"""
代码高亮器
基于 Pygments，按 language-* 指定语言，未指定时自动识别
"""

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound

from ...log import logger

# 保持代码原文不被增删换行
LEXER_OPTIONS = {"stripnl": False, "ensurenl": False}


class CodeHighlighter:
    """代码高亮器"""

    def __init__(self):
        self._formatter = HtmlFormatter(nowrap=True)

    def highlight(self, code: str, language: str = "") -> str:
        """返回高亮后的内联 HTML"""
        lexer = self._get_lexer(code, language)
        markup = highlight(code, lexer, self._formatter)
        # 格式化器总是以换行结尾
        if not code.endswith("\n") and markup.endswith("\n"):
            markup = markup[:-1]
        return markup

    def _get_lexer(self, code: str, language: str):
        if language:
            try:
                return get_lexer_by_name(language, **LEXER_OPTIONS)
            except ClassNotFound:
                logger.debug(f"[MarkFrame] 未知代码语言: {language}")
                return TextLexer(**LEXER_OPTIONS)
        try:
            return guess_lexer(code, **LEXER_OPTIONS)
        except ClassNotFound:
            return TextLexer(**LEXER_OPTIONS)

    def stylesheet(self, theme: str, scope: str) -> str:
        """生成限定在 scope 下的主题 CSS"""
        try:
            formatter = HtmlFormatter(style=theme)
        except ClassNotFound:
            logger.warning(f"[MarkFrame] 未知代码主题 {theme}，使用 default")
            formatter = HtmlFormatter(style="default")
        return formatter.get_style_defs(scope)
