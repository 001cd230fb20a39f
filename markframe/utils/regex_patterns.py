"""
正则表达式模式集中管理模块

本模块集中定义和预编译所有正则表达式，按功能分组，使用全大写+下划线命名。
"""

import re
from typing import Pattern

# ============================================================================
# 公式保护相关正则 (math_shield.py)
# ============================================================================

# 匹配块级公式 $$...$$（可跨行）
SHIELD_BLOCK_MATH: Pattern[str] = re.compile(r"\$\$([\s\S]*?)\$\$")

# 匹配行内公式 $...$（至少一个字符，不跨行）
SHIELD_INLINE_MATH: Pattern[str] = re.compile(r"\$([^$\n]+?)\$")

# 占位符前缀，后接随机 nonce
SHIELD_PREFIX = "MFSHIELD"


def shield_token_pattern(nonce: str) -> Pattern[str]:
    """构造某次保护专用的占位符匹配模式"""
    return re.compile(
        re.escape(SHIELD_PREFIX + nonce) + r"(BLOCK|INLINE)(\d+)END"
    )


# ============================================================================
# 后处理相关正则 (post_processor.py / code_highlighter.py)
# ============================================================================

# 从 class 中提取代码语言 language-xxx / lang-xxx
CODE_LANGUAGE_CLASS: Pattern[str] = re.compile(r"^(?:language|lang)-(\S+)$")


# 用户输入的 CSS 值中不允许出现的字符，防止跳出声明或 <style> 块
CSS_UNSAFE_CHARS: Pattern[str] = re.compile(r"[<>{};\"\\\r\n]")


# ============================================================================
# 导出相关正则 (download.py / image_upload.py)
# ============================================================================

# 解析 data URL
DATA_URL: Pattern[str] = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<base64>;base64)?,(?P<data>.*)$", re.DOTALL
)


__all__ = [
    "SHIELD_BLOCK_MATH",
    "SHIELD_INLINE_MATH",
    "SHIELD_PREFIX",
    "shield_token_pattern",
    "CODE_LANGUAGE_CLASS",
    "CSS_UNSAFE_CHARS",
    "DATA_URL",
]
