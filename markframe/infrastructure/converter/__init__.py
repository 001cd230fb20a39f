"""
基础设施层 - 转换器模块
"""
from .math_shield import MathShield, ShieldTable
from .markdown_converter import MarkdownConverter
from .card_template import CardTemplate

__all__ = [
    "MathShield",
    "ShieldTable",
    "MarkdownConverter",
    "CardTemplate",
]
