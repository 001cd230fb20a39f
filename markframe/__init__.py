"""
MarkFrame
Markdown + 数学公式 渲染为玻璃拟态卡片图片
"""

__version__ = "1.0.0"
