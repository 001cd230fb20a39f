"""
卡片模板测试
"""

from dataclasses import replace

from markframe.domain.models import CanvasGeometry, StyleConfig
from markframe.domain.style_compositor import compose_styles
from markframe.infrastructure.converter.card_template import CardTemplate


def _render(style):
    return CardTemplate().render("<p>hi</p>", style, compose_styles(style), CanvasGeometry())


def test_placeholders_are_filled():
    html = _render(StyleConfig())

    assert "{{" not in html
    assert "<p>hi</p>" in html
    assert "color: #1e293b;" in html


def test_user_values_stay_inside_style_block():
    style = StyleConfig(text_color="red;</style><script>alert(1)</script>")
    style = style.with_changes(font=replace(style.font, name='Inter", serif; x: "'))

    html = _render(style)

    assert "<script>" not in html
    assert html.count("</style>") == CardTemplate()._load_template().count("</style>")
    assert 'font-family: "Inter, serif x:", sans-serif;' in html
