"""
Markdown 渲染测试
"""

from markframe.infrastructure.capability import PARSER
from markframe.infrastructure.converter import MarkdownConverter
from markframe.infrastructure.engines.markdown_parser import MarkdownParser


def test_not_ready_keeps_previous_html(registry):
    rendered = []
    converter = MarkdownConverter(registry, on_render=rendered.append)

    assert converter.render("# Hello") == ""
    assert rendered == []


def test_renders_latest_document_when_parser_becomes_ready(registry):
    rendered = []
    converter = MarkdownConverter(registry, on_render=rendered.append)
    converter.render("# Old")
    converter.render("# New")

    registry.provide(PARSER, MarkdownParser())

    assert len(rendered) == 1
    assert "<h1>New</h1>" in converter.html


def test_detached_converter_ignores_parser(registry):
    rendered = []
    converter = MarkdownConverter(registry, on_render=rendered.append)
    converter.render("# Hello")

    converter.detach()
    registry.provide(PARSER, MarkdownParser())

    assert rendered == []
    assert registry.get(PARSER).listener_count == 0


def test_math_survives_markdown_verbatim(registry):
    registry.provide(PARSER, MarkdownParser())
    converter = MarkdownConverter(registry)

    html = converter.render("Inline $a^2+b^2=c^2$ and $$\\int_0^1 x dx$$ and $x*y*z$")

    assert "$a^2+b^2=c^2$" in html
    assert "$$\\int_0^1 x dx$$" in html
    assert "$x*y*z$" in html
    assert "<em>" not in html


def test_render_is_idempotent(registry):
    registry.provide(PARSER, MarkdownParser())
    converter = MarkdownConverter(registry)
    document = "Energy $E=mc^2$\n\n- one\n- two"

    assert converter.render(document) == converter.render(document)


def test_gfm_extensions(registry):
    registry.provide(PARSER, MarkdownParser())
    converter = MarkdownConverter(registry)

    html = converter.render(
        "```python\nx = 1\n```\n\n| a | b |\n|---|---|\n| 1 | 2 |\n\nline one\nline two"
    )

    assert '<code class="language-python">' in html
    assert "<table>" in html
    assert "<br />" in html


def test_strikethrough_and_autolink(registry):
    registry.provide(PARSER, MarkdownParser())
    converter = MarkdownConverter(registry)

    html = converter.render("~~gone~~ and https://example.com")

    assert "<del>gone</del>" in html
    assert '<a href="https://example.com"' in html
