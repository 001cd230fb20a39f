"""
公式定界符扫描测试
"""

from markframe.infrastructure.engines.math_autorender import MathAutoRender


def _math(segments):
    return [(s.data, s.display) for s in segments if s.is_math]


def test_split_inline_and_display():
    segments = MathAutoRender().split("a $x$ b $$y$$ c")

    assert [s.kind for s in segments] == ["text", "math", "text", "math", "text"]
    assert _math(segments) == [("x", False), ("y", True)]
    assert segments[1].raw == "$x$"


def test_unclosed_delimiter_keeps_text():
    text = "price $5 only"
    segments = MathAutoRender().split(text)

    assert not any(s.is_math for s in segments)
    assert "".join(s.data for s in segments) == text


def test_right_delimiter_inside_braces_is_skipped():
    assert _math(MathAutoRender().split("$a^{b$c}$")) == [("a^{b$c}", False)]


def test_escaped_delimiter_is_skipped():
    assert _math(MathAutoRender().split("$a\\$b$")) == [("a\\$b", False)]


def test_paren_and_bracket_delimiters():
    segments = MathAutoRender().split("\\(x\\) and \\[y\\]")

    assert _math(segments) == [("x", False), ("y", True)]


def test_contains_math():
    autorender = MathAutoRender()

    assert autorender.contains_math("cost $x$")
    assert not autorender.contains_math("plain text")
