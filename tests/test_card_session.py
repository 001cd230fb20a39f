"""
卡片会话测试：从文档到导出的完整流程
"""

import asyncio

from conftest import FakeTypesetter
from markframe.application import CardSession
from markframe.domain.models import BackgroundType, CanvasGeometry, PointerEvent
from markframe.infrastructure.capability import (
    HIGHLIGHTER,
    MATH_AUTORENDER,
    MATH_TYPESETTER,
    PARSER,
    RASTERIZER,
)
from markframe.infrastructure.converter.card_template import HANDLE_HTML
from markframe.infrastructure.engines.code_highlighter import CodeHighlighter
from markframe.infrastructure.engines.markdown_parser import MarkdownParser
from markframe.infrastructure.engines.math_autorender import MathAutoRender
from markframe.types import RenderConfig, ThemeMode, Viewport

DOCUMENT = "# Title\n\nEnergy $E=mc^2$\n\n```python\nx = 1\n```"


def _session(tmp_path, registry, rasterizer, sink, clipboard, notifier):
    config = RenderConfig(
        capture_delay_ms=0,
        postprocess_debounce_ms=0,
        copy_feedback_ms=10,
        output_dir=tmp_path,
    )
    return CardSession(
        config=config,
        registry=registry,
        download_sink=sink,
        clipboard=clipboard,
        notifier=notifier,
        clock=lambda: 42,
    )


def _provide_all(registry, typesetter, rasterizer):
    registry.provide(PARSER, MarkdownParser())
    registry.provide(MATH_AUTORENDER, MathAutoRender())
    registry.provide(MATH_TYPESETTER, typesetter)
    registry.provide(HIGHLIGHTER, CodeHighlighter())
    registry.provide(RASTERIZER, rasterizer)


def test_document_is_rendered_and_post_processed(
    tmp_path, registry, typesetter, rasterizer, sink, clipboard, notifier
):
    _provide_all(registry, typesetter, rasterizer)
    session = _session(tmp_path, registry, rasterizer, sink, clipboard, notifier)

    async def scenario():
        session.set_document(DOCUMENT)
        await session.scheduler.wait_idle()
        return session.content.to_html()

    html = asyncio.run(scenario())

    assert "<h1>Title</h1>" in html
    assert 'class="fake-math inline"' in html
    assert 'data-highlighted="yes"' in html
    assert "$E=mc^2$" in session.rendered_html


def test_text_color_change_retypesets_math(
    tmp_path, registry, typesetter, rasterizer, sink, clipboard, notifier
):
    _provide_all(registry, typesetter, rasterizer)
    session = _session(tmp_path, registry, rasterizer, sink, clipboard, notifier)

    async def scenario():
        session.set_document("$x$")
        await session.scheduler.wait_idle()
        session.select_text_preset("Pure White")
        await session.scheduler.wait_idle()

    asyncio.run(scenario())

    assert typesetter.calls[-1] == ("x", False, "#ffffff")
    assert session.style.theme_mode is ThemeMode.DARK
    assert session.content.to_html().count("fake-math") == 1


def test_setters_clamp(tmp_path, registry, rasterizer, sink, clipboard, notifier):
    session = _session(tmp_path, registry, rasterizer, sink, clipboard, notifier)

    session.set_blur(100)
    session.set_opacity(-5)
    session.set_padding(0)
    session.set_border_radius(99)
    session.set_brightness(500)

    style = session.style
    assert (style.blur, style.opacity, style.padding, style.border_radius) == (60, 0, 16, 48)
    assert style.image_brightness == 200


def test_background_selection(tmp_path, registry, rasterizer, sink, clipboard, notifier):
    session = _session(tmp_path, registry, rasterizer, sink, clipboard, notifier)

    session.set_custom_gradient("#000000", "#ffffff", "horizontal")
    assert session.style.background_type is BackgroundType.CUSTOM
    assert session.style.custom_direction == "to right"

    session.select_gradient("oceanic")
    assert session.style.background_type is BackgroundType.GRADIENT
    assert session.style.gradient.name == "Oceanic"

    image = tmp_path / "bg.png"
    image.write_bytes(b"fakepng")
    session.upload_background(image)
    assert session.style.background_type is BackgroundType.IMAGE
    assert session.style.image_data_url.startswith("data:image/png;base64,")
    assert session.image_input.value is None


def test_snapshot_viewport_follows_canvas(tmp_path, registry, rasterizer, sink, clipboard, notifier):
    session = _session(tmp_path, registry, rasterizer, sink, clipboard, notifier)

    session.canvas_resizer.pointer_down(PointerEvent(100, 100))
    session.pointer_hub.move(150, 130)
    session.pointer_hub.up()
    snapshot = session.snapshot()

    assert session.canvas == CanvasGeometry(900, 660)
    assert snapshot.viewport == Viewport(964, 724)
    assert HANDLE_HTML in snapshot.html
    assert "width: 900px;" in snapshot.html


def test_export_hides_handle_and_names_file(
    tmp_path, registry, typesetter, rasterizer, sink, clipboard, notifier
):
    _provide_all(registry, typesetter, rasterizer)
    session = _session(tmp_path, registry, rasterizer, sink, clipboard, notifier)

    outcome = asyncio.run(session.export_png())

    assert outcome.success
    assert sink.calls[0][1] == "markframe-42.png"
    assert HANDLE_HTML not in rasterizer.snapshots[0].html
    assert session.handle_visible
    assert ".markframe-content pre code" in rasterizer.snapshots[0].html


def test_copy_feedback_resets(tmp_path, registry, typesetter, rasterizer, sink, clipboard, notifier):
    _provide_all(registry, typesetter, rasterizer)
    session = _session(tmp_path, registry, rasterizer, sink, clipboard, notifier)

    async def scenario():
        outcome = await session.copy_to_clipboard()
        shown = session.copy_succeeded
        await session.scheduler.wait_idle()
        return outcome, shown

    outcome, shown = asyncio.run(scenario())

    assert outcome.success
    assert shown
    assert not session.copy_succeeded
    assert len(clipboard.images) == 1


def test_export_without_rasterizer(tmp_path, registry, rasterizer, sink, clipboard, notifier):
    session = _session(tmp_path, registry, rasterizer, sink, clipboard, notifier)

    outcome = asyncio.run(session.export_png())

    assert not outcome.success
    assert RASTERIZER in outcome.error_message
    assert sink.calls == []


def test_close_releases_rasterizer(tmp_path, registry, typesetter, rasterizer, sink, clipboard, notifier):
    _provide_all(registry, typesetter, rasterizer)
    session = _session(tmp_path, registry, rasterizer, sink, clipboard, notifier)

    asyncio.run(session.close())

    assert rasterizer.closed


def test_closed_sessions_release_registry_listeners(
    tmp_path, registry, typesetter, rasterizer, sink, clipboard, notifier
):
    _provide_all(registry, typesetter, rasterizer)

    for _ in range(3):
        session = _session(tmp_path, registry, rasterizer, sink, clipboard, notifier)
        asyncio.run(session.close())

    for resource_id in (PARSER, HIGHLIGHTER, MATH_TYPESETTER, MATH_AUTORENDER):
        assert registry.get(resource_id).listener_count == 0
