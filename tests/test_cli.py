"""
命令行测试
"""

from typer.testing import CliRunner

from markframe.main import app

runner = CliRunner()


def test_presets_lists_catalogs():
    result = runner.invoke(app, ["presets"])

    assert result.exit_code == 0
    assert "Apple Mesh" in result.output
    assert "Inter" in result.output


def test_preview_writes_card_html(tmp_path):
    source = tmp_path / "note.md"
    source.write_text("# Hello\n\nPlain text only.", encoding="utf-8")
    output = tmp_path / "card.html"

    result = runner.invoke(
        app,
        ["preview", str(source), "-o", str(output), "--blur", "10", "--width", "640"],
    )

    assert result.exit_code == 0, result.output
    html = output.read_text(encoding="utf-8")
    assert 'id="markframe-preview"' in html
    assert "<h1>Hello</h1>" in html
    assert "width: 640px;" in html
    assert "blur(10px)" in html


def test_unknown_gradient_fails(tmp_path):
    source = tmp_path / "note.md"
    source.write_text("hi", encoding="utf-8")

    result = runner.invoke(app, ["preview", str(source), "--gradient", "Nope"])

    assert result.exit_code == 1
