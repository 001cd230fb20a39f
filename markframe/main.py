"""
MarkFrame 命令行入口

- export: 渲染 Markdown 为 PNG 文件
- copy: 渲染并复制到剪贴板
- preview: 输出合成后的卡片 HTML
- presets: 列出字体、文字颜色与渐变预设
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .application import CardSession
from .config import load_config
from .domain.errors import MarkFrameError
from .log import logger, setup_logging
from .presets import FONTS, GRADIENT_DIRECTIONS, PRESET_GRADIENTS, TEXT_PRESETS
from .types import ExportOutcome, RenderConfig, ThemeMode

app = typer.Typer(
    name="markframe",
    help="MarkFrame - 将 Markdown 与公式渲染为精美卡片图片",
    add_completion=False,
)

console = Console()

SETTLE_TIMEOUT = 120


class RichNotifier:
    """用 Rich 面板提示用户"""

    def alert(self, message: str) -> None:
        console.print(Panel(message, title="MarkFrame", border_style="red"))


class StyleOptions:
    """命令行样式参数"""

    def __init__(self, **options):
        self.options = options

    def apply(self, session: CardSession) -> None:
        o = self.options
        if o["gradient"]:
            session.select_gradient(o["gradient"])
        if o["start"] and o["end"]:
            session.set_custom_gradient(o["start"], o["end"], o["direction"])
        if o["image"]:
            session.upload_background(o["image"])
        if o["brightness"] is not None:
            session.set_brightness(o["brightness"])
        if o["font"]:
            session.set_font(o["font"])
        if o["theme"]:
            session.set_theme_mode(ThemeMode(o["theme"]))
        if o["text_color"]:
            # 预设名优先，其余按 CSS 颜色处理
            try:
                session.select_text_preset(o["text_color"])
            except KeyError:
                session.set_text_color(o["text_color"])
        for key, setter in (
            ("blur", session.set_blur),
            ("opacity", session.set_opacity),
            ("padding", session.set_padding),
            ("radius", session.set_border_radius),
        ):
            if o[key] is not None:
                setter(o[key])


def _build_session(
    file: Path, config_path: Optional[Path], width: Optional[int], height: Optional[int],
) -> CardSession:
    config: RenderConfig = load_config(
        config_path, overrides={"canvas_width": width, "canvas_height": height}
    )
    session = CardSession(config=config, notifier=RichNotifier())
    session.document = file.read_text(encoding="utf-8")
    return session


async def _run(session: CardSession, action: str, style: StyleOptions) -> Optional[ExportOutcome]:
    # 样式设置会调度后处理，需要在事件循环内执行
    style.apply(session)
    session.start(rasterizer=action != "preview")
    try:
        await session.settle(timeout=SETTLE_TIMEOUT)
        if action == "export":
            return await session.export_png()
        if action == "copy":
            return await session.copy_to_clipboard()
        return None
    finally:
        await session.close()


def _report(outcome: Optional[ExportOutcome]) -> None:
    if outcome is None:
        console.print("[yellow]已有导出进行中[/yellow]")
        raise typer.Exit(1)
    if not outcome.success:
        console.print(f"[red]失败:[/red] {outcome.error_message}")
        raise typer.Exit(1)
    if outcome.image_path:
        console.print(f"[green]✓[/green] 已导出: {outcome.image_path}")
    else:
        console.print("[green]✓[/green] 已复制到剪贴板")


def _execute(
    action: str, file: Path, verbose: bool, style: StyleOptions, build_args: dict
) -> Optional[CardSession]:
    setup_logging(verbose)
    try:
        session = _build_session(file, **build_args)
    except (MarkFrameError, KeyError, OSError) as e:
        console.print(f"[red]错误:[/red] {e}")
        raise typer.Exit(2)

    try:
        outcome = asyncio.run(_run(session, action, style))
    except (MarkFrameError, KeyError, ValueError) as e:
        console.print(f"[red]错误:[/red] {e}")
        raise typer.Exit(1)
    except asyncio.TimeoutError:
        console.print("[red]错误:[/red] 等待渲染组件加载超时")
        raise typer.Exit(1)

    if action != "preview":
        _report(outcome)
    return session


def _style_options(
    gradient, start, end, direction, image, brightness, font, text_color, theme,
    blur, opacity, padding, radius,
) -> StyleOptions:
    return StyleOptions(
        gradient=gradient, start=start, end=end, direction=direction, image=image,
        brightness=brightness, font=font, text_color=text_color, theme=theme,
        blur=blur, opacity=opacity, padding=padding, radius=radius,
    )


FileArg = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Markdown 文件")
GradientOpt = typer.Option(None, "--gradient", "-g", help="预设渐变名称")
FromOpt = typer.Option(None, "--from", help="自定义渐变起始色")
ToOpt = typer.Option(None, "--to", help="自定义渐变结束色")
DirectionOpt = typer.Option(
    "diagonal", "--direction", help=f"渐变方向: {', '.join(GRADIENT_DIRECTIONS)}"
)
ImageOpt = typer.Option(None, "--image", "-i", exists=True, dir_okay=False, help="背景图片")
BrightnessOpt = typer.Option(None, "--brightness", help="背景图亮度 0-200")
FontOpt = typer.Option(None, "--font", "-f", help="字体名称")
TextColorOpt = typer.Option(None, "--text-color", "-c", help="文字颜色预设名或 CSS 颜色")
ThemeOpt = typer.Option(None, "--theme", help="light 或 dark")
BlurOpt = typer.Option(None, "--blur", help="模糊 0-60")
OpacityOpt = typer.Option(None, "--opacity", help="玻璃不透明度 0-100")
PaddingOpt = typer.Option(None, "--padding", help="内边距 16-128")
RadiusOpt = typer.Option(None, "--radius", help="圆角 0-48")
WidthOpt = typer.Option(None, "--width", "-W", help="卡片宽度")
HeightOpt = typer.Option(None, "--height", "-H", help="卡片高度")
ConfigOpt = typer.Option(None, "--config", exists=True, dir_okay=False, help="YAML 配置文件")
VerboseOpt = typer.Option(False, "--verbose", "-v", help="输出调试日志")


@app.command("export")
def export(
    file: Path = FileArg,
    gradient: Optional[str] = GradientOpt,
    start: Optional[str] = FromOpt,
    end: Optional[str] = ToOpt,
    direction: str = DirectionOpt,
    image: Optional[Path] = ImageOpt,
    brightness: Optional[int] = BrightnessOpt,
    font: Optional[str] = FontOpt,
    text_color: Optional[str] = TextColorOpt,
    theme: Optional[str] = ThemeOpt,
    blur: Optional[int] = BlurOpt,
    opacity: Optional[int] = OpacityOpt,
    padding: Optional[int] = PaddingOpt,
    radius: Optional[int] = RadiusOpt,
    width: Optional[int] = WidthOpt,
    height: Optional[int] = HeightOpt,
    config: Optional[Path] = ConfigOpt,
    verbose: bool = VerboseOpt,
) -> None:
    """渲染 Markdown 为 PNG 文件（3 倍分辨率）"""
    style = _style_options(
        gradient, start, end, direction, image, brightness, font, text_color, theme,
        blur, opacity, padding, radius,
    )
    _execute("export", file, verbose, style, dict(
        config_path=config, width=width, height=height,
    ))


@app.command("copy")
def copy(
    file: Path = FileArg,
    gradient: Optional[str] = GradientOpt,
    start: Optional[str] = FromOpt,
    end: Optional[str] = ToOpt,
    direction: str = DirectionOpt,
    image: Optional[Path] = ImageOpt,
    brightness: Optional[int] = BrightnessOpt,
    font: Optional[str] = FontOpt,
    text_color: Optional[str] = TextColorOpt,
    theme: Optional[str] = ThemeOpt,
    blur: Optional[int] = BlurOpt,
    opacity: Optional[int] = OpacityOpt,
    padding: Optional[int] = PaddingOpt,
    radius: Optional[int] = RadiusOpt,
    width: Optional[int] = WidthOpt,
    height: Optional[int] = HeightOpt,
    config: Optional[Path] = ConfigOpt,
    verbose: bool = VerboseOpt,
) -> None:
    """渲染 Markdown 并复制到剪贴板（2 倍分辨率）"""
    style = _style_options(
        gradient, start, end, direction, image, brightness, font, text_color, theme,
        blur, opacity, padding, radius,
    )
    _execute("copy", file, verbose, style, dict(
        config_path=config, width=width, height=height,
    ))


@app.command("preview")
def preview(
    file: Path = FileArg,
    output: Path = typer.Option(Path("card.html"), "--output", "-o", help="输出 HTML 路径"),
    gradient: Optional[str] = GradientOpt,
    start: Optional[str] = FromOpt,
    end: Optional[str] = ToOpt,
    direction: str = DirectionOpt,
    image: Optional[Path] = ImageOpt,
    brightness: Optional[int] = BrightnessOpt,
    font: Optional[str] = FontOpt,
    text_color: Optional[str] = TextColorOpt,
    theme: Optional[str] = ThemeOpt,
    blur: Optional[int] = BlurOpt,
    opacity: Optional[int] = OpacityOpt,
    padding: Optional[int] = PaddingOpt,
    radius: Optional[int] = RadiusOpt,
    width: Optional[int] = WidthOpt,
    height: Optional[int] = HeightOpt,
    config: Optional[Path] = ConfigOpt,
    verbose: bool = VerboseOpt,
) -> None:
    """输出合成后的卡片 HTML，不启动浏览器"""
    style = _style_options(
        gradient, start, end, direction, image, brightness, font, text_color, theme,
        blur, opacity, padding, radius,
    )
    session = _execute("preview", file, verbose, style, dict(
        config_path=config, width=width, height=height,
    ))
    output.write_text(session.card_html(), encoding="utf-8")
    logger.debug(f"[MarkFrame] 预览已写入 {output}")
    console.print(f"[green]✓[/green] 预览已写入: {output}")


@app.command("presets")
def presets() -> None:
    """列出可用的字体、文字颜色与渐变预设"""
    fonts = Table(title="字体")
    fonts.add_column("名称", style="cyan")
    fonts.add_column("说明")
    for font in FONTS:
        fonts.add_row(font.name, font.label)
    console.print(fonts)

    colors = Table(title="文字颜色")
    colors.add_column("名称", style="cyan")
    colors.add_column("值")
    for preset in TEXT_PRESETS:
        colors.add_row(preset.name, preset.value)
    console.print(colors)

    gradients = Table(title="渐变")
    gradients.add_column("名称", style="cyan")
    gradients.add_column("CSS")
    for preset in PRESET_GRADIENTS:
        gradients.add_row(preset.name, preset.value)
    console.print(gradients)


if __name__ == "__main__":
    app()
