"""
样式合成
StyleConfig → 背景 / 模糊层 / 着色层样式，预览和导出共用同一结果
"""

from dataclasses import dataclass
from typing import Mapping

from .models import BackgroundType, StyleConfig
from ..types import ThemeMode
from ..utils.regex_patterns import CSS_UNSAFE_CHARS

LIGHT_TINT_BASE = (255, 255, 255)
DARK_TINT_BASE = (15, 23, 42)


@dataclass(frozen=True)
class CompositedStyle:
    """合成后的样式"""

    background: Mapping[str, str]
    blur_layer: Mapping[str, str]
    tint_color: str
    card_border: str


def css_declarations(style: Mapping[str, str]) -> str:
    """{"filter": "blur(4px)"} -> "filter: blur(4px);" """
    return " ".join(f"{key}: {value};" for key, value in style.items())


def css_value(value: str) -> str:
    """去掉用户输入中可能跳出 CSS 声明的字符"""
    return CSS_UNSAFE_CHARS.sub("", str(value)).strip()


def background_style(config: StyleConfig) -> dict[str, str]:
    """背景样式：图片（带亮度滤镜）/ 自定义渐变 / 预设渐变"""
    if config.background_type is BackgroundType.IMAGE and config.image_data_url:
        style = {
            "background-image": f'url("{config.image_data_url}")',
            "filter": f"brightness({config.image_brightness}%)",
        }
    elif config.background_type is BackgroundType.CUSTOM:
        style = {
            "background-image": (
                f"linear-gradient({css_value(config.custom_direction)}, "
                f"{css_value(config.custom_start)}, {css_value(config.custom_end)})"
            )
        }
    else:
        style = {"background-image": config.gradient.value}

    style["background-size"] = "cover"
    style["background-position"] = "center"
    return style


def blur_layer_style(background: Mapping[str, str], blur: int) -> dict[str, str]:
    """模糊层：先沿用背景已有的滤镜（亮度），再叠加模糊"""
    filter_parts = []
    if background.get("filter"):
        filter_parts.append(background["filter"])
    filter_parts.append(f"blur({blur}px)")

    return {
        "background-image": background["background-image"],
        "background-size": background["background-size"],
        "background-position": background["background-position"],
        "filter": " ".join(filter_parts),
    }


def tint_color(theme_mode: ThemeMode, opacity: int) -> str:
    """半透明着色，alpha 等于不透明度百分比"""
    r, g, b = LIGHT_TINT_BASE if theme_mode is ThemeMode.LIGHT else DARK_TINT_BASE
    return f"rgba({r}, {g}, {b}, {opacity / 100:g})"


def card_border(theme_mode: ThemeMode) -> str:
    if theme_mode is ThemeMode.LIGHT:
        return "1px solid rgba(255,255,255,0.6)"
    return "1px solid rgba(255,255,255,0.15)"


def compose_styles(config: StyleConfig) -> CompositedStyle:
    background = background_style(config)
    return CompositedStyle(
        background=background,
        blur_layer=blur_layer_style(background, config.blur),
        tint_color=tint_color(config.theme_mode, config.opacity),
        card_border=card_border(config.theme_mode),
    )
