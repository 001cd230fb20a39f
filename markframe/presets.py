"""
静态预设表
字体、文字颜色、渐变背景和默认文档
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FontPreset:
    name: str
    label: str
    url: str


@dataclass(frozen=True)
class ColorPreset:
    name: str
    value: str


@dataclass(frozen=True)
class GradientPreset:
    name: str
    value: str


FONTS = (
    FontPreset("Inter", "Modern", "https://fonts.googleapis.com/css2?family=Inter:wght@400;600;800&display=swap"),
    FontPreset("Playfair Display", "Elegant", "https://fonts.googleapis.com/css2?family=Playfair+Display:ital,wght@0,400;0,700;1,400&display=swap"),
    FontPreset("JetBrains Mono", "Code", "https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;500&display=swap"),
    FontPreset("Roboto", "Clean", "https://fonts.googleapis.com/css2?family=Roboto:wght@400;500;700&display=swap"),
    FontPreset("Poppins", "Geometric", "https://fonts.googleapis.com/css2?family=Poppins:wght@400;600;800&display=swap"),
    FontPreset("Lora", "Serif", "https://fonts.googleapis.com/css2?family=Lora:ital,wght@0,400;0,700;1,400&display=swap"),
)

TEXT_PRESETS = (
    ColorPreset("Deep Slate", "#1e293b"),
    ColorPreset("Midnight", "#172554"),
    ColorPreset("Charcoal", "#334155"),
    ColorPreset("Forest", "#064e3b"),
    ColorPreset("Maroon", "#881337"),
    ColorPreset("Chocolate", "#451a03"),
    ColorPreset("Pure White", "#ffffff"),
    ColorPreset("Soft Gray", "#f1f5f9"),
    ColorPreset("Cream", "#fefce8"),
)

# 浅色文字需要深色玻璃底
LIGHT_TEXT_COLORS = frozenset({"#ffffff", "#f1f5f9", "#fefce8"})

PRESET_GRADIENTS = (
    GradientPreset("Apple Mesh", "linear-gradient(135deg, #ffe4e6 0%, #e9d5ff 50%, #dbeafe 100%)"),
    GradientPreset("Soft Air", "linear-gradient(135deg, #eef2ff 0%, #f5f3ff 100%)"),
    GradientPreset("Nordic", "linear-gradient(to right, #d4fc79 0%, #96e6a1 100%)"),
    GradientPreset("Sunset", "linear-gradient(to top, #fdcbf1 0%, #e6dee9 100%)"),
    GradientPreset("Oceanic", "linear-gradient(225deg, #60a5fa 0%, #5eead4 50%, #34d399 100%)"),
    GradientPreset("Midnight", "linear-gradient(135deg, #0f172a 0%, #3b0764 50%, #0f172a 100%)"),
    GradientPreset("Deep Space", "linear-gradient(to top, #09203f 0%, #537895 100%)"),
    GradientPreset("Clean", "linear-gradient(to bottom, #f9fafb, #f3f4f6)"),
)

GRADIENT_DIRECTIONS = {
    "horizontal": "to right",
    "vertical": "to bottom",
    "diagonal": "135deg",
    "reverse-diagonal": "45deg",
}

DEFAULT_MARKDOWN = """# The Glass Effect

> "Simplicity is the ultimate sophistication."

Notice how the **background colors** blur beautifully behind this card.

$$ E = mc^2 $$

### Python Code
```python
def glass_morph():
    return "Crystal Clear"
```
"""


def find_font(name: str) -> FontPreset:
    for font in FONTS:
        if font.name.lower() == name.lower():
            return font
    raise KeyError(name)


def find_gradient(name: str) -> GradientPreset:
    for gradient in PRESET_GRADIENTS:
        if gradient.name.lower() == name.lower():
            return gradient
    raise KeyError(name)


def find_text_preset(name: str) -> ColorPreset:
    for color in TEXT_PRESETS:
        if color.name.lower() == name.lower():
            return color
    raise KeyError(name)
