"""
公式自动识别
在纯文本中查找公式定界符，规则与 KaTeX auto-render 一致:
- 按定界符列表顺序匹配左定界符（$$ 优先于 $）
- 右定界符查找时跳过反斜杠转义，并要求花括号已闭合
- 找不到右定界符时，剩余文本原样保留
"""

import re
from dataclasses import dataclass
from typing import Pattern, Sequence


@dataclass(frozen=True)
class Delimiter:
    left: str
    right: str
    display: bool


@dataclass(frozen=True)
class Segment:
    """文本片段；kind 为 text 或 math"""

    kind: str
    data: str
    raw: str = ""
    display: bool = False

    @property
    def is_math(self) -> bool:
        return self.kind == "math"


DEFAULT_DELIMITERS = (
    Delimiter("$$", "$$", True),
    Delimiter("$", "$", False),
    Delimiter("\\(", "\\)", False),
    Delimiter("\\[", "\\]", True),
)

# 不扫描这些标签内的文本
IGNORED_TAGS = frozenset(
    {"script", "noscript", "style", "textarea", "pre", "code", "option"}
)


def find_end_of_math(delimiter: str, text: str, start: int) -> int:
    """查找右定界符位置，未找到返回 -1"""
    index = start
    brace_level = 0
    while index < len(text):
        character = text[index]
        if brace_level <= 0 and text.startswith(delimiter, index):
            return index
        if character == "\\":
            index += 1
        elif character == "{":
            brace_level += 1
        elif character == "}":
            brace_level -= 1
        index += 1
    return -1


class MathAutoRender:
    """公式定界符扫描器"""

    def __init__(self, delimiters: Sequence[Delimiter] = DEFAULT_DELIMITERS):
        self.delimiters = tuple(delimiters)
        self.ignored_tags = IGNORED_TAGS
        self._left_pattern: Pattern[str] = re.compile(
            "(" + "|".join(re.escape(d.left) for d in self.delimiters) + ")"
        )

    def contains_math(self, text: str) -> bool:
        return self._left_pattern.search(text) is not None

    def split(self, text: str) -> list[Segment]:
        """将文本切分为普通文本和公式片段"""
        segments: list[Segment] = []
        while True:
            match = self._left_pattern.search(text)
            if match is None:
                break
            index = match.start()
            if index > 0:
                segments.append(Segment("text", text[:index]))
                text = text[index:]

            delimiter = next(d for d in self.delimiters if text.startswith(d.left))
            end = find_end_of_math(delimiter.right, text, len(delimiter.left))
            if end == -1:
                break

            raw = text[: end + len(delimiter.right)]
            segments.append(
                Segment(
                    "math",
                    text[len(delimiter.left):end],
                    raw=raw,
                    display=delimiter.display,
                )
            )
            text = text[end + len(delimiter.right):]

        if text:
            segments.append(Segment("text", text))
        return segments
