"""
公式保护
在 Markdown 解析前把公式替换为不透明占位符，解析后原样还原

占位符格式: MFSHIELD<nonce><BLOCK|INLINE><index>END
nonce 每次保护重新生成，并保证不在原文中出现，因此占位符不会与用户内容冲突。
占位符只含字母数字，Markdown 解析器不会改写它。
"""

import re
import uuid
from dataclasses import dataclass, field

from ...domain.errors import ShieldMismatchError
from ...types import ShieldKind
from ...utils.regex_patterns import (
    SHIELD_BLOCK_MATH,
    SHIELD_INLINE_MATH,
    SHIELD_PREFIX,
    shield_token_pattern,
)


@dataclass(frozen=True)
class ShieldEntry:
    kind: ShieldKind
    source: str


@dataclass
class ShieldTable:
    """一次渲染内有效的公式表，按发现顺序编号"""

    nonce: str
    entries: list[ShieldEntry] = field(default_factory=list)

    def add(self, kind: ShieldKind, source: str) -> str:
        index = len(self.entries)
        self.entries.append(ShieldEntry(kind, source))
        return self.token(kind, index)

    def token(self, kind: ShieldKind, index: int) -> str:
        return f"{SHIELD_PREFIX}{self.nonce}{kind.value}{index}END"

    @property
    def sources(self) -> list[str]:
        return [entry.source for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> ShieldEntry:
        return self.entries[index]


def _new_nonce(text: str) -> str:
    while True:
        nonce = uuid.uuid4().hex[:12]
        if SHIELD_PREFIX + nonce not in text:
            return nonce


class MathShield:
    """公式保护编解码"""

    def shield(self, text: str) -> tuple[str, ShieldTable]:
        """先保护块级公式，再保护行内公式"""
        table = ShieldTable(nonce=_new_nonce(text))

        protected = SHIELD_BLOCK_MATH.sub(
            lambda m: table.add(ShieldKind.BLOCK, m.group(0)), text
        )
        protected = SHIELD_INLINE_MATH.sub(
            lambda m: table.add(ShieldKind.INLINE, m.group(0)), protected
        )
        return protected, table

    def unshield(self, html: str, table: ShieldTable) -> str:
        """把 HTML 中的占位符还原为原始公式"""

        def restore(match: re.Match) -> str:
            kind, index = ShieldKind(match.group(1)), int(match.group(2))
            if index >= len(table) or table[index].kind is not kind:
                raise ShieldMismatchError(match.group(0))
            return table[index].source

        return shield_token_pattern(table.nonce).sub(restore, html)
