"""
Markdown 解析器
基于 Python-Markdown，开启 GFM 风格扩展，段内单换行转为 <br />

- pymdownx.tilde: ~~删除线~~（关闭 ~下标~）
- pymdownx.magiclink: 裸链接自动转为 <a>
"""

import markdown


class MarkdownParser:
    """Markdown 解析器"""

    EXTENSIONS = [
        "fenced_code",
        "tables",
        "nl2br",
        "sane_lists",
        "pymdownx.tilde",
        "pymdownx.magiclink",
    ]
    EXTENSION_CONFIGS = {
        "pymdownx.tilde": {"subscript": False},
    }

    def __init__(self):
        self._md = markdown.Markdown(
            extensions=self.EXTENSIONS, extension_configs=self.EXTENSION_CONFIGS
        )

    def convert(self, text: str) -> str:
        """将 Markdown 转换为 HTML 片段"""
        self._md.reset()
        return self._md.convert(text)
