"""
挂载内容
渲染结果解析成的 HTML 树，后处理在树上原地修改
"""

from bs4 import BeautifulSoup


class MountedContent:
    """当前挂载的内容树"""

    def __init__(self):
        self._html = ""
        self._tree = BeautifulSoup("", "html.parser")
        self.revision = 0

    def mount(self, html: str) -> None:
        """用新的 HTML 整体替换内容树"""
        self._html = html
        self._tree = BeautifulSoup(html, "html.parser")
        self.revision += 1

    def remount(self) -> None:
        """从最近一次挂载的 HTML 重建内容树（不重新解析 Markdown）"""
        self.mount(self._html)

    @property
    def tree(self) -> BeautifulSoup:
        return self._tree

    @property
    def source_html(self) -> str:
        return self._html

    def to_html(self) -> str:
        return str(self._tree)
