"""
后处理
在挂载后的内容树上排版公式、高亮代码

两个变换相互独立、与顺序无关，可重复执行:
- typeset_math: 文本节点中的公式替换为排版结果，单个公式失败时保留原文
- highlight_code: 清除已高亮标记后重新高亮每个 pre > code
调度经过去抖，新内容到达时取消尚未执行的一次。
"""

from typing import Callable, Optional

from bs4 import BeautifulSoup, NavigableString, Tag

from ..domain.errors import MathTypesetError
from ..domain.interfaces import ICodeHighlighter, IMathTypesetter
from ..infrastructure.capability import (
    HIGHLIGHTER,
    MATH_AUTORENDER,
    MATH_TYPESETTER,
    CapabilityRegistry,
)
from ..log import logger
from ..utils.regex_patterns import CODE_LANGUAGE_CLASS
from ..utils.scheduler import TaskScheduler
from .mounted_content import MountedContent

TASK_ID = "post-process"
HIGHLIGHTED_ATTR = "data-highlighted"


def _is_ignored(node: NavigableString, ignored_tags) -> bool:
    return any(parent.name in ignored_tags for parent in node.parents)


def typeset_math(tree: BeautifulSoup, autorender, typesetter: IMathTypesetter, color: str) -> int:
    """排版树中所有公式，返回成功数"""
    rendered = 0
    text_nodes = [
        node
        for node in tree.find_all(string=True)
        if type(node) is NavigableString
        and autorender.contains_math(node)
        and not _is_ignored(node, autorender.ignored_tags)
    ]

    for node in text_nodes:
        segments = autorender.split(str(node))
        if not any(segment.is_math for segment in segments):
            continue

        replacements = []
        for segment in segments:
            if not segment.is_math:
                replacements.append(NavigableString(segment.data))
                continue
            try:
                markup = typesetter.typeset(segment.data, segment.display, color)
            except MathTypesetError as e:
                logger.warning(f"[MarkFrame] 公式排版失败，保留原文: {segment.raw[:50]} ({e})")
                replacements.append(NavigableString(segment.raw))
                continue
            replacements.extend(list(BeautifulSoup(markup, "html.parser").contents))
            rendered += 1

        for replacement in replacements:
            node.insert_before(replacement)
        node.extract()

    return rendered


def _code_language(code: Tag) -> str:
    for css_class in code.get("class", []):
        match = CODE_LANGUAGE_CLASS.match(css_class)
        if match:
            return match.group(1)
    return ""


def highlight_code(tree: BeautifulSoup, highlighter: ICodeHighlighter) -> int:
    """重新高亮所有代码块，返回处理数"""
    blocks = tree.select("pre code")
    for code in blocks:
        if code.has_attr(HIGHLIGHTED_ATTR):
            del code[HIGHLIGHTED_ATTR]

        text = code.get_text()
        markup = highlighter.highlight(text, _code_language(code))
        code.clear()
        # 包在 pre 中解析，保留 span 之间的缩进空白
        for node in list(BeautifulSoup(f"<pre>{markup}</pre>", "html.parser").pre.contents):
            code.append(node)

        classes = code.get("class", [])
        if "hljs" not in classes:
            code["class"] = classes + ["hljs"]
        code[HIGHLIGHTED_ATTR] = "yes"
    return len(blocks)


class PostProcessor:
    """后处理调度器"""

    def __init__(
        self,
        registry: CapabilityRegistry,
        scheduler: TaskScheduler,
        content: MountedContent,
        text_color: Callable[[], str],
        debounce_ms: int = 50,
        on_done: Optional[Callable[[], None]] = None,
    ):
        self._registry = registry
        self._scheduler = scheduler
        self._content = content
        self._text_color = text_color
        self._debounce_ms = debounce_ms
        self._on_done = on_done
        self._unsubscribers = [
            self._registry.subscribe(resource_id, self._on_capability)
            for resource_id in (MATH_TYPESETTER, MATH_AUTORENDER, HIGHLIGHTER)
        ]

    def request(self) -> None:
        """去抖后执行一次；之前未执行的请求被取消"""
        self._scheduler.schedule(TASK_ID, self.run, self._debounce_ms)

    @property
    def pending(self) -> bool:
        return self._scheduler.is_pending(TASK_ID)

    def run(self) -> None:
        """在同一棵内容树上执行两个变换；能力未就绪的变换跳过"""
        tree = self._content.tree

        if self._registry.is_ready(MATH_TYPESETTER, MATH_AUTORENDER):
            count = typeset_math(
                tree,
                self._registry.value(MATH_AUTORENDER),
                self._registry.value(MATH_TYPESETTER),
                self._text_color(),
            )
            logger.debug(f"[MarkFrame] 公式排版完成: {count}")
        else:
            logger.debug("[MarkFrame] 公式排版能力未就绪，跳过")

        if self._registry.is_ready(HIGHLIGHTER):
            count = highlight_code(tree, self._registry.value(HIGHLIGHTER))
            logger.debug(f"[MarkFrame] 代码高亮完成: {count}")
        else:
            logger.debug("[MarkFrame] 代码高亮能力未就绪，跳过")

        if self._on_done:
            self._on_done()

    def detach(self) -> None:
        """取消能力订阅和待执行的后处理"""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self._scheduler.cancel(TASK_ID)

    def _on_capability(self, capability) -> None:
        if capability.ready:
            self.request()
