"""
尺寸拖拽状态机
画布和侧栏各一个实例，状态 idle / dragging

    idle ──pointer_down(手柄)──► dragging ──pointer_up(任意位置)──► idle

进入 dragging 时在窗口级事件中心注册 move/up 监听，离开时注销，
指针移出手柄后拖拽仍然继续。每次 move 直接写入新尺寸。
"""

from enum import Enum
from typing import Callable, Optional

from ..domain.models import CanvasGeometry, PointerEvent, SidebarGeometry
from ..log import logger

PointerListener = Callable[[PointerEvent], None]


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class PointerEventHub:
    """窗口级指针事件分发"""

    def __init__(self):
        self._listeners: dict[str, list[PointerListener]] = {"move": [], "up": []}

    def add_listener(self, kind: str, listener: PointerListener) -> None:
        self._listeners[kind].append(listener)

    def remove_listener(self, kind: str, listener: PointerListener) -> None:
        if listener in self._listeners[kind]:
            self._listeners[kind].remove(listener)

    def listener_count(self, kind: str) -> int:
        return len(self._listeners[kind])

    def dispatch(self, kind: str, event: PointerEvent) -> None:
        for listener in list(self._listeners[kind]):
            listener(event)

    def move(self, x: float, y: float) -> None:
        self.dispatch("move", PointerEvent(x, y))

    def up(self, x: float = 0, y: float = 0) -> None:
        self.dispatch("up", PointerEvent(x, y))


class ResizeController:
    """拖拽状态机基类，子类决定如何由位移计算新尺寸"""

    name = "resize"

    def __init__(
        self,
        hub: PointerEventHub,
        enabled: Optional[Callable[[], bool]] = None,
    ):
        self._hub = hub
        self._enabled = enabled or (lambda: True)
        self.state = DragState.IDLE
        self._start: Optional[PointerEvent] = None

    @property
    def dragging(self) -> bool:
        return self.state is DragState.DRAGGING

    def pointer_down(self, event: PointerEvent) -> bool:
        """手柄按下，返回是否开始拖拽"""
        if self.dragging or not self._enabled():
            return False
        self._start = event
        self._capture_baseline()
        self.state = DragState.DRAGGING
        self._hub.add_listener("move", self._on_move)
        self._hub.add_listener("up", self._on_up)
        logger.debug(f"[MarkFrame] {self.name} 开始拖拽 ({event.x}, {event.y})")
        return True

    def _on_move(self, event: PointerEvent) -> None:
        if not self.dragging:
            return
        self._apply(event.x - self._start.x, event.y - self._start.y)

    def _on_up(self, event: PointerEvent) -> None:
        self.state = DragState.IDLE
        self._start = None
        self._hub.remove_listener("move", self._on_move)
        self._hub.remove_listener("up", self._on_up)
        logger.debug(f"[MarkFrame] {self.name} 拖拽结束")

    def _capture_baseline(self) -> None:
        raise NotImplementedError

    def _apply(self, dx: float, dy: float) -> None:
        raise NotImplementedError


class CanvasResizeController(ResizeController):
    """画布居中显示，拖动一侧边缘时整体尺寸变化为位移的两倍"""

    name = "canvas"

    def __init__(
        self,
        hub: PointerEventHub,
        geometry: CanvasGeometry = None,
        on_change: Optional[Callable[[CanvasGeometry], None]] = None,
        enabled: Optional[Callable[[], bool]] = None,
    ):
        super().__init__(hub, enabled)
        self.geometry = geometry or CanvasGeometry()
        self._on_change = on_change
        self._baseline = self.geometry

    def _capture_baseline(self) -> None:
        self._baseline = self.geometry

    def _apply(self, dx: float, dy: float) -> None:
        self.geometry = CanvasGeometry(
            width=self._baseline.width + 2 * dx,
            height=self._baseline.height + 2 * dy,
        )
        if self._on_change:
            self._on_change(self.geometry)


class SidebarResizeController(ResizeController):
    """侧栏贴边，宽度直接跟随水平位移"""

    name = "sidebar"

    def __init__(
        self,
        hub: PointerEventHub,
        geometry: SidebarGeometry = None,
        on_change: Optional[Callable[[SidebarGeometry], None]] = None,
        enabled: Optional[Callable[[], bool]] = None,
    ):
        super().__init__(hub, enabled)
        self.geometry = geometry or SidebarGeometry()
        self._on_change = on_change
        self._baseline = self.geometry

    def _capture_baseline(self) -> None:
        self._baseline = self.geometry

    def _apply(self, dx: float, dy: float) -> None:
        self.geometry = SidebarGeometry(width=self._baseline.width + dx)
        if self._on_change:
            self._on_change(self.geometry)
