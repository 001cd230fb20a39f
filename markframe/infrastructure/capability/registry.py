"""
能力注册表
按资源标识管理外部能力（解析器、排版器、高亮器、光栅化器）的加载状态

生命周期:
    idle ──request──► loading ──► ready
                              └─► error
条目在首次访问时创建，进程内永不移除，失败后不自动重试。
"""

import asyncio
import traceback
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from ...log import logger

Listener = Callable[["Capability"], None]
Loader = Callable[[], Awaitable[Any]]


class CapabilityStatus(Enum):
    """能力状态"""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class Capability:
    """单个能力的状态与订阅"""

    def __init__(self, resource_id: str):
        self.resource_id = resource_id
        self.status = CapabilityStatus.IDLE
        self.value: Any = None
        self.error: Optional[BaseException] = None
        self._listeners: list[Listener] = []

    @property
    def ready(self) -> bool:
        return self.status is CapabilityStatus.READY

    @property
    def settled(self) -> bool:
        return self.status in (CapabilityStatus.READY, CapabilityStatus.ERROR)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """订阅状态变化，返回取消订阅函数"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _transition(
        self,
        status: CapabilityStatus,
        value: Any = None,
        error: Optional[BaseException] = None,
    ) -> None:
        if status is self.status:
            return
        self.status = status
        self.value = value
        self.error = error
        logger.debug(f"[MarkFrame] 能力 {self.resource_id} -> {status.value}")
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.error(f"[MarkFrame] 能力监听器执行失败: {type(e).__name__}: {e}")
                logger.error(f"[MarkFrame] 堆栈信息:\n{traceback.format_exc()}")

    def __repr__(self) -> str:
        return f"Capability({self.resource_id!r}, {self.status.value})"


class CapabilityRegistry:
    """进程级能力注册表"""

    def __init__(self):
        self._capabilities: dict[str, Capability] = {}
        self._tasks: set[asyncio.Task] = set()

    def get(self, resource_id: str) -> Capability:
        """获取能力条目，不存在时创建为 idle"""
        capability = self._capabilities.get(resource_id)
        if capability is None:
            capability = Capability(resource_id)
            self._capabilities[resource_id] = capability
        return capability

    def status(self, resource_id: str) -> CapabilityStatus:
        return self.get(resource_id).status

    def value(self, resource_id: str) -> Any:
        return self.get(resource_id).value

    def is_ready(self, *resource_ids: str) -> bool:
        return all(self.get(rid).ready for rid in resource_ids)

    def subscribe(self, resource_id: str, listener: Listener) -> Callable[[], None]:
        return self.get(resource_id).subscribe(listener)

    def request(self, resource_id: str, loader: Loader) -> Capability:
        """请求加载能力，已在加载或已完成时直接返回"""
        capability = self.get(resource_id)
        if capability.status is not CapabilityStatus.IDLE:
            return capability

        capability._transition(CapabilityStatus.LOADING)
        logger.info(f"[MarkFrame] 正在加载能力: {resource_id}")
        task = asyncio.get_running_loop().create_task(self._load(capability, loader))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return capability

    async def _load(self, capability: Capability, loader: Loader) -> None:
        try:
            value = await loader()
        except Exception as e:
            logger.warning(
                f"[MarkFrame] 能力 {capability.resource_id} 加载失败: {type(e).__name__}: {e}"
            )
            capability._transition(CapabilityStatus.ERROR, error=e)
            return
        logger.info(f"[MarkFrame] 能力已就绪: {capability.resource_id}")
        capability._transition(CapabilityStatus.READY, value=value)

    def provide(self, resource_id: str, value: Any) -> Capability:
        """直接登记一个已加载的能力"""
        capability = self.get(resource_id)
        capability._transition(CapabilityStatus.READY, value=value)
        return capability

    async def wait_settled(self, *resource_ids: str, timeout: Optional[float] = None) -> None:
        """等待指定能力（默认全部）结束加载"""
        ids = resource_ids or tuple(self._capabilities)

        async def wait_all() -> None:
            while any(
                self.get(rid).status is CapabilityStatus.LOADING for rid in ids
            ):
                pending = [t for t in self._tasks if not t.done()]
                if pending:
                    await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                else:
                    await asyncio.sleep(0.01)

        await asyncio.wait_for(wait_all(), timeout=timeout)

    def __iter__(self):
        return iter(list(self._capabilities.values()))


_shared_registry: Optional[CapabilityRegistry] = None


def get_registry() -> CapabilityRegistry:
    """进程级共享注册表"""
    global _shared_registry
    if _shared_registry is None:
        _shared_registry = CapabilityRegistry()
    return _shared_registry
