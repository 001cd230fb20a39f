"""
可取消的延时任务调度
同一任务标识同时最多只有一个待执行任务
"""

import asyncio
import inspect
from typing import Any, Callable, Optional

from ..log import logger


class ScheduledTask:
    """调度句柄"""

    def __init__(self, task_id: str, handle: asyncio.TimerHandle):
        self.task_id = task_id
        self._handle = handle
        self._cancelled = False
        self._fired = False

    def cancel(self) -> None:
        if not self._fired and not self._cancelled:
            self._handle.cancel()
            self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def pending(self) -> bool:
        return not (self._fired or self._cancelled)


class TaskScheduler:
    """按任务标识去抖的调度器"""

    def __init__(self):
        self._pending: dict[str, ScheduledTask] = {}
        self._running: set[asyncio.Task] = set()

    def schedule(
        self, task_id: str, fn: Callable[[], Any], delay_ms: int
    ) -> ScheduledTask:
        """延时执行 fn；同一 task_id 的旧任务先被取消"""
        self.cancel(task_id)
        loop = asyncio.get_running_loop()
        task: Optional[ScheduledTask] = None

        def fire() -> None:
            task._fired = True
            if self._pending.get(task_id) is task:
                del self._pending[task_id]
            try:
                result = fn()
            except Exception as e:
                logger.error(f"[MarkFrame] 调度任务 {task_id} 执行失败: {e}", exc_info=True)
                return
            if inspect.isawaitable(result):
                running = asyncio.ensure_future(result)
                self._running.add(running)
                running.add_done_callback(self._on_done(task_id))

        handle = loop.call_later(max(delay_ms, 0) / 1000, fire)
        task = ScheduledTask(task_id, handle)
        self._pending[task_id] = task
        return task

    def _on_done(self, task_id: str) -> Callable[[asyncio.Task], None]:
        def done(running: asyncio.Task) -> None:
            self._running.discard(running)
            if not running.cancelled() and running.exception() is not None:
                logger.error(
                    f"[MarkFrame] 调度任务 {task_id} 执行失败: {running.exception()}",
                    exc_info=running.exception(),
                )

        return done

    def cancel(self, task_id: str) -> bool:
        """取消待执行任务，返回是否确实取消了一个任务"""
        task = self._pending.pop(task_id, None)
        if task is None:
            return False
        task.cancel()
        return True

    def cancel_all(self) -> None:
        for task_id in list(self._pending):
            self.cancel(task_id)

    def is_pending(self, task_id: str) -> bool:
        return task_id in self._pending

    async def wait_idle(self, poll_ms: int = 10) -> None:
        """等待所有待执行和执行中的任务完成"""
        while self._pending or self._running:
            if self._running:
                await asyncio.gather(*list(self._running), return_exceptions=True)
            else:
                await asyncio.sleep(poll_ms / 1000)
