"""
工具层 - AOP装饰器
日志、超时等横切关注点
"""

import asyncio
import functools
import time
from typing import Callable, TypeVar

from ..log import logger

T = TypeVar("T")


def log_execution(func: Callable[..., T]) -> Callable[..., T]:
    """日志装饰器 - 记录函数执行"""

    @functools.wraps(func)
    async def async_wrapper(*args, **kwargs) -> T:
        func_name = func.__name__
        logger.debug(f"[MarkFrame] {func_name} 开始执行")
        start_time = time.monotonic()
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            elapsed = time.monotonic() - start_time
            logger.error(
                f"[MarkFrame] {func_name} 执行失败，耗时: {elapsed:.2f}s, 错误: {e}"
            )
            raise
        elapsed = time.monotonic() - start_time
        logger.debug(f"[MarkFrame] {func_name} 执行完成，耗时: {elapsed:.2f}s")
        return result

    @functools.wraps(func)
    def sync_wrapper(*args, **kwargs) -> T:
        func_name = func.__name__
        logger.debug(f"[MarkFrame] {func_name} 开始执行")
        start_time = time.monotonic()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            elapsed = time.monotonic() - start_time
            logger.error(
                f"[MarkFrame] {func_name} 执行失败，耗时: {elapsed:.2f}s, 错误: {e}"
            )
            raise
        elapsed = time.monotonic() - start_time
        logger.debug(f"[MarkFrame] {func_name} 执行完成，耗时: {elapsed:.2f}s")
        return result

    if asyncio.iscoroutinefunction(func):
        return async_wrapper
    return sync_wrapper


def with_timeout(timeout_ms: int):
    """超时装饰器"""

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            try:
                return await asyncio.wait_for(
                    func(*args, **kwargs), timeout=timeout_ms / 1000
                )
            except asyncio.TimeoutError:
                raise TimeoutError(f"{func.__name__} 超时 ({timeout_ms}ms)")

        return wrapper

    return decorator
