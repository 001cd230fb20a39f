"""
工具层 - AOP装饰器、调度器和通用工具
"""

from .decorators import log_execution, with_timeout
from .scheduler import ScheduledTask, TaskScheduler
from . import regex_patterns

__all__ = ["log_execution", "with_timeout", "ScheduledTask", "TaskScheduler", "regex_patterns"]
