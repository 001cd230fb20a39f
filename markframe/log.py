"""
日志
包级 logger，所有模块共用
"""

import logging

logger = logging.getLogger("markframe")
logger.addHandler(logging.NullHandler())


def setup_logging(verbose: bool = False) -> None:
    """为命令行安装 Rich 日志输出"""
    from rich.logging import RichHandler

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if any(isinstance(h, RichHandler) for h in logger.handlers):
        return
    handler = RichHandler(rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
