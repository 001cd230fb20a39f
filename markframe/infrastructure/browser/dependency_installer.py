"""
Playwright 依赖检查
首次截图前确认 Chromium 及其系统库可用，缺失时尝试自动安装
"""

import asyncio
import ctypes
import platform
import sys
from typing import Optional

from ...log import logger

INSTALL_HINT = f"{sys.executable} -m playwright install --with-deps chromium"


class PlaywrightDependencyInstaller:
    """
    Playwright 依赖安装器

    1. Linux 下用 ctypes 探测 Chromium 需要的系统库
    2. 缺失时执行 playwright install --with-deps chromium
    3. 结果缓存，失败后不再重复尝试
    """

    REQUIRED_LIBS = (
        "libnspr4.so",
        "libnss3.so",
        "libatk-1.0.so.0",
        "libatk-bridge-2.0.so.0",
        "libdrm.so.2",
        "libxkbcommon.so.0",
        "libXcomposite.so.1",
        "libXdamage.so.1",
        "libXrandr.so.2",
        "libgbm.so.1",
        "libpango-1.0.so.0",
        "libcairo.so.2",
        "libasound.so.2",
    )

    def __init__(self, install_timeout: int = 300):
        self._install_timeout = install_timeout
        self._installed: Optional[bool] = None
        self._install_attempted = False

    def missing_libs(self) -> list[str]:
        """返回缺失的系统库；非 Linux 平台不检查"""
        if platform.system() != "Linux":
            return []
        return [lib for lib in self.REQUIRED_LIBS if not self._can_load(lib)]

    @staticmethod
    def _can_load(lib_name: str) -> bool:
        try:
            ctypes.CDLL(lib_name)
            return True
        except OSError:
            return False

    def is_installed(self) -> bool:
        if self._installed is None:
            missing = self.missing_libs()
            if missing:
                logger.warning(f"[MarkFrame] 检测到缺失的系统库: {missing[:3]}...")
            self._installed = not missing
        return self._installed

    async def check_and_install(self) -> bool:
        """检查并安装依赖，返回是否可用"""
        if self.is_installed():
            return True
        if self._install_attempted:
            return False

        self._install_attempted = True
        logger.info("[MarkFrame] 正在安装 Playwright 依赖...")
        if await self._run(sys.executable, "-m", "playwright", "install", "--with-deps", "chromium"):
            logger.info("[MarkFrame] Playwright 依赖安装成功")
            self._installed = True
            return True

        logger.error(f"[MarkFrame] 自动安装失败，请手动执行:\n  {INSTALL_HINT}")
        return False

    async def _run(self, *command: str) -> bool:
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
            _, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self._install_timeout
            )
        except asyncio.TimeoutError:
            logger.error(f"[MarkFrame] 依赖安装超时({self._install_timeout}s)")
            return False
        except OSError as e:
            logger.error(f"[MarkFrame] 依赖安装异常: {e}")
            return False

        if process.returncode != 0:
            logger.warning(f"[MarkFrame] 依赖安装失败: {stderr.decode(errors='replace')}")
            return False
        return True
