"""
系统剪贴板
通过平台自带工具写入一个 image/png 条目:
- Wayland: wl-copy
- X11: xclip
- macOS: osascript
- Windows: PowerShell
"""

import asyncio
import os
import platform
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from ...domain.errors import ClipboardWriteFailedError
from ...log import logger


class SystemClipboard:
    """系统剪贴板"""

    def __init__(self, timeout: int = 10):
        self._timeout = timeout

    async def write_image(self, png: bytes) -> None:
        system = platform.system()
        if system == "Darwin":
            await self._write_via_file(png, self._osascript_command)
        elif system == "Windows":
            await self._write_via_file(png, self._powershell_command)
        else:
            await self._run(self._linux_command(), stdin=png)
        logger.info(f"[MarkFrame] 已写入剪贴板，大小: {len(png)} bytes")

    def _linux_command(self) -> list[str]:
        if os.environ.get("WAYLAND_DISPLAY") and shutil.which("wl-copy"):
            return ["wl-copy", "--type", "image/png"]
        if shutil.which("xclip"):
            return ["xclip", "-selection", "clipboard", "-t", "image/png", "-i"]
        raise ClipboardWriteFailedError("未找到 wl-copy 或 xclip，无法写入剪贴板")

    @staticmethod
    def _osascript_command(path: Path) -> list[str]:
        script = f'set the clipboard to (read (POSIX file "{path}") as «class PNGf»)'
        return ["osascript", "-e", script]

    @staticmethod
    def _powershell_command(path: Path) -> list[str]:
        script = (
            "Add-Type -AssemblyName System.Windows.Forms; "
            "Add-Type -AssemblyName System.Drawing; "
            f"[System.Windows.Forms.Clipboard]::SetImage([System.Drawing.Image]::FromFile('{path}'))"
        )
        return ["powershell", "-NoProfile", "-STA", "-Command", script]

    async def _write_via_file(self, png: bytes, build_command) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "markframe-clipboard.png"
            path.write_bytes(png)
            await self._run(build_command(path))

    async def _run(self, command: list[str], stdin: Optional[bytes] = None) -> None:
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.PIPE if stdin is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
            _, stderr = await asyncio.wait_for(
                process.communicate(stdin), timeout=self._timeout
            )
        except asyncio.TimeoutError:
            raise ClipboardWriteFailedError(f"{command[0]} 超时({self._timeout}s)")
        except OSError as e:
            raise ClipboardWriteFailedError(f"无法执行 {command[0]}: {e}")

        if process.returncode != 0:
            raise ClipboardWriteFailedError(
                f"{command[0]} 退出码 {process.returncode}: {stderr.decode(errors='replace').strip()}"
            )
