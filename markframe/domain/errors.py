"""
领域层 - 错误类型定义
"""

from enum import Enum


class ErrorCode(Enum):
    """错误代码枚举"""

    CAPABILITY_NOT_READY = "CAPABILITY_NOT_READY"
    SHIELD_MISMATCH = "SHIELD_MISMATCH"
    MATH_TYPESET_FAILED = "MATH_TYPESET_FAILED"
    CAPTURE_FAILED = "CAPTURE_FAILED"
    CLIPBOARD_WRITE_FAILED = "CLIPBOARD_WRITE_FAILED"
    BROWSER_LAUNCH_FAILED = "BROWSER_LAUNCH_FAILED"
    DEPENDENCY_MISSING = "DEPENDENCY_MISSING"
    CONFIG_INVALID = "CONFIG_INVALID"


class MarkFrameError(Exception):
    """MarkFrame 错误基类"""

    def __init__(self, message: str, code: ErrorCode = None):
        super().__init__(message)
        self.code = code


class CapabilityNotReadyError(MarkFrameError):
    """外部能力尚未加载完成"""

    def __init__(self, resource_id: str):
        super().__init__(
            f"能力未就绪: {resource_id}", code=ErrorCode.CAPABILITY_NOT_READY
        )
        self.resource_id = resource_id


class ShieldMismatchError(MarkFrameError):
    """占位符在保护表中找不到对应条目"""

    def __init__(self, placeholder: str):
        super().__init__(
            f"占位符没有对应的公式: {placeholder}", code=ErrorCode.SHIELD_MISMATCH
        )
        self.placeholder = placeholder


class MathTypesetError(MarkFrameError):
    """单个公式排版失败"""

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"公式排版失败: {reason}", code=ErrorCode.MATH_TYPESET_FAILED
        )
        self.source = source


class CaptureFailedError(MarkFrameError):
    """截图失败"""

    def __init__(self, message: str):
        super().__init__(message, code=ErrorCode.CAPTURE_FAILED)


class ClipboardWriteFailedError(MarkFrameError):
    """写入剪贴板失败"""

    def __init__(self, message: str):
        super().__init__(message, code=ErrorCode.CLIPBOARD_WRITE_FAILED)


class BrowserError(MarkFrameError):
    """浏览器相关错误"""

    def __init__(self, message: str):
        super().__init__(message, code=ErrorCode.BROWSER_LAUNCH_FAILED)


class DependencyError(MarkFrameError):
    """依赖安装错误"""

    def __init__(self, message: str, install_command: str = ""):
        super().__init__(message, code=ErrorCode.DEPENDENCY_MISSING)
        self.install_command = install_command


class ConfigError(MarkFrameError):
    """配置错误"""

    def __init__(self, message: str):
        super().__init__(message, code=ErrorCode.CONFIG_INVALID)
