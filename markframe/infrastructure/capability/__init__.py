"""
基础设施层 - 能力注册表
"""
from .registry import (
    Capability,
    CapabilityRegistry,
    CapabilityStatus,
    get_registry,
)
from .providers import (
    PARSER,
    MATH_TYPESETTER,
    MATH_AUTORENDER,
    HIGHLIGHTER,
    RASTERIZER,
    ALL_CAPABILITIES,
    request_all,
)

__all__ = [
    "Capability",
    "CapabilityRegistry",
    "CapabilityStatus",
    "get_registry",
    "PARSER",
    "MATH_TYPESETTER",
    "MATH_AUTORENDER",
    "HIGHLIGHTER",
    "RASTERIZER",
    "ALL_CAPABILITIES",
    "request_all",
]
