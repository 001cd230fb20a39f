"""
配置加载
YAML 文件 + 环境变量覆盖，生成不可变的 RenderConfig
"""

import os
from dataclasses import fields
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .domain.errors import ConfigError
from .log import logger
from .types import RenderConfig

OUTPUT_DIR_ENV = "MARKFRAME_OUTPUT_DIR"

_INT_FIELDS = {f.name for f in fields(RenderConfig) if f.type in (int, "int")}


def _read_yaml(path: Path) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"配置文件不存在: {path}")
    except yaml.YAMLError as e:
        raise ConfigError(f"配置文件格式错误: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"配置文件顶层必须是映射: {path}")
    return data


def _coerce(key: str, value: Any) -> Any:
    if key == "output_dir":
        return Path(value).expanduser()
    if key in _INT_FIELDS:
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigError(f"配置项 {key} 必须是整数: {value!r}")
    return value


def load_config(
    path: Optional[Union[str, Path]] = None,
    overrides: Optional[dict] = None,
) -> RenderConfig:
    """
    加载渲染配置

    优先级: overrides > 环境变量 > 配置文件 > 默认值

    Args:
        path: YAML 配置文件路径
        overrides: 额外覆盖的配置项

    Raises:
        ConfigError: 文件不存在、格式错误或取值非法
    """
    raw: dict = {}
    if path is not None:
        raw.update(_read_yaml(Path(path)))
        logger.debug(f"[MarkFrame] 已读取配置文件: {path}")

    env_output = os.environ.get(OUTPUT_DIR_ENV)
    if env_output:
        raw["output_dir"] = env_output

    if overrides:
        raw.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(RenderConfig)}
    values = {}
    for key, value in raw.items():
        if key not in known:
            logger.warning(f"[MarkFrame] 忽略未知配置项: {key}")
            continue
        values[key] = _coerce(key, value)

    return RenderConfig(**values)
