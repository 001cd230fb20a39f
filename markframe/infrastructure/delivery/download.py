"""
文件下载
把 data URL 解码后写入输出目录
"""

import base64
from pathlib import Path
from urllib.parse import unquote_to_bytes

from ...log import logger
from ...utils.regex_patterns import DATA_URL


def encode_data_url(data: bytes, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_url(data_url: str) -> tuple[str, bytes]:
    """返回 (mime, 数据)"""
    match = DATA_URL.match(data_url)
    if match is None:
        raise ValueError("不是合法的 data URL")
    mime = match.group("mime") or "text/plain"
    if match.group("base64"):
        return mime, base64.b64decode(match.group("data"))
    return mime, unquote_to_bytes(match.group("data"))


class FileDownloadSink:
    """保存到本地目录"""

    def __init__(self, output_dir: Path):
        self._output_dir = Path(output_dir)

    def trigger(self, data_url: str, filename: str) -> Path:
        _, data = decode_data_url(data_url)
        self._output_dir.mkdir(parents=True, exist_ok=True)
        path = self._output_dir / filename
        path.write_bytes(data)
        logger.info(f"[MarkFrame] 图片已保存: {path}")
        return path
