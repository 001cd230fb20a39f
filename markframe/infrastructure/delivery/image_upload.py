"""
背景图片上传
读取本地图片转为 data URL，读取后清空选择，同一文件可以再次选择
"""

import mimetypes
from pathlib import Path
from typing import Optional

from .download import encode_data_url


class ImageUploadInput:
    """图片选择框"""

    def __init__(self):
        self.value: Optional[Path] = None

    def select(self, path: Path) -> None:
        self.value = Path(path)

    def read(self) -> Optional[str]:
        """读取所选文件；未选择时返回 None"""
        if self.value is None:
            return None
        path, self.value = self.value, None
        mime, _ = mimetypes.guess_type(path.name)
        if not mime or not mime.startswith("image/"):
            raise ValueError(f"不是图片文件: {path}")
        return encode_data_url(path.read_bytes(), mime)
