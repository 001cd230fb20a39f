"""
基础设施层 - 导出投递（文件、剪贴板、图片上传）
"""
from .download import FileDownloadSink, encode_data_url, decode_data_url
from .clipboard import SystemClipboard
from .image_upload import ImageUploadInput

__all__ = [
    "FileDownloadSink",
    "encode_data_url",
    "decode_data_url",
    "SystemClipboard",
    "ImageUploadInput",
]
