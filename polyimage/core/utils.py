"""
Utility functions for the image generation client
图像生成客户端的工具函数
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlparse

from .constants import DEFAULT_IMAGE_EXTENSION, IMAGE_MIME_TYPES

logger = logging.getLogger(__name__)


def detect_mime_type(url: str) -> str | None:
    """
    根据 URL 路径的扩展名推断 MIME 类型

    Args:
        url: 图片 URL

    Returns:
        str | None: MIME 类型，无法识别时返回 None
    """
    try:
        path = urlparse(url).path
    except ValueError:
        logger.debug(f"[Image Utils] 无法解析 URL: {url[:100]}")
        return None

    extension = posixpath.splitext(path)[1].lstrip(".").lower()
    return IMAGE_MIME_TYPES.get(extension)


def extension_for_mime(mime_type: str | None) -> str:
    """从 MIME 类型中提取文件扩展名，例如 image/webp -> webp"""
    if not mime_type:
        return DEFAULT_IMAGE_EXTENSION
    return mime_type.rsplit("/", 1)[-1] or DEFAULT_IMAGE_EXTENSION


def compact(data: dict[str, Any]) -> dict[str, Any]:
    """去掉值为 None 的键"""
    return {key: value for key, value in data.items() if value is not None}


def mask_api_key(api_key: str) -> str:
    return api_key[:4] + "****" + api_key[-4:] if len(api_key) > 8 else "****"


def preview_text(text: Any, limit: int) -> str:
    text = str(text)
    return text[:limit] + "..." if len(text) > limit else text


def iter_mappings(items: Any) -> list[Mapping[str, Any]]:
    """取出列表中的字典项，忽略 null 或其他类型的条目"""
    if not isinstance(items, (list, tuple)):
        return []
    return [item for item in items if isinstance(item, Mapping)]
