"""
Reference image input normalization
将调用方传入的参考图（URL 字符串或字典）统一转换为 ImageInput
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .errors import InvalidInputError
from .utils import detect_mime_type

_MIME_TYPE_KEYS = ("mime_type", "mimeType")


class ImageInput:
    """参考图输入，只有 UrlImage 和 InlineImage 两种形式。"""

    @staticmethod
    def from_raw(raw: Any) -> ImageInput:
        """
        解析参考图输入

        Args:
            raw: URL 字符串，或包含 url / base64 键的字典

        Returns:
            ImageInput: UrlImage 或 InlineImage

        Raises:
            InvalidInputError: 输入类型不支持，或 base64 图片缺少 mime_type
        """
        if isinstance(raw, ImageInput):
            return raw
        if isinstance(raw, str):
            return UrlImage(url=raw, mime_type=detect_mime_type(raw))
        if isinstance(raw, Mapping):
            return _from_mapping(raw)
        raise InvalidInputError(
            f"Invalid image input: expected str or mapping, got {type(raw).__name__}"
        )


@dataclass(frozen=True)
class UrlImage(ImageInput):
    url: str
    mime_type: str | None = None


@dataclass(frozen=True)
class InlineImage(ImageInput):
    base64: str
    mime_type: str


def _from_mapping(raw: Mapping[str, Any]) -> ImageInput:
    mime_type = next(
        (raw[key] for key in _MIME_TYPE_KEYS if raw.get(key) is not None), None
    )

    if raw.get("base64") is not None:
        # base64 数据无法可靠地推断格式，必须由调用方提供
        if mime_type is None:
            raise InvalidInputError("mime_type is required for base64 images")
        return InlineImage(base64=raw["base64"], mime_type=mime_type)

    if raw.get("url") is not None:
        url = raw["url"]
        if not isinstance(url, str):
            raise InvalidInputError(f"Image url must be str, got {type(url).__name__}")
        return UrlImage(url=url, mime_type=mime_type or detect_mime_type(url))

    raise InvalidInputError("Image mapping must contain either 'url' or 'base64' key")
