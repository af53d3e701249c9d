"""
Core type definitions for the image generation client
定义图像生成客户端的核心数据类型
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import Field, ValidationError
from pydantic.dataclasses import dataclass as pydantic_dataclass

from .constants import DEFAULT_TIMEOUT
from .errors import InvalidRequestError
from .utils import compact


class AdapterType(str, Enum):
    """适配器类型枚举"""

    OPENAI = "openai"
    GEMINI = "gemini"
    XAI = "xai"


@dataclass
class AdapterConfig:
    """适配器配置"""

    api_key: str | None = None
    model: str | None = None
    base_url: str | None = None
    timeout: int = DEFAULT_TIMEOUT
    proxy: str | None = None


@dataclass(frozen=True)
class ProviderCapability:
    """服务商的静态能力描述，进程内只读。"""

    name: str
    display_name: str
    base_url: str
    default_model: str
    known_models: tuple[str, ...]
    env_key: str
    supports_image_input: bool = False
    max_images: int = 0
    # None 表示该服务商的所有模型都支持参考图
    image_input_models: tuple[str, ...] | None = None
    models_endpoint: str | None = None
    model_keywords: tuple[str, ...] = ()

    def model_supports_images(self, model: str) -> bool:
        if not self.supports_image_input:
            return False
        return self.image_input_models is None or model in self.image_input_models


@dataclass(frozen=True)
class FilePart:
    """multipart 请求中的二进制文件字段"""

    data: bytes
    content_type: str
    filename: str


@pydantic_dataclass
class GenerationOptions:
    """图像生成选项。

    命名字段对应各服务商共有的概念，其余服务商特定参数放在 ``extra`` 中原样透传。
    """

    images: list[Any] = Field(default_factory=list)
    n: int | None = None
    size: str | None = None
    quality: str | None = None
    response_format: str | None = None
    seed: int | None = None
    aspect_ratio: str | None = None
    negative_prompt: str | None = None

    # 扩展参数，不同适配器可能有不同的参数
    extra: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def coerce(
        cls, options: GenerationOptions | Mapping[str, Any] | None = None, **kwargs: Any
    ) -> GenerationOptions:
        """将 None、字典或已有实例统一转换为 GenerationOptions。"""
        if isinstance(options, GenerationOptions) and not kwargs:
            return options

        if isinstance(options, GenerationOptions):
            raw = options.to_mapping()
        elif options is None:
            raw = {}
        elif isinstance(options, Mapping):
            raw = dict(options)
        else:
            raise InvalidRequestError(
                f"Invalid generation options: expected mapping, got {type(options).__name__}",
                status_code=400,
            )
        raw.update(kwargs)

        names = {f.name for f in dataclasses.fields(cls)} - {"extra"}
        known = {key: value for key, value in raw.items() if key in names}
        extra = dict(raw.get("extra") or {})
        extra.update(
            {key: value for key, value in raw.items() if key not in names and key != "extra"}
        )

        images = known.get("images")
        if images is None:
            known.pop("images", None)
        elif isinstance(images, (str, Mapping)):
            known["images"] = [images]

        try:
            return cls(**known, extra=extra)
        except ValidationError as exc:
            raise InvalidRequestError(
                f"Invalid generation options: {exc}", status_code=400
            ) from exc

    def to_payload(self) -> dict[str, Any]:
        """返回已设置的选项（不含 images），用于合并进请求体。"""
        payload = compact(
            {
                "n": self.n,
                "size": self.size,
                "quality": self.quality,
                "response_format": self.response_format,
                "seed": self.seed,
                "aspect_ratio": self.aspect_ratio,
                "negative_prompt": self.negative_prompt,
            }
        )
        payload.update(self.extra)
        return payload

    def to_mapping(self) -> dict[str, Any]:
        mapping = self.to_payload()
        if self.images:
            mapping["images"] = list(self.images)
        return mapping


@dataclass
class GeneratedImage:
    """单张生成结果，url 与 base64 至少有一个"""

    url: str | None = None
    base64: str | None = None
    mime_type: str | None = None
    revised_prompt: str | None = None

    def to_dict(self) -> dict[str, str]:
        return compact(dataclasses.asdict(self))


@dataclass
class GenerationResult:
    """图像生成结果"""

    images: list[GeneratedImage] = field(default_factory=list)
    created: int | None = None

    @property
    def image_count(self) -> int:
        """生成的图片数量"""
        return len(self.images)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"images": [image.to_dict() for image in self.images]}
        if self.created is not None:
            result["created"] = self.created
        return result
