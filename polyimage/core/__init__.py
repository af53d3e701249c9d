"""
Core module for the image generation client
图像生成客户端的核心模块
"""

from .base_adapter import BaseImageAdapter
from .capabilities import (
    GEMINI_CAPABILITY,
    OPENAI_CAPABILITY,
    XAI_CAPABILITY,
)
from .constants import DEFAULT_TIMEOUT, IMAGE_MIME_TYPES, LOG_PREFIX
from .errors import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    ImageGenError,
    InvalidInputError,
    InvalidRequestError,
    ProviderNotFoundError,
    RateLimitError,
    UnsupportedFeatureError,
    error_for_status,
    raise_for_status,
)
from .image_input import ImageInput, InlineImage, UrlImage
from .transport import HttpResponse, HttpTransport
from .types import (
    AdapterConfig,
    AdapterType,
    FilePart,
    GeneratedImage,
    GenerationOptions,
    GenerationResult,
    ProviderCapability,
)
from .utils import detect_mime_type

__all__ = [
    # 基类和核心组件
    "BaseImageAdapter",
    "HttpTransport",
    "HttpResponse",
    # 数据类型
    "AdapterConfig",
    "AdapterType",
    "FilePart",
    "GeneratedImage",
    "GenerationOptions",
    "GenerationResult",
    "ImageInput",
    "InlineImage",
    "UrlImage",
    "ProviderCapability",
    # 能力表
    "OPENAI_CAPABILITY",
    "GEMINI_CAPABILITY",
    "XAI_CAPABILITY",
    # 异常
    "ImageGenError",
    "ConfigurationError",
    "ProviderNotFoundError",
    "InvalidInputError",
    "UnsupportedFeatureError",
    "ApiError",
    "AuthenticationError",
    "RateLimitError",
    "InvalidRequestError",
    "error_for_status",
    "raise_for_status",
    # 工具函数
    "detect_mime_type",
    # 常量
    "LOG_PREFIX",
    "DEFAULT_TIMEOUT",
    "IMAGE_MIME_TYPES",
]
