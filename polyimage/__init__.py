"""
Unified client for image generation APIs
统一的多服务商图像生成客户端
"""

from .adapter import GeminiAdapter, OpenAIAdapter, XAIAdapter
from .client import ImageClient, create_client
from .core import (
    AdapterConfig,
    AdapterType,
    ApiError,
    AuthenticationError,
    ConfigurationError,
    GeneratedImage,
    GenerationOptions,
    GenerationResult,
    ImageGenError,
    ImageInput,
    InlineImage,
    InvalidInputError,
    InvalidRequestError,
    ProviderNotFoundError,
    RateLimitError,
    UnsupportedFeatureError,
    UrlImage,
)

__version__ = "0.1.0"

__all__ = [
    "ImageClient",
    "create_client",
    "OpenAIAdapter",
    "GeminiAdapter",
    "XAIAdapter",
    "AdapterConfig",
    "AdapterType",
    "GenerationOptions",
    "GenerationResult",
    "GeneratedImage",
    "ImageInput",
    "UrlImage",
    "InlineImage",
    "ImageGenError",
    "ConfigurationError",
    "ProviderNotFoundError",
    "InvalidInputError",
    "UnsupportedFeatureError",
    "ApiError",
    "AuthenticationError",
    "RateLimitError",
    "InvalidRequestError",
]
