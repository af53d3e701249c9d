"""
Error taxonomy and HTTP status mapping
统一的异常类型，以及与服务商无关的 HTTP 状态码映射
"""

from __future__ import annotations

from typing import Any


class ImageGenError(Exception):
    """所有异常的基类。"""


class ConfigurationError(ImageGenError):
    """缺少 API Key 等配置错误。"""


class ProviderNotFoundError(ImageGenError):
    """未知的服务商标识。"""


class InvalidInputError(ImageGenError, ValueError):
    """无法解析的参考图输入。"""


class UnsupportedFeatureError(ImageGenError):
    """服务商不支持所请求的功能。"""

    def __init__(self, message: str, *, provider: str | None = None, feature: str | None = None):
        super().__init__(message)
        self.provider = provider
        self.feature = feature


class ApiError(ImageGenError):
    """API 返回了非 2xx 响应。"""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response_body: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class AuthenticationError(ApiError):
    pass


class RateLimitError(ApiError):
    pass


class InvalidRequestError(ApiError):
    pass


def error_for_status(status: int, body: Any) -> ApiError:
    """根据状态码构造对应的异常，与具体服务商无关。"""
    if status == 401:
        error_cls, message = AuthenticationError, "Invalid API key"
    elif status == 429:
        error_cls, message = RateLimitError, "Rate limit exceeded"
    elif 400 <= status <= 499:
        error_cls, message = InvalidRequestError, f"Request failed: {body}"
    else:
        error_cls, message = ApiError, f"API error: {body}"
    return error_cls(message, status_code=status, response_body=body)


def raise_for_status(status: int, body: Any) -> Any:
    """2xx 时原样返回响应体，否则抛出映射后的异常。"""
    if 200 <= status <= 299:
        return body
    raise error_for_status(status, body)
