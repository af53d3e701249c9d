from __future__ import annotations

import abc
import asyncio
import logging
import os
from collections.abc import Mapping
from typing import Any

import aiohttp

from .constants import ERROR_PREVIEW_LENGTH, LOG_PREFIX
from .errors import (
    ApiError,
    ConfigurationError,
    InvalidRequestError,
    UnsupportedFeatureError,
    error_for_status,
)
from .image_input import ImageInput
from .transport import HttpResponse, HttpTransport
from .types import AdapterConfig, GenerationOptions, GenerationResult, ProviderCapability
from .utils import mask_api_key, preview_text

logger = logging.getLogger(__name__)


class BaseImageAdapter(abc.ABC):
    """图像生成适配器基类。

    子类只需提供 ``capability``、鉴权请求头、请求构建与响应解析；
    参数校验、参考图解析、错误映射和模型列表缓存都在这里完成。
    """

    capability: ProviderCapability

    def __init__(
        self,
        config: AdapterConfig | None = None,
        *,
        transport: HttpTransport | None = None,
    ):
        self.config = config or AdapterConfig()
        self.model = self.config.model or self.capability.default_model
        self.api_key = self.config.api_key or os.environ.get(self.capability.env_key, "")
        if not self.api_key:
            raise ConfigurationError(
                f"API key is required. Set {self.capability.env_key} "
                "environment variable or pass api_key option."
            )
        self.base_url = (self.config.base_url or self.capability.base_url).rstrip("/")
        self._owns_transport = transport is None
        self.transport = transport or HttpTransport(
            timeout=self.config.timeout, proxy=self.config.proxy
        )
        self._models: list[str] | None = None

    async def close(self) -> None:
        """关闭自行创建的传输层。"""
        if self._owns_transport:
            await self.transport.close()

    async def __aenter__(self) -> BaseImageAdapter:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _get_log_prefix(self) -> str:
        """获取统一的日志前缀。"""
        adapter_name = self.__class__.__name__.replace("Adapter", "")
        return f"{LOG_PREFIX} [{adapter_name}]"

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    @abc.abstractmethod
    def _auth_headers(self) -> dict[str, str]:
        """返回鉴权请求头。"""

    async def generate(
        self,
        prompt: str,
        options: GenerationOptions | Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> GenerationResult:
        """生成图像。

        校验顺序固定为：服务商是否支持参考图 -> 模型是否支持参考图 -> 参考图数量，
        全部在发起请求之前完成。
        """
        opts = GenerationOptions.coerce(options, **kwargs)
        images = self._prepare_images(opts.images)
        prefix = self._get_log_prefix()
        logger.info(
            f"{prefix} 开始生成: model='{self.model}', 参考图={len(images)}, prompt='{prompt[:50]}'"
        )

        response = await self._send_generate(prompt, images, opts)
        body = self._check_response(response)
        result = self._extract_images(body if isinstance(body, Mapping) else {})
        logger.info(f"{prefix} 生成成功: {result.image_count} 张图像")
        return result

    def _prepare_images(self, raw_images: list[Any]) -> list[ImageInput]:
        """校验并解析参考图，保持输入顺序。"""
        if not raw_images:
            return []

        cap = self.capability
        if not cap.supports_image_input:
            raise UnsupportedFeatureError(
                f"{cap.display_name} does not support image inputs",
                provider=cap.name,
                feature="image_input",
            )
        if not cap.model_supports_images(self.model):
            supported = ", ".join(cap.image_input_models or ())
            raise InvalidRequestError(
                f"Model '{self.model}' does not support image inputs. "
                f"Supported models: {supported}",
                status_code=400,
            )
        if len(raw_images) > cap.max_images:
            raise InvalidRequestError(
                f"Too many images: {len(raw_images)} provided, maximum is {cap.max_images}",
                status_code=400,
            )
        return [ImageInput.from_raw(raw) for raw in raw_images]

    def _check_response(self, response: HttpResponse) -> Any:
        """2xx 返回响应体，否则记录日志并抛出映射后的异常。"""
        if response.ok:
            return response.body
        logger.error(
            f"{self._get_log_prefix()} 错误 {response.status}: "
            f"{preview_text(response.body, ERROR_PREVIEW_LENGTH)}"
        )
        raise error_for_status(response.status, response.body)

    @abc.abstractmethod
    async def _send_generate(
        self, prompt: str, images: list[ImageInput], options: GenerationOptions
    ) -> HttpResponse:
        """构建并发送生成请求。"""

    @abc.abstractmethod
    def _extract_images(self, body: Mapping[str, Any]) -> GenerationResult:
        """从响应体中提取图像。"""

    async def list_models(self) -> list[str]:
        """获取可用的图像模型，结果在实例内缓存。"""
        if self._models is None:
            self._models = await self._load_models()
        return list(self._models)

    async def _load_models(self) -> list[str]:
        known = list(self.capability.known_models)
        endpoint = self.capability.models_endpoint
        if endpoint is None:
            return known

        prefix = self._get_log_prefix()
        url = self._url(endpoint)
        logger.debug(f"{prefix} 获取模型列表 -> {url}, key={mask_api_key(self.api_key)}")
        try:
            response = await self.transport.request_json(
                "GET", url, headers=self._auth_headers()
            )
            body = self._check_response(response)
        except (ApiError, aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning(f"{prefix} 获取模型列表失败，使用内置列表: {exc}")
            return known

        names = self._filter_models(body if isinstance(body, Mapping) else {})
        if not names:
            logger.warning(f"{prefix} 未找到图像模型，使用内置列表")
            return known
        return names

    def _filter_models(self, body: Mapping[str, Any]) -> list[str]:
        """从模型列表响应中筛选图像模型，有列表接口的子类需重写。"""
        return []

    def _is_image_model(self, name: str) -> bool:
        return any(keyword in name for keyword in self.capability.model_keywords)
