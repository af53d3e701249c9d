from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .adapter import GeminiAdapter, OpenAIAdapter, XAIAdapter
from .core.base_adapter import BaseImageAdapter
from .core.constants import DEFAULT_TIMEOUT, LOG_PREFIX
from .core.errors import ProviderNotFoundError
from .core.transport import HttpTransport
from .core.types import AdapterConfig, AdapterType, GenerationOptions, GenerationResult

logger = logging.getLogger(__name__)

ADAPTER_MAP: dict[AdapterType, type[BaseImageAdapter]] = {
    AdapterType.OPENAI: OpenAIAdapter,
    AdapterType.GEMINI: GeminiAdapter,
    AdapterType.XAI: XAIAdapter,
}


class ImageClient:
    """按服务商名称分发生图请求，本身不含业务逻辑。"""

    def __init__(
        self,
        provider: AdapterType | str,
        model: str | None = None,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout: int = DEFAULT_TIMEOUT,
        proxy: str | None = None,
        transport: HttpTransport | None = None,
    ):
        self.adapter_type = self._resolve_type(provider)
        config = AdapterConfig(
            api_key=api_key,
            model=model,
            base_url=base_url,
            timeout=timeout,
            proxy=proxy,
        )
        self.provider = ADAPTER_MAP[self.adapter_type](config, transport=transport)
        logger.debug(
            f"{LOG_PREFIX} 创建客户端: provider={self.adapter_type.value}, model={self.model}"
        )

    @staticmethod
    def _resolve_type(provider: AdapterType | str) -> AdapterType:
        if isinstance(provider, AdapterType):
            return provider
        try:
            return AdapterType(str(provider).lower())
        except ValueError:
            available = ", ".join(t.value for t in ADAPTER_MAP)
            raise ProviderNotFoundError(
                f"Unknown provider: {provider}. Available providers: {available}"
            ) from None

    @property
    def model(self) -> str:
        return self.provider.model

    async def generate(
        self,
        prompt: str,
        options: GenerationOptions | Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> GenerationResult:
        """执行生图逻辑。"""
        return await self.provider.generate(prompt, options, **kwargs)

    async def list_models(self) -> list[str]:
        return await self.provider.list_models()

    async def close(self) -> None:
        """关闭适配器。"""
        await self.provider.close()

    async def __aenter__(self) -> ImageClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()


def create_client(
    provider: AdapterType | str,
    model: str | None = None,
    api_key: str | None = None,
    **kwargs: Any,
) -> ImageClient:
    """ImageClient 的快捷构造函数。"""
    return ImageClient(provider, model=model, api_key=api_key, **kwargs)
