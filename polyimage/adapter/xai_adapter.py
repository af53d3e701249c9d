from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..core.base_adapter import BaseImageAdapter
from ..core.capabilities import XAI_CAPABILITY
from ..core.image_input import ImageInput
from ..core.transport import HttpResponse
from ..core.types import GeneratedImage, GenerationOptions, GenerationResult
from ..core.utils import iter_mappings, mask_api_key

logger = logging.getLogger(__name__)


class XAIAdapter(BaseImageAdapter):
    """xAI (Grok) 图像生成适配器，仅支持文生图，没有模型列表接口。"""

    capability = XAI_CAPABILITY

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    async def _send_generate(
        self, prompt: str, images: list[ImageInput], options: GenerationOptions
    ) -> HttpResponse:
        url = self._url("images/generations")
        logger.debug(
            f"{self._get_log_prefix()} 请求 -> {url}, key={mask_api_key(self.api_key)}"
        )
        return await self.transport.request_json(
            "POST",
            url,
            headers=self._auth_headers(),
            json=self._build_payload(prompt, options),
        )

    def _build_payload(self, prompt: str, options: GenerationOptions) -> dict[str, Any]:
        """构建请求载荷。"""
        payload: dict[str, Any] = {
            "model": self.model,
            "prompt": prompt,
            "n": 1 if options.n is None else options.n,
            "response_format": options.response_format or "url",
        }
        for key, value in options.to_payload().items():
            payload.setdefault(key, value)
        return payload

    def _extract_images(self, body: Mapping[str, Any]) -> GenerationResult:
        images = [
            GeneratedImage(url=item.get("url"), base64=item.get("b64_json"))
            for item in iter_mappings(body.get("data"))
            if item.get("url") or item.get("b64_json")
        ]
        return GenerationResult(images=images, created=body.get("created"))
