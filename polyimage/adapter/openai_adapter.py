from __future__ import annotations

import base64
import binascii
import logging
from collections.abc import Mapping
from typing import Any

from ..core.base_adapter import BaseImageAdapter
from ..core.capabilities import OPENAI_CAPABILITY
from ..core.errors import InvalidInputError
from ..core.image_input import ImageInput, InlineImage, UrlImage
from ..core.transport import HttpResponse
from ..core.types import FilePart, GeneratedImage, GenerationOptions, GenerationResult
from ..core.utils import extension_for_mime, iter_mappings, mask_api_key

logger = logging.getLogger(__name__)


class OpenAIAdapter(BaseImageAdapter):
    """标准 OpenAI 图像生成适配器 (DALL-E / gpt-image)。

    无参考图时走 images/generations (JSON)，有参考图时走 images/edits (multipart)。
    """

    capability = OPENAI_CAPABILITY

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    async def _send_generate(
        self, prompt: str, images: list[ImageInput], options: GenerationOptions
    ) -> HttpResponse:
        """执行单次生图请求。"""
        prefix = self._get_log_prefix()
        if images:
            url = self._url("images/edits")
            logger.debug(
                f"{prefix} 请求 -> {url}, key={mask_api_key(self.api_key)}, 参考图={len(images)}"
            )
            return await self.transport.request_multipart(
                "POST",
                url,
                headers=self._auth_headers(),
                fields=self._build_multipart_fields(prompt, images, options),
            )

        url = self._url("images/generations")
        logger.debug(f"{prefix} 请求 -> {url}, key={mask_api_key(self.api_key)}")
        return await self.transport.request_json(
            "POST",
            url,
            headers=self._auth_headers(),
            json=self._build_payload(prompt, options),
        )

    def _build_payload(self, prompt: str, options: GenerationOptions) -> dict[str, Any]:
        """构建请求载荷。"""
        payload: dict[str, Any] = {"model": self.model, "prompt": prompt}
        for key, value in options.to_payload().items():
            payload.setdefault(key, value)
        return payload

    def _build_multipart_fields(
        self, prompt: str, images: list[ImageInput], options: GenerationOptions
    ) -> dict[str, Any]:
        """构建 multipart 表单字段，参考图按 image[i] 编号。"""
        fields: dict[str, Any] = {"model": self.model, "prompt": prompt}
        for index, image in enumerate(images):
            fields[f"image[{index}]"] = self._build_image_part(image)
        for key, value in options.to_payload().items():
            fields.setdefault(key, value)
        return fields

    @staticmethod
    def _build_image_part(image: ImageInput) -> str | FilePart:
        if isinstance(image, UrlImage):
            return image.url
        if isinstance(image, InlineImage):
            try:
                data = base64.b64decode(image.base64)
            except (binascii.Error, ValueError) as exc:
                raise InvalidInputError(f"Invalid base64 image data: {exc}") from exc
            return FilePart(
                data=data,
                content_type=image.mime_type,
                filename=f"image.{extension_for_mime(image.mime_type)}",
            )
        raise TypeError(f"Unsupported image input: {type(image).__name__}")

    def _extract_images(self, body: Mapping[str, Any]) -> GenerationResult:
        """从响应中提取图片数据。"""
        images: list[GeneratedImage] = []
        for item in iter_mappings(body.get("data")):
            if not item.get("url") and not item.get("b64_json"):
                logger.warning(f"{self._get_log_prefix()} 无法从响应项中提取图像: {item}")
                continue
            images.append(
                GeneratedImage(
                    url=item.get("url"),
                    base64=item.get("b64_json"),
                    revised_prompt=item.get("revised_prompt"),
                )
            )
        return GenerationResult(images=images, created=body.get("created"))

    def _filter_models(self, body: Mapping[str, Any]) -> list[str]:
        ids = [model.get("id") for model in iter_mappings(body.get("data"))]
        return [
            model_id
            for model_id in ids
            if isinstance(model_id, str) and self._is_image_model(model_id)
        ]
