from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..core.base_adapter import BaseImageAdapter
from ..core.capabilities import GEMINI_CAPABILITY
from ..core.image_input import ImageInput, InlineImage, UrlImage
from ..core.transport import HttpResponse
from ..core.types import GeneratedImage, GenerationOptions, GenerationResult
from ..core.utils import compact, iter_mappings, mask_api_key

logger = logging.getLogger(__name__)


class GeminiAdapter(BaseImageAdapter):
    """Gemini 原生图像生成适配器。"""

    capability = GEMINI_CAPABILITY

    def _auth_headers(self) -> dict[str, str]:
        return {"x-goog-api-key": self.api_key}

    async def _send_generate(
        self, prompt: str, images: list[ImageInput], options: GenerationOptions
    ) -> HttpResponse:
        """执行单次生图请求。"""
        url = self._url(f"models/{self.model}:generateContent")
        logger.debug(
            f"{self._get_log_prefix()} 请求 -> {url}, key={mask_api_key(self.api_key)}"
        )
        return await self.transport.request_json(
            "POST",
            url,
            headers=self._auth_headers(),
            json=self._build_payload(prompt, images, options),
        )

    def _build_payload(
        self, prompt: str, images: list[ImageInput], options: GenerationOptions
    ) -> dict[str, Any]:
        """构建请求载荷。"""
        text = prompt
        if options.negative_prompt:
            text = f"{prompt}. Avoid: {options.negative_prompt}"

        parts: list[dict[str, Any]] = [{"text": text}]
        parts.extend(self._build_image_part(image) for image in images)

        payload: dict[str, Any] = {"contents": [{"parts": parts}]}

        generation_config = self._build_generation_config(options)
        if generation_config:
            payload["generationConfig"] = generation_config
        return payload

    @staticmethod
    def _build_image_part(image: ImageInput) -> dict[str, Any]:
        if isinstance(image, UrlImage):
            return {"fileData": compact({"fileUri": image.url, "mimeType": image.mime_type})}
        if isinstance(image, InlineImage):
            return {"inlineData": {"data": image.base64, "mimeType": image.mime_type}}
        raise TypeError(f"Unsupported image input: {type(image).__name__}")

    @staticmethod
    def _build_generation_config(options: GenerationOptions) -> dict[str, Any]:
        candidate_count = options.extra.get("sample_count") or options.n
        generation_config = compact({"candidateCount": candidate_count, "seed": options.seed})
        if options.aspect_ratio:
            generation_config["imageConfig"] = {"aspectRatio": options.aspect_ratio}
        return generation_config

    def _extract_images(self, body: Mapping[str, Any]) -> GenerationResult:
        """从响应中提取图像数据，合并所有候选结果。"""
        candidates = iter_mappings(body.get("candidates"))
        logger.debug(f"{self._get_log_prefix()} 候选结果: {len(candidates)}")

        images: list[GeneratedImage] = []
        for candidate in candidates:
            content = candidate.get("content")
            if not isinstance(content, Mapping):
                continue
            for part in iter_mappings(content.get("parts")):
                inline_data = part.get("inlineData") or part.get("inline_data")
                if not isinstance(inline_data, Mapping) or not inline_data.get("data"):
                    continue
                images.append(
                    GeneratedImage(
                        base64=inline_data["data"],
                        mime_type=inline_data.get("mimeType") or inline_data.get("mime_type"),
                    )
                )
        return GenerationResult(images=images)

    def _filter_models(self, body: Mapping[str, Any]) -> list[str]:
        names = []
        for model in iter_mappings(body.get("models")):
            if "generateContent" not in (model.get("supportedGenerationMethods") or []):
                continue
            name = model.get("name")
            if not isinstance(name, str):
                continue
            name = name.removeprefix("models/")
            if name and self._is_image_model(name):
                names.append(name)
        return names
