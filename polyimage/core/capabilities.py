"""服务商能力表。

每个服务商一条只读的 ProviderCapability，在导入时创建，之后不再修改。
"""

from __future__ import annotations

from .constants import (
    GEMINI_DEFAULT_BASE_URL,
    GEMINI_DEFAULT_MODEL,
    GEMINI_KNOWN_MODELS,
    GEMINI_MAX_IMAGES,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
    OPENAI_IMAGE_INPUT_MODELS,
    OPENAI_KNOWN_MODELS,
    OPENAI_MAX_IMAGES,
    XAI_DEFAULT_BASE_URL,
    XAI_DEFAULT_MODEL,
    XAI_KNOWN_MODELS,
)
from .types import AdapterType, ProviderCapability

OPENAI_CAPABILITY = ProviderCapability(
    name=AdapterType.OPENAI.value,
    display_name="OpenAI",
    base_url=OPENAI_DEFAULT_BASE_URL,
    default_model=OPENAI_DEFAULT_MODEL,
    known_models=OPENAI_KNOWN_MODELS,
    env_key="OPENAI_API_KEY",
    supports_image_input=True,
    max_images=OPENAI_MAX_IMAGES,
    image_input_models=OPENAI_IMAGE_INPUT_MODELS,
    models_endpoint="models",
    model_keywords=("dall-e", "image"),
)

GEMINI_CAPABILITY = ProviderCapability(
    name=AdapterType.GEMINI.value,
    display_name="Gemini",
    base_url=GEMINI_DEFAULT_BASE_URL,
    default_model=GEMINI_DEFAULT_MODEL,
    known_models=GEMINI_KNOWN_MODELS,
    env_key="GEMINI_API_KEY",
    supports_image_input=True,
    max_images=GEMINI_MAX_IMAGES,
    models_endpoint="models",
    model_keywords=("imagen", "image"),
)

XAI_CAPABILITY = ProviderCapability(
    name=AdapterType.XAI.value,
    display_name="xAI",
    base_url=XAI_DEFAULT_BASE_URL,
    default_model=XAI_DEFAULT_MODEL,
    known_models=XAI_KNOWN_MODELS,
    env_key="XAI_API_KEY",
)
