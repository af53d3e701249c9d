"""常量定义模块。

集中管理项目中使用的常量，避免魔法字符串分散在代码中。
"""

from __future__ import annotations

# ========================== 日志常量 ==========================

LOG_PREFIX = "[ImageGen]"
"""统一的日志前缀。"""

ERROR_PREVIEW_LENGTH = 200
"""错误日志中响应体预览的最大长度。"""


# ========================== 默认配置值 ==========================

DEFAULT_TIMEOUT = 180
"""默认请求超时时间（秒）。"""


# ========================== MIME 类型 ==========================

IMAGE_MIME_TYPES = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
    "gif": "image/gif",
}
"""URL 扩展名到 MIME 类型的映射。"""

DEFAULT_IMAGE_EXTENSION = "png"
"""无法从 MIME 类型推断扩展名时使用的默认值。"""


# ========================== API 端点 ==========================

OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
"""OpenAI API 默认 Base URL。"""

GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
"""Gemini API 默认 Base URL。"""

XAI_DEFAULT_BASE_URL = "https://api.x.ai/v1"
"""xAI API 默认 Base URL。"""


# ========================== 模型 ==========================

OPENAI_DEFAULT_MODEL = "gpt-image-1.5"
GEMINI_DEFAULT_MODEL = "gemini-3-pro-image-preview"
XAI_DEFAULT_MODEL = "grok-2-image"

OPENAI_KNOWN_MODELS = (
    "dall-e-3",
    "dall-e-2",
    "gpt-image-1",
    "gpt-image-1.5",
    "gpt-image-1-mini",
)
"""模型列表接口不可用时的 OpenAI 备选模型。"""

OPENAI_IMAGE_INPUT_MODELS = (
    "dall-e-2",
    "gpt-image-1",
    "gpt-image-1.5",
    "gpt-image-1-mini",
)
"""支持参考图输入 (images/edits) 的 OpenAI 模型。"""

GEMINI_KNOWN_MODELS = (
    "imagen-3.0-generate-002",
    "imagen-3.0-generate-001",
    "gemini-2.0-flash-exp-image-generation",
    "gemini-2.5-flash-image",
    "gemini-3-pro-image-preview",
)
"""模型列表接口不可用时的 Gemini 备选模型。"""

XAI_KNOWN_MODELS = (
    "grok-2-image",
    "grok-2-image-1212",
)
"""xAI 没有模型列表接口，始终使用该列表。"""


# ========================== 参考图限制 ==========================

OPENAI_MAX_IMAGES = 16
GEMINI_MAX_IMAGES = 10
