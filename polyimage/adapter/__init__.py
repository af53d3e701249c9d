"""
Adapter module for the image generation client
图像生成客户端的适配器模块
"""

from .gemini_adapter import GeminiAdapter
from .openai_adapter import OpenAIAdapter
from .xai_adapter import XAIAdapter

__all__ = [
    "GeminiAdapter",
    "OpenAIAdapter",
    "XAIAdapter",
]
