"""基于 aiohttp 的 HTTP 传输层。

只负责发送 JSON / multipart 请求并返回 (状态码, 已解析的响应体)，
不做重试，也不解释状态码。
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import aiohttp

from .constants import DEFAULT_TIMEOUT, LOG_PREFIX
from .types import FilePart

logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    status: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status <= 299


def decode_body(text: str) -> Any:
    """优先按 JSON 解析，失败时返回原始文本。"""
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


def form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    return str(value)


def build_form(fields: Mapping[str, Any]) -> aiohttp.MultipartWriter:
    """将字段映射转换为 multipart/form-data，FilePart 作为文件上传。"""
    writer = aiohttp.MultipartWriter("form-data")
    for name, value in fields.items():
        if isinstance(value, FilePart):
            part = writer.append(value.data, {"Content-Type": value.content_type})
            part.set_content_disposition("form-data", name=name, filename=value.filename)
        else:
            part = writer.append(form_value(value))
            part.set_content_disposition("form-data", name=name)
    return writer


class HttpTransport:
    """持有一个惰性创建的 aiohttp 会话。"""

    def __init__(
        self,
        timeout: int = DEFAULT_TIMEOUT,
        proxy: str | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        self.timeout = timeout
        self.proxy = proxy
        self._session = session

    def _get_session(self) -> aiohttp.ClientSession:
        """获取或创建 HTTP 会话。"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        """关闭底层的 HTTP 会话。"""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def request_json(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        json: Any = None,
    ) -> HttpResponse:
        """发送 JSON 请求（json 为 None 时不带请求体）。"""
        kwargs: dict[str, Any] = {}
        if json is not None:
            kwargs["json"] = json
        return await self._send(method, url, headers=headers, params=params, **kwargs)

    async def request_multipart(
        self,
        method: str,
        url: str,
        *,
        fields: Mapping[str, Any],
        headers: Mapping[str, str] | None = None,
    ) -> HttpResponse:
        """发送 multipart 表单请求。"""
        return await self._send(method, url, headers=headers, data=build_form(fields))

    async def _send(self, method: str, url: str, **kwargs: Any) -> HttpResponse:
        start_time = time.time()
        session = self._get_session()
        async with session.request(
            method,
            url,
            proxy=self.proxy,
            timeout=aiohttp.ClientTimeout(total=self.timeout),
            **kwargs,
        ) as resp:
            text = await resp.text(errors="replace")
            duration = time.time() - start_time
            logger.debug(
                f"{LOG_PREFIX} {method} {url} -> {resp.status} (耗时: {duration:.2f}s)"
            )
            return HttpResponse(status=resp.status, body=decode_body(text))
