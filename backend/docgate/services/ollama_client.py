# ollama_client.py
"""
Ollama /api/generate 를 호출하는 래퍼입니다.
비스트리밍 단일 응답만 사용하며, 응답 JSON 에서 문자열 `response` 필드를
검증해 꺼내 GenerateResponse 로 돌려줍니다.
"""

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from docgate.core.config import Settings
from docgate.core.errors import (
    InferenceResponseParseError,
    InferenceServiceError,
    InferenceTimeoutError,
    InvalidInferenceResponseError,
)
from docgate.schemas.documents import GenerateResponse

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/generate"


class OllamaClient:
    def __init__(
        self,
        base_url: str,
        model: str,
        timeout_sec: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_sec),
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=20),
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "OllamaClient":
        return cls(
            settings.ollama_base_url,
            settings.model_name,
            timeout_sec=settings.summarize_timeout_sec,
        )

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
        }

    async def generate(self, prompt: str) -> GenerateResponse:
        try:
            r = await self._client.post(f"{self.base_url}{GENERATE_PATH}", json=self.build_payload(prompt))
            r.raise_for_status()
        except httpx.TimeoutException as e:
            raise InferenceTimeoutError(f"AI服务调用超时: {e!r}") from e
        except httpx.HTTPStatusError as e:
            raise InferenceServiceError(
                f"AI服务调用失败: HTTP {e.response.status_code} {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise InferenceServiceError(f"AI服务调用失败: {e}") from e

        try:
            data = r.json()
        except ValueError as e:
            raise InferenceResponseParseError(f"AI响应解析失败: {e}") from e

        try:
            result = GenerateResponse.model_validate(data)
        except ValidationError as e:
            raise InvalidInferenceResponseError("无效的AI响应格式") from e

        logger.debug("ollama %s done_reason=%s chars=%d", self.model, result.done_reason, len(result.response))
        return result

    async def aclose(self) -> None:
        await self._client.aclose()
