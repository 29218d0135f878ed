from typing import Any

from pydantic import BaseModel, ConfigDict, StrictStr


class Document(BaseModel):
    # 누락된 필드는 빈 문자열로 취급 (빈 값 검증에서 걸러짐)
    title: StrictStr = ""
    content: StrictStr = ""

    model_config = ConfigDict(extra="ignore")


class UploadResponse(BaseModel):
    id: str
    message: str


class GenerateResponse(BaseModel):
    """Non-streamed reply from Ollama's /api/generate.

    Only ``response`` is validated; metadata fields pass through untyped.
    """

    response: StrictStr
    model: Any = None
    done: Any = None
    done_reason: Any = None

    model_config = ConfigDict(extra="ignore", protected_namespaces=())
