import asyncio

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from docgate.api.deps import ANY_METHOD, settings_from_app, store_from_app
from docgate.core.config import Settings
from docgate.core.errors import (
    InvalidDocumentError,
    MethodNotAllowedError,
    RequestTimeoutError,
    UnsupportedMediaTypeError,
)
from docgate.schemas.documents import Document, UploadResponse
from docgate.storage.document_store import DocumentStore

router = APIRouter(tags=["documents"])

JSON_MEDIA_TYPE = "application/json"
CREATED_MESSAGE = "文档创建成功"


def media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


def parse_document(raw: bytes) -> Document:
    try:
        doc = Document.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidDocumentError(f"请求体解析失败: {e}") from e

    if not doc.title or not doc.content:
        raise InvalidDocumentError("标题和内容不能为空")
    return doc


# 문서 업로드
@router.api_route("/upload", methods=ANY_METHOD, response_model=UploadResponse)
async def upload_document(
    request: Request,
    store: DocumentStore = Depends(store_from_app),
    settings: Settings = Depends(settings_from_app),
):
    if request.method != "POST":
        raise MethodNotAllowedError("仅支持POST方法")

    if media_type(request.headers.get("content-type", "")) != JSON_MEDIA_TYPE:
        raise UnsupportedMediaTypeError("仅支持JSON格式")

    doc = parse_document(await request.body())

    try:
        doc_id = await asyncio.wait_for(store.insert_one(doc), timeout=settings.upload_timeout_sec)
    except asyncio.TimeoutError as e:
        raise RequestTimeoutError(f"请求超时: 数据插入超过 {settings.upload_timeout_sec:g} 秒") from e

    return UploadResponse(id=doc_id, message=CREATED_MESSAGE)
