import asyncio
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from docgate.api.deps import ANY_METHOD, ollama_from_app, settings_from_app, store_from_app
from docgate.core.config import Settings
from docgate.core.errors import RequestTimeoutError
from docgate.services.ollama_client import OllamaClient
from docgate.services.prompt_builder import build_summary_prompt
from docgate.storage.document_store import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["summarize"])


async def summarize_any_document(store: DocumentStore, ollama: OllamaClient) -> str:
    doc = await store.find_one()
    prompt = build_summary_prompt(doc)
    data = await ollama.generate(prompt)
    return data.response


@router.api_route("/summarize", methods=ANY_METHOD, response_class=PlainTextResponse)
async def summarize(
    store: DocumentStore = Depends(store_from_app),
    ollama: OllamaClient = Depends(ollama_from_app),
    settings: Settings = Depends(settings_from_app),
):
    try:
        summary = await asyncio.wait_for(
            summarize_any_document(store, ollama),
            timeout=settings.summarize_timeout_sec,
        )
    except asyncio.TimeoutError as e:
        raise RequestTimeoutError(f"请求超时: 总结处理超过 {settings.summarize_timeout_sec:g} 秒") from e

    # 모델 출력은 가공하지 않고 그대로 반환
    return PlainTextResponse(summary)
