from fastapi import Request

from docgate.core.config import Settings
from docgate.services.ollama_client import OllamaClient
from docgate.storage.document_store import DocumentStore

# 라우트를 모든 메서드에 묶고 허용 여부는 핸들러가 판단함
ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def settings_from_app(request: Request) -> Settings:
    return request.app.state.settings


def store_from_app(request: Request) -> DocumentStore:
    return request.app.state.store


def ollama_from_app(request: Request) -> OllamaClient:
    return request.app.state.ollama
