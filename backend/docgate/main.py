import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from docgate.api.documents import router as documents_router
from docgate.core.config import Settings, get_settings
from docgate.core.errors import GatewayError, gateway_error_handler, http_error_handler
from docgate.routers.summarize import router as summarize_router
from docgate.services.ollama_client import OllamaClient
from docgate.storage.document_store import DocumentStore, MongoDocumentStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[DocumentStore] = None,
    ollama: Optional[OllamaClient] = None,
) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper(), stream=sys.stdout)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # 주입받지 않은 협력 객체만 여기서 만들고 닫음
        owned = []
        if app.state.store is None:
            app.state.store = MongoDocumentStore.from_settings(settings)
            owned.append(app.state.store.close)
        if app.state.ollama is None:
            app.state.ollama = OllamaClient.from_settings(settings)
            owned.append(app.state.ollama.aclose)

        try:
            yield
        finally:
            for close in owned:
                await close()

    app = FastAPI(title="docgate", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.ollama = ollama

    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    @app.get("/api/health")
    def health_check():
        return {"status": "ok", "service": "docgate"}

    # router 등록
    app.include_router(documents_router)  # 문서 업로드
    app.include_router(summarize_router)  # Ollama 요약

    return app


class GatewayServer(uvicorn.Server):
    """uvicorn server that announces itself only once the port is bound."""

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            logger.info("HTTP服务已启动，监听端口 %d...", self.config.port)


def run() -> None:
    settings = get_settings()
    config = uvicorn.Config(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    server = GatewayServer(config)
    server.run()
    # 포트 바인딩 실패 등으로 기동하지 못한 경우
    if not server.started:
        sys.exit(1)


if __name__ == "__main__":
    run()
