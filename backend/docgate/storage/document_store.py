"""
문서 저장소. 핸들러는 DocumentStore 프로토콜만 의존하고,
운영에서는 MongoDocumentStore, 테스트에서는 InMemoryDocumentStore 를 주입합니다.
"""

import logging
import uuid
from typing import Optional, Protocol, runtime_checkable

from pydantic import ValidationError
from pymongo import AsyncMongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

from docgate.core.config import Settings
from docgate.core.errors import (
    DocumentNotFoundError,
    StoreConnectionError,
    StoreOperationError,
)
from docgate.schemas.documents import Document

logger = logging.getLogger(__name__)

# 서버 선택 대기는 업로드 제한 시간보다 짧아야 연결 실패 원인이 호출자에게 전달됨
SERVER_SELECTION_FRACTION = 0.8


def server_selection_timeout_ms(settings: Settings) -> int:
    bound = min(settings.upload_timeout_sec, settings.summarize_timeout_sec)
    return int(bound * SERVER_SELECTION_FRACTION * 1000)


@runtime_checkable
class DocumentStore(Protocol):
    async def insert_one(self, document: Document) -> str:
        """Persist one document and return the store-assigned id."""
        ...

    async def find_one(self) -> Document:
        """Return an arbitrary stored document (no filter, no ordering)."""
        ...

    async def close(self) -> None:
        ...


class MongoDocumentStore:
    def __init__(self, client: AsyncMongoClient, database: str, collection: str):
        self._client = client
        self._collection = client[database][collection]

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoDocumentStore":
        timeout_ms = server_selection_timeout_ms(settings)
        client = AsyncMongoClient(
            settings.mongodb_url,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
        )
        return cls(client, settings.mongodb_database, settings.mongodb_collection)

    async def insert_one(self, document: Document) -> str:
        # insert_one 은 전달된 dict 에 _id 를 채워 넣으므로 새 dict 를 넘김
        try:
            result = await self._collection.insert_one(document.model_dump())
        except ConnectionFailure as e:
            raise StoreConnectionError(f"数据库连接失败: {e}") from e
        except PyMongoError as e:
            raise StoreOperationError(f"数据插入失败: {e}") from e
        return str(result.inserted_id)

    async def find_one(self) -> Document:
        try:
            raw = await self._collection.find_one({})
        except ConnectionFailure as e:
            raise StoreConnectionError(f"数据库连接失败: {e}") from e
        except PyMongoError as e:
            raise StoreOperationError(f"文档查询失败: {e}") from e

        if raw is None:
            raise DocumentNotFoundError("文档查询失败: 集合中没有文档")
        try:
            return Document.model_validate(raw)
        except ValidationError as e:
            raise StoreOperationError(f"文档查询失败: {e}") from e

    async def close(self) -> None:
        await self._client.close()


class InMemoryDocumentStore:
    """Process-local store with the same contract, for tests and local runs."""

    def __init__(self):
        self._docs: dict[str, Document] = {}

    async def insert_one(self, document: Document) -> str:
        doc_id = uuid.uuid4().hex
        self._docs[doc_id] = document.model_copy()
        return doc_id

    async def find_one(self) -> Document:
        for doc in self._docs.values():
            return doc.model_copy()
        raise DocumentNotFoundError("文档查询失败: 集合中没有文档")

    def get(self, doc_id: str) -> Optional[Document]:
        return self._docs.get(doc_id)

    def __len__(self) -> int:
        return len(self._docs)

    async def close(self) -> None:
        logger.debug("in-memory store closed with %d documents", len(self._docs))
