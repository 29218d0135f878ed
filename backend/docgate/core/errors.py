"""Exception types raised by the gateway and the handlers that render them."""

import logging

from fastapi import Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Base error. The message is sent to the caller as a plain-text body."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# 클라이언트 오류
class MethodNotAllowedError(GatewayError):
    status_code = 405


class UnsupportedMediaTypeError(GatewayError):
    status_code = 415


class InvalidDocumentError(GatewayError):
    status_code = 400


# 서버 오류
class StoreConnectionError(GatewayError):
    pass


class StoreOperationError(GatewayError):
    pass


class DocumentNotFoundError(StoreOperationError):
    pass


class InferenceServiceError(GatewayError):
    pass


class InferenceTimeoutError(InferenceServiceError):
    pass


class InferenceResponseParseError(GatewayError):
    pass


class InvalidInferenceResponseError(GatewayError):
    """The inference reply parsed as JSON but has no string ``response`` field."""


class RequestTimeoutError(GatewayError):
    pass


async def gateway_error_handler(request: Request, exc: GatewayError) -> PlainTextResponse:
    if exc.status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    # 프레임워크가 내는 404/405 등도 평문 본문으로 통일
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)
