# file: AUZY/core/errors.py
"""
Error taxonomy shared by the directory and content services.

Every failure the services raise is one of three kinds:

- ValidationError: the caller sent a malformed body, parameter or query.
- NotFoundError: a featured image or a tag lookup found nothing.
- StoreError: the document store or the object store failed.

Each error carries a message plus a `context` dict, which the HTTP layer
renders next to the message.
"""
import enum
import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger("core.errors")


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORE = "store"


class AuzyError(Exception):
    kind: ErrorKind
    status_code = 500

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict:
        body = {"error": self.message, "kind": self.kind.value}
        if self.context:
            body["context"] = self.context
        return body


class ValidationError(AuzyError):
    kind = ErrorKind.VALIDATION
    status_code = 400


class NotFoundError(AuzyError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404


class StoreError(AuzyError):
    """Opaque failure from the document store or the object store."""
    kind = ErrorKind.STORE

    DOCUMENT = "document"
    OBJECT = "object"

    def __init__(self, message: str, source: str = DOCUMENT, **context):
        super().__init__(message, source=source, **context)
        self.source = source
        # object store failures surface as bad gateway
        self.status_code = 502 if source == self.OBJECT else 500


# ---------------------------
# FastAPI handlers
# ---------------------------
async def auzy_error_handler(request: Request, exc: AuzyError):
    if isinstance(exc, StoreError):
        logger.error("%s %s -> store error: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.kind.value, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("❌ Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})
