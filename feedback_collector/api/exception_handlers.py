"""Central exception handlers.

Routers translate expected service errors into HTTPException themselves;
the handlers here cover what no router catches:

- request validation errors become 400 (invalid caller input)
- HashFailureError becomes 503 (the host could not hash, not a caller error)
- MalformedHashError becomes 500 (corrupt stored data)

Response bodies are generic; details go to the server log only.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from feedback_collector.services.credentials import HashFailureError, MalformedHashError

logger = logging.getLogger(__name__)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Never echo submitted values back: they may contain passwords
    errors = [
        {"loc": err.get("loc"), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(errors)},
    )


async def hash_failure_handler(request: Request, exc: HashFailureError) -> JSONResponse:
    logger.error(f"Hashing failed for {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Service temporarily unavailable"},
    )


async def malformed_hash_handler(request: Request, exc: MalformedHashError) -> JSONResponse:
    logger.error(f"Malformed stored hash for {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HashFailureError, hash_failure_handler)
    app.add_exception_handler(MalformedHashError, malformed_hash_handler)
