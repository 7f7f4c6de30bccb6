from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.adapters.api.controllers.feed import router as feed_router
from src.adapters.api.controllers.payments import router as payments_router
from src.adapters.api.schemas.payments import ErrorBodySchema, ErrorResponseSchema
from src.adapters.runtime import AppRuntimeConfig
from src.domain.exceptions import PaymentError, RecordStoreError

app = FastAPI(title="CharitEase")
app.include_router(feed_router)
app.include_router(payments_router)


@app.exception_handler(PaymentError)
async def payment_error_handler(request: Request, exc: PaymentError) -> JSONResponse:
    """Relay payment failures in the processor's error shape.

    The mobile client reads `error.message` to show a retryable alert.
    """

    logging.getLogger("uvicorn.error").warning(
        "Payment request failed: %s", exc.message, extra={"path": str(request.url.path)}
    )
    return JSONResponse(
        status_code=400,
        content=ErrorResponseSchema(
            error=ErrorBodySchema(message=exc.message, type=exc.type)
        ).model_dump(),
    )


@app.exception_handler(RecordStoreError)
async def record_store_error_handler(
    request: Request, exc: RecordStoreError
) -> JSONResponse:
    logging.getLogger("uvicorn.error").error(
        "Record store failure: %s", exc, extra={"path": str(request.url.path)}
    )
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Ensure API errors are JSON so the mobile client can display them."""

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    reveal = AppRuntimeConfig.from_env().reveal_errors
    if reveal or isinstance(exc, (FileNotFoundError, RuntimeError, ValueError)):
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
