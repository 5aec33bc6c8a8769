"""FastAPI application entrypoint."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api import router
from .models import ErrEnvelope, ErrorBody, ErrorCode
from .settings import settings


logger = logging.getLogger(settings.APP_NAME)


app = FastAPI(title=settings.APP_NAME)
app.include_router(router)


@app.on_event("startup")
async def startup() -> None:
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    if not settings.FIXERIO_API_KEY:
        logger.warning("FIXERIO_API_KEY is not set; rate requests will return empty rates")


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_: Request, exc: RequestValidationError):
    payload = ErrEnvelope(
        error=ErrorBody(
            code=ErrorCode.BAD_INPUT,
            message="invalid input",
            details={"errors": exc.errors()},
        )
    )
    return JSONResponse(status_code=400, content=jsonable_encoder(payload))


@app.get("/health")
async def health():
    return {"ok": True, "data": {"status": "healthy"}, "ts": datetime.now(timezone.utc).isoformat()}


if __name__ == "__main__":
    uvicorn.run(
        "rate_import.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
    )


__all__ = ["app"]
