"""
Map domain errors to JSON responses
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging

from zaiko.core.exceptions import ZaikoError

logger = logging.getLogger(__name__)

async def zaiko_error_handler(request: Request, exc: ZaikoError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ZaikoError, zaiko_error_handler)
