"""FastAPI application entrypoint."""
from __future__ import annotations

import logging
import os

from fastapi import Depends, FastAPI, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from . import config
from .errors import BannerError
from .llm import GenerationClient, get_generation_client
from .logging_setup import configure_logging
from .pipeline import generate_banner
from .schemas import BannerResponse, GenerationDirective

LOG_FILE_PATH = configure_logging(os.getenv("LOG_LEVEL"))
logger = logging.getLogger(__name__)
logger.info("Logging configured. File output: %s", LOG_FILE_PATH)

app = FastAPI(title="Promo Banner Generator")

BANNER_PATH = "/api/generate-banner"
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    try:
        response = await call_next(request)
    except Exception as exc:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        response = JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(exc) or "Unknown error"},
        )
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(BannerError)
async def banner_error_handler(request: Request, exc: BannerError) -> JSONResponse:
    if exc.status_code < 500:
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})

    logger.error("Banner request failed: %s", exc, exc_info=exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "Internal server error", "message": exc.public_message},
    )


@app.get("/healthz")
def healthz() -> dict[str, object]:
    return {"status": "ok", "generation_configured": bool(config.openai_api_key())}


@app.options(BANNER_PATH)
def banner_preflight() -> Response:
    return Response(status_code=200)


@app.api_route(BANNER_PATH, methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "TRACE"])
def banner_method_not_allowed() -> JSONResponse:
    return JSONResponse(status_code=405, content={"error": "Method not allowed"})


@app.post(BANNER_PATH, response_model=BannerResponse)
async def create_banner(
    request: Request,
    generation_client: GenerationClient = Depends(get_generation_client),
) -> BannerResponse:
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    directive = GenerationDirective.from_payload(payload)
    result = await run_in_threadpool(generate_banner, directive, generation_client)
    return BannerResponse.from_result(result)


if __name__ == "__main__":  # pragma: no cover - manual script usage
    import uvicorn

    uvicorn.run("bannergen.main:app", host="127.0.0.1", port=8000)
