"""HTTP API for the aid bot: one POST endpoint plus a health probe.

No business logic here: parse the body, delegate to the pipeline, map the
Result to a status code.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from aid_bot.config.composition import Container, build_container
from aid_bot.config.log_config import configure_logging
from aid_bot.config.settings import AppSettings
from aid_bot.domain.errors import (
    DomainError,
    InvalidLanguageError,
    NoMatchError,
    ValidationError,
)
from aid_bot.domain.models import AidRequest

logger = logging.getLogger(__name__)

FAILED_TO_GENERATE = "Failed to generate response"

CLIENT_ERRORS = (ValidationError, NoMatchError, InvalidLanguageError)


class AidBotRequestModel(BaseModel):
    """Request body for /aid-bot. Types are checked by the pipeline, not here."""

    content: Any = None
    language: Any = None


class AidBotResponseModel(BaseModel):
    response: str


class ErrorResponseModel(BaseModel):
    error: str


def to_domain_request(body: AidBotRequestModel) -> AidRequest:
    # Non-string content counts as missing; a non-string language can never match the catalog
    content = body.content if isinstance(body.content, str) else None
    # Any falsy language (None, "", false, 0) means no translation
    if not body.language:
        return AidRequest(content=content, language=None)
    language = body.language if isinstance(body.language, str) else str(body.language)
    return AidRequest(content=content, language=language)


def error_response(error: DomainError | None) -> JSONResponse:
    if isinstance(error, CLIENT_ERRORS):
        status, message = 400, str(error)
    else:
        status, message = 500, FAILED_TO_GENERATE
    return JSONResponse(status_code=status, content=ErrorResponseModel(error=message).model_dump())


async def read_body(request: Request) -> AidBotRequestModel:
    """JSON or urlencoded form body; anything unparseable is an empty body."""
    content_type = request.headers.get("content-type", "")
    payload: Any
    try:
        if content_type.startswith("application/x-www-form-urlencoded"):
            form = await request.form()
            payload = dict(form)
        else:
            payload = await request.json()
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}
    return AidBotRequestModel.model_validate(payload)


def create_app(
    settings: AppSettings | None = None, container: Container | None = None
) -> FastAPI:
    """Build the FastAPI app.

    Pass a ready container to skip corpus indexing (tests); otherwise the
    lifespan hook builds it before the first request and a CorpusError
    aborts startup.
    """
    settings = settings or (container.settings if container else AppSettings())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "container", None) is None:
            logger.info("Indexing support corpus from %s", settings.corpus_dir)
            app.state.container = build_container(settings)
        logger.info("Aid bot ready.")
        yield
        logger.info("Aid bot shutting down.")

    app = FastAPI(title="AidBot API", version="1.0.0", lifespan=lifespan)
    app.state.container = container

    origins = list(settings.cors_origins) or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post(
        "/aid-bot",
        response_model=AidBotResponseModel,
        responses={400: {"model": ErrorResponseModel}, 500: {"model": ErrorResponseModel}},
    )
    async def aid_bot(request: Request) -> Any:
        """Prioritize, ground and optionally translate one aid request.

        Example:
            POST /aid-bot
            {"content": "My roof collapsed and I have no food", "language": "es"}
        """
        body = await read_body(request)
        pipeline = request.app.state.container.pipeline
        try:
            result = await pipeline.execute(to_domain_request(body))
        except Exception:  # noqa: BLE001
            # must return from the route so the 500 keeps its CORS headers
            logger.exception("Unhandled error on %s", request.url.path)
            return error_response(None)
        if result.ok and result.value is not None:
            return AidBotResponseModel(response=result.value.response)
        return error_response(result.error)

    @app.get("/health")
    async def health(request: Request) -> dict[str, Any]:
        c: Container | None = request.app.state.container
        return {
            "status": "healthy" if c is not None else "starting",
            "service": "aid-bot",
            "indexed_chunks": c.index.chunk_count if c is not None else 0,
            "languages": len(c.catalog) if c is not None else 0,
        }

    return app


def build_app() -> FastAPI:
    """uvicorn factory: ``uvicorn aid_bot.interface.http.api:build_app --factory``."""
    load_dotenv()
    settings = AppSettings()
    configure_logging(settings.log_level)
    return create_app(settings)
