"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated

from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from diet_analyzer.app_logging import configure_logging
from diet_analyzer.config import Settings
from diet_analyzer.containers import AppContainer
from diet_analyzer.domain.catalog import MODEL_CATALOG
from diet_analyzer.domain.errors import DietAnalyzerError
from diet_analyzer.domain.providers import PROFILES, Provider
from diet_analyzer.services.analysis import AnalysisOptions, UploadedImage

SERVICE_NAME = "diabetic-diet-analyzer"
SERVICE_VERSION = "1.0.0"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(DietAnalyzerError)
    async def handle_analyzer_error(
        request: Request, exc: DietAnalyzerError
    ) -> JSONResponse:
        state_container: AppContainer = request.app.state.container
        logger.warning(
            "Analysis failed: %s: %s", type(exc).__name__, exc.message
        )
        return _failure(
            exc.message,
            status_code=exc.status_code,
            details=exc.details if state_container.settings.debug else None,
        )

    @app.get("/api/health")
    async def health(request: Request) -> dict[str, object]:
        """Report service status and which providers have credentials."""
        state_container: AppContainer = request.app.state.container
        settings = state_container.settings
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "environment": settings.environment,
            "dependencies": _provider_status(settings),
            "timestamp": _now_iso(),
        }

    @app.get("/api/models")
    async def list_models(request: Request) -> dict[str, object]:
        """Return the selectable vision models."""
        state_container: AppContainer = request.app.state.container
        return {
            "success": True,
            "models": [model.to_payload() for model in MODEL_CATALOG],
            "defaultModel": state_container.settings.default_model,
        }

    @app.post("/api/analyze")
    async def analyze(  # noqa: PLR0913
        request: Request,
        image: Annotated[UploadFile | None, File()] = None,
        model: Annotated[str | None, Form()] = None,
        api_key: Annotated[str | None, Form(alias="apiKey")] = None,
        base_url: Annotated[str | None, Form(alias="baseUrl")] = None,
        endpoint: Annotated[str | None, Form()] = None,
    ) -> JSONResponse:
        """Analyze an uploaded meal photo."""
        state_container: AppContainer = request.app.state.container
        settings = state_container.settings
        selected_model = (model or "").strip() or settings.default_model
        content = await image.read() if image is not None else b""
        uploaded = UploadedImage(
            content=content,
            content_type=image.content_type if image is not None else None,
        )
        options = AnalysisOptions(
            model=selected_model,
            api_key=api_key,
            base_url=base_url,
            endpoint=endpoint,
        )
        try:
            report = await state_container.analysis_service.analyze(uploaded, options)
        except DietAnalyzerError:
            raise
        except Exception as exc:
            logger.exception(
                "Unexpected analysis failure", extra={"model": selected_model}
            )
            return _failure(
                "分析失败",
                status_code=500,
                details=f"{type(exc).__name__}: {exc}" if settings.debug else None,
            )
        return JSONResponse(
            {
                "success": True,
                "data": report.model_dump(exclude_none=True),
                "model": selected_model,
                "timestamp": _now_iso(),
            }
        )

    return app


def _failure(message: str, *, status_code: int, details: str | None) -> JSONResponse:
    """Build the error envelope."""
    body: dict[str, object] = {"success": False, "error": message}
    if details:
        body["details"] = details
    return JSONResponse(body, status_code=status_code)


def _provider_status(settings: Settings) -> dict[str, str]:
    """Return configured/missing per provider."""
    status: dict[str, str] = {}
    for provider, profile in PROFILES.items():
        configured = bool(getattr(settings, profile.api_key_setting))
        if provider is Provider.DOUBAO:
            configured = configured and bool(settings.doubao_endpoint_id)
        status[provider.value] = "configured" if configured else "missing"
    return status


def _now_iso() -> str:
    return datetime.now(tz=UTC).isoformat()
