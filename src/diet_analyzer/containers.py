"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import httpx

from diet_analyzer.adapters.gemini_vision_client import GeminiVisionClient
from diet_analyzer.adapters.openai_vision_client import OpenAIVisionClient
from diet_analyzer.config import Settings
from diet_analyzer.domain.providers import PROFILES, Provider
from diet_analyzer.services.analysis import AnalysisService
from diet_analyzer.services.dispatcher import ProviderDispatcher, VisionClient


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    analysis_service: AnalysisService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    timeout = resolved_settings.request_timeout_seconds
    http_client = httpx.AsyncClient(timeout=timeout)
    clients: dict[Provider, VisionClient] = {
        Provider.GOOGLE: GeminiVisionClient.create(http_client, timeout),
    }
    for provider, profile in PROFILES.items():
        if provider is Provider.GOOGLE:
            continue
        clients[provider] = OpenAIVisionClient.create(profile, http_client, timeout)
    dispatcher = ProviderDispatcher(clients=clients, settings=resolved_settings)
    analysis_service = AnalysisService(
        dispatcher=dispatcher,
        max_image_bytes=resolved_settings.max_image_bytes,
    )

    async def close_resources() -> None:
        await http_client.aclose()

    return AppContainer(
        settings=resolved_settings,
        analysis_service=analysis_service,
        close_resources=close_resources,
    )
