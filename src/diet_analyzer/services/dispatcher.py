"""Routing of analysis requests to vision-LLM providers."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Protocol

from diet_analyzer.config import Settings
from diet_analyzer.domain.errors import (
    ConfigurationError,
    EmptyResponseError,
    ProviderError,
    ProviderUnavailableError,
    UnsupportedMediaError,
)
from diet_analyzer.domain.providers import (
    PROFILES,
    Provider,
    ProviderCredentials,
    ProviderProfile,
    VisionRequest,
    resolve_provider,
)
from diet_analyzer.services.prompt import ANALYSIS_PROMPT

_logger = logging.getLogger(__name__)

_DOUBAO_ENDPOINT_ENV = "DOUBAO_ENDPOINT_ID"


class VisionClient(Protocol):
    """Interface for a single, non-streaming vision completion."""

    async def complete(
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
        credentials: ProviderCredentials,
    ) -> str:
        """Return the model's raw answer text."""


@dataclass
class ProviderDispatcher:
    """Selects a provider for a model id and performs the call."""

    clients: Mapping[Provider, VisionClient]
    settings: Settings
    prompt: str = ANALYSIS_PROMPT

    async def dispatch(self, request: VisionRequest) -> str:
        """Send the image to the provider behind ``request.model``."""
        provider = resolve_provider(request.model)
        profile = PROFILES[provider]
        credentials = self.resolve_credentials(profile, request)
        if provider is Provider.DOUBAO:
            upstream_model = credentials.endpoint or request.model
        else:
            upstream_model = profile.upstream_model(request.model)
        client = self.clients[provider]
        _logger.info(
            "Dispatching analysis: model=%s provider=%s upstream=%s",
            request.model,
            provider,
            upstream_model,
        )
        try:
            text = await self._call_with_retry(
                lambda: client.complete(
                    model=upstream_model,
                    prompt=self.prompt,
                    image_bytes=request.image_bytes,
                    mime_type=request.mime_type,
                    credentials=credentials,
                ),
                profile=profile,
            )
        except ProviderError as exc:
            if rejects_image_input(exc):
                raise UnsupportedMediaError(profile.display_name, exc.body) from exc
            _logger.warning(
                "Provider call failed: provider=%s status=%s",
                provider,
                exc.provider_status,
            )
            raise
        if not text or not text.strip():
            raise EmptyResponseError(profile.display_name)
        return text

    def resolve_credentials(
        self, profile: ProviderProfile, request: VisionRequest
    ) -> ProviderCredentials:
        """Merge per-request overrides with configured credentials."""
        api_key = _clean(request.api_key) or _clean(
            getattr(self.settings, profile.api_key_setting)
        )
        if not api_key:
            raise ConfigurationError(profile.api_key_env, profile.display_name)
        base_url = _clean(request.base_url) or getattr(
            self.settings, profile.base_url_setting
        )
        endpoint = None
        if profile.provider is Provider.DOUBAO:
            endpoint = _clean(request.endpoint) or _clean(
                self.settings.doubao_endpoint_id
            )
            if not endpoint:
                raise ConfigurationError(_DOUBAO_ENDPOINT_ENV, profile.display_name)
        return ProviderCredentials(api_key=api_key, base_url=base_url, endpoint=endpoint)

    async def _call_with_retry(
        self, func: Callable[[], Awaitable[str]], *, profile: ProviderProfile
    ) -> str:
        """Retry transport failures only; HTTP errors surface immediately."""
        attempt = 0
        while True:
            try:
                return await func()
            except ProviderUnavailableError as exc:
                attempt += 1
                _logger.warning(
                    "Provider %s unreachable (attempt %s/%s): %s",
                    profile.provider,
                    attempt,
                    self.settings.provider_retry_attempts + 1,
                    exc.body,
                )
                if attempt > self.settings.provider_retry_attempts:
                    raise
                await asyncio.sleep(self.settings.provider_retry_delay_seconds)


def rejects_image_input(error: ProviderError) -> bool:
    """Detect a text-only endpoint refusing the image part of the message."""
    return error.provider_status == 400 and "image_url" in error.body


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None
