"""Shared test fixtures."""

import json
from dataclasses import dataclass, field

import pytest

from diet_analyzer.config import Settings
from diet_analyzer.containers import AppContainer
from diet_analyzer.domain.errors import ProviderError
from diet_analyzer.domain.providers import Provider, ProviderCredentials
from diet_analyzer.services.analysis import AnalysisService
from diet_analyzer.services.dispatcher import ProviderDispatcher, VisionClient

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"fake-png-body"
JPEG_BYTES = b"\xff\xd8\xff" + b"fake-jpeg-body"

FLAT_RESPONSE: dict[str, object] = {
    "foods": [
        {"name": "苹果", "estimated_weight": "150g"},
        {
            "name": "面包",
            "estimated_weight": "50g",
            "nutrients": {"carbs": 25, "protein": 4, "fat": 1},
        },
    ],
    "nutrition": {
        "total_carbs": "80g",
        "fiber": "2g",
        "net_carbs": "78g",
        "gl_level": "高",
        "calories": "999kcal",
    },
    "risk_level": "中",
    "recommendations": ["先吃蔬菜再吃主食"],
    "disclaimer": "仅供参考",
}


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning fixed text and recording calls."""

    text: str = field(default_factory=lambda: json.dumps(FLAT_RESPONSE))
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete(
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
        credentials: ProviderCredentials,
    ) -> str:
        self.calls.append(
            {
                "model": model,
                "prompt": prompt,
                "image_bytes": image_bytes,
                "mime_type": mime_type,
                "credentials": credentials,
            }
        )
        return self.text


@dataclass
class FailingVisionClient(VisionClient):
    """Fake vision client raising a queue of errors before answering."""

    errors: list[Exception] = field(default_factory=list)
    text: str = "{}"
    attempts: int = 0

    async def complete(
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
        credentials: ProviderCredentials,
    ) -> str:
        self.attempts += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.text


def provider_error(status_code: int, body: str) -> ProviderError:
    return ProviderError("DeepSeek", status_code, body)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        google_api_key="google-key",
        dashscope_api_key="dashscope-key",
        deepseek_api_key="deepseek-key",
        yi_api_key="yi-key",
        zhipu_api_key="zhipu-key",
        ark_api_key="ark-key",
        doubao_endpoint_id="ep-20240101-abc",
        provider_retry_delay_seconds=0.0,
        environment="test",
    )


@pytest.fixture
def vision_clients() -> dict[Provider, FakeVisionClient]:
    return {provider: FakeVisionClient() for provider in Provider}


@pytest.fixture
def dispatcher(
    settings: Settings, vision_clients: dict[Provider, FakeVisionClient]
) -> ProviderDispatcher:
    return ProviderDispatcher(clients=vision_clients, settings=settings)


@pytest.fixture
def container(settings: Settings, dispatcher: ProviderDispatcher) -> AppContainer:
    analysis_service = AnalysisService(
        dispatcher=dispatcher,
        max_image_bytes=settings.max_image_bytes,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        analysis_service=analysis_service,
        close_resources=close_resources,
    )
