"""Google Gemini generateContent REST client."""

from dataclasses import dataclass

import httpx

from diet_analyzer.domain.errors import ProviderError, ProviderUnavailableError
from diet_analyzer.domain.providers import PROFILES, Provider, ProviderCredentials
from diet_analyzer.services.dispatcher import VisionClient
from diet_analyzer.services.images import to_base64

_PROVIDER_NAME = PROFILES[Provider.GOOGLE].display_name


@dataclass
class GeminiVisionClient(VisionClient):
    """HTTPX-backed Gemini client sending the image as inline data."""

    http_client: httpx.AsyncClient
    timeout: float = 60.0
    temperature: float = 0.4

    @classmethod
    def create(
        cls, http_client: httpx.AsyncClient, timeout: float
    ) -> "GeminiVisionClient":
        """Create a Gemini client on a shared httpx session."""
        return cls(http_client=http_client, timeout=timeout)

    async def complete(
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
        credentials: ProviderCredentials,
    ) -> str:
        """Call generateContent and join the text parts of the first candidate."""
        url = f"{credentials.base_url.rstrip('/')}/models/{model}:generateContent"
        payload = {
            "contents": [
                {
                    "parts": [
                        {"text": prompt},
                        {
                            "inline_data": {
                                "mime_type": mime_type,
                                "data": to_base64(image_bytes),
                            }
                        },
                    ]
                }
            ],
            "generationConfig": {"temperature": self.temperature},
        }
        try:
            response = await self.http_client.post(
                url,
                params={"key": credentials.api_key},
                json=payload,
                timeout=self.timeout,
            )
        except httpx.TransportError as exc:
            raise ProviderUnavailableError(_PROVIDER_NAME, None, str(exc)) from exc
        if response.is_error:
            raise ProviderError(_PROVIDER_NAME, response.status_code, response.text)
        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError(
                _PROVIDER_NAME, response.status_code, response.text
            ) from exc
        return _candidate_text(data)


def _candidate_text(data: object) -> str:
    """Extract the text of the first candidate, or an empty string."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    candidate = candidates[0]
    if not isinstance(candidate, dict):
        return ""
    content = candidate.get("content")
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts")
    if not isinstance(parts, list):
        return ""
    return "".join(
        part["text"]
        for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    )
