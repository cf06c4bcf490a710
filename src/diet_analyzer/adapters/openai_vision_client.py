"""OpenAI-compatible chat completions client for vision analysis.

Qwen (DashScope compatible mode), DeepSeek, Yi, Zhipu and Doubao (Ark) all
accept the chat completions request shape with an ``image_url`` content part.
"""

from collections.abc import Callable
from dataclasses import dataclass

import httpx
from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from diet_analyzer.domain.errors import ProviderError, ProviderUnavailableError
from diet_analyzer.domain.providers import ProviderCredentials, ProviderProfile
from diet_analyzer.services.dispatcher import VisionClient
from diet_analyzer.services.images import to_base64, to_data_url


@dataclass
class OpenAIVisionClient(VisionClient):
    """Vision client backed by an OpenAI-compatible chat completions API."""

    profile: ProviderProfile
    client_factory: Callable[[ProviderCredentials], AsyncOpenAI]

    @classmethod
    def create(
        cls,
        profile: ProviderProfile,
        http_client: httpx.AsyncClient,
        timeout: float,
    ) -> "OpenAIVisionClient":
        """Create a client building per-call SDK instances on a shared session.

        SDK retries are disabled; the dispatcher decides what to retry.
        """

        def factory(credentials: ProviderCredentials) -> AsyncOpenAI:
            return AsyncOpenAI(
                api_key=credentials.api_key,
                base_url=credentials.base_url,
                http_client=http_client,
                timeout=timeout,
                max_retries=0,
            )

        return cls(profile=profile, client_factory=factory)

    async def complete(
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
        credentials: ProviderCredentials,
    ) -> str:
        """Send one user message with the prompt and the image."""
        if self.profile.image_as_data_url:
            image_url = to_data_url(image_bytes, mime_type)
        else:
            image_url = to_base64(image_bytes)
        client = self.client_factory(credentials)
        try:
            completion = await client.chat.completions.create(
                model=model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": prompt},
                            {"type": "image_url", "image_url": {"url": image_url}},
                        ],
                    }
                ],
                stream=False,
            )
        except APIStatusError as exc:
            raise ProviderError(
                self.profile.display_name, exc.status_code, exc.response.text
            ) from exc
        except APIConnectionError as exc:
            raise ProviderUnavailableError(
                self.profile.display_name, None, str(exc)
            ) from exc
        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""
