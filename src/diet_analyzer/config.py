"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEBUG_ENVIRONMENTS = frozenset({"local", "development"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Provider keys are optional here; a request for a provider without a key
    fails with a configuration error naming the missing variable.
    """

    google_api_key: str | None = None
    google_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    dashscope_api_key: str | None = None
    dashscope_base_url: str = "https://dashscope.aliyuncs.com/compatible-mode/v1"
    deepseek_api_key: str | None = None
    deepseek_base_url: str = "https://api.deepseek.com"
    yi_api_key: str | None = None
    yi_base_url: str = "https://api.lingyiwanwu.com/v1"
    zhipu_api_key: str | None = None
    zhipu_base_url: str = "https://open.bigmodel.cn/api/paas/v4"
    ark_api_key: str | None = None
    ark_base_url: str = "https://ark.cn-beijing.volces.com/api/v3"
    doubao_endpoint_id: str | None = None
    default_model: str = "doubao-vision"
    request_timeout_seconds: float = 60.0
    provider_retry_attempts: int = 1
    provider_retry_delay_seconds: float = 0.5
    max_image_bytes: int = 10 * 1024 * 1024
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def debug(self) -> bool:
        """Return true when error details may be shown to callers."""
        return self.environment in DEBUG_ENVIRONMENTS
