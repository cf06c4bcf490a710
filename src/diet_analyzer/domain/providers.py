"""Vision-LLM providers and the credentials needed to call them."""

from dataclasses import dataclass
from enum import StrEnum


class Provider(StrEnum):
    """Supported vision-LLM vendors."""

    GOOGLE = "google"
    ALI = "ali"
    DEEPSEEK = "deepseek"
    YI = "yi"
    ZHIPU = "zhipu"
    DOUBAO = "doubao"


@dataclass(frozen=True)
class ProviderProfile:
    """Static facts about a provider's API."""

    provider: Provider
    display_name: str
    api_key_setting: str
    base_url_setting: str
    image_as_data_url: bool = True
    model_aliases: tuple[tuple[str, str], ...] = ()

    @property
    def api_key_env(self) -> str:
        return self.api_key_setting.upper()

    def upstream_model(self, model: str) -> str:
        """Translate a catalog model id into the id the API expects."""
        return dict(self.model_aliases).get(model, model)


PROFILES: dict[Provider, ProviderProfile] = {
    Provider.GOOGLE: ProviderProfile(
        provider=Provider.GOOGLE,
        display_name="Google Gemini",
        api_key_setting="google_api_key",
        base_url_setting="google_base_url",
    ),
    Provider.ALI: ProviderProfile(
        provider=Provider.ALI,
        display_name="阿里通义千问",
        api_key_setting="dashscope_api_key",
        base_url_setting="dashscope_base_url",
    ),
    Provider.DEEPSEEK: ProviderProfile(
        provider=Provider.DEEPSEEK,
        display_name="DeepSeek",
        api_key_setting="deepseek_api_key",
        base_url_setting="deepseek_base_url",
        model_aliases=(("deepseek-vl", "deepseek-chat"),),
    ),
    Provider.YI: ProviderProfile(
        provider=Provider.YI,
        display_name="零一万物",
        api_key_setting="yi_api_key",
        base_url_setting="yi_base_url",
    ),
    Provider.ZHIPU: ProviderProfile(
        provider=Provider.ZHIPU,
        display_name="智谱AI",
        api_key_setting="zhipu_api_key",
        base_url_setting="zhipu_base_url",
        image_as_data_url=False,
    ),
    Provider.DOUBAO: ProviderProfile(
        provider=Provider.DOUBAO,
        display_name="豆包/火山引擎",
        api_key_setting="ark_api_key",
        base_url_setting="ark_base_url",
    ),
}

_PREFIXES: tuple[tuple[str, Provider], ...] = (
    ("gemini", Provider.GOOGLE),
    ("qwen", Provider.ALI),
    ("deepseek", Provider.DEEPSEEK),
    ("yi", Provider.YI),
    ("glm", Provider.ZHIPU),
    ("doubao", Provider.DOUBAO),
)


def resolve_provider(model: str) -> Provider:
    """Pick the provider by model id prefix; unknown ids go to Google."""
    lowered = model.strip().lower()
    for prefix, provider in _PREFIXES:
        if lowered.startswith(prefix):
            return provider
    return Provider.GOOGLE


@dataclass(frozen=True)
class ProviderCredentials:
    """Resolved key, base URL and (Doubao only) endpoint id for one call."""

    api_key: str
    base_url: str
    endpoint: str | None = None


@dataclass(frozen=True)
class VisionRequest:
    """Everything needed for a single provider call."""

    model: str
    image_bytes: bytes
    mime_type: str
    api_key: str | None = None
    base_url: str | None = None
    endpoint: str | None = None
