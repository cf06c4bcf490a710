"""Errors surfaced to API callers."""


class DietAnalyzerError(Exception):
    """Base error carrying an HTTP status and a user-facing message."""

    status_code: int = 500

    def __init__(self, message: str, *, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(DietAnalyzerError):
    """Uploaded image is missing, of the wrong type, or too large."""

    status_code = 400


class ConfigurationError(DietAnalyzerError):
    """A credential required by the selected provider is missing."""

    status_code = 400

    def __init__(self, credential: str, provider: str) -> None:
        super().__init__(f"{provider} 未配置 {credential}")
        self.credential = credential
        self.provider = provider


class ProviderError(DietAnalyzerError):
    """The vision provider answered with a non-2xx status."""

    status_code = 500

    def __init__(
        self, provider: str, status_code: int | None, body: str = ""
    ) -> None:
        label = status_code if status_code is not None else "n/a"
        super().__init__(f"{provider} 调用失败 (status={label})", details=body)
        self.provider = provider
        self.provider_status = status_code
        self.body = body


class ProviderUnavailableError(ProviderError):
    """The provider could not be reached or timed out."""


class UnsupportedMediaError(DietAnalyzerError):
    """The endpoint rejected image input (text-only model or endpoint)."""

    status_code = 400

    def __init__(self, provider: str, body: str = "") -> None:
        super().__init__(
            f"{provider} 当前模型或端点不支持图片输入，请选择支持视觉的模型或自定义视觉端点",
            details=body,
        )
        self.provider = provider


class EmptyResponseError(DietAnalyzerError):
    """The provider returned a successful response without any text."""

    status_code = 500

    def __init__(self, provider: str) -> None:
        super().__init__(f"{provider} 模型未返回任何内容")
        self.provider = provider
