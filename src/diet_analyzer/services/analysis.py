"""Meal photo analysis: validation, provider call, normalization."""

import logging
from dataclasses import dataclass

from diet_analyzer.domain.errors import ValidationError
from diet_analyzer.domain.providers import VisionRequest
from diet_analyzer.domain.report import RawTextReport, Report
from diet_analyzer.services.dispatcher import ProviderDispatcher
from diet_analyzer.services.images import ALLOWED_MIME_TYPES, resolve_mime_type
from diet_analyzer.services.normalizer import normalize
from diet_analyzer.services.parsing import parse_response

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedImage:
    """Image bytes as received from the client."""

    content: bytes
    content_type: str | None = None


@dataclass(frozen=True)
class AnalysisOptions:
    """Model choice and optional per-request provider overrides."""

    model: str
    api_key: str | None = None
    base_url: str | None = None
    endpoint: str | None = None


@dataclass
class AnalysisService:
    """Runs one photo through a provider and returns a normalized report."""

    dispatcher: ProviderDispatcher
    max_image_bytes: int

    async def analyze(
        self, image: UploadedImage, options: AnalysisOptions
    ) -> Report | RawTextReport:
        """Analyze a meal photo with the selected model."""
        mime_type = self.validate_image(image)
        raw_text = await self.dispatcher.dispatch(
            VisionRequest(
                model=options.model,
                image_bytes=image.content,
                mime_type=mime_type,
                api_key=options.api_key,
                base_url=options.base_url,
                endpoint=options.endpoint,
            )
        )
        report = normalize(parse_response(raw_text))
        if isinstance(report, RawTextReport):
            _logger.info("Model %s answered without usable JSON", options.model)
        return report

    def validate_image(self, image: UploadedImage) -> str:
        """Return the image MIME type, rejecting empty, unknown or large files."""
        if not image.content:
            raise ValidationError("请提供图片文件")
        mime_type = resolve_mime_type(image.content_type, image.content)
        if mime_type not in ALLOWED_MIME_TYPES:
            raise ValidationError("仅支持 JPG、PNG、WEBP 格式的图片")
        if len(image.content) > self.max_image_bytes:
            limit_mb = self.max_image_bytes // (1024 * 1024)
            raise ValidationError(f"图片大小不能超过 {limit_mb}MB")
        return mime_type
