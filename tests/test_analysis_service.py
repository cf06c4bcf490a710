"""Tests for the analysis service."""

import asyncio

import pytest

from diet_analyzer.domain.errors import ValidationError
from diet_analyzer.domain.providers import Provider
from diet_analyzer.domain.report import RawTextReport, Report
from diet_analyzer.services.analysis import (
    AnalysisOptions,
    AnalysisService,
    UploadedImage,
)
from diet_analyzer.services.dispatcher import ProviderDispatcher
from tests.conftest import JPEG_BYTES, PNG_BYTES, FakeVisionClient


def _service(
    dispatcher: ProviderDispatcher, max_image_bytes: int = 10 * 1024 * 1024
) -> AnalysisService:
    return AnalysisService(dispatcher=dispatcher, max_image_bytes=max_image_bytes)


def test_analyze_returns_normalized_report(
    dispatcher: ProviderDispatcher,
    vision_clients: dict[Provider, FakeVisionClient],
) -> None:
    service = _service(dispatcher)

    report = asyncio.run(
        service.analyze(
            UploadedImage(content=JPEG_BYTES, content_type="image/jpeg"),
            AnalysisOptions(model="doubao-vision"),
        )
    )

    assert isinstance(report, Report)
    assert [food.name for food in report.foods] == ["苹果", "面包"]
    assert report.foods[0].nutrients is not None
    assert report.foods[0].nutrients.carbs == pytest.approx(21.0)
    assert report.nutrition.total_carbs == "46.0g"
    assert report.nutrition.fiber == "3.6g"
    assert report.nutrition.net_carbs == "42.4g"
    assert report.nutrition.gl_level == "中"
    assert report.nutrition.calories == "214kcal"
    assert report.risk_level == "中"
    assert report.color_code == "yellow"
    assert report.recommendations == ["先吃蔬菜再吃主食"]
    call = vision_clients[Provider.DOUBAO].calls[0]
    assert call["model"] == "ep-20240101-abc"
    assert call["mime_type"] == "image/jpeg"


def test_analyze_sniffs_generic_content_type(
    dispatcher: ProviderDispatcher,
    vision_clients: dict[Provider, FakeVisionClient],
) -> None:
    service = _service(dispatcher)

    asyncio.run(
        service.analyze(
            UploadedImage(content=PNG_BYTES, content_type="application/octet-stream"),
            AnalysisOptions(model="gemini-2.0-flash"),
        )
    )

    assert vision_clients[Provider.GOOGLE].calls[0]["mime_type"] == "image/png"


def test_analyze_wraps_prose_answers(
    dispatcher: ProviderDispatcher,
    vision_clients: dict[Provider, FakeVisionClient],
) -> None:
    vision_clients[Provider.YI].text = "图片中是一碗米饭和青菜。"
    service = _service(dispatcher)

    report = asyncio.run(
        service.analyze(
            UploadedImage(content=PNG_BYTES, content_type="image/png"),
            AnalysisOptions(model="yi-vision"),
        )
    )

    assert report == RawTextReport(analysis="图片中是一碗米饭和青菜。")


@pytest.mark.parametrize(
    ("image", "message"),
    [
        (UploadedImage(content=b"", content_type="image/png"), "请提供图片文件"),
        (
            UploadedImage(content=b"GIF89a-body", content_type="image/gif"),
            "仅支持 JPG、PNG、WEBP 格式的图片",
        ),
        (
            UploadedImage(content=b"not an image", content_type=None),
            "仅支持 JPG、PNG、WEBP 格式的图片",
        ),
    ],
)
def test_validation_rejects_before_dispatch(
    dispatcher: ProviderDispatcher,
    vision_clients: dict[Provider, FakeVisionClient],
    image: UploadedImage,
    message: str,
) -> None:
    service = _service(dispatcher)

    with pytest.raises(ValidationError) as exc_info:
        asyncio.run(service.analyze(image, AnalysisOptions(model="qwen-vl-plus")))

    assert exc_info.value.message == message
    assert exc_info.value.status_code == 400
    assert not vision_clients[Provider.ALI].calls


def test_validation_rejects_oversized_images(
    dispatcher: ProviderDispatcher,
    vision_clients: dict[Provider, FakeVisionClient],
) -> None:
    service = _service(dispatcher, max_image_bytes=1024 * 1024)
    image = UploadedImage(
        content=PNG_BYTES + b"0" * (1024 * 1024), content_type="image/png"
    )

    with pytest.raises(ValidationError) as exc_info:
        asyncio.run(service.analyze(image, AnalysisOptions(model="qwen-vl-plus")))

    assert exc_info.value.message == "图片大小不能超过 1MB"
    assert not vision_clients[Provider.ALI].calls
