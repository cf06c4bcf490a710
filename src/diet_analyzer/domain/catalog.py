"""Catalog of selectable vision models."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class ModelInfo:
    """A model offered to clients."""

    id: str
    name: str
    description: str
    provider: str
    max_image_size: str = "10MB"
    status: Literal["available", "unavailable"] = "available"

    def to_payload(self) -> dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "provider": self.provider,
            "maxImageSize": self.max_image_size,
            "status": self.status,
        }


MODEL_CATALOG: tuple[ModelInfo, ...] = (
    ModelInfo(
        id="gemini-pro-vision",
        name="Google Gemini Pro Vision",
        description="Google视觉模型，适合食物识别和营养分析",
        provider="Google",
    ),
    ModelInfo(
        id="gemini-2.0-flash",
        name="Gemini 2.0 Flash",
        description="快速响应模型，平衡速度和准确性",
        provider="Google",
    ),
    ModelInfo(
        id="qwen-vl-plus",
        name="Qwen-VL-Plus",
        description="阿里通义千问视觉模型，支持图片多模态理解",
        provider="Ali",
    ),
    ModelInfo(
        id="deepseek-vl",
        name="DeepSeek-V3 (Chat)",
        description="DeepSeek官方API (纯文本) / 自定义端点 (支持VL)",
        provider="DeepSeek",
    ),
    ModelInfo(
        id="yi-vision",
        name="Yi-Vision (零一万物)",
        description="零一万物视觉模型，中文理解能力强",
        provider="Yi",
    ),
    ModelInfo(
        id="glm-4v",
        name="GLM-4V (智谱AI)",
        description="智谱AI视觉模型，擅长中文识别",
        provider="Zhipu",
    ),
    ModelInfo(
        id="doubao-vision",
        name="Doubao Vision (豆包/火山引擎)",
        description="字节跳动豆包大模型，视觉理解能力出色",
        provider="Doubao",
    ),
)
