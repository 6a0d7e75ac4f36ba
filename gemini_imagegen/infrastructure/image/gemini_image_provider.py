"""Gemini Image Provider - Infrastructure Layer"""

import logging
from typing import Optional

from google import genai
from google.genai import types

from ...domain.repository.image_provider import ImageProvider
from ...domain.entity.image import GeneratedImage, ImageRequest, ImageResponse

logger = logging.getLogger(__name__)


class GeminiImageProvider(ImageProvider):
    """Gemini (Imagen) 图像生成提供商实现"""

    SUPPORTED_MODELS = [
        "imagen-3.0-generate-002",
        "imagen-4.0-generate-001",
        "imagen-4.0-fast-generate-001",
        "imagen-4.0-ultra-generate-001",
    ]

    def __init__(self, api_key: str, client: Optional[genai.Client] = None):
        """初始化 Gemini 图像提供商

        Args:
            api_key: API 密钥
            client: 预先构造的客户端 (可选, 测试用)
        """
        self._client = client or genai.Client(api_key=api_key)

    async def generate_images(self, request: ImageRequest) -> ImageResponse:
        """生成图像"""
        logger.info(f"Requesting {request.num_images} image(s) from {request.model}")
        response = await self._client.aio.models.generate_images(
            model=request.model,
            prompt=request.prompt,
            config=types.GenerateImagesConfig(
                number_of_images=request.num_images,
            ),
        )

        images = None
        if response.generated_images is not None:
            images = []
            for generated in response.generated_images:
                image = generated.image
                images.append(GeneratedImage(payload=image.image_bytes if image else None))

        return ImageResponse(
            request_id=request.id,
            images=images,
            model_used=request.model,
        )

    def supports_model(self, model: str) -> bool:
        """检查是否支持指定模型"""
        return model.startswith("imagen-") or model in self.SUPPORTED_MODELS
