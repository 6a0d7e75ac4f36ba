from ...domain.repository.image_provider import ImageProvider
from ...domain.entity.image import GeneratedImage, ImageRequest, ImageResponse

# 1x1 transparent PNG
PLACEHOLDER_PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


class MockImageProvider(ImageProvider):
    """模拟图像提供商，未配置 API Key 时使用"""

    async def generate_images(self, request: ImageRequest) -> ImageResponse:
        """返回 base64 编码的占位 PNG"""
        return ImageResponse(
            request_id=request.id,
            images=[GeneratedImage(payload=PLACEHOLDER_PNG_BASE64) for _ in range(request.num_images)],
            model_used="mock-image-model",
        )

    def supports_model(self, model: str) -> bool:
        return True
