"""Generate Images Use Case - Application Layer"""

import base64
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Union

from ...domain.entity.image import (
    GeneratedImageFile,
    GenerationRequest,
    GenerationResult,
    ImageRequest,
)
from ...domain.errors import GenerationError
from ...domain.repository.image_provider import ImageProvider
from ...domain.service.naming import batch_timestamp, image_filename
from ...domain.service.path_resolver import PathResolver
from ...infrastructure.storage.filesystem import ensure_directory, write_file

logger = logging.getLogger(__name__)


def decode_payload(payload: Union[str, bytes]) -> bytes:
    """base64 文本解码为字节, 原始字节直接返回"""
    if isinstance(payload, str):
        return base64.b64decode(payload)
    return bytes(payload)


class GenerateImagesUseCase:
    """生成图像并写入磁盘用例"""

    def __init__(
        self,
        image_provider: ImageProvider,
        path_resolver: PathResolver,
        model: str,
        desktop_path: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._provider = image_provider
        self._resolver = path_resolver
        self._model = model
        self._desktop_path = desktop_path
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def execute(self, request: GenerationRequest) -> GenerationResult:
        """执行生成图像

        Raises:
            GenerationError: 服务未返回图像集合, 或调用/写入过程中任何异常
        """
        try:
            return await self._generate(request)
        except GenerationError:
            raise
        except Exception as e:
            logger.error(f"Image generation failed: {e}")
            raise GenerationError(f"Failed to generate images: {e}") from e

    async def _generate(self, request: GenerationRequest) -> GenerationResult:
        # 1. 解析并创建输出目录
        output_dir = self._resolver.resolve_within(
            request.output_dir, request.sub_dir, request.category
        )
        await ensure_directory(output_dir)

        # 2. 调用图像服务
        response = await self._provider.generate_images(ImageRequest(
            prompt=request.prompt,
            model=self._model,
            num_images=request.number_of_images,
        ))
        if not response.images:
            raise GenerationError("No images were generated")

        # 3. 解码并命名, 整批共用一个时间戳
        timestamp = batch_timestamp(self._clock())
        pending: List[GeneratedImageFile] = []
        for position, image in enumerate(response.images, start=1):
            if not image.has_payload:
                logger.warning(f"Image {position} has no image data, skipping")
                continue
            filename = image_filename(request.prompt, timestamp, len(pending) + 1)
            pending.append(GeneratedImageFile(
                path=self._resolver.resolve_within(output_dir, filename),
                data=decode_payload(image.payload),
            ))

        # 4. 写入磁盘
        files = []
        for item in pending:
            await write_file(item.path, item.data)
            files.append(item.path)

        logger.info(f"Generated {len(files)} image(s) in {output_dir}")
        return GenerationResult(
            files=files,
            message=f"Successfully generated {len(files)} images",
            storage_dir=output_dir,
            desktop_path=self._desktop_path,
        )
