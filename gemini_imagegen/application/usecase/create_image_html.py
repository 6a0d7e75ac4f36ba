"""Create Image HTML Use Case - Application Layer"""

import logging
import os
import tempfile
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from ...domain.entity.html import HtmlRenderRequest, HtmlRenderResult
from ...domain.errors import RenderError
from ...domain.service.html_renderer import render_gallery, render_images
from ...domain.service.naming import batch_timestamp
from ...domain.service.path_resolver import PathResolver, to_file_url
from ...infrastructure.storage.filesystem import (
    copy_files,
    distinct_names,
    ensure_directory,
    file_exists,
)

logger = logging.getLogger(__name__)


class CreateImageHtmlUseCase:
    """图像路径渲染为 HTML 用例"""

    def __init__(
        self,
        path_resolver: PathResolver,
        staging_root: str,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """初始化用例

        Args:
            path_resolver: 路径解析器
            staging_root: 临时暂存根目录 (每次调用在其下新建带时间戳的子目录)
            clock: 时间源 (测试用)
        """
        self._resolver = path_resolver
        self._staging_root = staging_root
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def execute(self, request: HtmlRenderRequest) -> HtmlRenderResult:
        """执行渲染

        Raises:
            RenderError: 路径解析、暂存复制或拼装过程中任何异常
        """
        try:
            return await self._render(request)
        except RenderError:
            raise
        except Exception as e:
            logger.error(f"HTML rendering failed: {e}")
            raise RenderError(f"Failed to create HTML: {e}") from e

    async def _render(self, request: HtmlRenderRequest) -> HtmlRenderResult:
        resolved = [self._resolver.normalize(path) for path in request.image_paths]
        present = {}
        for path in resolved:
            present[path] = file_exists(path)
            if not present[path]:
                logger.warning(f"Image file not found, rendering anyway: {path}")

        temp_dir = None
        temp_paths: List[str] = []
        to_render = resolved
        if request.use_temp:
            temp_dir = await self._create_staging_dir()
            staged = await self._stage([p for p in resolved if present[p]], temp_dir)
            temp_paths = list(staged.values())
            to_render = [staged.get(path, path) for path in resolved]

        sources = [to_file_url(self._resolver.normalize(path)) for path in to_render]
        if request.gallery:
            html = render_gallery(sources, request.width, request.height)
        else:
            html = render_images(sources, request.width, request.height)

        kind = "gallery" if request.gallery else "tags"
        return HtmlRenderResult(
            html=html,
            message=f"Created HTML {kind} for {len(request.image_paths)} images",
            storage_location=temp_dir or self._resolver.base_dir,
            absolute_paths=resolved,
            temp_dir=temp_dir,
            temp_paths=temp_paths,
        )

    async def _create_staging_dir(self) -> str:
        await ensure_directory(self._staging_root)
        prefix = batch_timestamp(self._clock()) + "-"
        return tempfile.mkdtemp(prefix=prefix, dir=self._staging_root)

    async def _stage(self, sources: List[str], temp_dir: str) -> Dict[str, str]:
        """复制到暂存目录, 返回 {源路径: 暂存路径}"""
        unique = list(dict.fromkeys(sources))
        names = distinct_names(unique)
        pairs = [(source, os.path.join(temp_dir, name)) for source, name in zip(unique, names)]
        await copy_files(pairs)
        logger.info(f"Staged {len(pairs)} image(s) in {temp_dir}")
        return dict(pairs)
