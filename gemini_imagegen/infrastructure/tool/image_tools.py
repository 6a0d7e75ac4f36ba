"""Image Tools Implementation"""

from typing import Any, Dict

from ...application.usecase.create_image_html import CreateImageHtmlUseCase
from ...application.usecase.generate_images import GenerateImagesUseCase
from ...domain.entity.html import DEFAULT_SIZE, HtmlRenderRequest
from ...domain.entity.image import MAX_IMAGES, MIN_IMAGES, GenerationRequest
from ...domain.entity.tool import Tool
from ...domain.errors import GenerationError, RenderError

_TRUE_WORDS = ("true", "yes", "1")
_FALSE_WORDS = ("false", "no", "0")


def parse_flag(value: Any, name: str) -> bool:
    """解析布尔参数, 接受 JSON 布尔值和 "true"/"false" 字符串"""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


class GenerateImagesTool(Tool):
    """图像生成工具"""

    def __init__(self, use_case: GenerateImagesUseCase, storage_dir: str):
        self._use_case = use_case
        self._storage_dir = storage_dir

    @property
    def name(self) -> str:
        return "generate_images"

    @property
    def description(self) -> str:
        return "Generate images using Google Gemini AI and save them to local storage"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "prompt": {
                    "type": "string",
                    "description": "Text description of the image to generate",
                },
                "numberOfImages": {
                    "type": "number",
                    "description": f"Number of images to generate ({MIN_IMAGES}-{MAX_IMAGES})",
                    "default": MIN_IMAGES,
                    "minimum": MIN_IMAGES,
                    "maximum": MAX_IMAGES,
                },
                "category": {
                    "type": "string",
                    "description": "Category subfolder to save images in",
                    "default": "",
                },
                "outputDir": {
                    "type": "string",
                    "description": "Directory to save generated images",
                    "default": self._storage_dir,
                },
                "subDir": {
                    "type": "string",
                    "description": "Subdirectory within outputDir to save images",
                    "default": "",
                },
            },
            "required": ["prompt"],
        }

    async def execute(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        try:
            request = GenerationRequest(
                prompt=str(arguments.get("prompt") or ""),
                number_of_images=int(arguments.get("numberOfImages", MIN_IMAGES)),
                category=str(arguments.get("category") or ""),
                output_dir=arguments.get("outputDir") or None,
                sub_dir=str(arguments.get("subDir") or ""),
            )
        except (TypeError, ValueError) as e:
            raise GenerationError(f"Failed to generate images: {e}") from e

        result = await self._use_case.execute(request)
        return result.to_dict()


class CreateImageHtmlTool(Tool):
    """图像 HTML 渲染工具"""

    def __init__(
        self,
        use_case: CreateImageHtmlUseCase,
        width: int = DEFAULT_SIZE,
        height: int = DEFAULT_SIZE,
        gallery: bool = True,
        use_temp: bool = False,
    ):
        self._use_case = use_case
        self._width = width
        self._height = height
        self._gallery = gallery
        self._use_temp = use_temp

    @property
    def name(self) -> str:
        return "create_image_html"

    @property
    def description(self) -> str:
        return "Create HTML img tags or a styled gallery from image file paths"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "imagePaths": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Array of image file paths",
                },
                "width": {
                    "type": "number",
                    "description": "Image width in pixels",
                    "default": self._width,
                },
                "height": {
                    "type": "number",
                    "description": "Image height in pixels",
                    "default": self._height,
                },
                "gallery": {
                    "type": "boolean",
                    "description": "Render a styled gallery instead of bare img tags",
                    "default": self._gallery,
                },
                "useTemp": {
                    "type": "boolean",
                    "description": "Whether to copy images to a temp directory",
                    "default": self._use_temp,
                },
            },
            "required": ["imagePaths"],
        }

    async def execute(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        try:
            image_paths = arguments.get("imagePaths") or []
            if isinstance(image_paths, str):
                raise ValueError("imagePaths must be an array of strings")
            request = HtmlRenderRequest(
                image_paths=list(image_paths),
                width=int(arguments.get("width", self._width)),
                height=int(arguments.get("height", self._height)),
                gallery=parse_flag(arguments.get("gallery", self._gallery), "gallery"),
                use_temp=parse_flag(arguments.get("useTemp", self._use_temp), "useTemp"),
            )
        except (TypeError, ValueError) as e:
            raise RenderError(f"Failed to create HTML: {e}") from e

        result = await self._use_case.execute(request)
        return result.to_dict()
