"""HTML Render Entities - Domain Layer"""

from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_SIZE = 512


@dataclass
class HtmlRenderRequest:
    """create_image_html 工具请求"""

    image_paths: List[str]
    width: int = DEFAULT_SIZE
    height: int = DEFAULT_SIZE
    gallery: bool = True
    use_temp: bool = False

    def __post_init__(self) -> None:
        """验证实体"""
        if not self.image_paths:
            raise ValueError("At least one image path is required")

        if any(not isinstance(p, str) or not p.strip() for p in self.image_paths):
            raise ValueError("Image paths must be non-empty strings")

        if self.width <= 0 or self.height <= 0:
            raise ValueError("Dimensions must be positive")


@dataclass
class HtmlRenderResult:
    """create_image_html 工具结果"""

    html: str
    message: str
    storage_location: str = ""
    absolute_paths: List[str] = field(default_factory=list)
    temp_dir: Optional[str] = None
    temp_paths: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        result = {
            "html": self.html,
            "message": self.message,
            "storageLocation": self.storage_location,
            "absolutePaths": list(self.absolute_paths),
        }
        if self.temp_dir is not None:
            result["tempDir"] = self.temp_dir
            result["tempPaths"] = list(self.temp_paths)
        return result
