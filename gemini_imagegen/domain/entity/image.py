"""Image Entities - Domain Layer"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Union
from uuid import uuid4

MIN_IMAGES = 1
MAX_IMAGES = 4


@dataclass
class ImageRequest:
    """图像生成请求实体"""

    id: str = field(default_factory=lambda: str(uuid4()))
    prompt: str = ""
    model: str = "imagen-3.0-generate-002"
    num_images: int = 1
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        """验证实体"""
        if not self.prompt:
            raise ValueError("Prompt cannot be empty")

        if self.num_images <= 0:
            raise ValueError("Number of images must be positive")


@dataclass
class GeneratedImage:
    """单张生成结果

    payload is either base64 text (transport encoding) or raw bytes, or
    None when the service returned an entry without image data.
    """

    payload: Optional[Union[str, bytes]] = None

    @property
    def has_payload(self) -> bool:
        return bool(self.payload)


@dataclass
class ImageResponse:
    """图像生成响应实体

    images is None when the service reported no image collection at all.
    """

    id: str = field(default_factory=lambda: str(uuid4()))
    request_id: str = ""
    images: Optional[List[GeneratedImage]] = None
    model_used: str = ""
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        if not self.request_id:
            raise ValueError("Request ID cannot be empty")


@dataclass
class GenerationRequest:
    """generate_images 工具请求

    The location qualifier resolves to one directory:
    output_dir (or the storage base) / sub_dir / category.
    """

    prompt: str
    number_of_images: int = MIN_IMAGES
    category: str = ""
    output_dir: Optional[str] = None
    sub_dir: str = ""

    def __post_init__(self) -> None:
        if not self.prompt or not self.prompt.strip():
            raise ValueError("Prompt cannot be empty")


@dataclass
class GeneratedImageFile:
    """已解码、待写入的图像文件"""

    path: str
    data: bytes


@dataclass
class GenerationResult:
    """generate_images 工具结果"""

    files: List[str]
    message: str
    storage_dir: str
    desktop_path: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.files)

    def to_dict(self) -> dict:
        result = {
            "message": self.message,
            "files": list(self.files),
            "storageDir": self.storage_dir,
        }
        if self.desktop_path:
            result["desktopPath"] = self.desktop_path
        return result
