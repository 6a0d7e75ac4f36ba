"""Image File Naming - Domain Layer"""

import re
from datetime import datetime, timezone
from typing import Optional

PROMPT_SLUG_LENGTH = 30
IMAGE_EXTENSION = ".png"

_NON_SLUG = re.compile(r"[^a-z0-9]")


def sanitize_prompt(prompt: str) -> str:
    """提示词转文件名片段: 小写, 非 [a-z0-9] 替换为 '-', 截断为 30 字符"""
    return _NON_SLUG.sub("-", prompt.lower())[:PROMPT_SLUG_LENGTH]


def batch_timestamp(now: Optional[datetime] = None) -> str:
    """批次时间戳, 例如 2024-05-01T10-20-30-123Z"""
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    iso = moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"
    return iso.replace(":", "-").replace(".", "-")


def image_filename(prompt: str, timestamp: str, index: int) -> str:
    """生成图像文件名 (index 从 1 开始)"""
    return f"{sanitize_prompt(prompt)}-{timestamp}-{index}{IMAGE_EXTENSION}"
