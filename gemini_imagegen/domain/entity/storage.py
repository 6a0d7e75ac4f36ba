"""Storage Entities - Domain Layer"""

import os
from enum import Enum


class StorageStrategy(str, Enum):
    """基础存储目录的选择策略"""

    DESKTOP = "desktop"
    WORKING_DIRECTORY = "working_directory"
    TEMPORARY_ROOT = "temporary_root"
    EXPLICIT = "explicit"

    @classmethod
    def parse(cls, value: str) -> "StorageStrategy":
        """从配置字符串解析策略 (忽略大小写与连字符)"""
        normalized = (value or "").strip().lower().replace("-", "_")
        for strategy in cls:
            if strategy.value == normalized:
                return strategy
        choices = ", ".join(s.value for s in cls)
        raise ValueError(f"Unknown storage strategy '{value}' (expected one of: {choices})")


class PathFlavor(str, Enum):
    """路径分隔符约定"""

    POSIX = "posix"
    WINDOWS = "windows"

    @classmethod
    def host(cls) -> "PathFlavor":
        return cls.WINDOWS if os.name == "nt" else cls.POSIX
