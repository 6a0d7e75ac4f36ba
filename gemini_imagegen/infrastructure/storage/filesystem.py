"""Filesystem Operations - Infrastructure Layer"""

import asyncio
import logging
import os
import re
import shutil
from typing import List, Sequence, Set, Tuple

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\\/]")


async def ensure_directory(path: str) -> None:
    """递归创建目录, 已存在不报错"""
    await asyncio.to_thread(os.makedirs, path, exist_ok=True)


async def write_file(path: str, data: bytes) -> None:
    """写入二进制文件"""

    def _write() -> None:
        with open(path, "wb") as f:
            f.write(data)

    await asyncio.to_thread(_write)
    logger.debug(f"Wrote {len(data)} bytes to {path}")


def file_exists(path: str) -> bool:
    return os.path.isfile(path)


def distinct_names(sources: Sequence[str]) -> List[str]:
    """为每个源文件生成互不相同的目标文件名

    Repeated basenames get a numeric suffix: ``a.png``, ``a-2.png``, ...
    """
    used: Set[str] = set()
    names = []
    for source in sources:
        name = _SEPARATORS.split(source)[-1] or "image"
        stem, ext = os.path.splitext(name)
        candidate, count = name, 1
        while candidate.lower() in used:
            count += 1
            candidate = f"{stem}-{count}{ext}"
        used.add(candidate.lower())
        names.append(candidate)
    return names


async def copy_files(pairs: Sequence[Tuple[str, str]]) -> None:
    """并发复制 (source, destination) 对, 每个目标互不相同"""
    await asyncio.gather(
        *(asyncio.to_thread(shutil.copy2, source, destination) for source, destination in pairs)
    )
