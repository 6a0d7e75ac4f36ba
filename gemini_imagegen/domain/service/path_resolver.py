"""Path Resolver Domain Service - Domain Layer

Caller-supplied paths arrive in many shapes: relative names, container mount
paths (``/app/images/x.png``), ``file://`` URLs, Windows paths with escaped
backslashes (``G:\\\\images\\\\x.png``). They are parsed into a
:class:`StructuredPath` (root kind, drive, segments) and every transformation
is a pure function over that value, so normalizing twice yields the same
result.
"""

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple

from ..entity.storage import PathFlavor

FILE_SCHEME = "file://"

_SEPARATORS = re.compile(r"[\\/]+")
_DRIVE = re.compile(r"^([A-Za-z]):(?=[\\/]|$)")
# file:///C:/... leaves a slash in front of the drive once the scheme is gone
_URL_DRIVE = re.compile(r"^[\\/]([A-Za-z]):(?=[\\/]|$)")


class RootKind(str, Enum):
    """路径根类型"""

    RELATIVE = "relative"
    POSIX = "posix"
    DRIVE = "drive"


@dataclass(frozen=True)
class StructuredPath:
    """结构化路径: 根类型 + 盘符 + 路径段"""

    root: RootKind
    segments: Tuple[str, ...] = ()
    drive: str = ""

    @property
    def is_relative(self) -> bool:
        return self.root is RootKind.RELATIVE

    def is_absolute_for(self, flavor: PathFlavor) -> bool:
        if flavor is PathFlavor.WINDOWS:
            return self.root is RootKind.DRIVE
        return self.root is RootKind.POSIX


def collapse_segments(parts: Iterable[str], rooted: bool) -> Tuple[str, ...]:
    """Trim segments, drop empty and ``.`` ones and resolve ``..`` lexically.

    A rooted path never climbs above its root; a relative path keeps
    leading ``..`` segments for the later join.
    """
    out = []
    for part in parts:
        part = part.strip()
        if part in ("", "."):
            continue
        if part == "..":
            if out and out[-1] != "..":
                out.pop()
            elif not rooted:
                out.append(part)
            continue
        out.append(part)
    return tuple(out)


def strip_file_scheme(text: str) -> str:
    """移除 file:// 前缀 (可重复出现)"""
    while text[: len(FILE_SCHEME)].lower() == FILE_SCHEME:
        text = text[len(FILE_SCHEME):]
    return text


def parse_path(raw: str) -> StructuredPath:
    """解析原始路径字符串

    Both separators are accepted regardless of host, so runs such as the
    doubled backslashes of an escaped Windows path collapse to one.
    """
    stripped = raw.strip()
    text = strip_file_scheme(stripped)

    if len(text) < len(stripped):
        match = _URL_DRIVE.match(text) or _DRIVE.match(text)
    else:
        match = _DRIVE.match(text)
    if match:
        rest = text[match.end():]
        return StructuredPath(
            root=RootKind.DRIVE,
            drive=f"{match.group(1).upper()}:",
            segments=collapse_segments(_SEPARATORS.split(rest), rooted=True),
        )

    if text[:1] in ("/", "\\"):
        return StructuredPath(
            root=RootKind.POSIX,
            segments=collapse_segments(_SEPARATORS.split(text), rooted=True),
        )

    return StructuredPath(
        root=RootKind.RELATIVE,
        segments=collapse_segments(_SEPARATORS.split(text), rooted=False),
    )


def join_path(base: StructuredPath, *parts: StructuredPath) -> StructuredPath:
    """将若干路径的段拼接到 base 之下 (忽略 parts 的根)"""
    segments = list(base.segments)
    for part in parts:
        segments.extend(part.segments)
    return replace(base, segments=collapse_segments(segments, rooted=not base.is_relative))


def render_path(path: StructuredPath, flavor: PathFlavor) -> str:
    """按宿主平台分隔符渲染路径"""
    if flavor is PathFlavor.WINDOWS:
        body = "\\".join(path.segments)
        if path.root is RootKind.DRIVE:
            return f"{path.drive}\\{body}"
        if path.root is RootKind.POSIX:
            return f"\\{body}"
        return body or "."

    body = "/".join(path.segments)
    if path.root is RootKind.POSIX:
        return f"/{body}"
    return body or "."


def is_within(path: StructuredPath, base: StructuredPath, flavor: PathFlavor) -> bool:
    """判断 path 是否位于 base 目录之内 (含 base 本身)"""
    if path.root is not base.root:
        return False

    def fold(value: str) -> str:
        return value.lower() if flavor is PathFlavor.WINDOWS else value

    if fold(path.drive) != fold(base.drive):
        return False
    size = len(base.segments)
    if len(path.segments) < size:
        return False
    return all(fold(a) == fold(b) for a, b in zip(path.segments[:size], base.segments))


def to_file_url(path: str) -> str:
    """渲染为可嵌入网页的 file:// URL (不做 URL 编码)"""
    return FILE_SCHEME + path.replace("\\", "/")


class PathResolver:
    """路径解析领域服务

    Anchors every caller-supplied path under a single base directory chosen
    by the configured storage strategy.
    """

    def __init__(
        self,
        base_dir: str,
        flavor: Optional[PathFlavor] = None,
        container_prefixes: Sequence[str] = ("/app/",),
    ):
        """初始化路径解析器

        Args:
            base_dir: 基础存储目录 (必须为绝对路径)
            flavor: 路径约定，默认取宿主平台
            container_prefixes: 需要剥离的容器挂载前缀
        """
        self._flavor = flavor or PathFlavor.host()
        self._base = parse_path(base_dir)
        if not self._base.is_absolute_for(self._flavor):
            raise ValueError(f"Base directory must be absolute: {base_dir!r}")
        parsed_prefixes = (parse_path(prefix) for prefix in container_prefixes if prefix)
        self._prefixes = [
            prefix for prefix in parsed_prefixes
            if prefix.root is RootKind.POSIX and prefix.segments
        ]

    @property
    def flavor(self) -> PathFlavor:
        return self._flavor

    @property
    def base_dir(self) -> str:
        return render_path(self._base, self._flavor)

    def normalize(self, raw: str) -> str:
        """规范化任意输入路径为绝对路径"""
        return render_path(self._resolve(parse_path(raw)), self._flavor)

    def resolve_within(self, directory: Optional[str], *parts: str) -> str:
        """解析目录并在其下追加子路径段

        Parts are always treated as relative to ``directory`` (an empty
        ``directory`` means the base directory).
        """
        anchor = self._resolve(parse_path(directory)) if directory else self._base
        children = [parse_path(part) for part in parts if part]
        return render_path(join_path(anchor, *children), self._flavor)

    def _resolve(self, parsed: StructuredPath) -> StructuredPath:
        resolved = self._anchor(parsed)
        if is_within(resolved, self._base, self._flavor):
            return resolved
        # Relative input may collapse onto a mount path once anchored
        probe = parsed if parsed.root is RootKind.POSIX else resolved
        stripped = self._strip_container_prefix(probe)
        if stripped is not None:
            return self._anchor(stripped)
        return resolved

    def _anchor(self, parsed: StructuredPath) -> StructuredPath:
        if parsed.is_absolute_for(self._flavor):
            return parsed
        if self._flavor is PathFlavor.WINDOWS and parsed.root is RootKind.POSIX:
            # Rooted without a drive: take the base directory's drive
            return replace(parsed, root=RootKind.DRIVE, drive=self._base.drive)
        # Relative, or a drive path on a POSIX host: re-root under the base
        return join_path(self._base, parsed)

    def _strip_container_prefix(self, parsed: StructuredPath) -> Optional[StructuredPath]:
        if parsed.root is not RootKind.POSIX:
            return None
        for prefix in self._prefixes:
            size = len(prefix.segments)
            if parsed.segments[:size] == prefix.segments:
                return StructuredPath(root=RootKind.RELATIVE, segments=parsed.segments[size:])
        return None
