"""Storage Locations - Infrastructure Layer

Desktop discovery is an ordered list of probes. Each probe returns a path,
returns None to pass, or raises; the chain ends at the current working
directory so discovery itself never fails.
"""

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Callable, List, Mapping, Optional

from ...domain.entity.storage import StorageStrategy

logger = logging.getLogger(__name__)

DESKTOP_FOLDER = "Desktop"
USER_DIRS_FILE = "user-dirs.dirs"

_DESKTOP_ENTRY = re.compile(r'^\s*XDG_DESKTOP_DIR\s*=\s*"?([^"\n]*)"?\s*$', re.MULTILINE)

Probe = Callable[[], Optional[Path]]


def _profile_variable() -> str:
    return "USERPROFILE" if os.name == "nt" else "HOME"


def _home_directory(environ: Mapping[str, str]) -> Path:
    profile = environ.get(_profile_variable())
    if profile:
        return Path(profile)
    return Path.home()


def read_user_dirs_desktop(environ: Mapping[str, str]) -> Optional[Path]:
    """从 XDG user-dirs.dirs 读取桌面目录

    Returns None when the file is absent. Read or parse failures raise so
    the caller falls back to the next probe.
    """
    home = _home_directory(environ)
    config_home = environ.get("XDG_CONFIG_HOME") or str(home / ".config")
    user_dirs = Path(config_home) / USER_DIRS_FILE
    if not user_dirs.is_file():
        return None

    match = _DESKTOP_ENTRY.search(user_dirs.read_text(encoding="utf-8"))
    if match is None or not match.group(1).strip():
        raise ValueError(f"No XDG_DESKTOP_DIR entry in {user_dirs}")

    value = match.group(1).strip().replace("${HOME}", str(home)).replace("$HOME", str(home))
    desktop = Path(value)
    if not desktop.is_absolute():
        desktop = home / desktop
    return desktop


def desktop_probes(environ: Optional[Mapping[str, str]] = None) -> List[Probe]:
    """按优先级排列的桌面目录探测函数"""
    env = os.environ if environ is None else environ
    probes: List[Probe] = []

    if os.name != "nt":
        probes.append(lambda: read_user_dirs_desktop(env))

    def from_profile() -> Optional[Path]:
        profile = env.get(_profile_variable())
        return Path(profile) / DESKTOP_FOLDER if profile else None

    def from_home() -> Optional[Path]:
        return Path.home() / DESKTOP_FOLDER

    probes.append(from_profile)
    probes.append(from_home)
    return probes


def discover_desktop(environ: Optional[Mapping[str, str]] = None) -> Path:
    """探测用户桌面目录, 全部失败时返回当前工作目录"""
    for probe in desktop_probes(environ):
        try:
            found = probe()
        except Exception as e:
            logger.debug(f"Desktop probe failed: {e}")
            continue
        if found is not None:
            return found

    logger.warning("Could not determine desktop directory, using working directory")
    return Path.cwd()


def resolve_base_directory(
    strategy: StorageStrategy,
    app_folder: str,
    explicit_path: str = "",
    environ: Optional[Mapping[str, str]] = None,
    desktop: Optional[Path] = None,
) -> Path:
    """根据存储策略确定基础目录

    Args:
        strategy: 存储策略
        app_folder: 桌面/工作目录/临时目录下的应用子目录
        explicit_path: explicit 策略使用的目录
        environ: 环境变量 (默认 os.environ)
        desktop: 已探测到的桌面目录 (为空时重新探测)

    Returns:
        绝对路径
    """
    if strategy is StorageStrategy.EXPLICIT:
        if not explicit_path:
            raise ValueError("Explicit storage strategy requires a storage path")
        path = Path(explicit_path).expanduser()
        return path if path.is_absolute() else Path.cwd() / path

    if strategy is StorageStrategy.DESKTOP:
        root = desktop or discover_desktop(environ)
    elif strategy is StorageStrategy.WORKING_DIRECTORY:
        root = Path.cwd()
    else:
        root = Path(tempfile.gettempdir())

    return root / app_folder if app_folder else root
