"""Configuration Management - Infrastructure Layer"""

import os
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, field
import yaml

from ...domain.entity.storage import StorageStrategy


class ConfigError(Exception):
    """配置错误"""
    pass


@dataclass
class ServerConfig:
    """服务器配置"""
    name: str = "gemini-image-gen"
    version: str = "1.1.0"


@dataclass
class GeminiConfig:
    """Gemini 图像服务配置"""
    api_key: str = ""
    model: str = "imagen-3.0-generate-002"


@dataclass
class StorageConfig:
    """存储配置"""
    strategy: StorageStrategy = StorageStrategy.DESKTOP
    path: str = ""
    app_folder: str = "gemini-images"
    staging_folder: str = "mcp-image-gen"
    container_prefixes: List[str] = field(default_factory=lambda: ["/app/"])

    def __post_init__(self) -> None:
        if self.strategy is StorageStrategy.EXPLICIT and not self.path:
            raise ConfigError("storage.path is required when storage.strategy is 'explicit'")


@dataclass
class HtmlConfig:
    """HTML 渲染默认值"""
    width: int = 512
    height: int = 512
    gallery: bool = True
    use_temp: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigError("html.width and html.height must be positive")


@dataclass
class LoggingConfig:
    """日志配置"""
    level: str = "INFO"
    format: str = "text"


@dataclass
class Settings:
    """应用配置"""
    server: ServerConfig = field(default_factory=ServerConfig)
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    html: HtmlConfig = field(default_factory=HtmlConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """加载配置

        Args:
            config_path: 配置文件路径（可选）

        Returns:
            配置对象

        Raises:
            ConfigError: 配置无效
        """
        # 1. 确定配置文件路径
        if config_path is None:
            # 默认路径：项目根目录/config/config.yaml
            project_root = Path(__file__).parent.parent.parent.parent
            config_path = project_root / "config" / "config.yaml"

        # 2. 加载 YAML 配置
        config_data = {}
        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                try:
                    config_data = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
            if not isinstance(config_data, dict):
                raise ConfigError(f"Expected a mapping at the top of {config_path}")

        # 3. 解析服务器配置
        server_data = config_data.get("server") or {}
        server = ServerConfig(
            name=server_data.get("name", "gemini-image-gen"),
            version=str(server_data.get("version", "1.1.0")),
        )

        # 4. 解析 Gemini 配置（API Key 支持环境变量覆盖）
        gemini_data = config_data.get("gemini") or {}
        gemini = GeminiConfig(
            api_key=os.getenv("GEMINI_API_KEY", gemini_data.get("api_key", "")),
            model=gemini_data.get("model", "imagen-3.0-generate-002"),
        )

        # 5. 解析存储配置
        storage_data = config_data.get("storage") or {}
        strategy_name = os.getenv(
            "IMAGEGEN_STORAGE_STRATEGY", storage_data.get("strategy", "desktop")
        )
        try:
            strategy = StorageStrategy.parse(strategy_name)
        except ValueError as e:
            raise ConfigError(str(e)) from e

        prefixes = storage_data.get("container_prefixes", ["/app/"])
        storage = StorageConfig(
            strategy=strategy,
            path=os.getenv("IMAGEGEN_STORAGE_PATH", storage_data.get("path", "")) or "",
            app_folder=storage_data.get("app_folder", "gemini-images"),
            staging_folder=storage_data.get("staging_folder", "mcp-image-gen"),
            container_prefixes=list(prefixes or []),
        )

        # 6. 解析 HTML 默认值
        html_data = config_data.get("html") or {}
        html = HtmlConfig(
            width=int(html_data.get("width", 512)),
            height=int(html_data.get("height", 512)),
            gallery=bool(html_data.get("gallery", True)),
            use_temp=bool(html_data.get("use_temp", False)),
        )

        # 7. 解析日志配置
        logging_data = config_data.get("logging") or {}
        logging_config = LoggingConfig(
            level=os.getenv("LOG_LEVEL", logging_data.get("level", "INFO")),
            format=logging_data.get("format", "text"),
        )

        return cls(
            server=server,
            gemini=gemini,
            storage=storage,
            html=html,
            logging=logging_config,
        )


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """加载配置的便捷函数

    Args:
        config_path: 配置文件路径（可选）

    Returns:
        配置对象
    """
    return Settings.load(config_path)
