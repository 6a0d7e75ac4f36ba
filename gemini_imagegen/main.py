"""Gemini Image Tools Main Entry Point"""

import argparse
import asyncio
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Mapping, Optional

from .application.usecase.create_image_html import CreateImageHtmlUseCase
from .application.usecase.execute_tool import ExecuteToolUseCase
from .application.usecase.generate_images import GenerateImagesUseCase
from .domain.entity.storage import StorageStrategy
from .domain.repository.image_provider import ImageProvider
from .domain.service.path_resolver import PathResolver
from .infrastructure.config.settings import ConfigError, Settings, load_settings
from .infrastructure.image.gemini_image_provider import GeminiImageProvider
from .infrastructure.image.mock_image_provider import MockImageProvider
from .infrastructure.storage.locations import discover_desktop, resolve_base_directory
from .infrastructure.tool.image_tools import CreateImageHtmlTool, GenerateImagesTool
from .infrastructure.tool.registry import InMemoryToolRegistry
from .rpc.handler import StdioHandler
from .rpc.tools import ToolMethods


def setup_logging(level: str = "INFO", log_format: str = "text") -> None:
    """配置日志系统 (输出到 stderr, stdout 用于 JSON-RPC)

    Args:
        level: 日志级别
        log_format: 日志格式 (json/text)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)

    if log_format == "json":
        # JSON 格式日志
        logging.basicConfig(
            level=log_level,
            format='{"time":"%(asctime)s","level":"%(levelname)s","name":"%(name)s","message":"%(message)s"}',
            datefmt="%Y-%m-%d %H:%M:%S",
            stream=sys.stderr,
        )
    else:
        # 文本格式日志
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            stream=sys.stderr,
        )


def create_image_provider(config: Settings) -> ImageProvider:
    """创建图像提供商实例, 未配置 API Key 时退回模拟提供商"""
    if config.gemini.api_key:
        provider = GeminiImageProvider(api_key=config.gemini.api_key)
        logging.info(f"Initialized Gemini image provider (model={config.gemini.model})")
    else:
        logging.warning("GEMINI_API_KEY not provided. Initializing Mock image provider.")
        provider = MockImageProvider()

    if not provider.supports_model(config.gemini.model):
        logging.warning(f"Model {config.gemini.model} is not a known image model, requests may fail")
    return provider


def create_tool_registry(
    config: Settings,
    image_provider: ImageProvider,
    environ: Optional[Mapping[str, str]] = None,
) -> InMemoryToolRegistry:
    """创建并初始化工具注册表"""
    desktop = None
    if config.storage.strategy is StorageStrategy.DESKTOP:
        desktop = discover_desktop(environ)

    base_dir = resolve_base_directory(
        config.storage.strategy,
        config.storage.app_folder,
        explicit_path=config.storage.path,
        environ=environ,
        desktop=desktop,
    )
    resolver = PathResolver(str(base_dir), container_prefixes=config.storage.container_prefixes)
    desktop_path = str(desktop) if desktop else None

    generate_use_case = GenerateImagesUseCase(
        image_provider=image_provider,
        path_resolver=resolver,
        model=config.gemini.model,
        desktop_path=desktop_path,
    )
    html_use_case = CreateImageHtmlUseCase(
        path_resolver=resolver,
        staging_root=os.path.join(tempfile.gettempdir(), config.storage.staging_folder),
    )

    registry = InMemoryToolRegistry()
    registry.register_tool(GenerateImagesTool(generate_use_case, storage_dir=resolver.base_dir))
    registry.register_tool(CreateImageHtmlTool(
        html_use_case,
        width=config.html.width,
        height=config.html.height,
        gallery=config.html.gallery,
        use_temp=config.html.use_temp,
    ))
    logging.info(
        f"Tool registry initialized with {len(registry.list_tools())} tools, "
        f"storage={config.storage.strategy.value} ({resolver.base_dir})"
    )
    return registry


def create_handler(config: Settings, registry: InMemoryToolRegistry) -> StdioHandler:
    """创建 JSON-RPC 处理器并注册方法"""
    tool_methods = ToolMethods(ExecuteToolUseCase(tool_registry=registry))
    handler = StdioHandler()

    async def handle_initialize(params):
        return {
            "name": config.server.name,
            "version": config.server.version,
            "capabilities": {
                "tools": tool_methods.get_capabilities(),
            }
        }

    async def handle_shutdown(params):
        logging.getLogger(__name__).info("Received shutdown, stopping stdio handler")
        handler.stop()
        return {}

    handler.register_method("initialize", handle_initialize)
    handler.register_method("shutdown", handle_shutdown)
    handler.register_method("tools/list", tool_methods.handle_list)
    handler.register_method("tools/call", tool_methods.handle_call)
    handler.register_method("ping", lambda p: {"pong": True})
    return handler


async def serve(config: Settings) -> None:
    """以 JSON-RPC 2.0 over stdio 模式运行"""
    logger = logging.getLogger(__name__)
    logger.info(f"Starting {config.server.name} {config.server.version} (JSON-RPC 2.0 over stdio)")

    registry = create_tool_registry(config, create_image_provider(config))
    handler = create_handler(config, registry)
    await handler.run()
    logger.info("Server exited")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gemini-imagegen",
        description="Image generation and HTML rendering tools over JSON-RPC stdio",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    """主函数"""
    args = parse_args(argv)

    # 1. 加载配置
    try:
        config = load_settings(args.config)
    except ConfigError as e:
        setup_logging()
        logging.error(f"Failed to load configuration: {e}")
        sys.exit(1)

    # 2. 配置日志
    setup_logging(args.log_level or config.logging.level, config.logging.format)

    # 3. 运行服务
    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        logging.info("Received keyboard interrupt")
    except Exception as e:
        logging.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
