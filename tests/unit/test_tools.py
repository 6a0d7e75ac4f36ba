import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from gemini_imagegen import main
from gemini_imagegen.application.usecase.execute_tool import ExecuteToolUseCase
from gemini_imagegen.domain.entity.storage import StorageStrategy
from gemini_imagegen.domain.entity.tool import ToolCall
from gemini_imagegen.domain.errors import (
    OPERATION_FAILED,
    TOOL_NOT_FOUND,
    GenerationError,
    RenderError,
    ToolNotFoundError,
)
from gemini_imagegen.infrastructure.config.settings import Settings, StorageConfig
from gemini_imagegen.infrastructure.image.mock_image_provider import MockImageProvider
from gemini_imagegen.infrastructure.storage import locations
from gemini_imagegen.main import create_handler, create_tool_registry
from gemini_imagegen.rpc.handler import METHOD_NOT_FOUND, PARSE_ERROR


@pytest.fixture
def settings(tmp_path):
    return Settings(storage=StorageConfig(
        strategy=StorageStrategy.EXPLICIT,
        path=str(tmp_path / "images"),
    ))


@pytest.fixture
def registry(settings):
    return create_tool_registry(settings, MockImageProvider())


def test_tool_catalog(registry):
    use_case = ExecuteToolUseCase(tool_registry=registry)
    tools = use_case.list_tools()

    assert [t["name"] for t in tools] == ["generate_images", "create_image_html"]
    generate, html = tools
    assert generate["inputSchema"]["required"] == ["prompt"]
    assert generate["inputSchema"]["properties"]["numberOfImages"]["maximum"] == 4
    assert html["inputSchema"]["required"] == ["imagePaths"]
    assert html["inputSchema"]["properties"]["width"]["default"] == 512
    assert html["inputSchema"]["properties"]["gallery"]["default"] is True


@pytest.mark.asyncio
async def test_unknown_tool_has_no_side_effects(tmp_path):
    provider = MagicMock()
    provider.generate_images = AsyncMock()
    settings = Settings(storage=StorageConfig(
        strategy=StorageStrategy.EXPLICIT, path=str(tmp_path / "images")
    ))
    use_case = ExecuteToolUseCase(tool_registry=create_tool_registry(settings, provider))

    with pytest.raises(ToolNotFoundError) as exc_info:
        await use_case.execute(ToolCall(name="paint_picture", arguments={"prompt": "fox"}))

    assert exc_info.value.code == TOOL_NOT_FOUND
    provider.generate_images.assert_not_called()
    assert not (tmp_path / "images").exists()


@pytest.mark.asyncio
async def test_generate_images_tool(registry, tmp_path):
    tool = registry.get_tool("generate_images")

    result = await tool.execute({"prompt": "a red fox", "numberOfImages": 2})

    assert len(result["files"]) == 2
    assert result["message"] == "Successfully generated 2 images"
    assert result["storageDir"] == str(tmp_path / "images")
    assert "desktopPath" not in result
    for path in result["files"]:
        assert Path(path).is_file()
        assert Path(path).name.startswith("a-red-fox-")


@pytest.mark.asyncio
async def test_generate_images_tool_rejects_empty_prompt(registry):
    tool = registry.get_tool("generate_images")

    with pytest.raises(GenerationError):
        await tool.execute({"prompt": ""})


@pytest.mark.asyncio
async def test_create_image_html_tool(registry, tmp_path):
    tool = registry.get_tool("create_image_html")

    result = await tool.execute({"imagePaths": ["a.png"], "width": 256.0, "gallery": False})

    assert 'width="256" height="512"' in result["html"]
    assert result["absolutePaths"] == [str(tmp_path / "images" / "a.png")]


@pytest.mark.asyncio
async def test_create_image_html_tool_rejects_bad_arguments(registry):
    tool = registry.get_tool("create_image_html")

    with pytest.raises(RenderError):
        await tool.execute({"imagePaths": "a.png"})
    with pytest.raises(RenderError):
        await tool.execute({"imagePaths": []})


async def call(handler, method, params=None, msg_id=1):
    raw = json.dumps({"jsonrpc": "2.0", "id": msg_id, "method": method, "params": params or {}})
    return json.loads(await handler.handle_request(raw))


@pytest.mark.asyncio
async def test_rpc_list_and_call(settings, registry):
    handler = create_handler(settings, registry)

    listed = await call(handler, "tools/list")
    assert len(listed["result"]["tools"]) == 2

    called = await call(handler, "tools/call", {
        "name": "generate_images", "arguments": {"prompt": "fox"}
    })
    assert len(called["result"]["toolResult"]["files"]) == 1


@pytest.mark.asyncio
async def test_rpc_error_codes(settings, registry):
    handler = create_handler(settings, registry)

    not_found = await call(handler, "tools/call", {"name": "nope", "arguments": {}})
    assert not_found["error"]["code"] == TOOL_NOT_FOUND
    assert "nope" in not_found["error"]["message"]

    failed = await call(handler, "tools/call", {"name": "generate_images", "arguments": {}})
    assert failed["error"]["code"] == OPERATION_FAILED

    unknown_method = await call(handler, "resources/list")
    assert unknown_method["error"]["code"] == METHOD_NOT_FOUND

    parse_error = json.loads(await handler.handle_request("{not json"))
    assert parse_error["error"]["code"] == PARSE_ERROR


@pytest.mark.asyncio
async def test_rpc_initialize_ping_and_notifications(settings, registry):
    handler = create_handler(settings, registry)

    init = await call(handler, "initialize")
    assert init["result"]["name"] == "gemini-image-gen"
    assert [t["name"] for t in init["result"]["capabilities"]["tools"]] == [
        "generate_images", "create_image_html"
    ]

    pong = await call(handler, "ping")
    assert pong["result"] == {"pong": True}

    notification = json.dumps({"jsonrpc": "2.0", "method": "ping"})
    assert await handler.handle_request(notification) is None


@pytest.mark.asyncio
async def test_create_image_html_tool_parses_string_flags(registry):
    tool = registry.get_tool("create_image_html")

    tags = await tool.execute({"imagePaths": ["a.png"], "gallery": "false"})
    assert "<style>" not in tags["html"]
    assert "tempDir" not in tags

    gallery = await tool.execute({"imagePaths": ["a.png"], "gallery": "TRUE", "useTemp": "no"})
    assert "<style>" in gallery["html"]


@pytest.mark.asyncio
async def test_create_image_html_tool_rejects_unknown_flags(registry):
    tool = registry.get_tool("create_image_html")

    with pytest.raises(RenderError, match="gallery"):
        await tool.execute({"imagePaths": ["a.png"], "gallery": "sometimes"})
    with pytest.raises(RenderError, match="useTemp"):
        await tool.execute({"imagePaths": ["a.png"], "useTemp": 2})


@pytest.mark.asyncio
async def test_desktop_is_discovered_once(tmp_path, monkeypatch):
    desktop = tmp_path / "Desktop"
    lookup = MagicMock(return_value=desktop)
    monkeypatch.setattr(main, "discover_desktop", lookup)
    monkeypatch.setattr(locations, "discover_desktop", lookup)
    settings = Settings(storage=StorageConfig(strategy=StorageStrategy.DESKTOP))

    registry = create_tool_registry(settings, MockImageProvider())
    result = await registry.get_tool("generate_images").execute({"prompt": "fox"})

    assert lookup.call_count == 1
    assert result["storageDir"] == str(desktop / "gemini-images")
    assert result["desktopPath"] == str(desktop)
