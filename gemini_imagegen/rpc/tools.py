"""Tool Methods

Handles 'tools/list' and 'tools/call' JSON-RPC calls by delegating to
the ExecuteToolUseCase.
"""

from ..application.usecase.execute_tool import ExecuteToolUseCase
from ..domain.entity.tool import ToolCall


class ToolMethods:
    """tools/list 与 tools/call 方法处理"""

    def __init__(self, use_case: ExecuteToolUseCase):
        self._use_case = use_case

    async def handle_list(self, params: dict) -> dict:
        return {"tools": self._use_case.list_tools()}

    async def handle_call(self, params: dict) -> dict:
        """Handle a tools/call JSON-RPC request.

        Params:
        {
            "name": "generate_images",
            "arguments": {"prompt": "a red fox", "numberOfImages": 2}
        }
        """
        call = ToolCall(
            name=params.get("name", ""),
            arguments=params.get("arguments") or {},
        )
        result = await self._use_case.execute(call)
        return {"toolResult": result}

    def get_capabilities(self) -> list:
        """Return tool capabilities for the initialize response."""
        return [
            {"name": tool["name"], "description": tool["description"]}
            for tool in self._use_case.list_tools()
        ]
