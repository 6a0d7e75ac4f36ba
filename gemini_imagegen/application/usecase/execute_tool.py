"""Execute Tool Use Case - Application Layer"""

import logging
from typing import Any, Dict, List

from ...domain.entity.tool import ToolCall
from ...domain.errors import ToolError, ToolNotFoundError
from ...domain.repository.tool_registry import ToolRegistry

logger = logging.getLogger(__name__)


class ExecuteToolUseCase:
    """执行工具用例"""

    def __init__(self, tool_registry: ToolRegistry):
        self._tool_registry = tool_registry

    def list_tools(self) -> List[Dict[str, Any]]:
        """列出工具及其输入约定"""
        return [tool.describe() for tool in self._tool_registry.list_tools()]

    async def execute(self, call: ToolCall) -> Dict[str, Any]:
        """执行工具

        Raises:
            ToolNotFoundError: 工具不存在
            ToolError: 工具执行失败
        """
        # 1. 获取工具
        tool = self._tool_registry.get_tool(call.name)
        if tool is None:
            raise ToolNotFoundError(call.name)

        # 2. 执行工具
        logger.info(f"Executing tool '{call.name}'")
        try:
            return await tool.execute(call.arguments)
        except ToolError:
            raise
        except Exception as e:
            raise ToolError(f"Error executing '{call.name}': {e}") from e
