"""In-Memory Tool Registry - Infrastructure Layer"""

from typing import Dict, List, Optional
from ...domain.repository.tool_registry import ToolRegistry
from ...domain.entity.tool import Tool


class InMemoryToolRegistry(ToolRegistry):
    """内存工具注册表 (按注册顺序列出)"""

    def __init__(self):
        self._tools: Dict[str, Tool] = {}

    def get_tool(self, name: str) -> Optional[Tool]:
        """获取工具"""
        return self._tools.get(name)

    def list_tools(self) -> List[Tool]:
        """列出所有工具"""
        return list(self._tools.values())

    def register_tool(self, tool: Tool) -> None:
        """注册工具 (名称即唯一标识)"""
        self._tools[tool.name] = tool
