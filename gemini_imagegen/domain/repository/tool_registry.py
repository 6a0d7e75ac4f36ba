"""Tool Registry Repository Interface - Domain Layer"""

from abc import ABC, abstractmethod
from typing import List, Optional
from ..entity.tool import Tool


class ToolRegistry(ABC):
    """工具注册表接口"""

    @abstractmethod
    def get_tool(self, name: str) -> Optional[Tool]:
        """获取工具

        Args:
            name: 工具名称

        Returns:
            工具实例或 None
        """
        pass

    @abstractmethod
    def list_tools(self) -> List[Tool]:
        """列出所有工具"""
        pass

    @abstractmethod
    def register_tool(self, tool: Tool) -> None:
        """注册工具"""
        pass
