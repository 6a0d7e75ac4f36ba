"""Tool Entity - Domain Layer"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any
from uuid import uuid4


@dataclass
class ToolCall:
    """工具调用请求"""

    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=datetime.now)


class Tool(ABC):
    """工具接口 (抽象基类)"""

    @property
    @abstractmethod
    def name(self) -> str:
        """工具名称"""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """工具描述"""
        pass

    @property
    @abstractmethod
    def input_schema(self) -> Dict[str, Any]:
        """JSON Schema 形式的输入约定"""
        pass

    @abstractmethod
    async def execute(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        """执行工具

        Args:
            arguments: 调用参数

        Returns:
            结构化结果
        """
        pass

    def describe(self) -> Dict[str, Any]:
        """tools/list 中的条目"""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }
