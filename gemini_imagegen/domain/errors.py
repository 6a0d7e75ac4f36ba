"""Tool Errors - Domain Layer"""

# Codes surfaced to the dispatcher
TOOL_NOT_FOUND = 1
OPERATION_FAILED = 2


class ToolError(Exception):
    """工具错误基类"""

    code: int = OPERATION_FAILED

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ToolNotFoundError(ToolError):
    """未知工具名称"""

    code = TOOL_NOT_FOUND

    def __init__(self, name: str):
        super().__init__(f"Tool '{name}' not found")
        self.name = name


class GenerationError(ToolError):
    """图像生成或写入失败"""
    pass


class RenderError(ToolError):
    """HTML 渲染失败"""
    pass
