import inspect
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from infra.errors import InvalidInputError


class Tool(BaseModel):
    """一个可被宿主调用的工具：名称、JSON Schema 形式的参数和实现函数"""
    name: str = Field(..., description="工具名称，必须唯一")
    description: str = Field(..., description="工具功能描述")
    parameters: Dict[str, Any] = Field(..., description="参数的 JSON Schema（type=object）")
    func: Union[Callable, Callable[..., Awaitable[Any]]] = Field(..., description="实现函数，同步异步均可")

    @property
    def required(self) -> List[str]:
        return list(self.parameters.get("required", []))

    def get_definition(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters
        }

    def check_required(self, parameters: Dict[str, Any]):
        missing = [p for p in self.required if parameters.get(p) is None]
        if missing:
            raise InvalidInputError(f"Missing required parameters: {', '.join(missing)}",
                                    {"tool": self.name, "missing": missing})

    async def invoke(self, parameters: Dict[str, Any]) -> Any:
        self.check_required(parameters)
        if inspect.iscoroutinefunction(self.func):
            return await self.func(**parameters)
        return self.func(**parameters)


class ToolCallResult(BaseModel):
    tool_name: str
    parameters: Dict[str, Any]
    success: bool
    result: Any = None
    error: Optional[str] = None
    error_code: Optional[str] = None  # ChronoError.code，非输入类错误时为空


class ToolCallPlan(BaseModel):
    """宿主一次性下发的多个调用之一"""
    tool_name: str
    tool_parameters: Dict[str, Any] = Field(default_factory=dict)
