import asyncio
from typing import Any, Dict, Iterable, List

from infra.errors import ChronoError
from infra.logger import logger
from .models import Tool, ToolCallPlan, ToolCallResult


class ToolManager:
    def __init__(self):
        self.tools: Dict[str, Tool] = {}

    def register(self, tool: Tool):
        if tool.name in self.tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self.tools[tool.name] = tool

    def definitions(self) -> List[Dict[str, Any]]:
        return [tool.get_definition() for tool in self.tools.values()]

    async def call_tool(self, name: str, parameters: Dict[str, Any] | None = None) -> ToolCallResult:
        """调用单个工具，任何错误都包装进 ToolCallResult，不向外抛"""
        parameters = parameters or {}
        tool = self.tools.get(name)
        if tool is None:
            return ToolCallResult(tool_name=name, parameters=parameters, success=False,
                                  error=f"Unknown tool: {name}")
        try:
            result = await tool.invoke(parameters)
        except ChronoError as e:
            logger.warn("ToolManager", f"工具「{name}」输入有误: {e}")
            return ToolCallResult(tool_name=name, parameters=parameters, success=False,
                                  error=e.message, error_code=e.code)
        except TypeError as e:
            # 参数名不对或缺参数
            logger.warn("ToolManager", f"工具「{name}」参数错误: {e}")
            return ToolCallResult(tool_name=name, parameters=parameters, success=False, error=str(e))
        except Exception as e:
            logger.error("ToolManager", f"工具「{name}」调用失败: {e!r}")
            return ToolCallResult(tool_name=name, parameters=parameters, success=False, error=str(e))
        return ToolCallResult(tool_name=name, parameters=parameters, success=True, result=result)

    async def call_tools(self, plans: Iterable[ToolCallPlan]) -> List[ToolCallResult]:
        """并发执行多个工具调用，结果顺序与 plans 一致"""
        return list(await asyncio.gather(
            *(self.call_tool(plan.tool_name, plan.tool_parameters) for plan in plans)
        ))
