import logging
import typing
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from ..errors import AmadeusMCPError, InvalidArgumentsError, UnknownMethodError, UnknownToolError
from ..tools.base import OrchestrationResult
from ..tools.formatting import Renderer, format_result, render_json
from .protocol import CallToolRequest, CallToolResult, Tool, create_tool_definition, text_content

logger = logging.getLogger(__name__)

Handler = Callable[[BaseModel], Awaitable[OrchestrationResult]]

_JSON_TYPES = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
    list: "array",
    dict: "object",
}


def _json_type(annotation) -> Dict[str, Any]:
    """JSON schema fragment for a field annotation. Optional[X] maps like X."""
    origin = typing.get_origin(annotation)
    if origin is typing.Union:
        members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        return _json_type(members[0]) if members else {"type": "string"}
    if origin in (list, tuple):
        schema: Dict[str, Any] = {"type": "array"}
        item_args = typing.get_args(annotation)
        if item_args:
            schema["items"] = _json_type(item_args[0])
        return schema
    if origin is dict:
        return {"type": "object"}
    # Default to string
    return {"type": _JSON_TYPES.get(annotation, "string")}


def input_schema(args_model: Type[BaseModel]) -> Dict[str, Any]:
    parameters = {
        "type": "object",
        "properties": {},
        "required": [],
    }
    for field_name, field in args_model.model_fields.items():
        prop = _json_type(field.annotation)
        prop["description"] = field.description or f"Parameter {field_name}"
        parameters["properties"][field_name] = prop
        if field.is_required():
            parameters["required"].append(field_name)
    return parameters


@dataclass(frozen=True)
class RegisteredTool:
    definition: Tool
    args_model: Type[BaseModel]
    handler: Handler
    renderer: Renderer


class MCPServer:
    """Tool registry and request dispatcher for the Amadeus travel tools."""

    def __init__(self, name: str = "amadeus-travel-mcp", version: str = "1.0.0"):
        self.name = name
        self.version = version
        self.tools: Dict[str, RegisteredTool] = {}

    def register_tool(
        self,
        name: str,
        description: str,
        args_model: Type[BaseModel],
        handler: Handler,
        renderer: Renderer = render_json,
    ):
        """Register an async handler; its input schema comes from ``args_model``."""
        if name in self.tools:
            raise ValueError(f"Tool already registered: {name}")
        definition = create_tool_definition(name, description, input_schema(args_model))
        self.tools[name] = RegisteredTool(definition, args_model, handler, renderer)

    def list_tools(self) -> List[Dict[str, Any]]:
        return [tool.definition.model_dump() for tool in self.tools.values()]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> OrchestrationResult:
        tool = self.tools.get(name)
        if tool is None:
            raise UnknownToolError(name)
        try:
            args = tool.args_model.model_validate(arguments or {})
        except ValidationError as e:
            raise InvalidArgumentsError(name, e.errors(include_url=False)) from e
        return await tool.handler(args)

    async def execute(self, request: CallToolRequest) -> CallToolResult:
        """Run one tools/call; every failure becomes isError content."""
        logger.info(f"Executing tool: {request.name}", extra={"tool": request.name})
        try:
            result = await self.call_tool(request.name, request.arguments)
        except AmadeusMCPError as e:
            logger.error(f"Tool {request.name} failed: {e}", extra={"tool": request.name})
            return CallToolResult(content=[text_content(f"Error: {e}")], isError=True)
        except Exception as e:
            logger.exception(f"Unexpected error in tool {request.name}", extra={"tool": request.name})
            return CallToolResult(content=[text_content(f"Error: {e}")], isError=True)

        formatted = format_result(result, self.tools[request.name].renderer)
        size = sum(len(item["text"]) for item in formatted.content)
        logger.info(f"Tool {request.name} returned {size} chars", extra={"tool": request.name})
        return formatted

    async def handle_request(self, method: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if method == "tools/list":
            return {"tools": self.list_tools()}
        if method == "tools/call":
            params = params or {}
            try:
                request = CallToolRequest.model_validate(params)
            except ValidationError as e:
                errors = e.errors(include_url=False)
                return CallToolResult(
                    content=[text_content(f"Error: {InvalidArgumentsError('tools/call', errors)}")],
                    isError=True,
                ).to_dict()
            result = await self.execute(request)
            return result.to_dict()
        raise UnknownMethodError(method)
