from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field, field_validator

# JSON-RPC 2.0 Constants
JSONRPC_VERSION = "2.0"
MCP_PROTOCOL_VERSION = "2025-03-26"

# JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class JsonRpcRequest(BaseModel):
    method: str
    params: Optional[Dict[str, Any]] = None
    id: Optional[Union[str, int]] = None
    jsonrpc: str = Field(default=JSONRPC_VERSION, pattern=r"^2\.0$")

    @property
    def is_notification(self) -> bool:
        return self.id is None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class JsonRpcResponse(BaseModel):
    result: Any = None
    error: Optional[Dict[str, Any]] = None
    id: Optional[Union[str, int]] = None
    jsonrpc: str = Field(default=JSONRPC_VERSION, pattern=r"^2\.0$")

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(exclude_none=True)
        # A successful response always carries "result", even when empty
        if self.error is None:
            data["result"] = self.result if self.result is not None else {}
        # "id" is null (not absent) when the request id could not be read
        data.setdefault("id", None)
        return data


def error_response(request_id: Optional[Union[str, int]], code: int, message: str) -> JsonRpcResponse:
    return JsonRpcResponse(id=request_id, error={"code": code, "message": message})


# MCP Specific Structures

class Tool(BaseModel):
    name: str
    description: str
    inputSchema: Dict[str, Any]

    model_config = {"frozen": True}


class CallToolRequest(BaseModel):
    name: str
    arguments: Optional[Dict[str, Any]] = Field(default_factory=dict)

    @field_validator("arguments", mode="before")
    @classmethod
    def _null_means_empty(cls, value):
        # Some clients send "arguments": null for tools without parameters
        return {} if value is None else value


class CallToolResult(BaseModel):
    content: List[Dict[str, Any]]
    isError: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump()
        if not self.isError:
            data.pop("isError")
        return data


def text_content(text: str) -> Dict[str, Any]:
    return {"type": "text", "text": text}


# Helper to create a tool definition
def create_tool_definition(name: str, description: str, parameters: Dict[str, Any]) -> Tool:
    return Tool(name=name, description=description, inputSchema=parameters)
