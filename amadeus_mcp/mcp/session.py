import logging
import uuid
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..errors import UnknownMethodError
from .mcp_server import MCPServer
from .protocol import (
    INTERNAL_ERROR,
    INVALID_REQUEST,
    MCP_PROTOCOL_VERSION,
    METHOD_NOT_FOUND,
    JsonRpcRequest,
    JsonRpcResponse,
    error_response,
)

logger = logging.getLogger(__name__)


class McpSession:
    """One MCP client conversation: JSON-RPC envelope in, JSON-RPC envelope out."""

    def __init__(self, server: MCPServer, session_id: Optional[str] = None):
        self.server = server
        self.session_id = session_id or uuid.uuid4().hex
        self.initialized = False
        self.client_info: Dict[str, Any] = {}

    def _initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        self.initialized = True
        self.client_info = params.get("clientInfo") or {}
        logger.info(
            f"Session initialized for {self.client_info.get('name', 'unknown client')}",
            extra={"session_id": self.session_id},
        )
        return {
            "protocolVersion": params.get("protocolVersion") or MCP_PROTOCOL_VERSION,
            "capabilities": {"tools": {"listChanged": False}},
            "serverInfo": {"name": self.server.name, "version": self.server.version},
        }

    async def handle_message(self, message: Any) -> Optional[Dict[str, Any]]:
        """Answer one JSON-RPC message. Returns None for notifications. Never raises."""
        request_id = message.get("id") if isinstance(message, dict) else None
        try:
            request = JsonRpcRequest.model_validate(message)
        except ValidationError as e:
            logger.warning(f"Invalid request: {e}", extra={"session_id": self.session_id})
            return error_response(request_id, INVALID_REQUEST, "Invalid Request").to_dict()

        if request.is_notification:
            logger.debug(f"Notification: {request.method}", extra={"session_id": self.session_id})
            return None

        params = request.params or {}
        try:
            if request.method == "initialize":
                result = self._initialize(params)
            elif request.method == "ping":
                result = {}
            else:
                result = await self.server.handle_request(request.method, params)
        except UnknownMethodError as e:
            return error_response(request.id, METHOD_NOT_FOUND, str(e)).to_dict()
        except Exception as e:
            logger.exception(f"Error handling {request.method}", extra={"session_id": self.session_id})
            return error_response(request.id, INTERNAL_ERROR, f"Internal error: {e}").to_dict()

        return JsonRpcResponse(id=request.id, result=result).to_dict()
