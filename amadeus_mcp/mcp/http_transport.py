import logging
import uuid
from typing import Dict, Optional

from fastapi import FastAPI, Header, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .mcp_server import MCPServer
from .protocol import INVALID_REQUEST, PARSE_ERROR, error_response
from .session import McpSession

logger = logging.getLogger(__name__)

SESSION_HEADER = "mcp-session-id"


def create_app(server: MCPServer, mode: str = "live") -> FastAPI:
    """FastAPI app serving MCP over HTTP.

    `initialize` opens a session and returns its id in the mcp-session-id
    header. Every other request must carry an id issued here; a missing id is
    a 400, an unknown or closed one a 404.
    """
    app = FastAPI(title="Amadeus Travel MCP", version=server.version)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[SESSION_HEADER],
    )

    sessions: Dict[str, McpSession] = {}
    app.state.sessions = sessions

    def open_session() -> McpSession:
        session = McpSession(server, uuid.uuid4().hex)
        sessions[session.session_id] = session
        logger.info("New MCP session", extra={"session_id": session.session_id})
        return session

    @app.post("/mcp")
    async def mcp_endpoint(request: Request, mcp_session_id: Optional[str] = Header(None)):
        try:
            message = await request.json()
        except ValueError:
            body = error_response(None, PARSE_ERROR, "Parse error").to_dict()
            return JSONResponse(body, status_code=400)

        request_id = message.get("id") if isinstance(message, dict) else None
        if isinstance(message, dict) and message.get("method") == "initialize":
            # Session ids are always issued here, never taken from the client
            session = open_session()
        elif not mcp_session_id:
            body = error_response(request_id, INVALID_REQUEST, "Bad Request: missing mcp-session-id").to_dict()
            return JSONResponse(body, status_code=400)
        elif mcp_session_id not in sessions:
            body = error_response(request_id, INVALID_REQUEST, "Session not found").to_dict()
            return JSONResponse(body, status_code=404)
        else:
            session = sessions[mcp_session_id]

        headers = {SESSION_HEADER: session.session_id}
        response = await session.handle_message(message)
        if response is None:
            return Response(status_code=202, headers=headers)
        if "error" in response and not session.initialized:
            sessions.pop(session.session_id, None)
            return JSONResponse(response, status_code=400)
        return JSONResponse(response, headers=headers)

    @app.delete("/mcp")
    async def end_session(mcp_session_id: Optional[str] = Header(None)):
        if not mcp_session_id or sessions.pop(mcp_session_id, None) is None:
            return JSONResponse({"error": "Unknown session"}, status_code=404)
        logger.info("MCP session closed", extra={"session_id": mcp_session_id})
        return Response(status_code=204)

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "server": server.name,
            "version": server.version,
            "mode": mode,
            "tools": len(server.tools),
            "sessions": len(sessions),
        }

    return app
