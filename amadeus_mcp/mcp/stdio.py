"""
Stdio transport: newline-delimited JSON-RPC on stdin/stdout.

Every request runs as its own task, so a slow tool call (or a rate-limit
wait) does not hold up the messages behind it. Responses are written whole,
one per line.
"""

import asyncio
import json
import logging
import sys
from typing import Any, Dict, Optional, Set

from .protocol import PARSE_ERROR, error_response
from .session import McpSession

logger = logging.getLogger(__name__)


class StdioTransport:
    def __init__(self, session: McpSession, reader=None, writer=None):
        self.session = session
        self.reader = reader or sys.stdin
        self.writer = writer or sys.stdout
        self._pending: Set[asyncio.Task] = set()

    def write(self, response: Optional[Dict[str, Any]]):
        if response is None:
            return
        self.writer.write(json.dumps(response, ensure_ascii=False) + "\n")
        self.writer.flush()

    async def _answer(self, message: Any):
        self.write(await self.session.handle_message(message))

    def dispatch(self, line: str):
        line = line.strip()
        if not line:
            return
        try:
            message = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f"Unparseable message: {e}")
            self.write(error_response(None, PARSE_ERROR, "Parse error").to_dict())
            return
        task = asyncio.create_task(self._answer(message))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def serve(self):
        loop = asyncio.get_running_loop()
        logger.info("Amadeus MCP server listening on stdio")
        while True:
            line = await loop.run_in_executor(None, self.reader.readline)
            if not line:
                break
            self.dispatch(line)
        if self._pending:
            await asyncio.gather(*self._pending)
        logger.info("stdin closed, shutting down")


async def run_stdio(session: McpSession):
    await StdioTransport(session).serve()
