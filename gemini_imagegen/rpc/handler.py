"""JSON-RPC 2.0 Stdio Handler

Dispatches incoming JSON-RPC requests to the registered method handlers
(initialize, tools/list, tools/call, ...). Requests are processed one at a
time: each handler runs to completion before the next line is read.
"""

import asyncio
import inspect
import json
import logging
import sys
from typing import Callable, Dict, Optional, TextIO

from ..domain.errors import ToolError

logger = logging.getLogger(__name__)

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603


class StdioHandler:
    """JSON-RPC 2.0 request dispatcher over stdin/stdout.

    Reads line-delimited JSON from stdin, dispatches to registered
    method handlers, and writes responses to stdout.
    """

    def __init__(self, output: Optional[TextIO] = None):
        self._methods: Dict[str, Callable] = {}
        self._running = False
        self._output = output

    def register_method(self, name: str, handler: Callable) -> None:
        """Register a method handler (sync or async function)."""
        self._methods[name] = handler

    async def handle_request(self, raw: str) -> Optional[str]:
        """Parse and dispatch a single JSON-RPC request.

        Returns JSON response string, or None for notifications.
        """
        try:
            msg = json.loads(raw)
        except json.JSONDecodeError as e:
            return self._error(None, PARSE_ERROR, f"Parse error: {e}")

        if not isinstance(msg, dict):
            return self._error(None, INVALID_REQUEST, "Invalid request")

        method = msg.get("method", "")
        params = msg.get("params") or {}
        msg_id = msg.get("id")

        handler = self._methods.get(method)
        if handler is None:
            if msg_id is None:
                return None  # notification for unknown method, ignore
            return self._error(msg_id, METHOD_NOT_FOUND, f"Method not found: {method}")

        try:
            result = handler(params)
            if inspect.isawaitable(result):
                result = await result
        except ToolError as e:
            logger.warning(f"{method} failed: {e.message}")
            return None if msg_id is None else self._error(msg_id, e.code, e.message)
        except Exception as e:
            logger.exception(f"Error handling {method}")
            return None if msg_id is None else self._error(msg_id, INTERNAL_ERROR, str(e))

        if msg_id is None:
            return None  # notification, no response
        return json.dumps({"jsonrpc": "2.0", "id": msg_id, "result": result})

    async def run(self) -> None:
        """Main loop: read stdin line by line, dispatch, write to stdout."""
        self._running = True
        logger.info("Stdio handler started, reading from stdin")

        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader()
        protocol = asyncio.StreamReaderProtocol(reader)
        await loop.connect_read_pipe(lambda: protocol, sys.stdin)

        while self._running:
            try:
                line = await reader.readline()
                if not line:
                    logger.info("EOF on stdin, shutting down")
                    break

                raw = line.decode("utf-8").strip()
                if not raw:
                    continue

                response = await self.handle_request(raw)
                if response is not None:
                    self._write(response)

            except asyncio.CancelledError:
                break
            except Exception:
                logger.exception("Error in stdio read loop")

        self._running = False
        logger.info("Stdio handler stopped")

    def stop(self) -> None:
        """Signal the handler to stop."""
        self._running = False

    def _write(self, line: str) -> None:
        out = self._output or sys.stdout
        out.write(line + "\n")
        out.flush()

    @staticmethod
    def _error(msg_id, code: int, message: str) -> str:
        return json.dumps({
            "jsonrpc": "2.0", "id": msg_id,
            "error": {"code": code, "message": message}
        })
