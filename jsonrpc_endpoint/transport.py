"""HTTP transport for the JSON-RPC handler."""
import logging

from fastapi import Request, Response

from .jsonrpc.handler import JSONRPCHandler
from .jsonrpc.models import CONTENT_TYPE

logger = logging.getLogger(__name__)


class HTTPTransport:
    """Carries JSON-RPC payloads over HTTP POST bodies."""

    def __init__(self, jsonrpc_handler: JSONRPCHandler, content_type: str = CONTENT_TYPE):
        self.jsonrpc_handler = jsonrpc_handler
        self.content_type = content_type

    async def handle_post_request(self, request: Request) -> Response:
        """Handle POST request from client.

        The FastAPI request travels with the call as its context, so methods
        can inspect headers or client details. JSON-RPC failures are reported
        in the body; the status is always 200.
        """
        body = await request.body()
        logger.debug(f"JSON-RPC request from {request.client}: {len(body)} bytes")

        payload = await self.jsonrpc_handler.process(body, request)

        # Answer with the content type the client used, as long as it sent one
        content_type = request.headers.get("Content-Type") or self.content_type
        return Response(content=payload, status_code=200, media_type=content_type)
