"""FastAPI server exposing the JSON-RPC 2.0 endpoint."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request

from .config import EndpointSettings
from .jsonrpc.handler import JSONRPCHandler
from .jsonrpc.registry import MethodRegistry
from .transport import HTTPTransport

settings = EndpointSettings.from_env()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


def register_builtin_methods(registry: MethodRegistry) -> None:
    """Register the methods every endpoint answers."""

    # Method: system.listMethods
    def list_methods():
        return registry.names()

    # Method: ping
    async def ping():
        return "pong"

    registry.register("system.listMethods", list_methods)
    registry.register("ping", ping)


def create_app(
    settings: Optional[EndpointSettings] = None,
    registry: Optional[MethodRegistry] = None,
) -> FastAPI:
    """Build the FastAPI application around a method registry."""
    if settings is None:
        settings = EndpointSettings.from_env()
    if registry is None:
        registry = MethodRegistry()
    register_builtin_methods(registry)

    jsonrpc_handler = JSONRPCHandler(
        registry,
        default_data_message=settings.default_data_message,
    )
    transport = HTTPTransport(jsonrpc_handler, content_type=settings.content_type)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifecycle manager for FastAPI app."""
        logger.info(f"Starting {settings.service_name} JSON-RPC endpoint...")
        logger.info(f"Registered {len(registry)} JSON-RPC methods")
        yield
        logger.info(f"Shutting down {settings.service_name}...")

    app = FastAPI(
        title=settings.service_name,
        description="JSON-RPC 2.0 endpoint",
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.jsonrpc_handler = jsonrpc_handler
    app.state.registry = registry

    @app.post("/")
    @app.post("/rpc")
    @app.post("/jsonrpc")
    async def jsonrpc_endpoint(request: Request):
        """JSON-RPC 2.0 endpoint (single requests and batches)."""
        return await transport.handle_post_request(request)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": settings.service_name,
            "version": settings.version,
            "methods": len(registry),
        }

    return app


app = create_app(settings)
