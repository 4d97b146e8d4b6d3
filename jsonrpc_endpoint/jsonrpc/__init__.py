"""JSON-RPC 2.0 request processing."""
from .models import (
    JSONRPCNotification,
    JSONRPCRequest,
    JSONRPCResponse,
    JSONRPCError,
    ParseError,
    ClientError,
    NoMethodError,
    ArgumentError,
    InternalError,
    ServerError,
    ErrorCode,
    CONTENT_TYPE,
)
from .registry import MethodRegistry, Instantiable, Invocable
from .operation import Operation, get_context
from .handler import JSONRPCHandler, FailureCategory

__all__ = [
    "JSONRPCNotification",
    "JSONRPCRequest",
    "JSONRPCResponse",
    "JSONRPCError",
    "ParseError",
    "ClientError",
    "NoMethodError",
    "ArgumentError",
    "InternalError",
    "ServerError",
    "ErrorCode",
    "CONTENT_TYPE",
    "MethodRegistry",
    "Instantiable",
    "Invocable",
    "Operation",
    "get_context",
    "JSONRPCHandler",
    "FailureCategory",
]
