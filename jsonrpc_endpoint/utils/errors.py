"""Failure conditions raised while resolving and executing JSON-RPC methods."""
from typing import Any, Optional


class EndpointError(Exception):
    """Base exception for JSON-RPC endpoint errors."""

    pass


class InvalidRequestError(EndpointError):
    """The decoded payload is not a valid JSON-RPC 2.0 request."""

    pass


class MethodNotFoundError(EndpointError):
    """No operation is registered under the requested method name."""

    pass


class ArgumentsError(EndpointError):
    """The request params do not fit the resolved operation."""

    pass


class RPCError(EndpointError):
    """Application error carrying its own JSON-RPC code, message and data.

    Operations raise this (or a subclass) to put a specific error on the
    wire. Subclasses may override the class-level ``code`` and ``message``.
    """

    code: int = -32000
    message: str = "server error"

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[int] = None,
        data: Any = None,
    ):
        self.message = message or self.message
        self.code = self.code if code is None else code
        self.data = data
        super().__init__(self.message)
