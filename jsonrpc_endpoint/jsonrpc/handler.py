"""JSON-RPC 2.0 request handler."""
import asyncio
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..utils.errors import (
    ArgumentsError,
    InvalidRequestError,
    MethodNotFoundError,
    RPCError,
)
from .models import (
    DEFAULT_DATA_MESSAGE,
    ArgumentError,
    ClientError,
    InternalError,
    JSONRPCError,
    JSONRPCRequest,
    JSONRPCResponse,
    NoMethodError,
    ParseError,
    dump_json,
    load_json,
)
from .operation import reset_context, set_context
from .registry import MethodRegistry, Target

logger = logging.getLogger(__name__)


class FailureCategory(str, Enum):
    """Kinds of failure a handler maps to JSON-RPC errors."""

    PARSE = "parse"
    INVALID_REQUEST = "invalid_request"
    NO_METHOD = "no_method"
    BAD_ARGUMENTS = "bad_arguments"
    RPC_ERROR = "rpc_error"
    INTERNAL = "internal"


ErrorHandler = Callable[[BaseException], Union[JSONRPCError, Mapping[str, Any]]]


class JSONRPCHandler:
    """Decodes JSON-RPC 2.0 payloads and routes them to registered methods.

    Args:
        registry: Anything exposing ``resolve(name)``; a fresh
            ``MethodRegistry`` when omitted
        default_data_message: ``data.message`` written on errors that carry
            none of their own
        error_handlers: Optional per-category overrides. Each one receives
            the raised exception and returns the error to send instead of
            the default one.
    """

    def __init__(
        self,
        registry: Optional[MethodRegistry] = None,
        default_data_message: str = DEFAULT_DATA_MESSAGE,
        error_handlers: Optional[Mapping[FailureCategory, ErrorHandler]] = None,
    ):
        self.registry = registry if registry is not None else MethodRegistry()
        self.default_data_message = default_data_message
        self.error_handlers: Dict[FailureCategory, ErrorHandler] = dict(error_handlers or {})

    def register_method(self, method_name: str, handler: Callable) -> Target:
        """Register a JSON-RPC method on the underlying registry."""
        return self.registry.register(method_name, handler)

    async def process(self, input: Union[bytes, str], context: Any = None) -> bytes:
        """Process a raw JSON-RPC payload and return the encoded response.

        A JSON array is handled as a batch. Every failure ends up as an error
        response; nothing raised by a method escapes this call.
        """
        try:
            payload = load_json(input)
        except (ValueError, RecursionError) as e:
            logger.debug(f"Failed to decode JSON-RPC payload: {e}")
            response = JSONRPCResponse(id=None, error=self._error_for(FailureCategory.PARSE, e))
            return self._encode(response.to_dict(self.default_data_message))

        if isinstance(payload, list):
            output: Any = await self.process_batch(payload, context)
        else:
            output = await self.process_request(payload, context)
        return self._encode(output)

    async def process_batch(self, batch: List[Any], context: Any = None) -> List[Dict[str, Any]]:
        """Process every batch item independently, keeping input order."""
        results = await asyncio.gather(
            *(self.process_request(struct, context) for struct in batch)
        )
        return list(results)

    async def process_request(self, struct: Any, context: Any = None) -> Dict[str, Any]:
        """Process one decoded request object into a response mapping."""
        request = JSONRPCRequest.from_raw(struct, context)
        response = await self.handle_request(request)
        data = response.to_dict(self.default_data_message)
        try:
            dump_json(data)
        except (TypeError, ValueError, RecursionError) as e:
            logger.error(f"Unserializable response for {request.method}: {e}")
            error = InternalError(message=str(e))
            data = JSONRPCResponse(id=request.id, error=error).to_dict(self.default_data_message)
        return data

    async def handle_request(self, request: JSONRPCRequest) -> JSONRPCResponse:
        """Handle a JSON-RPC 2.0 request.

        Args:
            request: JSONRPCRequest object

        Returns:
            JSONRPCResponse with result or error
        """
        try:
            if not request.is_valid():
                logger.debug(
                    f"Invalid request: method={request.method!r}, version={request.jsonrpc!r}, "
                    f"id={request.id!r}, params={request.params!r}"
                )
                raise InvalidRequestError("invalid JSON-RPC request")

            target = self.registry.resolve(request.method)
            if target is None:
                raise MethodNotFoundError(f"Method not found: {request.method}")

            token = set_context(request.context)
            try:
                result = await target.invoke(request)
            finally:
                reset_context(token)

            return JSONRPCResponse(id=request.id, result=result)

        except InvalidRequestError as e:
            error = self._error_for(FailureCategory.INVALID_REQUEST, e)
        except MethodNotFoundError as e:
            error = self._error_for(FailureCategory.NO_METHOD, e)
        except ArgumentsError as e:
            error = self._error_for(FailureCategory.BAD_ARGUMENTS, e)
        except RPCError as e:
            error = self._error_for(FailureCategory.RPC_ERROR, e)
        except Exception as e:
            if FailureCategory.INTERNAL not in self.error_handlers:
                logger.error(f"Internal error handling {request.method}: {e}", exc_info=True)
            error = self._error_for(FailureCategory.INTERNAL, e)

        return JSONRPCResponse(id=request.id, error=error)

    def _error_for(self, category: FailureCategory, exc: BaseException) -> JSONRPCError:
        override = self.error_handlers.get(category)
        if override is not None:
            try:
                error = override(exc)
                if isinstance(error, JSONRPCError):
                    return error
                return JSONRPCError.model_validate(error)
            except Exception:
                logger.error(f"Error handler for {category.value} failed", exc_info=True)
        try:
            return self._default_error(category, exc)
        except Exception:
            logger.error(f"Could not build {category.value} error from {exc!r}", exc_info=True)
            return InternalError(message=f"invalid {category.value} error raised")

    @staticmethod
    def _default_error(category: FailureCategory, exc: BaseException) -> JSONRPCError:
        if category is FailureCategory.PARSE:
            return ParseError(message=str(exc))
        if category is FailureCategory.INVALID_REQUEST:
            return ClientError(message=str(exc))
        if category is FailureCategory.NO_METHOD:
            return NoMethodError(message=str(exc))
        if category is FailureCategory.BAD_ARGUMENTS:
            return ArgumentError(message=str(exc))
        if category is FailureCategory.RPC_ERROR and isinstance(exc, RPCError):
            return JSONRPCError(code=exc.code, message=str(exc.message), data=exc.data)
        return InternalError(message=str(exc) or type(exc).__name__)

    @staticmethod
    def _encode(output: Any) -> bytes:
        return (dump_json(output) + "\n").encode("utf-8")
