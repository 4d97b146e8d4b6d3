"""JSON-RPC 2.0 request/response models."""
import json
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

JSONRPC_VERSION = "2.0"
CONTENT_TYPE = "application/json; charset=UTF-8"
DEFAULT_DATA_MESSAGE = "Unknown Error"

_REQUEST_FIELDS = ("jsonrpc", "method", "params", "id")
_RESPONSE_FIELDS = ("jsonrpc", "result", "error", "id")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-JSON constant {name}")


def dump_json(payload: Any) -> str:
    """Encode a payload as compact, strict JSON (no NaN or Infinity)."""
    return json.dumps(payload, separators=(",", ":"), allow_nan=False)


def load_json(text: Union[str, bytes]) -> Any:
    """Decode JSON text, rejecting the non-standard NaN and Infinity literals."""
    return json.loads(text, parse_constant=_reject_constant)


class ErrorCode:
    """JSON-RPC 2.0 reserved error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    SERVER_ERROR = -32000


class JSONRPCNotification(BaseModel):
    """JSON-RPC 2.0 notification model.

    ``context`` holds whatever the transport attached to the call (the HTTP
    request, for instance). It is never serialized or inspected here.
    """

    jsonrpc: str = JSONRPC_VERSION
    method: Optional[str] = None
    params: Optional[Union[List[Any], Dict[str, Any]]] = None
    context: Any = Field(default=None, exclude=True)

    @classmethod
    def from_raw(cls, struct: Any, context: Any = None):
        """Build a message from a decoded JSON value without validating it.

        Unknown keys are dropped and missing ones keep their defaults, so this
        never raises; call ``is_valid()`` to find out whether the shape is
        acceptable.
        """
        values = {}
        if isinstance(struct, dict):
            values = {k: v for k, v in struct.items() if k in cls.model_fields and k in _REQUEST_FIELDS}
        message = cls.model_construct(**values)
        message.context = context
        return message

    @classmethod
    def parse(cls, text: Union[str, bytes], context: Any = None):
        return cls.from_raw(load_json(text), context)

    def is_valid(self) -> bool:
        return (
            self.jsonrpc == JSONRPC_VERSION
            and isinstance(self.method, str)
            and bool(self.method)
            and (self.params is None or isinstance(self.params, (list, dict)))
        )

    def positional_args(self) -> List[Any]:
        return list(self.params) if isinstance(self.params, list) else []

    def keyword_args(self) -> Dict[str, Any]:
        return dict(self.params) if isinstance(self.params, dict) else {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jsonrpc": str(self.jsonrpc or JSONRPC_VERSION),
            "method": str(self.method or ""),
            "params": self.params if self.params is not None else [],
        }

    def to_json(self) -> str:
        return dump_json(self.to_dict())


class JSONRPCRequest(JSONRPCNotification):
    """JSON-RPC 2.0 request model.

    A request differs from a notification only by its ``id``. An explicit
    ``"id": null`` counts as present; only a missing id makes it invalid.
    """

    id: Any = None

    def has_id(self) -> bool:
        return "id" in self.model_fields_set

    def is_valid(self) -> bool:
        return super().is_valid() and self.has_id()

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["id"] = self.id
        return data


class JSONRPCError(BaseModel):
    """JSON-RPC 2.0 error model."""

    code: int
    message: str
    data: Optional[Any] = None

    def to_dict(self, default_data_message: str = DEFAULT_DATA_MESSAGE) -> Dict[str, Any]:
        """Wire form of the error.

        ``data`` always carries a ``message``: missing data becomes
        ``{"message": default_data_message}`` and a mapping without one gets it
        added. Non-mapping data is passed through untouched.
        """
        data = self.data
        if data is None:
            data = {"message": default_data_message}
        elif isinstance(data, dict) and data.get("message") is None:
            data = {**data, "message": default_data_message}
        return {
            "code": int(self.code),
            "message": str(self.message),
            "data": data,
        }


class ParseError(JSONRPCError):
    code: int = ErrorCode.PARSE_ERROR
    message: str = "parse error"


class ClientError(JSONRPCError):
    code: int = ErrorCode.INVALID_REQUEST
    message: str = "invalid request"


class NoMethodError(JSONRPCError):
    code: int = ErrorCode.METHOD_NOT_FOUND
    message: str = "undefined method"


class ArgumentError(JSONRPCError):
    code: int = ErrorCode.INVALID_PARAMS
    message: str = "invalid arguments"


class InternalError(JSONRPCError):
    code: int = ErrorCode.INTERNAL_ERROR
    message: str = "internal error"


class ServerError(JSONRPCError):
    code: int = ErrorCode.SERVER_ERROR
    message: str = "server error"


class JSONRPCResponse(BaseModel):
    """JSON-RPC 2.0 response model."""

    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    result: Optional[Any] = None
    error: Optional[JSONRPCError] = None

    @classmethod
    def from_dict(cls, struct: Dict[str, Any]) -> "JSONRPCResponse":
        return cls.model_validate({k: v for k, v in struct.items() if k in _RESPONSE_FIELDS})

    @classmethod
    def parse(cls, text: Union[str, bytes]) -> Union["JSONRPCResponse", List["JSONRPCResponse"]]:
        """Parse a single response or a batch of them from wire text."""
        payload = load_json(text)
        if isinstance(payload, list):
            return [cls.from_dict(item) for item in payload]
        return cls.from_dict(payload)

    def to_dict(self, default_data_message: str = DEFAULT_DATA_MESSAGE) -> Dict[str, Any]:
        """Wire form: ``jsonrpc``, then ``error`` or ``result``, then ``id``.

        ``id`` is always present. ``result`` is written whenever it was set on
        an error-free response, including a null result.
        """
        data: Dict[str, Any] = {"jsonrpc": self.jsonrpc or JSONRPC_VERSION}
        if self.error is not None:
            data["error"] = self.error.to_dict(default_data_message)
        elif "result" in self.model_fields_set:
            data["result"] = self.result
        data["id"] = self.id
        return data

    def to_json(self, default_data_message: str = DEFAULT_DATA_MESSAGE) -> str:
        return dump_json(self.to_dict(default_data_message))
