"""Operation base class and access to the per-call transport context."""
import contextvars
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ValidationError

from ..utils.errors import ArgumentsError
from .models import JSONRPCRequest

_current_context: contextvars.ContextVar[Any] = contextvars.ContextVar(
    "_current_context", default=None
)


def get_context() -> Any:
    """Return the transport context of the request being dispatched.

    Plain functions registered as methods have no request object of their
    own; this is how they reach e.g. the originating HTTP request.
    """
    return _current_context.get()


def set_context(context: Any) -> contextvars.Token:
    return _current_context.set(context)


def reset_context(token: contextvars.Token) -> None:
    _current_context.reset(token)


class Operation:
    """A JSON-RPC method implemented as a class.

    The handler instantiates the class with the validated request and calls
    ``execute()``, which may be a regular or an async method.

    Set ``params_model`` to a pydantic model to have the params validated on
    construction. Positional params are matched to the model fields in
    declaration order; the validated model is available as ``self.args``.
    """

    params_model: Optional[Type[BaseModel]] = None

    def __init__(self, request: JSONRPCRequest):
        self.request = request
        self.params = request.params if request.params is not None else []
        self.context = request.context
        self.args: Optional[BaseModel] = None
        if self.params_model is not None:
            self.args = self._validate_params()

    def _validate_params(self) -> BaseModel:
        fields = list(self.params_model.model_fields)
        if isinstance(self.params, dict):
            values: Dict[str, Any] = dict(self.params)
        else:
            if len(self.params) > len(fields):
                raise ArgumentsError(
                    f"{self.request.method} takes at most {len(fields)} arguments "
                    f"({len(self.params)} given)"
                )
            values = dict(zip(fields, self.params))
        try:
            return self.params_model.model_validate(values)
        except ValidationError as e:
            raise ArgumentsError(str(e)) from e

    def execute(self) -> Any:
        raise NotImplementedError(f"{type(self).__name__} must implement execute()")
