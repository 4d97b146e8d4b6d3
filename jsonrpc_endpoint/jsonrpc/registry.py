"""Method registry mapping JSON-RPC method names to operations."""
import contextvars
import functools
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type, Union

from starlette.concurrency import run_in_threadpool

from ..utils.errors import ArgumentsError
from .models import JSONRPCRequest

logger = logging.getLogger(__name__)


async def _resolve_value(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def _call(func: Callable, *args: Any, **kwargs: Any) -> Any:
    """Await coroutine functions; run anything else in the thread pool.

    The worker thread runs in a copy of the current context, so
    ``get_context()`` works from synchronous methods too.
    """
    if inspect.iscoroutinefunction(func):
        return await func(*args, **kwargs)
    context = contextvars.copy_context()
    call = functools.partial(context.run, func, *args, **kwargs)
    return await _resolve_value(await run_in_threadpool(call))


@dataclass(frozen=True)
class Instantiable:
    """An operation class, instantiated with the request for every call."""

    operation_type: Type

    async def invoke(self, request: JSONRPCRequest) -> Any:
        operation = self.operation_type(request)
        return await _call(operation.execute)


@dataclass(frozen=True)
class Invocable:
    """A plain callable, invoked with the request params spread as arguments."""

    func: Callable

    async def invoke(self, request: JSONRPCRequest) -> Any:
        args = request.positional_args()
        kwargs = request.keyword_args()
        try:
            signature = inspect.signature(self.func)
        except (TypeError, ValueError):
            # Some builtins expose no signature; let the call itself decide.
            signature = None
        if signature is not None:
            try:
                signature.bind(*args, **kwargs)
            except TypeError as e:
                raise ArgumentsError(f"{request.method}: {e}") from e
        return await _call(self.func, *args, **kwargs)


Target = Union[Instantiable, Invocable]


class MethodRegistry:
    """Holds the operations a JSON-RPC handler can dispatch to."""

    def __init__(self):
        self.methods: Dict[str, Target] = {}

    def register(self, name: str, target: Callable) -> Target:
        """Register a JSON-RPC method.

        Args:
            name: Name of the JSON-RPC method (e.g., "system.listMethods")
            target: An operation class or a plain (sync or async) callable

        Returns:
            The resolved registry entry
        """
        if not isinstance(name, str) or not name:
            raise ValueError("method name must be a non-empty string")
        if not callable(target):
            raise TypeError(f"target for {name} is not callable")

        if inspect.isclass(target):
            entry: Target = Instantiable(target)
        else:
            entry = Invocable(target)
        self.methods[name] = entry
        logger.info(f"Registered JSON-RPC method: {name} ({type(entry).__name__})")
        return entry

    def method(self, name: Optional[str] = None):
        """Decorator form of ``register``; defaults to the object's name."""

        def decorator(target):
            self.register(name or target.__name__, target)
            return target

        return decorator

    def resolve(self, name: Any) -> Optional[Target]:
        if not isinstance(name, str):
            return None
        return self.methods.get(name)

    def names(self) -> List[str]:
        return sorted(self.methods)

    def __contains__(self, name: object) -> bool:
        return name in self.methods

    def __len__(self) -> int:
        return len(self.methods)
