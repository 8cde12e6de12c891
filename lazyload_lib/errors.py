"""Exceptions raised by the registry and the registrar."""
from enum import Enum
from typing import Any, Hashable


def describe_key(key: Hashable) -> str:
    if isinstance(key, str):
        return key
    return getattr(key, '__qualname__', None) or repr(key)


def describe_kind(kind: Any) -> str:
    if isinstance(kind, Enum):
        return f"{type(kind).__name__}.{kind.name}"
    return repr(kind)


class LazyloadError(Exception):
    """Base class for lazyload errors."""


class UnsupportedLifecycleError(LazyloadError, NotImplementedError):
    """A lifecycle kind the requested operation does not handle.

    This is a programmer error (an invalid or reserved kind was passed), so
    callers should let it surface rather than retry.
    """

    def __init__(self, register_as: Any, async_operation: bool = False) -> None:
        self.register_as = register_as
        self.async_operation = async_operation
        message = f"{describe_kind(register_as)} is not implemented"
        if async_operation:
            message += " for async operations"
        super().__init__(message)


class ServiceNotRegisteredError(LazyloadError, KeyError):
    def __init__(self, key: Hashable) -> None:
        self.key = key
        super().__init__(f"No service registered for key '{describe_key(key)}'")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class ServiceNotReadyError(LazyloadError, RuntimeError):
    """Synchronous fetch of a registration that can only be awaited."""

    def __init__(self, key: Hashable) -> None:
        self.key = key
        super().__init__(
            f"Service '{describe_key(key)}' is registered as async; use get_async()"
        )


class RegistrationConflictError(LazyloadError, ValueError):
    def __init__(self, key: Hashable) -> None:
        self.key = key
        super().__init__(f"Service already registered for key '{describe_key(key)}'")
