"""Lifecycle kinds accepted by the get-or-register operations."""
from enum import Enum


class RegisterAs(Enum):
    """How a dependency is registered on first request."""

    # Created immediately and reused.
    SINGLETON = "singleton"
    # New instance on every fetch.
    FACTORY = "factory"
    # Created on first fetch, then reused.
    LAZY_SINGLETON = "lazySingleton"
    # New async instance on every fetch.
    FACTORY_ASYNC = "factoryAsync"
    # Async instance created on first fetch, then reused.
    LAZY_SINGLETON_ASYNC = "lazySingletonAsync"
    # Async instance awaited immediately, then reused.
    SINGLETON_ASYNC = "singletonAsync"


SYNC_KINDS = frozenset({
    RegisterAs.SINGLETON,
    RegisterAs.FACTORY,
    RegisterAs.LAZY_SINGLETON,
})

ASYNC_KINDS = frozenset({
    RegisterAs.FACTORY_ASYNC,
    RegisterAs.LAZY_SINGLETON_ASYNC,
    RegisterAs.SINGLETON_ASYNC,
})
