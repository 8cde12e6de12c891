"""Get-or-register on top of a service registry.

`Registrar` wraps any `RegistryProtocol` implementation and resolves a
dependency by key, registering it on first request according to the
requested `RegisterAs` lifecycle:

    registrar = Registrar(ServiceContainer())

    # Repository reused across the app, created on first use
    repo = registrar.get_or_register(AuthRepository, lambda: AuthRepository(db), RegisterAs.LAZY_SINGLETON)

    # Use case created fresh on every fetch
    use_case = registrar.get_or_register_factory(AuthUseCase, lambda: AuthUseCase(repo))

Synchronous kinds are first-writer-wins: once a key is registered, later
calls return the existing value and ignore the supplied creator and kind.
Of the async kinds only `SINGLETON_ASYNC` behaves that way. `FACTORY_ASYNC`
and `LAZY_SINGLETON_ASYNC` re-register on every call, so a second
`LAZY_SINGLETON_ASYNC` call replaces the deferred producer and may yield a
new instance.

The check/register/fetch sequence is not locked. Two threads racing on the
same unregistered key may both register; which one wins is decided by the
registry's conflict policy.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Hashable, Tuple, TypeVar

from lazyload_lib.errors import UnsupportedLifecycleError, describe_key, describe_kind
from lazyload_lib.register_as import RegisterAs
from lazyload_lib.services.interfaces import RegistryProtocol

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Registrar:
    def __init__(self, registry: RegistryProtocol) -> None:
        self._registry = registry
        # in-flight SINGLETON_ASYNC creations keyed by (event loop, key)
        self._pending: Dict[Tuple[asyncio.AbstractEventLoop, Hashable], "asyncio.Future[Any]"] = {}

    @property
    def registry(self) -> RegistryProtocol:
        return self._registry

    def get_or_register(
        self,
        key: Hashable,
        instance_creator: Callable[[], T],
        register_as: RegisterAs,
    ) -> T:
        """Return the registered instance for `key`, registering it first if needed.

        `register_as` must be one of SINGLETON, FACTORY or LAZY_SINGLETON.
        Any other kind raises `UnsupportedLifecycleError` and leaves `key`
        unregistered, unless `key` was already registered, in which case the
        existing value is returned.
        """
        if not self._registry.is_registered(key):
            if register_as is RegisterAs.SINGLETON:
                self._registry.register_singleton(key, instance_creator())
            elif register_as is RegisterAs.FACTORY:
                self._registry.register_factory(key, instance_creator)
            elif register_as is RegisterAs.LAZY_SINGLETON:
                self._registry.register_lazy_singleton(key, instance_creator)
            else:
                logger.error("Unsupported lifecycle %s requested for %s",
                             describe_kind(register_as), describe_key(key))
                raise UnsupportedLifecycleError(register_as)

        return self._registry.get(key)

    async def get_or_register_async(
        self,
        key: Hashable,
        instance_creator: Callable[[], Awaitable[T]],
        register_as: RegisterAs,
    ) -> T:
        """Async counterpart of `get_or_register`.

        `register_as` must be one of FACTORY_ASYNC, LAZY_SINGLETON_ASYNC or
        SINGLETON_ASYNC; anything else raises `UnsupportedLifecycleError`
        when the coroutine is awaited.
        """
        if register_as is RegisterAs.FACTORY_ASYNC:
            self._registry.register_factory_async(key, instance_creator)
            return await self._registry.get_async(key)
        if register_as is RegisterAs.LAZY_SINGLETON_ASYNC:
            self._registry.register_lazy_singleton_async(key, instance_creator)
            return await self._registry.get_async(key)
        if register_as is RegisterAs.SINGLETON_ASYNC:
            if not self._registry.is_registered(key):
                await self._create_singleton(key, instance_creator)
            return self._registry.get(key)

        logger.error("Unsupported async lifecycle %s requested for %s",
                     describe_kind(register_as), describe_key(key))
        raise UnsupportedLifecycleError(register_as, async_operation=True)

    async def _create_singleton(self, key: Hashable, instance_creator: Callable[[], Awaitable[Any]]) -> None:
        # creations are shared per event loop; a future cannot be awaited from another loop
        slot = (asyncio.get_running_loop(), key)
        pending = self._pending.get(slot)
        if pending is None:
            pending = asyncio.ensure_future(instance_creator())
            self._pending[slot] = pending
            pending.add_done_callback(lambda fut: self._on_created(slot, fut))

        await asyncio.shield(pending)

    def _on_created(self, slot: Tuple[asyncio.AbstractEventLoop, Hashable], fut: "asyncio.Future[Any]") -> None:
        """Register a finished creation, even when every awaiting caller was cancelled."""
        if self._pending.get(slot) is fut:
            del self._pending[slot]
        if fut.cancelled() or fut.exception() is not None:
            return
        key = slot[1]
        # another loop may have won the race; the registry keeps the first instance
        if not self._registry.is_registered(key):
            self._registry.register_singleton(key, fut.result())

    # Convenience wrappers with the lifecycle fixed

    def get_or_register_factory(self, key: Hashable, instance_creator: Callable[[], T]) -> T:
        """New instance on every fetch."""
        return self.get_or_register(key, instance_creator, RegisterAs.FACTORY)

    def get_or_register_lazy_singleton(self, key: Hashable, instance_creator: Callable[[], T]) -> T:
        """Instance created on first fetch, then reused."""
        return self.get_or_register(key, instance_creator, RegisterAs.LAZY_SINGLETON)

    def get_or_register_singleton(self, key: Hashable, instance_creator: Callable[[], T]) -> T:
        """Instance created immediately, then reused."""
        return self.get_or_register(key, instance_creator, RegisterAs.SINGLETON)

    async def get_or_register_factory_async(self, key: Hashable, instance_creator: Callable[[], Awaitable[T]]) -> T:
        return await self.get_or_register_async(key, instance_creator, RegisterAs.FACTORY_ASYNC)

    async def get_or_register_lazy_singleton_async(self, key: Hashable, instance_creator: Callable[[], Awaitable[T]]) -> T:
        return await self.get_or_register_async(key, instance_creator, RegisterAs.LAZY_SINGLETON_ASYNC)

    async def get_or_register_singleton_async(self, key: Hashable, instance_creator: Callable[[], Awaitable[T]]) -> T:
        return await self.get_or_register_async(key, instance_creator, RegisterAs.SINGLETON_ASYNC)
