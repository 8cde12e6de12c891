import asyncio
import logging
from dataclasses import dataclass
from threading import RLock
from typing import Any, Callable, Dict, Hashable, List, Optional, cast

from lazyload_lib.errors import (
    RegistrationConflictError,
    ServiceNotReadyError,
    ServiceNotRegisteredError,
    describe_key,
)
from lazyload_lib.register_as import RegisterAs

logger = logging.getLogger(__name__)

_UNSET = object()


@dataclass
class _Registration:
    kind: RegisterAs
    instance: Any = _UNSET
    factory: Optional[Callable[[], Any]] = None
    pending: Optional["asyncio.Future[Any]"] = None

    @property
    def materialized(self) -> bool:
        return self.instance is not _UNSET


class ServiceContainer:
    """A small, explicit registry of singletons and factories keyed by type.

    Keys are any hashable value; usually the service class itself, sometimes
    a string chosen by the caller. Each slot holds either a fixed instance or
    a producer:

    - singleton: the registered instance is returned as-is.
    - factory: the producer is called on every `get`.
    - lazy singleton: the producer is called on the first `get` and cached.
    - async factory / async lazy singleton: as above, but fetched with
      `get_async`. A sync `get` raises `ServiceNotReadyError` unless the lazy
      async singleton has already been materialized.

    Every individual call is atomic. Re-registering a key replaces the slot
    when `allow_reassignment` is true, otherwise it raises
    `RegistrationConflictError`.
    """

    def __init__(self, allow_reassignment: bool = True) -> None:
        self._lock = RLock()
        self._registrations: Dict[Hashable, _Registration] = {}
        self.allow_reassignment = allow_reassignment

    def is_registered(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._registrations

    def keys(self) -> List[Hashable]:
        with self._lock:
            return list(self._registrations.keys())

    def register_singleton(self, key: Hashable, instance: Any) -> None:
        self._register(key, _Registration(RegisterAs.SINGLETON, instance=instance))

    def register_factory(self, key: Hashable, factory: Callable[[], Any]) -> None:
        self._register(key, _Registration(RegisterAs.FACTORY, factory=factory))

    def register_lazy_singleton(self, key: Hashable, factory: Callable[[], Any]) -> None:
        self._register(key, _Registration(RegisterAs.LAZY_SINGLETON, factory=factory))

    def register_factory_async(self, key: Hashable, factory: Callable[[], Any]) -> None:
        self._register(key, _Registration(RegisterAs.FACTORY_ASYNC, factory=factory))

    def register_lazy_singleton_async(self, key: Hashable, factory: Callable[[], Any]) -> None:
        self._register(key, _Registration(RegisterAs.LAZY_SINGLETON_ASYNC, factory=factory))

    def _register(self, key: Hashable, registration: _Registration) -> None:
        with self._lock:
            if key in self._registrations:
                if not self.allow_reassignment:
                    raise RegistrationConflictError(key)
                logger.debug("Replacing registration for %s", describe_key(key))
            self._registrations[key] = registration
        logger.debug("Registered %s as %s", describe_key(key), registration.kind.value)

    def _lookup(self, key: Hashable) -> _Registration:
        try:
            return self._registrations[key]
        except KeyError:
            raise ServiceNotRegisteredError(key) from None

    def get(self, key: Hashable) -> Any:
        with self._lock:
            reg = self._lookup(key)
            if reg.materialized:
                return reg.instance
            if reg.kind is RegisterAs.FACTORY:
                return cast(Callable[[], Any], reg.factory)()
            if reg.kind is RegisterAs.LAZY_SINGLETON:
                # held under the lock so the producer runs once across threads
                reg.instance = cast(Callable[[], Any], reg.factory)()
                logger.debug("Materialized lazy singleton %s", describe_key(key))
                return reg.instance
            raise ServiceNotReadyError(key)

    async def get_async(self, key: Hashable) -> Any:
        with self._lock:
            reg = self._lookup(key)
            if reg.kind not in (RegisterAs.FACTORY_ASYNC, RegisterAs.LAZY_SINGLETON_ASYNC):
                return self.get(key)
            if reg.materialized:
                return reg.instance
            factory = cast(Callable[[], Any], reg.factory)
            if reg.kind is RegisterAs.FACTORY_ASYNC:
                pending = None
            else:
                loop = asyncio.get_running_loop()
                # a cancelled fetch or one owned by another loop cannot be shared
                if reg.pending is None or reg.pending.cancelled() or reg.pending.get_loop() is not loop:
                    reg.pending = asyncio.ensure_future(factory())
                    reg.pending.add_done_callback(
                        lambda fut: self._on_materialized(key, reg, fut))
                pending = reg.pending

        if pending is None:
            return await factory()

        instance = await asyncio.shield(pending)
        with self._lock:
            # an earlier fetch on another loop may have materialized first
            return reg.instance if reg.materialized else instance

    def _on_materialized(self, key: Hashable, reg: _Registration, fut: "asyncio.Future[Any]") -> None:
        with self._lock:
            if reg.pending is fut:
                reg.pending = None
            if fut.cancelled() or fut.exception() is not None:
                return
            if not reg.materialized:
                reg.instance = fut.result()
                logger.debug("Materialized async lazy singleton %s", describe_key(key))
