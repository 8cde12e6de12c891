from typing import Any, Awaitable, Callable, Hashable, Iterable, Protocol, runtime_checkable


@runtime_checkable
class RegistryProtocol(Protocol):
    """Registry capability consumed by `lazyload_lib.registrar.Registrar`.

    Implementations should make each individual call atomic and follow the
    semantics documented on `lazyload_lib.services.container.ServiceContainer`
    (ServiceNotRegisteredError for missing keys, cached lazy singletons, etc.).
    """

    def is_registered(self, key: Hashable) -> bool: ...

    def register_singleton(self, key: Hashable, instance: Any) -> None: ...

    def register_factory(self, key: Hashable, factory: Callable[[], Any]) -> None: ...

    def register_lazy_singleton(self, key: Hashable, factory: Callable[[], Any]) -> None: ...

    def register_factory_async(self, key: Hashable, factory: Callable[[], Awaitable[Any]]) -> None: ...

    def register_lazy_singleton_async(self, key: Hashable, factory: Callable[[], Awaitable[Any]]) -> None: ...

    def get(self, key: Hashable) -> Any: ...

    async def get_async(self, key: Hashable) -> Any: ...

    def keys(self) -> Iterable[Hashable]: ...
