"""Get-or-register helpers over a service registry.

    from lazyload_lib import Registrar, RegisterAs, ServiceContainer

    registrar = Registrar(ServiceContainer())
    service = registrar.get_or_register(MyService, MyService, RegisterAs.SINGLETON)
"""
from .errors import (
    LazyloadError,
    RegistrationConflictError,
    ServiceNotReadyError,
    ServiceNotRegisteredError,
    UnsupportedLifecycleError,
)
from .register_as import ASYNC_KINDS, SYNC_KINDS, RegisterAs
from .registrar import Registrar
from .services import RegistryProtocol, ServiceContainer

__all__ = [
    "Registrar",
    "RegisterAs",
    "SYNC_KINDS",
    "ASYNC_KINDS",
    "RegistryProtocol",
    "ServiceContainer",
    "LazyloadError",
    "UnsupportedLifecycleError",
    "ServiceNotRegisteredError",
    "ServiceNotReadyError",
    "RegistrationConflictError",
]
