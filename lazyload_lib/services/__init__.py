"""Services package: the registry the registrar runs against.

Keep this package minimal; it exposes the registry protocol, the in-memory
container and the request-time resolvers.
"""
from .container import ServiceContainer
from .interfaces import RegistryProtocol

__all__ = [
    "ServiceContainer",
    "RegistryProtocol",
]
