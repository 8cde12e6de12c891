import asyncio
from enum import Enum
from typing import Any, Hashable

from starlette.testclient import TestClient

from lazyload_lib.main import create_registrar
from lazyload_lib.services.resolver import attach_registrar


class SampleService:
    def __init__(self, name: str) -> None:
        self.name = name


class OtherService:
    def __init__(self, name: str) -> None:
        self.name = name


class AsyncSampleService:
    def __init__(self, name: str) -> None:
        self.name = name

    @classmethod
    async def create(cls, name: str) -> "AsyncSampleService":
        # Simulate async initialization
        await asyncio.sleep(0.01)
        return cls(name)


class CountingCreator:
    """Zero-arg creator that records how often it was called."""

    def __init__(self, name: str = 'test') -> None:
        self.name = name
        self.calls = 0

    def __call__(self) -> SampleService:
        self.calls += 1
        return SampleService(f'{self.name}-{self.calls}')


class AsyncCountingCreator:
    def __init__(self, name: str = 'test') -> None:
        self.name = name
        self.calls = 0

    async def __call__(self) -> AsyncSampleService:
        self.calls += 1
        return await AsyncSampleService.create(f'{self.name}-{self.calls}')


class UnsupportedKind(Enum):
    """A lifecycle tag outside RegisterAs, used to exercise the error path."""

    TEST_UNSUPPORTED = 'testUnsupported'


def register_service_on_client(client: TestClient, key: Hashable, instance: Any) -> None:
    """Register a service instance into the app's registrar for tests.

    Creates and attaches a registrar when the app has none yet.

    Usage in tests:
        from tests.helpers import register_service_on_client
        register_service_on_client(client, SampleService, SampleService('fake'))
    """
    registrar = getattr(client.app.state, 'registrar', None)
    if registrar is None:
        registrar = create_registrar()
        attach_registrar(client.app, registrar)

    registrar.registry.register_singleton(key, instance)
