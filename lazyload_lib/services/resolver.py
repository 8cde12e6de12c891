from typing import Any, Callable, Hashable

from fastapi import FastAPI, HTTPException
from starlette.requests import Request

from lazyload_lib.errors import ServiceNotReadyError, describe_key
from lazyload_lib.register_as import ASYNC_KINDS, RegisterAs
from lazyload_lib.registrar import Registrar


def attach_registrar(app: FastAPI, registrar: Registrar) -> None:
    """Expose `registrar` to request handlers via `app.state.registrar`."""
    app.state.registrar = registrar


def _registrar(request: Request) -> Registrar:
    registrar = getattr(request.app.state, 'registrar', None)
    if registrar is None:
        raise HTTPException(status_code=500, detail="Service registrar not configured")
    return registrar


def resolve_service(request: Request, key: Hashable) -> Any:
    """Resolve an already registered service from the application's registrar.

    Raises an HTTP 500 if `app.state.registrar` is missing, `key` has no
    registration, or `key` is registered as async and not materialized yet.
    """
    registrar = _registrar(request)
    try:
        return registrar.registry.get(key)
    except KeyError:
        raise HTTPException(status_code=500, detail=f"Service '{describe_key(key)}' not configured")
    except ServiceNotReadyError as exc:
        raise HTTPException(status_code=500, detail=str(exc))


def resolve_optional_service(request: Request, key: Hashable) -> Any:
    """Resolve an optional service, returning None if it is not registered.

    An async registration that is not materialized yet still raises an
    HTTP 500, as in `resolve_service`.
    """
    registrar = getattr(request.app.state, 'registrar', None)
    if registrar is None:
        return None
    try:
        return registrar.registry.get(key)
    except KeyError:
        return None
    except ServiceNotReadyError as exc:
        raise HTTPException(status_code=500, detail=str(exc))


def provide(
    key: Hashable,
    instance_creator: Callable[[], Any],
    register_as: RegisterAs = RegisterAs.LAZY_SINGLETON,
) -> Callable[..., Any]:
    """Build a FastAPI dependency that gets-or-registers `key` per request.

        @app.get('/items')
        def items(repo: ItemRepository = Depends(provide(ItemRepository, ItemRepository))):
            ...

    Async kinds produce an async dependency; `instance_creator` must then
    return an awaitable.
    """
    if register_as in ASYNC_KINDS:
        async def _async_dependency(request: Request) -> Any:
            return await _registrar(request).get_or_register_async(key, instance_creator, register_as)
        return _async_dependency

    def _dependency(request: Request) -> Any:
        return _registrar(request).get_or_register(key, instance_creator, register_as)
    return _dependency
