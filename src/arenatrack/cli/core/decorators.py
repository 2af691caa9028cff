"""Dependency injection decorators for CLI commands."""

from functools import wraps

import rich_click as click

from ...catalog import CatalogError, load_catalog
from ...models import ConnectionState
from ...sync import SyncController
from ..commands.common import (
    print_connection_success,
    print_connection_test,
)
from .exceptions import ConfigurationError, ConnectionError


def with_config(f):
    """
    Inject config from context.

    Usage:
        @with_config
        def command(config, ...):
            pass
    """
    @wraps(f)
    @click.pass_context
    def wrapper(ctx, *args, **kwargs):
        return f(*args, config=ctx.obj.config, **kwargs)
    return wrapper


def with_storage(f):
    """
    Inject local fallback storage with automatic resource management.

    Usage:
        @with_storage
        def command(storage, ...):
            pass
    """
    @wraps(f)
    @click.pass_context
    def wrapper(ctx, *args, **kwargs):
        from ..services.storage import StorageService

        with StorageService(ctx.obj.db_path) as storage:
            return f(*args, storage=storage, **kwargs)
    return wrapper


def with_controller(f):
    """
    Inject a connected SyncController with profiles loaded.

    The store is closed (and any change feed stopped) when the command returns.

    Usage:
        @with_controller
        def command(controller, ...):
            pass
    """
    @wraps(f)
    @click.pass_context
    def wrapper(ctx, *args, **kwargs):
        from ..services.store import StoreService

        config = ctx.obj.config
        with StoreService.from_config(config, ctx.obj.db_path) as store:
            controller = SyncController(store, default_names=config.default_profile_names)

            print_connection_test(f"{store.name} store")
            if not controller.connect():
                hint = (
                    "Check store.url and store.api_key in config.yaml"
                    if store.name == "remote"
                    else f"Check that {ctx.obj.db_path} is writable"
                )
                raise ConnectionError(f"Failed to connect to the {store.name} store. {hint}")
            print_connection_success(f"{store.name} store")

            controller.load()
            if controller.state is not ConnectionState.READY:
                raise ConnectionError("Failed to load profiles")

            return f(*args, controller=controller, **kwargs)
    return wrapper


def with_catalog(f):
    """
    Inject the champion catalog.

    Usage:
        @with_catalog
        def command(catalog, ...):
            pass
    """
    @wraps(f)
    @click.pass_context
    def wrapper(ctx, *args, **kwargs):
        path = ctx.obj.config.get("catalog.path")
        if not path:
            raise ConfigurationError("catalog.path is required in config.yaml")

        try:
            catalog = load_catalog(path)
        except CatalogError as e:
            raise ConfigurationError(str(e))

        return f(*args, catalog=catalog, **kwargs)
    return wrapper
