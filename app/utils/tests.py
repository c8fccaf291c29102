from typing import Callable, Dict, Optional

from fastapi import FastAPI


def create_test_app(
    routers,
    middlewares=None,
    dependency_overrides: Optional[Dict[Callable, Callable]] = None,
) -> FastAPI:
    """
    Create a FastAPI test application with the given routers and middlewares.

    Args:
        routers: A router or list of routers to include in the app.
        middlewares: Optional list of (middleware_class, config_dict) tuples.
        dependency_overrides: Optional mapping of provider to replacement,
            e.g. {get_notification_service: lambda: service}.

    Returns:
        FastAPI: A configured FastAPI application.

    Example:
        app = create_test_app(
            [messages.router],
            dependency_overrides={get_notification_service: lambda: service},
        )
    """
    # Create a fresh app; no lifespan so the process-wide trigger is untouched
    app = FastAPI()

    # Add any additional middlewares
    if middlewares:
        for middleware_class, middleware_config in middlewares:
            app.add_middleware(middleware_class, **middleware_config)

    # Include the router
    if not isinstance(routers, list):
        routers = [routers]
    for router in routers:
        app.include_router(router)

    if dependency_overrides:
        app.dependency_overrides.update(dependency_overrides)

    return app
