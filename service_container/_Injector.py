import inspect
from functools import wraps

from flask import current_app, has_app_context


def service_resolver(param, func_name: str):
    """Resolves and retrieves the appropriate service from the container."""
    if not has_app_context():
        raise RuntimeError(f"No Flask app context available for injecting '{param.name}' in '{func_name}'")

    if param.annotation is inspect.Parameter.empty:
        return None

    service_name = param.annotation if isinstance(param.annotation, str) else param.annotation.__name__

    container = current_app.container
    if not (container.has(service_name) or container.has_singleton(service_name)):
        raise ValueError(
            f"[Injector] Cannot resolve service '{service_name}' for parameter '{param.name}' in '{func_name}'. "
            f"Ensure it is registered in the container."
        )

    return container.get(service_name)


def injector(func):
    sig = inspect.signature(func)

    @wraps(func)
    def wrapper(*args, **kwargs):
        for name, param in sig.parameters.items():
            if name in kwargs:  # already provided by Flask (e.g. user_id)
                continue
            service = service_resolver(param, func.__name__)
            if service is not None:
                kwargs[name] = service
        return func(*args, **kwargs)

    return wrapper


# Combined route and injector
def injectable_route(app, route, prefix=None, **options):
    if prefix:
        route = f"{prefix}/{route}"

    def decorator(func):
        route_decorator = app.route(route, **options)
        return route_decorator(
            injector(func)
        )

    return decorator
