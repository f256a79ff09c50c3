"""
Handler modules with automatic API registration
Functions decorated with @api_handler are collected here and mounted on a FastAPI app
"""

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Type, TypeVar

from taskrecap.core.logger import get_logger

if TYPE_CHECKING:
    from fastapi import FastAPI

F = TypeVar("F", bound=Callable[..., Any])

logger = get_logger(__name__)

# Global API handler registry
_handler_registry: Dict[str, Dict[str, Any]] = {}


def api_handler(
    body: Optional[Type] = None,
    method: str = "POST",
    path: Optional[str] = None,
    tags: Optional[List[str]] = None,
    summary: Optional[str] = None,
    description: Optional[str] = None,
):
    """
    API handler decorator

    @param body - Request model type, validated by FastAPI from the JSON body
    @param method - HTTP method
    @param path - Route path below the prefix, defaults to /<function name>
    @param tags - OpenAPI tags, defaults to the handler module name
    @param summary - OpenAPI summary, defaults to the first docstring line
    @param description - OpenAPI description, defaults to the docstring
    """

    def decorator(func: F) -> F:
        func_name = getattr(func, "__name__", "unknown")
        module_name = (getattr(func, "__module__", "") or "unknown").split(".")[-1]
        func_doc = getattr(func, "__doc__", None) or ""

        if func_name in _handler_registry:
            logger.warning(f"Handler {func_name} registered twice, keeping the latest")

        _handler_registry[func_name] = {
            "func": func,
            "body": body,
            "method": method.upper(),
            "path": path or f"/{func_name}",
            "tags": tags or [module_name],
            "module": module_name,
            "summary": summary or (func_doc.split("\n")[0] if func_doc else func_name),
            "description": description or func_doc,
        }

        return func

    return decorator


def get_registered_handlers() -> Dict[str, Dict[str, Any]]:
    """
    Snapshot of the handler registry

    @returns Mapping of handler name to its route metadata
    """
    return _handler_registry.copy()


def register_fastapi_routes(app: "FastAPI", prefix: str = "/api") -> None:
    """
    Mount every registered handler on the app

    @param app - FastAPI application instance
    @param prefix - Route prefix
    """
    handlers = get_registered_handlers()
    logger.info(f"Starting FastAPI route registration, {len(handlers)} handlers")

    registered = 0
    for handler_name, handler_info in handlers.items():
        method = handler_info["method"]
        full_path = f"{prefix}{handler_info['path']}"

        try:
            app.add_api_route(
                full_path,
                handler_info["func"],
                methods=[method],
                tags=handler_info["tags"],
                summary=handler_info["summary"],
                description=handler_info["description"],
                response_model=None,
            )
        except Exception as e:
            logger.error(f"✗ Failed to register route {handler_name}: {e}", exc_info=True)
            continue

        registered += 1
        logger.debug(
            f"✓ Registered route: {method} {full_path} ({handler_name} from {handler_info['module']})"
        )

    logger.info(f"FastAPI route registration completed: {registered} routes")


# Import all handler modules to trigger decorator registration
# ruff: noqa: E402
from . import dashboard

__all__ = [
    "api_handler",
    "register_fastapi_routes",
    "get_registered_handlers",
    "dashboard",
]
