from .client import TodoistAPIError, TodoistAuthError, TodoistClient
from .export import JsonExportSource

__all__ = ["TodoistClient", "TodoistAPIError", "TodoistAuthError", "JsonExportSource"]
