from .manager import DashboardManager, get_dashboard_manager

__all__ = ["DashboardManager", "get_dashboard_manager"]
