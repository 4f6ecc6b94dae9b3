from .dashboard import Dashboard, ResultCard, build_dashboard, format_millions, format_percent

__all__ = ["Dashboard", "ResultCard", "build_dashboard", "format_millions", "format_percent"]
