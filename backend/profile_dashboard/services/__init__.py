from .aggregator import aggregate
from .controller import DashboardController, classify_error
from .pipeline import load_dashboard

__all__ = ["DashboardController", "aggregate", "classify_error", "load_dashboard"]
