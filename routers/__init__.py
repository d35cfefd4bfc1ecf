"""
API Routers Package
"""

from .records import router as records_router
from .stats import router as stats_router
from .calendar import router as calendar_router

__all__ = ['records_router', 'stats_router', 'calendar_router']
