"""
Flask REST API for the price forecast service.

Provides endpoints for:
- Refresh status and health checks
- Class and district statistics
- Per-class and ad-hoc forecasts
"""

from tashkentforecast.api.server import create_app
from tashkentforecast.api.routes import register_routes

__all__ = [
    "create_app",
    "register_routes",
]
