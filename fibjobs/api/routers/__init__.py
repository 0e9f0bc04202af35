"""
API Routers Package

Available Routers:
    - values_router: job submission and state endpoints (/values)
"""

from .values import router as values_router

__all__ = ["values_router"]
