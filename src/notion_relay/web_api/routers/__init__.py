"""
API Routers
===========
Each router handles a specific domain of the API.
"""
from . import health, webhook

__all__ = ["health", "webhook"]
