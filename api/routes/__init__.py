"""
API Routes Module

This module contains all API endpoint implementations organized by function:
- machines.py: Fleet machine reads and control
- edge.py: Edge node reads
- models.py: ML model reads
- motor.py: Aggregate motor readings, health and control
- system.py: Fleet aggregates and tick control

All routers are combined in main.py to create the complete API.
"""

from .machines import router as machines_router
from .edge import router as edge_router
from .models import router as models_router
from .motor import router as motor_router
from .system import router as system_router

__all__ = [
    "machines_router",
    "edge_router",
    "models_router",
    "motor_router",
    "system_router",
]
