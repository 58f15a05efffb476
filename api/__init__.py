"""
API Module - FastAPI Host Adapter

This module exposes the simulation engines over HTTP for host UIs.
It is a thin consumer of the engine capability interface and adds no
simulation semantics of its own.

Key Components:
- main.py: FastAPI application, lifespan and root endpoints
- models.py: Pydantic schemas for request/response validation
- dependencies.py: Engine dependencies for the routes
- routes/: API endpoint implementations

Endpoints:
- GET /api/v1/machines: Fleet machine readings
- GET /api/v1/edge-nodes: Edge node readings
- GET /api/v1/ml-models: ML model readings
- GET /api/v1/motor/reading: Sampled aggregate motor reading
- GET /api/v1/system/summary: Fleet aggregates
- POST /api/v1/system/tick: Start a new reading
"""

__version__ = "0.1.0"
