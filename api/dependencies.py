"""
Engine Dependencies

The lifespan handler in main.py builds one FleetEngine, one
AggregateMotor and one ReadingSampler and stores them on ``app.state``.
These dependencies hand them to the routes.

Engines are not thread-safe. Every route is ``async def`` so all engine
calls run on the event loop thread, one at a time.

Usage in FastAPI:
    @router.get("/machines")
    async def list_machines(fleet: FleetEngine = Depends(get_fleet)):
        return fleet.machine_count()
"""

from fastapi import Request

from engine import FleetEngine, AggregateMotor, ReadingSampler


def get_fleet(request: Request) -> FleetEngine:
    """Dependency that provides the process-wide fleet engine."""
    return request.app.state.fleet


def get_motor(request: Request) -> AggregateMotor:
    """Dependency that provides the aggregate motor."""
    return request.app.state.motor


def get_sampler(request: Request) -> ReadingSampler:
    """Dependency that provides the aggregate motor's reading sampler."""
    return request.app.state.sampler
