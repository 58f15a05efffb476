"""
System Endpoints

Fleet-wide aggregates and tick control.

Hosts poll the read routes and call POST /system/tick once per polling
interval; every read between two ticks observes the same physics pass.
"""

from datetime import datetime

from fastapi import APIRouter, Depends

from api.dependencies import get_fleet, get_motor
from api.models import SystemSummary, TickResponse
from engine import FleetEngine, AggregateMotor

router = APIRouter(prefix="/system", tags=["System"])


@router.get(
    "/summary",
    response_model=SystemSummary,
    summary="Fleet summary",
    description="""
    Aggregates for the current reading:
    - **overall_efficiency**: mean efficiency of running machines (0 when none run)
    - **total_power_consumption**: total power of running machines (kW)
    - **system_health_score**: mean health over all machines
    """
)
async def system_summary(
    fleet: FleetEngine = Depends(get_fleet),
    motor: AggregateMotor = Depends(get_motor)
):
    """Get fleet-wide aggregates."""
    machines = fleet.machines()
    nodes = fleet.edge_nodes()
    return SystemSummary(
        timestamp=datetime.utcnow(),
        machine_count=len(machines),
        running_machines=sum(1 for m in machines if m.is_running),
        edge_node_count=len(nodes),
        online_edge_nodes=sum(1 for n in nodes if n.is_online),
        ml_model_count=fleet.ml_model_count(),
        overall_efficiency=fleet.overall_efficiency(),
        total_power_consumption=fleet.total_power_consumption(),
        system_health_score=fleet.system_health_score(),
        is_working_hours=fleet.is_working_hours(),
        seasonal_factor=fleet.seasonal_factor(),
        fleet_tick=fleet.coalescer.tick,
        motor_tick=motor.coalescer.tick,
    )


@router.post(
    "/tick",
    response_model=TickResponse,
    summary="Start a new reading",
    description="Mark both engines stale so the next read runs one fresh physics pass."
)
async def next_tick(
    fleet: FleetEngine = Depends(get_fleet),
    motor: AggregateMotor = Depends(get_motor)
):
    """Start a new reading on the fleet and the aggregate motor."""
    fleet.reset_for_next_reading()
    motor.reset_for_next_reading()
    return TickResponse(
        fleet_tick=fleet.coalescer.tick,
        motor_tick=motor.coalescer.tick,
        message="Next read will run a fresh physics pass",
    )
