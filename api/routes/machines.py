"""
Machine Endpoints

Index-based reads and control of the simulated fleet machines.

Index routes mirror the engine: an out-of-range index returns the
sentinel payload and control operations on it are no-ops. Lookups by
machine identifier return 404 for unknown ids. The maintenance schedule
and energy analysis cover the whole fleet.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_fleet
from api.models import (
    ControlResponse,
    EnergyAnalysisResponse,
    MachineDetail,
    MachineReading,
    MaintenanceScheduleResponse,
    MaintenanceTaskModel,
    TargetSpeedRequest,
)
from engine import FleetEngine, analyze_energy, generate_maintenance_schedule

router = APIRouter(prefix="/machines", tags=["Machines"])


def build_machine_reading(fleet: FleetEngine, index: int) -> MachineReading:
    """Read every machine accessor for one index."""
    return MachineReading(
        index=index,
        id=fleet.machine_id(index),
        name=fleet.machine_name(index),
        type=fleet.machine_type(index),
        is_running=fleet.machine_running(index),
        speed=fleet.machine_speed(index),
        temperature=fleet.machine_temperature(index),
        load=fleet.machine_load(index),
        efficiency=fleet.machine_efficiency(index),
        power_consumption=fleet.machine_power(index),
        vibration=fleet.machine_vibration(index),
        health_score=fleet.machine_health(index),
        maintenance_status=fleet.machine_maintenance_status(index),
    )


def _in_range(fleet: FleetEngine, index: int) -> bool:
    return 0 <= index < fleet.machine_count()


# =========================================
# API Endpoints
# =========================================

@router.get(
    "",
    response_model=List[MachineReading],
    summary="List machines",
    description="Current reading of every machine in the fleet."
)
async def list_machines(fleet: FleetEngine = Depends(get_fleet)):
    """List all machines."""
    return [build_machine_reading(fleet, i) for i in range(fleet.machine_count())]


@router.post(
    "/reset",
    response_model=ControlResponse,
    summary="Reset machine wear",
    description="""
    Restore bearing wear, oil degradation, operating hours, health (95)
    and maintenance status (Good) on every machine. Identity, category,
    speeds and temperatures are kept.
    """
)
async def reset_machines(fleet: FleetEngine = Depends(get_fleet)):
    """Reset wear state of all machines."""
    fleet.reset()
    return ControlResponse(success=True, message="All machines reset")


@router.get(
    "/maintenance-schedule",
    response_model=MaintenanceScheduleResponse,
    summary="Maintenance schedule",
    description="""
    One task per machine that needs work, most urgent first.

    **Priority** (first match wins):
    - Critical: maintenance status Critical or efficiency < 70 (in 2 hours)
    - High: operating hours > 2000 or efficiency < 85 (in 1 day)
    - Medium: operating hours > 1500 (in 7 days)
    """
)
async def maintenance_schedule(fleet: FleetEngine = Depends(get_fleet)):
    """Build the fleet maintenance schedule."""
    schedule = generate_maintenance_schedule(fleet.machines(), fleet.clock())
    return MaintenanceScheduleResponse(
        generated_at=schedule.generated_at,
        task_count=len(schedule.tasks),
        total_cost=round(schedule.total_cost, 2),
        total_hours=schedule.total_hours,
        tasks=[MaintenanceTaskModel(**task.to_dict()) for task in schedule.tasks],
    )


@router.get(
    "/energy",
    response_model=EnergyAnalysisResponse,
    summary="Energy analysis",
    description="Power draw, daily energy, mean efficiency and savings potential of running machines."
)
async def energy_analysis(fleet: FleetEngine = Depends(get_fleet)):
    """Analyse fleet energy consumption."""
    return EnergyAnalysisResponse(**analyze_energy(fleet.machines()).to_dict())


@router.get(
    "/by-id/{machine_id}",
    response_model=MachineDetail,
    summary="Get machine by identifier",
    description="Noise-free snapshot of a machine, including cumulative wear."
)
async def get_machine_by_id(machine_id: str, fleet: FleetEngine = Depends(get_fleet)):
    """Get one machine by its identifier."""
    machine = fleet.find_machine(machine_id)
    if machine is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Machine not found: {machine_id}"
        )
    return MachineDetail(**machine.to_dict())


@router.get(
    "/{index}",
    response_model=MachineReading,
    summary="Get machine by index",
    description="Current reading of one machine. Out-of-range indices return the sentinel payload."
)
async def get_machine(index: int, fleet: FleetEngine = Depends(get_fleet)):
    """Get one machine by index."""
    return build_machine_reading(fleet, index)


@router.post(
    "/{index}/start",
    response_model=ControlResponse,
    summary="Start machine"
)
async def start_machine(index: int, fleet: FleetEngine = Depends(get_fleet)):
    """Start a machine (no-op for an out-of-range index)."""
    fleet.start_machine(index)
    applied = _in_range(fleet, index)
    return ControlResponse(
        success=applied,
        message=f"Started {fleet.machine_id(index)}" if applied else "Index out of range; ignored",
        index=index,
    )


@router.post(
    "/{index}/stop",
    response_model=ControlResponse,
    summary="Stop machine"
)
async def stop_machine(index: int, fleet: FleetEngine = Depends(get_fleet)):
    """Stop a machine (no-op for an out-of-range index)."""
    fleet.stop_machine(index)
    applied = _in_range(fleet, index)
    return ControlResponse(
        success=applied,
        message=f"Stopped {fleet.machine_id(index)}" if applied else "Index out of range; ignored",
        index=index,
    )


@router.put(
    "/{index}/target-speed",
    response_model=ControlResponse,
    summary="Set target speed",
    description="Set a new speed target. Current speed converges toward it over later ticks."
)
async def set_target_speed(
    index: int,
    request: TargetSpeedRequest,
    fleet: FleetEngine = Depends(get_fleet)
):
    """Set a machine's target speed."""
    fleet.set_target_speed(index, request.target_speed)
    applied = _in_range(fleet, index)
    return ControlResponse(
        success=applied,
        message=(
            f"{fleet.machine_id(index)} target set to {request.target_speed:.0f} rpm"
            if applied else "Index out of range; ignored"
        ),
        index=index,
    )
