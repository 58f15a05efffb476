"""
Aggregate Motor Endpoints

This module exposes the single aggregate motor:
- Sampled readings (status, title and alerts included)
- Daily-life application metrics
- Health score with explainable breakdown
- OEE and window health analysis over the recent reading history
- Start, stop and reset control

Each call to /motor/reading starts a new tick; the other read routes
observe the most recent tick.
"""

from dataclasses import asdict
from datetime import datetime

from fastapi import APIRouter, Depends

from api.dependencies import get_motor, get_sampler
from api.models import (
    AnomalyModel,
    ControlResponse,
    DailyLifeResponse,
    HealthAnalysisResponse,
    HealthCategory,
    HealthScoreResponse,
    MetricBreakdown,
    MotorReadingResponse,
    OEEResponse,
    PredictionModel,
    TrendModel,
)
from engine import AggregateMotor, ReadingSampler, analyze_health, calculate_oee
from engine.sampler import MACHINE_ID

router = APIRouter(prefix="/motor", tags=["Aggregate Motor"])


@router.get(
    "/reading",
    response_model=MotorReadingResponse,
    summary="Sample a reading",
    description="""
    Start a new tick and read the complete sensor surface from it.

    **Status** (first match wins):
    - critical: temperature > 90, vibration > 5.0, efficiency < 75,
      oil pressure < 2.0, bearing health < 70 or system health < 60
    - warning: temperature > 80, vibration > 4.0, efficiency < 85,
      oil pressure < 2.5, bearing health < 80 or system health < 75
    - maintenance: system health < 85
    - normal: otherwise
    """
)
async def sample_reading(sampler: ReadingSampler = Depends(get_sampler)):
    """Sample one reading of the aggregate motor."""
    reading = sampler.sample()
    return MotorReadingResponse(**reading.to_dict())


@router.get(
    "/daily-life",
    response_model=DailyLifeResponse,
    summary="Daily-life metrics",
    description="Everyday equivalents (home, vehicle, recreation, appliances) of the current tick."
)
async def daily_life(motor: AggregateMotor = Depends(get_motor)):
    """Get daily-life metrics for the current tick."""
    return DailyLifeResponse(**motor.daily_life().to_dict())


@router.get(
    "/health",
    response_model=HealthScoreResponse,
    summary="Motor health score",
    description="""
    Weighted health score of the aggregate motor:
    - **Efficiency** (40%)
    - **Vibration** (25%)
    - **Temperature** (20%)
    - **Bearing** (10%)
    - **Oil** (5%)
    """
)
async def motor_health(motor: AggregateMotor = Depends(get_motor)):
    """Get the motor health score with breakdown."""
    result = motor.health_report()
    return HealthScoreResponse(
        machine_id=MACHINE_ID,
        timestamp=datetime.utcnow(),
        overall_score=result.overall_score,
        category=HealthCategory(result.category.value),
        primary_concern=result.primary_concern,
        recommendations=result.recommendations,
        breakdown=[
            MetricBreakdown(
                metric_name=item.metric_name,
                raw_value=item.raw_value,
                normalized_score=item.normalized_score,
                weighted_contribution=item.weighted_contribution,
                weight=item.weight,
                status=item.status,
            )
            for item in result.breakdown
        ]
    )


@router.get(
    "/oee",
    response_model=OEEResponse,
    summary="Overall equipment effectiveness",
    description="""
    OEE over the readings sampled by /motor/reading (most recent 100):
    - **Availability**: share of readings that are not critical
    - **Performance**: mean speed against 2500 rpm, capped at 100
    - **Quality**: share of normal readings with efficiency above 85
    """
)
async def motor_oee(sampler: ReadingSampler = Depends(get_sampler)):
    """Calculate OEE over the reading history."""
    return OEEResponse(**calculate_oee(list(sampler.history)).to_dict())


@router.get(
    "/analysis",
    response_model=HealthAnalysisResponse,
    summary="Health analysis",
    description="""
    Window-level assessment over the recent reading history: averaged
    health score, risk level, signal trends, failure predictions and
    temperature or vibration anomalies.
    """
)
async def motor_analysis(
    motor: AggregateMotor = Depends(get_motor),
    sampler: ReadingSampler = Depends(get_sampler)
):
    """Analyse motor health over the reading history."""
    result = analyze_health(list(sampler.history), motor.clock())
    return HealthAnalysisResponse(
        machine_id=result.machine_id,
        analysis_timestamp=result.analysis_timestamp,
        sample_count=result.sample_count,
        overall_health_score=result.overall_health_score,
        risk_level=result.risk_level.value,
        trends=TrendModel(**asdict(result.trends)),
        predictions=[PredictionModel(**p.to_dict()) for p in result.predictions],
        anomalies=[AnomalyModel(**a.to_dict()) for a in result.anomalies],
        recommendations=result.recommendations,
    )


@router.post("/start", response_model=ControlResponse, summary="Start motor")
async def start_motor(motor: AggregateMotor = Depends(get_motor)):
    motor.start()
    return ControlResponse(success=True, message="Motor started")


@router.post("/stop", response_model=ControlResponse, summary="Stop motor")
async def stop_motor(motor: AggregateMotor = Depends(get_motor)):
    motor.stop()
    return ControlResponse(success=True, message="Motor stopped")


@router.post(
    "/reset",
    response_model=ControlResponse,
    summary="Reset motor wear",
    description="Restore wear, degradation, runtime, health and maintenance status."
)
async def reset_motor(motor: AggregateMotor = Depends(get_motor)):
    motor.reset()
    return ControlResponse(success=True, message="Motor reset")
