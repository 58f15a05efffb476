"""
ML Model Endpoints

Index-based reads of the simulated predictive models. An out-of-range
index returns the sentinel payload.
"""

from typing import List

from fastapi import APIRouter, Depends

from api.dependencies import get_fleet
from api.models import MLModelReading
from engine import FleetEngine

router = APIRouter(prefix="/ml-models", tags=["ML Models"])


def build_model_reading(fleet: FleetEngine, index: int) -> MLModelReading:
    return MLModelReading(
        index=index,
        id=fleet.ml_model_id(index),
        name=fleet.ml_model_name(index),
        accuracy=fleet.ml_model_accuracy(index),
        confidence=fleet.ml_model_confidence(index),
        failure_probability=fleet.ml_model_failure_probability(index),
        remaining_useful_life=fleet.ml_model_remaining_useful_life(index),
    )


@router.get(
    "",
    response_model=List[MLModelReading],
    summary="List ML models"
)
async def list_models(fleet: FleetEngine = Depends(get_fleet)):
    """List all ML models."""
    return [build_model_reading(fleet, i) for i in range(fleet.ml_model_count())]


@router.get(
    "/{index}",
    response_model=MLModelReading,
    summary="Get ML model by index"
)
async def get_model(index: int, fleet: FleetEngine = Depends(get_fleet)):
    """Get one ML model by index."""
    return build_model_reading(fleet, index)
