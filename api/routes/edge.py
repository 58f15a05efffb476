"""
Edge Node Endpoints

Index-based reads of the simulated edge-compute nodes. An out-of-range
index returns the sentinel payload.
"""

from typing import List

from fastapi import APIRouter, Depends

from api.dependencies import get_fleet
from api.models import EdgeNodeReading
from engine import FleetEngine

router = APIRouter(prefix="/edge-nodes", tags=["Edge Nodes"])


def build_edge_node_reading(fleet: FleetEngine, index: int) -> EdgeNodeReading:
    return EdgeNodeReading(
        index=index,
        id=fleet.edge_node_id(index),
        name=fleet.edge_node_name(index),
        location=fleet.edge_node_location(index),
        is_online=fleet.edge_node_online(index),
        cpu_usage=fleet.edge_node_cpu(index),
        memory_usage=fleet.edge_node_memory(index),
        network_latency=fleet.edge_node_latency(index),
        processing_time=fleet.edge_node_processing_time(index),
    )


@router.get(
    "",
    response_model=List[EdgeNodeReading],
    summary="List edge nodes"
)
async def list_edge_nodes(fleet: FleetEngine = Depends(get_fleet)):
    """List all edge nodes, including offline ones."""
    return [build_edge_node_reading(fleet, i) for i in range(fleet.edge_node_count())]


@router.get(
    "/{index}",
    response_model=EdgeNodeReading,
    summary="Get edge node by index"
)
async def get_edge_node(index: int, fleet: FleetEngine = Depends(get_fleet)):
    """Get one edge node by index."""
    return build_edge_node_reading(fleet, index)
