"""
Entity Registry

Owns the process-wide population of simulated entities and seeds it
exactly once. All seed values are literal constants so a freshly
initialised fleet is fully determined by the wall clock (which decides
the initial run flags).
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from core.seasonality import is_working_hours
from .models import Machine, MachineType, EdgeNode, MLModel

logger = logging.getLogger(__name__)


# =========================================
# Seed tables
# =========================================

# Run policy for the initial is_running flag
ALWAYS = "always"
NEVER = "never"
WORKING_HOURS = "working_hours"

# (id, name, type, run_policy, speed, target_speed, temperature, load,
#  efficiency, power_kw, vibration, pressure, flow_rate, health)
MACHINE_SEEDS = (
    ("MOTOR-001", "Main Drive Motor", MachineType.MOTOR, ALWAYS,
     2500.0, 2500.0, 65.0, 0.70, 92.0, 4.5, 1.5, 3.5, 15.0, 95.0),

    ("PUMP-101", "Industrial Pump 1", MachineType.PUMP, WORKING_HOURS,
     1900.0, 1900.0, 60.0, 0.70, 90.0, 3.7, 1.3, 10.0, 30.0, 93.0),
    ("PUMP-102", "Industrial Pump 2", MachineType.PUMP, WORKING_HOURS,
     2000.0, 2000.0, 65.0, 0.80, 92.0, 4.2, 1.4, 12.0, 35.0, 94.0),
    ("PUMP-103", "Industrial Pump 3", MachineType.PUMP, WORKING_HOURS,
     2100.0, 2100.0, 70.0, 0.90, 94.0, 4.7, 1.5, 14.0, 40.0, 95.0),

    ("CONV-101", "Conveyor Belt 1", MachineType.CONVEYOR, WORKING_HOURS,
     140.0, 140.0, 48.0, 0.65, 88.0, 3.1, 0.9, 0.0, 0.0, 92.0),
    ("CONV-102", "Conveyor Belt 2", MachineType.CONVEYOR, WORKING_HOURS,
     160.0, 160.0, 51.0, 0.80, 91.0, 3.4, 1.0, 0.0, 0.0, 94.0),

    ("COMP-101", "Air Compressor 1", MachineType.COMPRESSOR, WORKING_HOURS,
     3200.0, 3200.0, 83.0, 0.90, 86.0, 9.0, 2.3, 15.0, 10.0, 91.0),
    ("COMP-102", "Air Compressor 2", MachineType.COMPRESSOR, WORKING_HOURS,
     3400.0, 3400.0, 91.0, 1.00, 90.0, 10.5, 2.5, 18.0, 12.0, 94.0),

    ("FAN-101", "Industrial Fan 1", MachineType.FAN, WORKING_HOURS,
     900.0, 900.0, 32.0, 0.50, 88.0, 3.0, 0.7, 0.0, 140.0, 94.0),
    ("FAN-102", "Industrial Fan 2", MachineType.FAN, WORKING_HOURS,
     1000.0, 1000.0, 34.0, 0.60, 91.0, 3.4, 0.8, 0.0, 160.0, 96.0),

    # Backup units idle at zero speed until started
    ("GEN-101", "Backup Generator 1", MachineType.GENERATOR, NEVER,
     0.0, 1800.0, 25.0, 0.0, 94.0, 0.0, 0.2, 0.0, 0.0, 96.0),
    ("GEN-102", "Backup Generator 2", MachineType.GENERATOR, NEVER,
     0.0, 1800.0, 25.0, 0.0, 96.0, 0.0, 0.2, 0.0, 0.0, 97.0),

    ("TURB-101", "Steam Turbine 1", MachineType.TURBINE, WORKING_HOURS,
     3600.0, 3600.0, 120.0, 0.90, 88.0, 0.0, 1.8, 45.0, 150.0, 89.0),

    ("CRUSH-101", "Jaw Crusher 1", MachineType.CRUSHER, WORKING_HOURS,
     250.0, 250.0, 45.0, 0.80, 78.0, 75.0, 3.5, 0.0, 0.0, 82.0),

    ("MIX-101", "Industrial Mixer 1", MachineType.MIXER, WORKING_HOURS,
     80.0, 80.0, 45.0, 0.70, 89.0, 6.5, 1.4, 0.0, 0.0, 92.0),
    ("MIX-102", "Industrial Mixer 2", MachineType.MIXER, WORKING_HOURS,
     100.0, 100.0, 50.0, 0.80, 91.0, 7.5, 1.6, 0.0, 0.0, 94.0),

    ("PRESS-101", "Hydraulic Press 1", MachineType.PRESS, WORKING_HOURS,
     0.0, 0.0, 35.0, 0.70, 85.0, 45.0, 0.8, 200.0, 0.0, 88.0),
)

# (id, name, location, is_online, cpu, memory, latency_ms, processing_ms,
#  storage_gb, bandwidth, connected_machines)
EDGE_NODE_SEEDS = (
    ("EDGE-101", "Edge Node 1", "Building 1, Floor 2", True,
     43.0, 61.0, 15.0, 57.0, 9.0, 68.0, 4),
    ("EDGE-102", "Edge Node 2", "Building 2, Floor 1", True,
     51.0, 67.0, 18.0, 69.0, 11.2, 76.0, 5),
    ("EDGE-103", "Edge Node 3", "Building 3, Floor 2", True,
     59.0, 73.0, 21.0, 81.0, 13.4, 84.0, 6),
    ("EDGE-104", "Edge Node 4", "Building 4, Floor 1", True,
     67.0, 79.0, 24.0, 93.0, 15.6, 92.0, 7),
    ("EDGE-105", "Edge Node 5", "Building 5, Floor 2", True,
     75.0, 85.0, 27.0, 105.0, 17.8, 100.0, 8),

    ("EDGE-DATA-001", "Data Processing Edge Node", "Building 1, Floor 2", True,
     78.0, 85.0, 8.0, 25.0, 45.2, 90.0, 8),
    ("EDGE-AI-001", "AI/ML Processing Edge Node", "Building 2, Floor 2", True,
     92.0, 95.0, 5.0, 15.0, 62.8, 85.0, 12),
    ("EDGE-SEC-001", "Security Edge Node", "Building 3, Floor 1", True,
     45.0, 70.0, 3.0, 8.0, 28.5, 40.0, 15),
    ("EDGE-BACKUP-001", "Backup Edge Node", "Building 4, Floor 1", False,
     0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0),
)

# (id, name, accuracy, confidence, failure_probability, rul_hours, feature_weights)
ML_MODEL_SEEDS = (
    ("ML-001", "Predictive Maintenance Model", 96.8, 0.92, 1.8, 185.0,
     (0.35, 0.28, 0.22, 0.10, 0.05)),
    ("ML-002", "Anomaly Detection Model", 94.5, 0.88, 0.0, 0.0,
     (0.40, 0.30, 0.20, 0.10)),
    ("ML-003", "Energy Optimization Model", 91.2, 0.85, 0.0, 0.0,
     (0.45, 0.25, 0.20, 0.10)),
    ("ML-004", "Quality Control Model", 93.7, 0.90, 0.0, 0.0,
     (0.30, 0.35, 0.25, 0.10)),
    ("ML-005", "Performance Prediction Model", 89.4, 0.82, 0.0, 0.0,
     (0.25, 0.30, 0.25, 0.20)),
    ("ML-006", "Fault Diagnosis Model", 95.1, 0.91, 0.0, 0.0,
     (0.35, 0.25, 0.20, 0.15, 0.05)),
)


# =========================================
# Registry
# =========================================

class FleetRegistry:
    """
    Process-wide entity population.

    The lists returned by ``machines``, ``edge_nodes`` and ``models`` are
    the live objects; only the engine mutates them. Hosts receive copies.

    Example:
        registry = FleetRegistry()
        registry.ensure_initialized()
        print(len(registry.machines))   # 17
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        """
        Args:
            clock: Wall-clock source (defaults to datetime.now)
        """
        self.clock = clock or datetime.now
        self._machines: List[Machine] = []
        self._edge_nodes: List[EdgeNode] = []
        self._models: List[MLModel] = []
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def machines(self) -> List[Machine]:
        self.ensure_initialized()
        return self._machines

    @property
    def edge_nodes(self) -> List[EdgeNode]:
        self.ensure_initialized()
        return self._edge_nodes

    @property
    def models(self) -> List[MLModel]:
        self.ensure_initialized()
        return self._models

    def ensure_initialized(self) -> None:
        """Populate the registry on first call; later calls do nothing."""
        if self._initialized:
            return

        now = self.clock()
        working = is_working_hours(now)

        self._machines = [self._build_machine(seed, now, working) for seed in MACHINE_SEEDS]
        self._edge_nodes = [self._build_edge_node(seed, now) for seed in EDGE_NODE_SEEDS]
        self._models = [self._build_model(seed, now) for seed in ML_MODEL_SEEDS]
        self._initialized = True

        running = sum(1 for m in self._machines if m.is_running)
        logger.info(
            f"Registry initialized: {len(self._machines)} machines "
            f"({running} running), {len(self._edge_nodes)} edge nodes, "
            f"{len(self._models)} ML models"
        )

    @staticmethod
    def _build_machine(seed, now: datetime, working: bool) -> Machine:
        (machine_id, name, machine_type, policy, speed, target, temperature,
         load, efficiency, power, vibration, pressure, flow_rate, health) = seed

        if policy == ALWAYS:
            running = True
        elif policy == NEVER:
            running = False
        else:
            running = working

        return Machine(
            id=machine_id,
            name=name,
            type=machine_type,
            is_running=running,
            current_speed=speed,
            target_speed=target,
            temperature=temperature,
            load=load,
            efficiency=efficiency,
            power_consumption=power,
            vibration=vibration,
            pressure=pressure,
            flow_rate=flow_rate,
            health_score=health,
            installed_at=now,
            last_maintenance=now,
        )

    @staticmethod
    def _build_edge_node(seed, now: datetime) -> EdgeNode:
        (node_id, name, location, online, cpu, memory, latency, processing,
         storage, bandwidth, connected) = seed
        return EdgeNode(
            id=node_id,
            name=name,
            location=location,
            is_online=online,
            cpu_usage=cpu,
            memory_usage=memory,
            network_latency=latency,
            processing_time=processing,
            storage_used=storage,
            bandwidth_usage=bandwidth,
            connected_machines=connected,
            last_sync=now,
        )

    @staticmethod
    def _build_model(seed, now: datetime) -> MLModel:
        model_id, name, accuracy, confidence, failure, rul, weights = seed
        return MLModel(
            id=model_id,
            name=name,
            accuracy=accuracy,
            confidence=confidence,
            failure_probability=failure,
            remaining_useful_life=rul,
            feature_weights=weights,
            last_training=now,
        )
