"""
Fleet Telemetry Engine

Owns the registry, the random source and the update coalescer for the
multi-machine simulation, and exposes the host-facing accessors.

Time model:
    One coalesced tick advances every running machine, every online edge
    node and every ML model by ``config.tick_seconds`` of simulated time.
    Accessors trigger at most one tick per reading; hosts call
    ``reset_for_next_reading()`` once per polling interval, or drive time
    directly with ``advance(dt)``.

Every accessor is total: a bad index returns a sentinel value instead of
raising.
"""

import logging
import math
from datetime import datetime
from typing import Callable, List, Optional

from core.physics import MachinePhysics, clamp
from core.seasonality import is_working_hours, seasonal_factor
from .config import EngineConfig
from .coalescer import UpdateCoalescer
from .models import Machine, EdgeNode, MLModel
from .random_source import RandomSource, SeededRandom
from .registry import FleetRegistry

logger = logging.getLogger(__name__)


# Sentinels returned for out-of-range indices
UNKNOWN_ID = "UNKNOWN"
UNKNOWN_MACHINE = "Unknown Machine"
UNKNOWN_NODE = "Unknown Node"
UNKNOWN_LOCATION = "Unknown Location"
UNKNOWN_MODEL = "Unknown Model"

# Per-read measurement noise, uniform in ±amplitude
MACHINE_NOISE = {
    "speed": 1.0,
    "temperature": 0.5,
    "load": 0.05,
    "efficiency": 0.5,
    "power": 0.2,
    "vibration": 0.1,
    "health": 1.0,
}
EDGE_NOISE = {
    "cpu": 2.0,
    "memory": 2.0,
    "latency": 1.0,
    "processing": 5.0,
}
MODEL_NOISE = {
    "accuracy": 0.5,
    "confidence": 0.02,
    "failure_probability": 0.1,
    "remaining_useful_life": 1.0,
}

# Model drift limits
MIN_ACCURACY, MAX_ACCURACY = 85.0, 98.0
MIN_CONFIDENCE, MAX_CONFIDENCE = 0.70, 0.95
MAX_FAILURE_PROBABILITY = 15.0
MIN_REMAINING_LIFE = 30.0


class FleetEngine:
    """
    Multi-machine telemetry engine.

    Example:
        engine = FleetEngine(EngineConfig(seed=42))
        for i in range(engine.machine_count()):
            print(engine.machine_id(i), engine.machine_temperature(i))
        engine.reset_for_next_reading()
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        rng: Optional[RandomSource] = None,
        clock: Optional[Callable[[], datetime]] = None,
        physics: Optional[MachinePhysics] = None,
    ):
        """
        Initialize the fleet engine.

        Args:
            config: Engine settings (defaults to EngineConfig())
            rng: Random source (defaults to SeededRandom(config.seed))
            clock: Wall-clock source (defaults to datetime.now)
            physics: Machine physics model (defaults to MachinePhysics())
        """
        self.config = config or EngineConfig()
        self.rng = rng or SeededRandom(self.config.seed)
        self.clock = clock or datetime.now
        self.physics = physics or MachinePhysics()
        self.registry = FleetRegistry(self.clock)
        self.coalescer = UpdateCoalescer("fleet")

    # =========================================
    # Ticking
    # =========================================

    def _step(self, dt: float) -> None:
        """One ordered pass: machines, then edge nodes, then ML models."""
        now = self.clock()
        seasonal = seasonal_factor(now)

        for machine in self.registry.machines:
            self.physics.update(machine, dt, seasonal)

        for node in self.registry.edge_nodes:
            if node.is_online:
                self._update_edge_node(node, dt, now)

        average_health = self._average_health()
        for model in self.registry.models:
            self._update_model(model, dt, average_health)

        logger.debug(f"Fleet pass {self.coalescer.tick + 1}: dt={dt}s")

    def _refresh(self) -> None:
        self.coalescer.ensure_fresh(lambda: self._step(self.config.tick_seconds))

    def advance(self, dt: Optional[float] = None) -> None:
        """
        Run one pass immediately and mark the current reading fresh.

        Args:
            dt: Simulated seconds to advance (defaults to config.tick_seconds)
        """
        if dt is None:
            dt = self.config.tick_seconds
        if dt <= 0:
            raise ValueError(f"dt must be positive, got {dt}")
        self._step(dt)
        self.coalescer.mark_fresh()

    def reset_for_next_reading(self) -> None:
        """Start a new reading; the next accessor call runs a fresh pass."""
        self.coalescer.reset_for_next_reading()

    def _update_edge_node(self, node: EdgeNode, dt: float, now: datetime) -> None:
        node.uptime_seconds += dt
        t = node.uptime_seconds
        rng = self.rng

        node.cpu_usage = clamp(45.0 + math.sin(t * 0.1) * 10.0 + rng.randint(-10, 9), 20.0, 90.0)
        node.memory_usage = clamp(60.0 + math.cos(t * 0.05) * 15.0 + rng.randint(-7, 7), 30.0, 95.0)
        node.network_latency = clamp(15.0 + math.sin(t * 0.2) * 5.0 + rng.randint(-5, 4), 5.0, 50.0)
        node.processing_time = clamp(50.0 + math.cos(t * 0.15) * 20.0 + rng.randint(-15, 14), 20.0, 150.0)
        node.bandwidth_usage = clamp(node.bandwidth_usage + rng.uniform(-2.0, 2.0), 10.0, 100.0)
        node.last_sync = now

    def _update_model(self, model: MLModel, dt: float, average_health: float) -> None:
        model.prediction_count += 1
        model.accuracy = clamp(
            model.accuracy + self.rng.uniform(-0.1, 0.1), MIN_ACCURACY, MAX_ACCURACY
        )
        model.confidence = clamp(
            model.confidence + self.rng.uniform(-0.05, 0.05), MIN_CONFIDENCE, MAX_CONFIDENCE
        )
        model.failure_probability = clamp(
            (100.0 - average_health) * 0.2, 0.0, MAX_FAILURE_PROBABILITY
        )
        model.remaining_useful_life = max(
            MIN_REMAINING_LIFE, model.remaining_useful_life - dt / 3600.0
        )

    def _average_health(self) -> float:
        machines = self.registry.machines
        return sum(m.health_score for m in machines) / len(machines)

    def _noise(self, amplitude: float) -> float:
        if not self.config.noise:
            return 0.0
        return self.rng.uniform(-amplitude, amplitude)

    # =========================================
    # Index resolution
    # =========================================

    def _machine(self, index: int) -> Optional[Machine]:
        self._refresh()
        machines = self.registry.machines
        if 0 <= index < len(machines):
            return machines[index]
        return None

    def _edge_node(self, index: int) -> Optional[EdgeNode]:
        self._refresh()
        nodes = self.registry.edge_nodes
        if 0 <= index < len(nodes):
            return nodes[index]
        return None

    def _model(self, index: int) -> Optional[MLModel]:
        self._refresh()
        models = self.registry.models
        if 0 <= index < len(models):
            return models[index]
        return None

    def _machine_value(self, index: int, field: str, noise_key: str) -> float:
        machine = self._machine(index)
        if machine is None:
            return 0.0
        return getattr(machine, field) + self._noise(MACHINE_NOISE[noise_key])

    def _edge_value(self, index: int, field: str, noise_key: str) -> float:
        node = self._edge_node(index)
        if node is None:
            return 0.0
        return getattr(node, field) + self._noise(EDGE_NOISE[noise_key])

    def _model_value(self, index: int, field: str) -> float:
        model = self._model(index)
        if model is None:
            return 0.0
        return getattr(model, field) + self._noise(MODEL_NOISE[field])

    # =========================================
    # Machine accessors
    # =========================================

    def machine_count(self) -> int:
        return len(self.registry.machines)

    def machine_id(self, index: int) -> str:
        machine = self._machine(index)
        return machine.id if machine else UNKNOWN_ID

    def machine_name(self, index: int) -> str:
        machine = self._machine(index)
        return machine.name if machine else UNKNOWN_MACHINE

    def machine_type(self, index: int) -> int:
        machine = self._machine(index)
        return int(machine.type) if machine else 0

    def machine_running(self, index: int) -> bool:
        machine = self._machine(index)
        return machine.is_running if machine else False

    def machine_speed(self, index: int) -> float:
        return self._machine_value(index, "current_speed", "speed")

    def machine_temperature(self, index: int) -> float:
        return self._machine_value(index, "temperature", "temperature")

    def machine_load(self, index: int) -> float:
        return self._machine_value(index, "load", "load")

    def machine_efficiency(self, index: int) -> float:
        return self._machine_value(index, "efficiency", "efficiency")

    def machine_power(self, index: int) -> float:
        return self._machine_value(index, "power_consumption", "power")

    def machine_vibration(self, index: int) -> float:
        return self._machine_value(index, "vibration", "vibration")

    def machine_health(self, index: int) -> float:
        return self._machine_value(index, "health_score", "health")

    def machine_maintenance_status(self, index: int) -> int:
        machine = self._machine(index)
        return int(machine.maintenance_status) if machine else 0

    # =========================================
    # Edge node accessors
    # =========================================

    def edge_node_count(self) -> int:
        return len(self.registry.edge_nodes)

    def edge_node_id(self, index: int) -> str:
        node = self._edge_node(index)
        return node.id if node else UNKNOWN_ID

    def edge_node_name(self, index: int) -> str:
        node = self._edge_node(index)
        return node.name if node else UNKNOWN_NODE

    def edge_node_location(self, index: int) -> str:
        node = self._edge_node(index)
        return node.location if node else UNKNOWN_LOCATION

    def edge_node_online(self, index: int) -> bool:
        node = self._edge_node(index)
        return node.is_online if node else False

    def edge_node_cpu(self, index: int) -> float:
        return self._edge_value(index, "cpu_usage", "cpu")

    def edge_node_memory(self, index: int) -> float:
        return self._edge_value(index, "memory_usage", "memory")

    def edge_node_latency(self, index: int) -> float:
        return self._edge_value(index, "network_latency", "latency")

    def edge_node_processing_time(self, index: int) -> float:
        return self._edge_value(index, "processing_time", "processing")

    # =========================================
    # ML model accessors
    # =========================================

    def ml_model_count(self) -> int:
        return len(self.registry.models)

    def ml_model_id(self, index: int) -> str:
        model = self._model(index)
        return model.id if model else UNKNOWN_ID

    def ml_model_name(self, index: int) -> str:
        model = self._model(index)
        return model.name if model else UNKNOWN_MODEL

    def ml_model_accuracy(self, index: int) -> float:
        return self._model_value(index, "accuracy")

    def ml_model_confidence(self, index: int) -> float:
        return self._model_value(index, "confidence")

    def ml_model_failure_probability(self, index: int) -> float:
        return self._model_value(index, "failure_probability")

    def ml_model_remaining_useful_life(self, index: int) -> float:
        return self._model_value(index, "remaining_useful_life")

    # =========================================
    # Snapshots and lookups (noise-free copies)
    # =========================================

    def machine_snapshot(self, index: int) -> Optional[Machine]:
        machine = self._machine(index)
        return machine.copy() if machine else None

    def edge_node_snapshot(self, index: int) -> Optional[EdgeNode]:
        node = self._edge_node(index)
        return node.copy() if node else None

    def ml_model_snapshot(self, index: int) -> Optional[MLModel]:
        model = self._model(index)
        return model.copy() if model else None

    def machines(self) -> List[Machine]:
        self._refresh()
        return [m.copy() for m in self.registry.machines]

    def edge_nodes(self) -> List[EdgeNode]:
        self._refresh()
        return [n.copy() for n in self.registry.edge_nodes]

    def ml_models(self) -> List[MLModel]:
        self._refresh()
        return [m.copy() for m in self.registry.models]

    def find_machine(self, machine_id: str) -> Optional[Machine]:
        return next((m for m in self.machines() if m.id == machine_id), None)

    def find_edge_node(self, node_id: str) -> Optional[EdgeNode]:
        return next((n for n in self.edge_nodes() if n.id == node_id), None)

    def find_ml_model(self, model_id: str) -> Optional[MLModel]:
        return next((m for m in self.ml_models() if m.id == model_id), None)

    # =========================================
    # System aggregates
    # =========================================

    def overall_efficiency(self) -> float:
        """Mean efficiency of running machines (0 when none run)."""
        self._refresh()
        running = [m for m in self.registry.machines if m.is_running]
        if not running:
            return 0.0
        return sum(m.efficiency for m in running) / len(running)

    def total_power_consumption(self) -> float:
        """Total power draw (kW) of running machines."""
        self._refresh()
        return sum(m.power_consumption for m in self.registry.machines if m.is_running)

    def system_health_score(self) -> int:
        """Mean health over all machines, truncated to an integer."""
        self._refresh()
        return int(self._average_health())

    def is_working_hours(self) -> bool:
        return is_working_hours(self.clock())

    def seasonal_factor(self) -> float:
        return seasonal_factor(self.clock())

    # =========================================
    # Control operations
    # =========================================

    def _control_target(self, index: int, operation: str) -> Optional[Machine]:
        machines = self.registry.machines
        if 0 <= index < len(machines):
            return machines[index]
        logger.warning(f"{operation}: machine index {index} out of range; ignored")
        return None

    def start_machine(self, index: int) -> None:
        machine = self._control_target(index, "start_machine")
        if machine is None:
            return
        machine.is_running = True
        self.coalescer.invalidate()
        logger.info(f"Started {machine.id}")

    def stop_machine(self, index: int) -> None:
        machine = self._control_target(index, "stop_machine")
        if machine is None:
            return
        machine.is_running = False
        self.coalescer.invalidate()
        logger.info(f"Stopped {machine.id}")

    def set_target_speed(self, index: int, target_speed: float) -> None:
        """Set a new speed target; current speed converges over later ticks."""
        machine = self._control_target(index, "set_target_speed")
        if machine is None:
            return
        machine.target_speed = float(target_speed)
        self.coalescer.invalidate()
        logger.info(f"{machine.id} target speed set to {target_speed:.0f} rpm")

    def reset(self) -> None:
        """Restore wear, degradation, hours, health and status on every machine."""
        now = self.clock()
        for machine in self.registry.machines:
            machine.reset_wear(now)
        self.coalescer.invalidate()
        logger.info(f"Reset wear state of {len(self.registry.machines)} machines")
