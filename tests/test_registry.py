"""
Tests for the Entity Registry

Run with: pytest tests/test_registry.py -v
"""

from datetime import datetime

from engine.models import MachineType
from engine.registry import FleetRegistry, MACHINE_SEEDS, EDGE_NODE_SEEDS, ML_MODEL_SEEDS

# Monday morning and Saturday morning
WEEKDAY = datetime(2024, 1, 8, 10, 0)
WEEKEND = datetime(2024, 1, 13, 10, 0)


class TestFleetRegistry:
    """Test seeding and idempotence."""

    def setup_method(self):
        """Set up test fixtures."""
        self.registry = FleetRegistry(clock=lambda: WEEKDAY)

    def test_lazy_initialization(self):
        assert not self.registry.initialized
        assert len(self.registry.machines) == 17
        assert self.registry.initialized

    def test_population_counts(self):
        assert len(self.registry.machines) == len(MACHINE_SEEDS) == 17
        assert len(self.registry.edge_nodes) == len(EDGE_NODE_SEEDS) == 9
        assert len(self.registry.models) == len(ML_MODEL_SEEDS) == 6

    def test_initialization_is_idempotent(self):
        first = self.registry.machines
        first[0].bearing_wear = 0.05

        self.registry.ensure_initialized()
        assert self.registry.machines is first
        assert self.registry.machines[0].bearing_wear == 0.05

    def test_primary_motor(self):
        motor = self.registry.machines[0]
        assert motor.id == "MOTOR-001"
        assert motor.type == MachineType.MOTOR
        assert motor.is_running
        assert motor.current_speed == 2500.0

    def test_unique_ids(self):
        ids = [m.id for m in self.registry.machines]
        assert len(ids) == len(set(ids))

    def test_generators_never_start(self):
        generators = [m for m in self.registry.machines if m.type == MachineType.GENERATOR]
        assert len(generators) == 2
        assert all(not g.is_running for g in generators)
        assert all(g.target_speed == 1800.0 for g in generators)

    def test_weekday_run_flags(self):
        running = [m for m in self.registry.machines if m.is_running]
        assert len(running) == 15

    def test_weekend_run_flags(self):
        registry = FleetRegistry(clock=lambda: WEEKEND)
        running = [m.id for m in registry.machines if m.is_running]
        assert running == ["MOTOR-001"]

    def test_backup_edge_node_offline(self):
        backup = self.registry.edge_nodes[-1]
        assert backup.id == "EDGE-BACKUP-001"
        assert not backup.is_online
        assert backup.cpu_usage == 0.0
        assert backup.connected_machines == 0

    def test_timestamps_use_clock(self):
        assert all(m.installed_at == WEEKDAY for m in self.registry.machines)
        assert all(n.last_sync == WEEKDAY for n in self.registry.edge_nodes)
        assert all(m.last_training == WEEKDAY for m in self.registry.models)

    def test_models_start_unused(self):
        assert all(m.prediction_count == 0 for m in self.registry.models)
        assert self.registry.models[0].remaining_useful_life == 185.0
