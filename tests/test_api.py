"""
Tests for the FastAPI Host Adapter

The engines built by the lifespan handler are swapped for seeded,
noise-free engines on a fixed weekday clock so responses are stable.

Run with: pytest tests/test_api.py -v
"""

import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient

from core.maintenance import MaintenanceStatus
from api.main import app
from engine import AggregateMotor, EngineConfig, FleetEngine, ReadingSampler

WEEKDAY = datetime(2024, 1, 8, 10, 0)
API = "/api/v1"


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        config = EngineConfig(seed=42, noise=False)
        motor = AggregateMotor(config, clock=lambda: WEEKDAY)
        app.state.fleet = FleetEngine(config, clock=lambda: WEEKDAY)
        app.state.motor = motor
        app.state.sampler = ReadingSampler(motor)
        yield test_client


class TestRootEndpoints:
    """Root, health and liveness endpoints."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["api_base"] == API

    def test_health(self, client):
        data = client.get("/health").json()
        assert data["status"] == "ok"
        assert data["components"]["fleet_engine"] == "ok"

    def test_live(self, client):
        assert client.get("/live").json() == {"alive": True}


class TestMachineEndpoints:
    """Fleet machine routes."""

    def test_list_machines(self, client):
        machines = client.get(f"{API}/machines").json()
        assert len(machines) == 17
        assert machines[0]["id"] == "MOTOR-001"
        assert machines[0]["index"] == 0

    def test_bad_index_returns_sentinel(self, client):
        data = client.get(f"{API}/machines/99").json()
        assert data["id"] == "UNKNOWN"
        assert data["name"] == "Unknown Machine"
        assert data["speed"] == 0.0
        assert data["is_running"] is False

    def test_lookup_by_id(self, client):
        data = client.get(f"{API}/machines/by-id/PUMP-101").json()
        assert data["id"] == "PUMP-101"
        assert data["type_name"] == "pump"

    def test_unknown_id_is_404(self, client):
        response = client.get(f"{API}/machines/by-id/NOPE-999")
        assert response.status_code == 404
        data = response.json()
        assert data["error"] is True
        assert data["status_code"] == 404

    def test_set_target_speed(self, client):
        response = client.put(f"{API}/machines/0/target-speed", json={"target_speed": 3000})
        assert response.json()["success"] is True

        data = client.get(f"{API}/machines/by-id/MOTOR-001").json()
        assert data["target_speed"] == 3000.0

    def test_target_speed_validation(self, client):
        response = client.put(f"{API}/machines/0/target-speed", json={"target_speed": 20000})
        assert response.status_code == 422

    def test_out_of_range_control_is_ignored(self, client):
        response = client.put(f"{API}/machines/99/target-speed", json={"target_speed": 1000})
        assert response.status_code == 200
        assert response.json()["success"] is False

    def test_start_and_stop(self, client):
        assert client.post(f"{API}/machines/10/start").json()["success"] is True
        assert client.get(f"{API}/machines/10").json()["is_running"] is True

        assert client.post(f"{API}/machines/10/stop").json()["success"] is True
        assert client.get(f"{API}/machines/10").json()["is_running"] is False

    def test_reset(self, client):
        assert client.post(f"{API}/machines/reset").json()["success"] is True
        data = client.get(f"{API}/machines/by-id/MOTOR-001").json()
        assert data["maintenance_label"] in {"Good", "Warning", "Critical", "MaintenanceDue"}

    def test_maintenance_schedule(self, client):
        generator = app.state.fleet.registry.machines[10]
        generator.maintenance_status = MaintenanceStatus.CRITICAL

        data = client.get(f"{API}/machines/maintenance-schedule").json()
        assert data["task_count"] == len(data["tasks"])
        assert data["tasks"][0]["priority"] == "Critical"
        task = next(t for t in data["tasks"] if t["machine_id"] == "GEN-101")
        assert task["priority"] == "Critical"
        assert task["task_type"] == "Emergency"
        assert task["estimated_duration_hours"] == 8
        assert task["scheduled_date"] == (WEEKDAY + timedelta(hours=2)).isoformat()

        ranks = {"Critical": 1, "High": 2, "Medium": 3}
        order = [ranks[task["priority"]] for task in data["tasks"]]
        assert order == sorted(order)

    def test_energy(self, client):
        energy = client.get(f"{API}/machines/energy").json()
        summary = client.get(f"{API}/system/summary").json()
        assert energy["running_machines"] == summary["running_machines"]
        assert energy["total_power_kw"] == pytest.approx(summary["total_power_consumption"], abs=0.01)
        assert energy["daily_energy_kwh"] == pytest.approx(energy["total_power_kw"] * 24, abs=0.5)


class TestEdgeAndModelEndpoints:
    """Edge node and ML model routes."""

    def test_edge_nodes(self, client):
        nodes = client.get(f"{API}/edge-nodes").json()
        assert len(nodes) == 9
        assert nodes[8]["is_online"] is False

    def test_edge_node_sentinel(self, client):
        data = client.get(f"{API}/edge-nodes/20").json()
        assert data["id"] == "UNKNOWN"
        assert data["location"] == "Unknown Location"

    def test_ml_models(self, client):
        models = client.get(f"{API}/ml-models").json()
        assert len(models) == 6
        assert models[0]["id"] == "ML-001"

    def test_ml_model_sentinel(self, client):
        assert client.get(f"{API}/ml-models/6").json()["name"] == "Unknown Model"


class TestMotorEndpoints:
    """Aggregate motor routes."""

    def test_reading(self, client):
        data = client.get(f"{API}/motor/reading").json()
        assert data["machine_id"] == "MOTOR-001"
        assert data["status"] in {"normal", "maintenance", "warning", "critical"}
        assert data["speed"] == int(data["rpm"])

    def test_daily_life(self, client):
        data = client.get(f"{API}/motor/daily-life").json()
        assert len(data) == 22

    def test_health(self, client):
        data = client.get(f"{API}/motor/health").json()
        assert data["machine_id"] == "MOTOR-001"
        assert len(data["breakdown"]) == 5
        assert 0 <= data["overall_score"] <= 100

    def test_stop_start_reset(self, client):
        assert client.post(f"{API}/motor/stop").json()["success"] is True
        assert app.state.motor.is_running() is False

        client.post(f"{API}/motor/start")
        assert app.state.motor.is_running() is True

        client.post(f"{API}/motor/reset")
        assert app.state.motor.state.runtime_seconds == 0.0

    def test_oee_without_readings(self, client):
        data = client.get(f"{API}/motor/oee").json()
        assert data["sample_count"] == 0
        assert data["overall_oee"] == 0.0

    def test_oee_over_sampled_readings(self, client):
        for _ in range(5):
            client.get(f"{API}/motor/reading")
        data = client.get(f"{API}/motor/oee").json()
        assert data["sample_count"] == 5
        assert 0.0 <= data["overall_oee"] <= 100.0
        assert data["recommendations"]

    def test_analysis(self, client):
        assert client.get(f"{API}/motor/analysis").json()["risk_level"] == "Unknown"

        for _ in range(3):
            client.get(f"{API}/motor/reading")
        data = client.get(f"{API}/motor/analysis").json()
        assert data["sample_count"] == 3
        assert data["risk_level"] in {"Low", "Medium", "High", "Critical"}
        assert set(data["trends"]) == {"temperature", "vibration", "efficiency", "power"}


class TestSystemEndpoints:
    """Aggregates and tick control."""

    def test_summary(self, client):
        data = client.get(f"{API}/system/summary").json()
        assert data["machine_count"] == 17
        assert data["running_machines"] == 15
        assert data["edge_node_count"] == 9
        assert data["online_edge_nodes"] == 8
        assert data["ml_model_count"] == 6
        assert data["is_working_hours"] is True

    def test_reads_coalesce_until_tick(self, client):
        first = client.get(f"{API}/system/summary").json()["fleet_tick"]
        assert client.get(f"{API}/system/summary").json()["fleet_tick"] == first

        client.post(f"{API}/system/tick")
        assert client.get(f"{API}/system/summary").json()["fleet_tick"] == first + 1
