"""
Test Suite for Motor Telemetry Twin

This module contains tests for:
- Calendar helpers (test_seasonality.py)
- Machine physics stages (test_physics.py)
- Maintenance classification (test_maintenance.py)
- Motor health scoring (test_health_score.py)
- Range guard (test_validators.py)
- Registry, coalescer and fleet engine (test_registry.py, test_coalescer.py, test_fleet_engine.py)
- Scenarios, aggregate motor, sampler and generator
- Maintenance schedule, energy, OEE and health analytics (test_analytics.py)
- API endpoints (test_api.py)
- Dashboard charts and helpers (test_dashboard_components.py)
- Capability protocols (test_interface.py)

Run tests with:
    pytest tests/ -v
    pytest tests/ --cov=core --cov=engine --cov=api
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
