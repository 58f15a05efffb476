"""
Streamlit Dashboard Application

This module provides the web-based host UI for the Motor Telemetry Twin.
It talks to the FastAPI adapter over HTTP and never touches the engines
directly.

Components:
- dashboard.py: Main dashboard application
- components/: Reusable UI components
  - charts.py: Plotly chart components
  - gauge.py: Health gauge and metric cards
  - explainability.py: Health breakdown, recommendations and alerts

Features:
- Live aggregate motor readings with trend history
- Fleet, edge node and ML model overview
- Daily-life metrics derived from the motor state
- Start/stop/target-speed/reset control
"""

__version__ = "0.1.0"
