"""
Motor Telemetry Twin - Streamlit Dashboard

Host UI for the telemetry API: watches the aggregate motor reading by
reading, and shows the simulated fleet, edge nodes and ML models.

Features:
- Live motor readings with trend history
- Explainable health breakdown and alerts
- Fleet table with start/stop/target-speed control
- Edge node and ML model telemetry
- Daily-life metrics

Run with: streamlit run app/dashboard.py
"""

import os
import logging
import streamlit as st
import requests
import pandas as pd
from typing import Dict, Any, Optional, List

from components.charts import (
    readings_to_frame,
    create_health_trend_chart,
    create_metric_trend_chart,
    create_multi_metric_chart,
    create_metric_comparison_chart,
    create_gauge_chart,
    create_fleet_bar_chart,
    create_edge_node_chart,
)
from components.gauge import (
    METRIC_THRESHOLDS,
    render_health_gauge,
    render_metric_card,
    render_status_indicator,
    render_alert_banner,
)
from components.explainability import (
    render_health_breakdown,
    render_recommendations,
    render_alerts,
)

logger = logging.getLogger(__name__)


# =========================================
# Configuration
# =========================================

API_URL = os.getenv("API_URL", "http://localhost:8000")
API_BASE = f"{API_URL}/api/v1"
HISTORY_LIMIT = int(os.getenv("DASHBOARD_HISTORY", "200"))

st.set_page_config(
    page_title="Motor Telemetry Twin",
    page_icon="⚙️",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .main .block-container {
        padding-top: 2rem;
        padding-bottom: 2rem;
    }

    [data-testid="stMetric"] {
        background: rgba(31, 41, 55, 0.6);
        border-radius: 10px;
        padding: 15px;
        border: 1px solid #374151;
    }

    [data-testid="stSidebar"] {
        background: linear-gradient(180deg, #1F2937 0%, #111827 100%);
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)


# =========================================
# API Helper Functions
# =========================================

@st.cache_data(ttl=30)
def fetch_api(endpoint: str) -> Optional[Any]:
    """Fetch slowly changing data from the API with caching."""
    return get_api(endpoint)


def get_api(endpoint: str) -> Optional[Any]:
    """Fetch data from the API without caching."""
    try:
        response = requests.get(f"{API_BASE}{endpoint}", timeout=10)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        logger.warning(f"GET {endpoint} failed: {e}")
        st.error(f"API Error: {e}")
        return None


def send_api(method: str, endpoint: str, data: Dict[str, Any] = None) -> Optional[Any]:
    """POST or PUT to the API."""
    try:
        response = requests.request(method, f"{API_BASE}{endpoint}", json=data, timeout=30)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        logger.warning(f"{method} {endpoint} failed: {e}")
        st.error(f"API Error: {e}")
        return None


def check_api_health() -> bool:
    """Check if API is available."""
    try:
        response = requests.get(f"{API_URL}/health", timeout=5)
        return response.status_code == 200
    except requests.exceptions.RequestException:
        return False


def run_control(method: str, endpoint: str, data: Dict[str, Any] = None) -> None:
    """Send a control command and report the outcome."""
    result = send_api(method, endpoint, data)
    if result is None:
        return
    if result.get("success"):
        st.success(result.get("message", "Done"))
        st.cache_data.clear()
    else:
        st.warning(result.get("message", "Command was ignored"))


def get_history() -> List[Dict[str, Any]]:
    """Readings collected during this browser session."""
    if "history" not in st.session_state:
        st.session_state["history"] = []
    return st.session_state["history"]


def record_reading(reading: Dict[str, Any]) -> None:
    history = get_history()
    history.append(reading)
    del history[:-HISTORY_LIMIT]


# =========================================
# Sidebar
# =========================================

def render_sidebar() -> None:
    """Render the sidebar with connection status and actions."""
    with st.sidebar:
        st.title("⚙️ Motor Twin")
        st.markdown("---")

        if check_api_health():
            st.success("🟢 API Connected")
        else:
            st.error("🔴 API Disconnected")
            st.info(f"API URL: {API_URL}")

        st.markdown("---")
        st.subheader("⚡ Quick Actions")

        if st.button("⏭️ Next Fleet Reading", use_container_width=True):
            result = send_api("POST", "/system/tick")
            if result:
                st.cache_data.clear()
                st.info(f"Fleet tick {result['fleet_tick']}")

        if st.button("🔄 Refresh Data", use_container_width=True):
            st.cache_data.clear()
            st.rerun()

        if st.button("🧹 Clear History", use_container_width=True):
            st.session_state["history"] = []


# =========================================
# Motor Monitoring Page
# =========================================

def render_monitoring_page() -> None:
    """Render the aggregate motor monitoring page."""
    st.title("📊 Motor Monitoring")

    col1, col2, _ = st.columns([1, 1, 2])
    with col1:
        samples = st.number_input("Readings to take", min_value=1, max_value=100, value=1)
    with col2:
        st.markdown("<br>", unsafe_allow_html=True)
        if st.button("📥 Take Readings", type="primary", use_container_width=True):
            for _ in range(int(samples)):
                reading = get_api("/motor/reading")
                if reading is None:
                    break
                record_reading(reading)

    history = get_history()
    if not history:
        render_alert_banner("No readings yet. Take a reading to start monitoring.", severity="info")
        return

    reading = history[-1]
    health = get_api("/motor/health")

    st.markdown(f"#### {reading['title']}")

    # Row 1: Health and key metrics
    col1, col2 = st.columns([1, 3])

    with col1:
        render_health_gauge(reading["system_health"], "System Health", size="large")
        render_status_indicator(reading["status"], size="large")

    with col2:
        st.markdown("### ⚡ Key Metrics")
        cols = st.columns(4)
        with cols[0]:
            render_metric_card("Temperature", reading["temperature"], "°C",
                               metric_name="temperature", decimals=0)
        with cols[1]:
            render_metric_card("Vibration", reading["vibration"], "mm/s",
                               metric_name="vibration", decimals=2)
        with cols[2]:
            render_metric_card("Efficiency", reading["efficiency"], "%",
                               metric_name="efficiency")
        with cols[3]:
            render_metric_card("Oil Pressure", reading["oil_pressure"], "bar",
                               metric_name="oil_pressure", decimals=2)

        cols = st.columns(4)
        cols[0].metric("Speed", f"{reading['speed']} rpm")
        cols[1].metric("Torque", f"{reading['torque']:.1f} N·m")
        cols[2].metric("Power", f"{reading['power_consumption']:.2f} kW")
        cols[3].metric(
            "Runtime",
            f"{reading['operating_hours']}h {reading['operating_minutes']}m "
            f"{reading['operating_seconds']:.0f}s"
        )

    st.markdown("---")

    # Row 2: Trends
    st.markdown("### 📈 Trends")
    df = readings_to_frame(history)

    tab1, tab2, tab3, tab4 = st.tabs(["Health", "Thermal", "Mechanical", "Electrical"])

    with tab1:
        fig = create_health_trend_chart(df["timestamp"], df["system_health"], height=400)
        st.plotly_chart(fig, use_container_width=True)

    with tab2:
        warning, critical, _ = METRIC_THRESHOLDS["temperature"]
        fig = create_metric_trend_chart(
            df["timestamp"], df["temperature"], "temperature", "°C",
            thresholds={"warning": warning, "critical": critical}
        )
        st.plotly_chart(fig, use_container_width=True)

    with tab3:
        col1, col2 = st.columns(2)
        with col1:
            warning, critical, _ = METRIC_THRESHOLDS["vibration"]
            fig = create_metric_trend_chart(
                df["timestamp"], df["vibration"], "vibration", "mm/s",
                thresholds={"warning": warning, "critical": critical}
            )
            st.plotly_chart(fig, use_container_width=True)
        with col2:
            fig = create_multi_metric_chart(
                df, ["bearing_health", "system_health"], title="Bearing vs System Health", height=300
            )
            st.plotly_chart(fig, use_container_width=True)

    with tab4:
        col1, col2 = st.columns(2)
        with col1:
            warning, critical, _ = METRIC_THRESHOLDS["efficiency"]
            fig = create_metric_trend_chart(
                df["timestamp"], df["efficiency"], "efficiency", "%",
                thresholds={"warning": warning, "critical": critical}
            )
            st.plotly_chart(fig, use_container_width=True)
        with col2:
            fig = create_metric_trend_chart(
                df["timestamp"], df["power_consumption"], "power_consumption", "kW"
            )
            st.plotly_chart(fig, use_container_width=True)

    st.markdown("---")

    # Row 3: Explainability
    st.markdown("### 🔍 Health Analysis")
    col1, col2 = st.columns(2)

    with col1:
        if health and health.get("breakdown"):
            st.plotly_chart(
                create_metric_comparison_chart(health["breakdown"]),
                use_container_width=True
            )
            render_health_breakdown(health["breakdown"])
        else:
            st.info("No health breakdown available")

    with col2:
        st.markdown("### 🚨 Alerts")
        render_alerts(reading.get("alerts", []))

        if health:
            severity = "critical" if health.get("category") in ("poor", "critical") else "warning"
            if health.get("recommendations"):
                render_recommendations(health["recommendations"], severity=severity)
            else:
                st.success("✅ No immediate actions required")

    st.markdown("---")
    st.markdown("### 🎛️ Motor Control")
    cols = st.columns(3)
    if cols[0].button("▶️ Start Motor", use_container_width=True):
        run_control("POST", "/motor/start")
    if cols[1].button("⏹️ Stop Motor", use_container_width=True):
        run_control("POST", "/motor/stop")
    if cols[2].button("🛠️ Reset Motor", use_container_width=True):
        run_control("POST", "/motor/reset")


# =========================================
# Fleet Page
# =========================================

def render_fleet_page() -> None:
    """Render the fleet overview and machine controls."""
    st.title("🏭 Fleet Overview")

    summary = fetch_api("/system/summary")
    if summary:
        cols = st.columns(5)
        cols[0].metric("Running", f"{summary['running_machines']}/{summary['machine_count']}")
        cols[1].metric("Efficiency", f"{summary['overall_efficiency']:.1f}%")
        cols[2].metric("Total Power", f"{summary['total_power_consumption']:.1f} kW")
        cols[3].metric("Fleet Health", summary["system_health_score"])
        cols[4].metric("Working Hours", "Yes" if summary["is_working_hours"] else "No")

    machines = fetch_api("/machines")
    if not machines:
        st.info("No machine data available")
        return

    df = pd.DataFrame(machines)

    metric = st.selectbox(
        "Chart metric",
        options=["health_score", "temperature", "efficiency", "vibration", "power_consumption", "speed"],
        format_func=lambda m: m.replace("_", " ").title()
    )
    st.plotly_chart(create_fleet_bar_chart(df, metric), use_container_width=True)

    st.dataframe(
        df[["index", "id", "name", "is_running", "speed", "temperature", "efficiency",
            "vibration", "power_consumption", "health_score", "maintenance_status"]],
        use_container_width=True,
        hide_index=True
    )

    st.markdown("### 🎛️ Machine Control")
    options = {m["index"]: f"{m['id']} - {m['name']}" for m in machines}
    index = st.selectbox("Machine", options=list(options.keys()), format_func=lambda i: options[i])

    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("▶️ Start", use_container_width=True):
            run_control("POST", f"/machines/{index}/start")
    with col2:
        if st.button("⏹️ Stop", use_container_width=True):
            run_control("POST", f"/machines/{index}/stop")
    with col3:
        if st.button("🛠️ Reset Fleet", use_container_width=True):
            run_control("POST", "/machines/reset")

    with st.form("target_speed_form"):
        target = st.number_input("Target speed (rpm)", min_value=0.0, max_value=10000.0, value=2500.0)
        if st.form_submit_button("Set Target Speed", type="primary"):
            run_control("PUT", f"/machines/{index}/target-speed", {"target_speed": target})


# =========================================
# Edge & ML Page
# =========================================

def render_edge_ml_page() -> None:
    """Render edge node and ML model telemetry."""
    st.title("🛰️ Edge Nodes & ML Models")

    nodes = fetch_api("/edge-nodes")
    if nodes:
        st.plotly_chart(create_edge_node_chart(nodes), use_container_width=True)
        st.dataframe(pd.DataFrame(nodes), use_container_width=True, hide_index=True)

    st.markdown("---")

    models = fetch_api("/ml-models")
    if models:
        cols = st.columns(len(models))
        for col, model in zip(cols, models):
            with col:
                fig = create_gauge_chart(model["accuracy"], title=model["name"], height=220)
                st.plotly_chart(fig, use_container_width=True)
        st.dataframe(pd.DataFrame(models), use_container_width=True, hide_index=True)


# =========================================
# Daily Life Page
# =========================================

DAILY_LIFE_GROUPS = {
    "🏠 Home": ["hvac_efficiency", "energy_savings", "comfort_level", "air_quality", "smart_devices"],
    "🚗 Vehicle": ["fuel_efficiency", "engine_health", "battery_level", "tire_pressure",
                  "vehicle_maintenance_due"],
    "⛵ Recreation": ["boat_engine_efficiency", "boat_engine_hours", "blade_sharpness", "fuel_level",
                     "generator_power_output", "generator_fuel_efficiency",
                     "pool_pump_flow_rate", "pool_pump_energy_usage"],
    "🧺 Appliances": ["washing_machine_efficiency", "dishwasher_efficiency",
                     "refrigerator_efficiency", "air_conditioner_efficiency"],
}


def render_daily_life_page() -> None:
    """Render the consumer-facing metrics derived from the motor."""
    st.title("🏡 Daily Life")
    st.markdown("Everyday equipment metrics derived from the current motor state.")

    metrics = get_api("/motor/daily-life")
    if not metrics:
        return

    for group, names in DAILY_LIFE_GROUPS.items():
        st.markdown(f"### {group}")
        cols = st.columns(len(names))
        for col, name in zip(cols, names):
            value = metrics.get(name)
            if isinstance(value, bool):
                shown = "Yes" if value else "No"
            elif isinstance(value, float):
                shown = f"{value:.1f}"
            else:
                shown = str(value)
            col.metric(name.replace("_", " ").title(), shown)


# =========================================
# Main Application
# =========================================

def main():
    """Main application entry point."""
    render_sidebar()

    st.sidebar.markdown("---")
    st.sidebar.subheader("📍 Navigation")

    page = st.sidebar.radio(
        "Go to",
        ["📊 Motor", "🏭 Fleet", "🛰️ Edge & ML", "🏡 Daily Life"],
        label_visibility="collapsed"
    )

    if page == "📊 Motor":
        render_monitoring_page()
    elif page == "🏭 Fleet":
        render_fleet_page()
    elif page == "🛰️ Edge & ML":
        render_edge_ml_page()
    elif page == "🏡 Daily Life":
        render_daily_life_page()


if __name__ == "__main__":
    main()
