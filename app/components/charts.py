"""
Chart Components for Dashboard

This module provides Plotly-based chart components for visualizing
motor readings, fleet telemetry and health breakdowns.

All charts are designed to be:
- Responsive and interactive
- Consistent in styling
- Color-coded for quick interpretation

None of the builders touch Streamlit, so they can be used from notebooks
and tests as well.
"""

import pandas as pd
import plotly.graph_objects as go
import plotly.express as px
from plotly.subplots import make_subplots
from typing import List, Dict, Any, Optional
from datetime import datetime


# =========================================
# Color Schemes
# =========================================

COLORS = {
    "excellent": "#10B981",  # Green
    "good": "#34D399",       # Light green
    "fair": "#FBBF24",       # Yellow
    "poor": "#F97316",       # Orange
    "critical": "#EF4444",   # Red
    "primary": "#3B82F6",    # Blue
    "secondary": "#6B7280",  # Gray
    "background": "#1F2937", # Dark gray
    "text": "#F9FAFB",       # Light text
    "grid": "#374151",       # Grid lines
}

METRIC_COLORS = {
    "system_health": COLORS["primary"],
    "temperature": "#F97316",
    "efficiency": "#10B981",
    "vibration": "#EF4444",
    "power_consumption": "#8B5CF6",
    "load": "#6B7280",
    "oil_pressure": "#06B6D4",
    "bearing_health": "#EC4899",
}


def get_health_color(score: float) -> str:
    """Get color based on health score."""
    if score >= 90:
        return COLORS["excellent"]
    elif score >= 75:
        return COLORS["good"]
    elif score >= 55:
        return COLORS["fair"]
    elif score >= 30:
        return COLORS["poor"]
    else:
        return COLORS["critical"]


# =========================================
# Data Preparation
# =========================================

def readings_to_frame(readings: List[Dict[str, Any]]) -> pd.DataFrame:
    """
    Build a time-indexed DataFrame from serialized motor readings.

    Alerts are reduced to a count so every column stays scalar.
    """
    if not readings:
        return pd.DataFrame()

    df = pd.DataFrame(readings)
    if "alerts" in df.columns:
        df["alert_count"] = df["alerts"].apply(len)
        df = df.drop(columns=["alerts"])
    df["timestamp"] = pd.to_datetime(df["timestamp"])
    return df.sort_values("timestamp").reset_index(drop=True)


# =========================================
# Chart Layout Defaults
# =========================================

def get_default_layout(title: str = "", height: int = 400) -> dict:
    """Get default chart layout settings."""
    return {
        "title": {
            "text": title,
            "font": {"size": 16, "color": COLORS["text"]},
            "x": 0.5,
            "xanchor": "center"
        },
        "paper_bgcolor": "rgba(0,0,0,0)",
        "plot_bgcolor": "rgba(0,0,0,0)",
        "height": height,
        "margin": {"l": 60, "r": 40, "t": 60, "b": 60},
        "font": {"color": COLORS["text"], "size": 12},
        "xaxis": {
            "gridcolor": COLORS["grid"],
            "showgrid": True,
            "zeroline": False,
        },
        "yaxis": {
            "gridcolor": COLORS["grid"],
            "showgrid": True,
            "zeroline": False,
        },
        "legend": {
            "bgcolor": "rgba(0,0,0,0.5)",
            "bordercolor": COLORS["grid"],
            "font": {"color": COLORS["text"]}
        },
        "hovermode": "x unified",
    }


# =========================================
# Health Trend Chart
# =========================================

def create_health_trend_chart(
    times: List[datetime],
    scores: List[float],
    title: str = "Health Score Trend",
    height: int = 350
) -> go.Figure:
    """
    Create a health score trend chart with color-coded zones.

    Args:
        times: List of timestamps
        scores: List of health scores (0-100)
        title: Chart title
        height: Chart height in pixels

    Returns:
        Plotly Figure object
    """
    fig = go.Figure()

    zone_configs = [
        (90, 100, COLORS["excellent"], "Excellent"),
        (75, 90, COLORS["good"], "Good"),
        (55, 75, COLORS["fair"], "Fair"),
        (30, 55, COLORS["poor"], "Poor"),
        (0, 30, COLORS["critical"], "Critical"),
    ]

    for y0, y1, color, name in zone_configs:
        fig.add_hrect(
            y0=y0, y1=y1,
            fillcolor=color,
            opacity=0.15,
            line_width=0,
            annotation_text=name,
            annotation_position="right",
            annotation_font_size=10,
            annotation_font_color=color,
        )

    fig.add_trace(go.Scatter(
        x=list(times),
        y=list(scores),
        mode="lines+markers",
        name="Health Score",
        line={"color": COLORS["primary"], "width": 2},
        marker={"size": 6, "color": [get_health_color(s) for s in scores]},
        hovertemplate="<b>%{y:.1f}</b><br>%{x}<extra></extra>"
    ))

    layout = get_default_layout(title, height)
    layout["yaxis"]["range"] = [0, 105]
    layout["yaxis"]["title"] = "Health Score"
    layout["xaxis"]["title"] = "Time"

    fig.update_layout(**layout)

    return fig


# =========================================
# Metric Trend Chart
# =========================================

def create_metric_trend_chart(
    times: List[datetime],
    values: List[float],
    metric_name: str,
    unit: str = "",
    thresholds: Optional[Dict[str, float]] = None,
    title: Optional[str] = None,
    height: int = 300
) -> go.Figure:
    """
    Create a trend chart for a single metric with optional thresholds.

    Args:
        times: List of timestamps
        values: List of metric values
        metric_name: Name of the metric
        unit: Unit of measurement
        thresholds: Optional dict with 'warning' and 'critical' thresholds
        title: Chart title (defaults to metric name)
        height: Chart height in pixels
    """
    fig = go.Figure()

    if thresholds:
        if "warning" in thresholds:
            fig.add_hline(
                y=thresholds["warning"],
                line_dash="dash",
                line_color=COLORS["fair"],
                annotation_text="Warning",
                annotation_position="right"
            )
        if "critical" in thresholds:
            fig.add_hline(
                y=thresholds["critical"],
                line_dash="dash",
                line_color=COLORS["critical"],
                annotation_text="Critical",
                annotation_position="right"
            )

    fig.add_trace(go.Scatter(
        x=list(times),
        y=list(values),
        mode="lines",
        name=metric_name,
        line={"color": METRIC_COLORS.get(metric_name, COLORS["primary"]), "width": 2},
        hovertemplate=f"<b>%{{y:.2f}}</b> {unit}<br>%{{x}}<extra></extra>"
    ))

    chart_title = title or metric_name.replace("_", " ").title()
    layout = get_default_layout(chart_title, height)
    layout["yaxis"]["title"] = f"{metric_name} ({unit})" if unit else metric_name
    layout["xaxis"]["title"] = "Time"
    layout["showlegend"] = False

    fig.update_layout(**layout)

    return fig


# =========================================
# Multi-Metric Chart
# =========================================

def create_multi_metric_chart(
    df: pd.DataFrame,
    metrics: List[str],
    title: str = "Motor Metrics",
    height: int = 400
) -> go.Figure:
    """Overlay several reading columns on one time axis."""
    fig = go.Figure()

    for metric_name in metrics:
        if metric_name not in df.columns:
            continue
        fig.add_trace(go.Scatter(
            x=df["timestamp"],
            y=df[metric_name],
            mode="lines",
            name=metric_name.replace("_", " ").title(),
            line={"color": METRIC_COLORS.get(metric_name, COLORS["primary"]), "width": 2},
        ))

    layout = get_default_layout(title, height)
    layout["xaxis"]["title"] = "Time"
    layout["legend"]["orientation"] = "h"
    layout["legend"]["yanchor"] = "bottom"
    layout["legend"]["y"] = 1.02
    layout["legend"]["xanchor"] = "center"
    layout["legend"]["x"] = 0.5

    fig.update_layout(**layout)

    return fig


# =========================================
# Health Breakdown Chart (Bar)
# =========================================

def create_metric_comparison_chart(
    breakdown: List[Dict[str, Any]],
    title: str = "Health Score Breakdown",
    height: int = 300
) -> go.Figure:
    """
    Create a horizontal bar chart of per-component health scores.

    Bars are ordered worst first and coloured by their score.
    """
    items = sorted(breakdown, key=lambda b: b.get("normalized_score", 0))
    names = [b.get("metric_name", "").replace("_", " ").title() for b in items]
    scores = [b.get("normalized_score", 0) for b in items]
    weights = [b.get("weight", 0) for b in items]

    fig = go.Figure(go.Bar(
        x=scores,
        y=names,
        orientation="h",
        marker={"color": [get_health_color(s) for s in scores]},
        text=[f"{s:.0f}" for s in scores],
        textposition="auto",
        customdata=[w * 100 for w in weights],
        hovertemplate="<b>%{y}</b><br>Score: %{x:.1f}<br>Weight: %{customdata:.0f}%<extra></extra>",
    ))

    layout = get_default_layout(title, height)
    layout["xaxis"]["range"] = [0, 100]
    layout["xaxis"]["title"] = "Score"
    layout["showlegend"] = False
    layout["hovermode"] = "closest"

    fig.update_layout(**layout)

    return fig


# =========================================
# Gauge Chart
# =========================================

def create_gauge_chart(
    value: float,
    title: str = "Health Score",
    max_value: float = 100,
    height: int = 250
) -> go.Figure:
    """Create a Plotly indicator gauge for a 0..max_value quantity."""
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=value,
        title={"text": title, "font": {"color": COLORS["text"]}},
        gauge={
            "axis": {"range": [0, max_value]},
            "bar": {"color": get_health_color(value / max_value * 100 if max_value else 0)},
            "steps": [
                {"range": [0, max_value * 0.30], "color": "rgba(239, 68, 68, 0.2)"},
                {"range": [max_value * 0.30, max_value * 0.55], "color": "rgba(249, 115, 22, 0.2)"},
                {"range": [max_value * 0.55, max_value * 0.75], "color": "rgba(251, 191, 36, 0.2)"},
                {"range": [max_value * 0.75, max_value], "color": "rgba(16, 185, 129, 0.2)"},
            ],
        },
    ))

    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        font={"color": COLORS["text"]},
        height=height,
        margin={"l": 30, "r": 30, "t": 60, "b": 20},
    )

    return fig


# =========================================
# Fleet Charts
# =========================================

def create_fleet_bar_chart(
    machines: pd.DataFrame,
    metric: str = "health_score",
    title: Optional[str] = None,
    height: int = 400
) -> go.Figure:
    """Bar chart of one metric across the fleet, coloured by run state."""
    df = machines.assign(state=machines["is_running"].map({True: "Running", False: "Stopped"}))
    fig = px.bar(
        df,
        x="id",
        y=metric,
        color="state",
        color_discrete_map={"Running": COLORS["primary"], "Stopped": COLORS["secondary"]},
        hover_data=["name"],
    )

    layout = get_default_layout(title or metric.replace("_", " ").title(), height)
    layout["xaxis"]["title"] = "Machine"
    layout["yaxis"]["title"] = metric.replace("_", " ").title()
    layout["hovermode"] = "closest"

    fig.update_layout(**layout)

    return fig


def create_edge_node_chart(nodes: List[Dict[str, Any]], height: int = 350) -> go.Figure:
    """Side-by-side CPU and memory utilisation of every edge node."""
    names = [n["id"] for n in nodes]

    fig = make_subplots(rows=1, cols=2, subplot_titles=("CPU Usage (%)", "Memory Usage (%)"))
    fig.add_trace(
        go.Bar(x=names, y=[n["cpu_usage"] for n in nodes], marker_color=COLORS["primary"], name="CPU"),
        row=1, col=1
    )
    fig.add_trace(
        go.Bar(x=names, y=[n["memory_usage"] for n in nodes], marker_color="#8B5CF6", name="Memory"),
        row=1, col=2
    )
    fig.update_yaxes(range=[0, 100], gridcolor=COLORS["grid"])
    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font={"color": COLORS["text"]},
        height=height,
        showlegend=False,
        margin={"l": 40, "r": 20, "t": 60, "b": 80},
    )

    return fig
