"""
Gauge and Metric Card Components

This module provides visual components for displaying single motor
values with context, including health gauges, metric cards, and
reading status indicators.

Metric thresholds mirror the ones the reading sampler uses to classify
readings, so a card turns red exactly when the reading is critical.
"""

import streamlit as st
from typing import Dict, Optional, Tuple


# =========================================
# Color Utilities
# =========================================

def get_health_color(score: float) -> str:
    """Get color hex code based on health score."""
    if score >= 90:
        return "#10B981"  # Green - Excellent
    elif score >= 75:
        return "#34D399"  # Light green - Good
    elif score >= 55:
        return "#FBBF24"  # Yellow - Fair
    elif score >= 30:
        return "#F97316"  # Orange - Poor
    else:
        return "#EF4444"  # Red - Critical


def get_health_category(score: float) -> str:
    """Get category name based on health score."""
    if score >= 90:
        return "Excellent"
    elif score >= 75:
        return "Good"
    elif score >= 55:
        return "Fair"
    elif score >= 30:
        return "Poor"
    else:
        return "Critical"


def get_health_emoji(score: float) -> str:
    """Get emoji based on health score."""
    if score >= 75:
        return "🟢"
    elif score >= 55:
        return "🟡"
    elif score >= 30:
        return "🟠"
    else:
        return "🔴"


# (warning, critical, higher_is_better)
METRIC_THRESHOLDS: Dict[str, Tuple[float, float, bool]] = {
    "temperature": (80.0, 90.0, False),
    "vibration": (4.0, 5.0, False),
    "efficiency": (85.0, 75.0, True),
    "oil_pressure": (2.5, 2.0, True),
    "bearing_health": (80.0, 70.0, True),
    "system_health": (75.0, 60.0, True),
}

STATUS_STYLES = {
    "Normal": ("#10B981", "✅"),
    "Warning": ("#FBBF24", "⚠️"),
    "Critical": ("#EF4444", "🔴"),
    "Unknown": ("#6B7280", "❓"),
}


def get_metric_status(metric_name: str, value: float) -> Tuple[str, str, str]:
    """
    Get status, color, and emoji for a specific metric value.

    Returns:
        Tuple of (status, color, emoji)
    """
    if metric_name not in METRIC_THRESHOLDS:
        status = "Unknown"
    else:
        warning, critical, higher_is_better = METRIC_THRESHOLDS[metric_name]
        if higher_is_better:
            if value < critical:
                status = "Critical"
            elif value < warning:
                status = "Warning"
            else:
                status = "Normal"
        else:
            if value > critical:
                status = "Critical"
            elif value > warning:
                status = "Warning"
            else:
                status = "Normal"

    color, emoji = STATUS_STYLES[status]
    return (status, color, emoji)


# =========================================
# Health Gauge Component
# =========================================

def render_health_gauge(
    score: float,
    title: str = "Health Score",
    show_category: bool = True,
    size: str = "large"
) -> None:
    """
    Render a health score gauge using Streamlit components.

    Args:
        score: Health score (0-100)
        title: Title to display
        show_category: Whether to show the category label
        size: "small", "medium", or "large"
    """
    color = get_health_color(score)
    category = get_health_category(score)
    emoji = get_health_emoji(score)

    sizes = {
        "small": {"score_size": "2rem", "title_size": "0.9rem", "padding": "0.5rem"},
        "medium": {"score_size": "3rem", "title_size": "1rem", "padding": "1rem"},
        "large": {"score_size": "4rem", "title_size": "1.2rem", "padding": "1.5rem"},
    }
    config = sizes.get(size, sizes["medium"])

    gauge_html = f"""
    <div style="
        text-align: center;
        padding: {config['padding']};
        background: linear-gradient(135deg, rgba(31, 41, 55, 0.8), rgba(17, 24, 39, 0.9));
        border-radius: 12px;
        border: 1px solid {color}40;
    ">
        <div style="
            font-size: {config['title_size']};
            color: #9CA3AF;
            margin-bottom: 0.5rem;
            text-transform: uppercase;
            letter-spacing: 1px;
        ">{title}</div>
        <div style="
            font-size: {config['score_size']};
            font-weight: bold;
            color: {color};
        ">{score:.1f}</div>
        <div style="
            font-size: 1rem;
            color: {color};
            margin-top: 0.5rem;
        ">{emoji} {category if show_category else ''}</div>
        <div style="
            margin-top: 0.75rem;
            height: 8px;
            background: #374151;
            border-radius: 4px;
            overflow: hidden;
        ">
            <div style="
                width: {max(0.0, min(100.0, score))}%;
                height: 100%;
                background: {color};
                border-radius: 4px;
            "></div>
        </div>
    </div>
    """

    st.markdown(gauge_html, unsafe_allow_html=True)


# =========================================
# Metric Card Component
# =========================================

def render_metric_card(
    label: str,
    value: float,
    unit: str = "",
    metric_name: Optional[str] = None,
    help_text: Optional[str] = None,
    decimals: int = 1
) -> None:
    """Render a single metric with a threshold-coloured border."""
    if metric_name:
        status, color, emoji = get_metric_status(metric_name, value)
    else:
        status, color, emoji = "", "#3B82F6", ""

    card_html = f"""
    <div style="
        padding: 14px;
        background: rgba(31, 41, 55, 0.6);
        border-radius: 10px;
        border-left: 4px solid {color};
    " title="{help_text or ''}">
        <div style="font-size: 0.8rem; color: #9CA3AF; text-transform: uppercase;">{label}</div>
        <div style="font-size: 1.8rem; font-weight: bold; color: #F3F4F6;">
            {value:.{decimals}f}<span style="font-size: 0.9rem; color: #9CA3AF;"> {unit}</span>
        </div>
        <div style="font-size: 0.8rem; color: {color};">{emoji} {status}</div>
    </div>
    """

    st.markdown(card_html, unsafe_allow_html=True)


# =========================================
# Status Indicator
# =========================================

READING_STATUS_STYLES = {
    "normal": ("#10B981", "🟢", "Normal"),
    "maintenance": ("#3B82F6", "🔧", "Maintenance"),
    "warning": ("#FBBF24", "🟡", "Warning"),
    "critical": ("#EF4444", "🔴", "Critical"),
}


def render_status_indicator(status: str, size: str = "medium") -> None:
    """Render a pill for a reading status (normal/maintenance/warning/critical)."""
    color, emoji, label = READING_STATUS_STYLES.get(
        status.lower(), ("#6B7280", "⚪", status.title())
    )
    font_size = {"small": "0.8rem", "medium": "1rem", "large": "1.2rem"}.get(size, "1rem")

    st.markdown(
        f"""
        <div style="text-align: center; margin-top: 10px;">
            <span style="
                background: {color}20;
                color: {color};
                border: 1px solid {color};
                padding: 6px 16px;
                border-radius: 20px;
                font-size: {font_size};
                font-weight: 600;
            ">{emoji} {label}</span>
        </div>
        """,
        unsafe_allow_html=True
    )


def render_alert_banner(message: str, severity: str = "info") -> None:
    """Render a full-width banner."""
    styles = {
        "info": ("#3B82F6", "ℹ️"),
        "warning": ("#FBBF24", "⚠️"),
        "critical": ("#EF4444", "🚨"),
        "success": ("#10B981", "✅"),
    }
    color, emoji = styles.get(severity, styles["info"])

    st.markdown(
        f"""
        <div style="
            padding: 14px 18px;
            background: {color}1A;
            border: 1px solid {color};
            border-radius: 10px;
            color: #F3F4F6;
            margin-bottom: 12px;
        ">{emoji} {message}</div>
        """,
        unsafe_allow_html=True
    )
