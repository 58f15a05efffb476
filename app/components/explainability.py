"""
Explainability Components

This module provides components for explaining motor health scores,
displaying maintenance recommendations, and listing reading alerts.

Explainability is crucial for building trust with maintenance teams
and enabling informed decision-making.
"""

import streamlit as st
from typing import List, Dict, Any


# =========================================
# Color and Status Utilities
# =========================================

STATUS_COLORS = {
    "excellent": "#10B981",
    "good": "#34D399",
    "fair": "#FBBF24",
    "poor": "#F97316",
    "critical": "#EF4444",
}

STATUS_EMOJIS = {
    "excellent": "✅",
    "good": "✅",
    "fair": "⚠️",
    "poor": "🔶",
    "critical": "🔴",
}

SEVERITY_STYLES = {
    "info": {"border": "#3B82F6", "bg": "rgba(59, 130, 246, 0.1)", "emoji": "🔵"},
    "warning": {"border": "#FBBF24", "bg": "rgba(251, 191, 36, 0.1)", "emoji": "🟡"},
    "critical": {"border": "#EF4444", "bg": "rgba(239, 68, 68, 0.1)", "emoji": "🔴"},
}

# Short explanations of what each health component tracks
COMPONENT_DESCRIPTIONS = {
    "bearing": "Accumulated bearing wear. Grows with load and speed while running.",
    "oil": "Lubricant breakdown. Accelerates with temperature.",
    "temperature": "Winding temperature relative to the 80 °C warning line.",
    "vibration": "RMS vibration. Rises with wear and with deviation from nominal speed.",
    "efficiency": "Electrical to mechanical conversion efficiency.",
}


def get_status_color(status: str) -> str:
    """Get color for a status."""
    return STATUS_COLORS.get(status.lower(), "#6B7280")


def get_status_emoji(status: str) -> str:
    """Get emoji for a status."""
    return STATUS_EMOJIS.get(status.lower(), "❓")


# =========================================
# Health Breakdown Component
# =========================================

def render_health_breakdown(
    breakdown: List[Dict[str, Any]],
    show_weights: bool = True,
    show_details: bool = True
) -> None:
    """
    Render a detailed breakdown of health score contributions.

    Args:
        breakdown: List of component breakdown dicts
        show_weights: Whether to show weight percentages
        show_details: Whether to show what each component tracks
    """
    if not breakdown:
        st.info("No health breakdown data available")
        return

    st.markdown("### 📊 Health Score Breakdown")

    # Worst first for attention
    sorted_breakdown = sorted(breakdown, key=lambda x: x.get("normalized_score", 0))

    for item in sorted_breakdown:
        metric_name = item.get("metric_name", "unknown")
        raw_value = item.get("raw_value", 0)
        score = item.get("normalized_score", 0)
        weight = item.get("weight", 0)
        status = item.get("status", "fair")

        color = get_status_color(status)
        emoji = get_status_emoji(status)
        display_name = metric_name.replace("_", " ").title()
        weight_html = (
            f'<span style="font-size: 0.75rem; color: #6B7280;">({weight*100:.0f}% weight)</span>'
            if show_weights else ""
        )
        detail = COMPONENT_DESCRIPTIONS.get(metric_name, "")
        detail_html = (
            f'<div style="margin-top: 8px; font-size: 0.85rem; color: #9CA3AF;">{detail}</div>'
            if show_details and detail else ""
        )

        breakdown_html = f"""
        <div style="
            padding: 12px;
            background: rgba(31, 41, 55, 0.6);
            border-radius: 8px;
            border-left: 4px solid {color};
            margin-bottom: 10px;
        ">
            <div style="display: flex; justify-content: space-between; align-items: center; margin-bottom: 8px;">
                <div style="display: flex; align-items: center; gap: 8px;">
                    <span style="font-size: 1.1rem;">{emoji}</span>
                    <span style="font-weight: 600; color: #F3F4F6;">{display_name}</span>
                    {weight_html}
                </div>
                <div style="display: flex; align-items: center; gap: 12px;">
                    <span style="font-size: 0.9rem; color: #9CA3AF;">
                        Value: <strong style="color: #F3F4F6;">{raw_value:.4g}</strong>
                    </span>
                    <span style="font-size: 1.1rem; font-weight: bold; color: {color};">{score:.0f}/100</span>
                </div>
            </div>
            <div style="height: 6px; background: #374151; border-radius: 3px; overflow: hidden;">
                <div style="width: {score}%; height: 100%; background: {color}; border-radius: 3px;"></div>
            </div>
            {detail_html}
        </div>
        """

        st.markdown(breakdown_html, unsafe_allow_html=True)


# =========================================
# Recommendations Component
# =========================================

def render_recommendations(
    recommendations: List[str],
    title: str = "🔧 Recommended Actions",
    severity: str = "warning"
) -> None:
    """
    Render a numbered list of recommendations.

    Args:
        recommendations: List of recommendation strings
        title: Section title
        severity: "info", "warning", or "critical" for styling
    """
    if not recommendations:
        return

    config = SEVERITY_STYLES.get(severity, SEVERITY_STYLES["warning"])

    st.markdown(f"### {title}")

    recommendations_html = f"""
    <div style="
        padding: 16px;
        background: {config['bg']};
        border: 1px solid {config['border']}40;
        border-radius: 10px;
    ">
    """

    for i, rec in enumerate(recommendations, 1):
        is_urgent = "URGENT" in rec.upper() or "IMMEDIATE" in rec.upper()
        divider = "border-bottom: 1px solid #37415180;" if i < len(recommendations) else ""

        recommendations_html += f"""
        <div style="display: flex; gap: 12px; padding: 10px 0; {divider}">
            <span style="
                display: flex;
                align-items: center;
                justify-content: center;
                width: 24px;
                height: 24px;
                background: {config['border']}30;
                color: {config['border']};
                border-radius: 50%;
                font-size: 0.85rem;
                font-weight: bold;
                flex-shrink: 0;
            ">{i}</span>
            <span style="
                color: {'#FBBF24' if is_urgent else '#E5E7EB'};
                font-size: 0.95rem;
                line-height: 1.5;
                {'font-weight: 600;' if is_urgent else ''}
            ">{rec}</span>
        </div>
        """

    recommendations_html += "</div>"

    st.markdown(recommendations_html, unsafe_allow_html=True)


# =========================================
# Alerts Component
# =========================================

def render_alerts(alerts: List[Dict[str, Any]]) -> None:
    """Render the alerts raised for one reading, most severe first."""
    if not alerts:
        st.success("✅ No alerts for this reading")
        return

    order = {"critical": 0, "warning": 1, "info": 2}
    for alert in sorted(alerts, key=lambda a: order.get(a.get("severity"), 3)):
        config = SEVERITY_STYLES.get(alert.get("severity"), SEVERITY_STYLES["info"])
        st.markdown(
            f"""
            <div style="
                padding: 10px 14px;
                background: {config['bg']};
                border-left: 4px solid {config['border']};
                border-radius: 6px;
                margin-bottom: 8px;
                color: #E5E7EB;
            ">{config['emoji']} <strong>{alert.get('type', '').title()}</strong>: {alert.get('message', '')}</div>
            """,
            unsafe_allow_html=True
        )
