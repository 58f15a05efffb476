"""
Dashboard Components

Reusable chart, gauge and explainability widgets for the Streamlit
dashboard.
"""

from .charts import (
    readings_to_frame,
    create_health_trend_chart,
    create_metric_trend_chart,
    create_multi_metric_chart,
    create_metric_comparison_chart,
    create_gauge_chart,
    create_fleet_bar_chart,
    create_edge_node_chart,
)
from .gauge import (
    get_metric_status,
    render_health_gauge,
    render_metric_card,
    render_status_indicator,
    render_alert_banner,
)
from .explainability import (
    render_health_breakdown,
    render_recommendations,
    render_alerts,
)

__all__ = [
    "readings_to_frame",
    "create_health_trend_chart",
    "create_metric_trend_chart",
    "create_multi_metric_chart",
    "create_metric_comparison_chart",
    "create_gauge_chart",
    "create_fleet_bar_chart",
    "create_edge_node_chart",
    "get_metric_status",
    "render_health_gauge",
    "render_metric_card",
    "render_status_indicator",
    "render_alert_banner",
    "render_health_breakdown",
    "render_recommendations",
    "render_alerts",
]
