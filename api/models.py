"""
Pydantic Models for API Request/Response Validation

This module defines all the data models used by the API for:
- Request body validation
- Response serialization
- Documentation generation (OpenAPI/Swagger)

All models use Pydantic v2 syntax for validation and serialization.
"""

from datetime import datetime
from typing import Optional, List, Dict
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


# =========================================
# Enums
# =========================================

class HealthCategory(str, Enum):
    """Health score categories."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CRITICAL = "critical"


class ReadingStatus(str, Enum):
    """Sampled reading classification."""
    NORMAL = "normal"
    MAINTENANCE = "maintenance"
    WARNING = "warning"
    CRITICAL = "critical"


# =========================================
# Fleet Models
# =========================================

class MachineReading(BaseModel):
    """
    Accessor reading for one machine.

    Numeric fields carry per-read measurement noise. An out-of-range
    index yields the sentinel payload (id "UNKNOWN", zeros, False).
    """
    index: int
    id: str = Field(..., description="Machine identifier, e.g. PUMP-101")
    name: str
    type: int = Field(..., ge=0, le=9, description="Machine category code")
    is_running: bool
    speed: float = Field(..., description="Current speed (rpm)")
    temperature: float = Field(..., description="Temperature (°C)")
    load: float = Field(..., description="Load fraction")
    efficiency: float = Field(..., description="Efficiency (%)")
    power_consumption: float = Field(..., description="Power draw (kW)")
    vibration: float = Field(..., description="Vibration (mm/s)")
    health_score: float = Field(..., description="Health score (0-100)")
    maintenance_status: int = Field(..., ge=0, le=3)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "index": 1,
            "id": "PUMP-101",
            "name": "Industrial Pump 1",
            "type": 1,
            "is_running": True,
            "speed": 1899.4,
            "temperature": 60.2,
            "load": 0.71,
            "efficiency": 90.3,
            "power_consumption": 7.1,
            "vibration": 1.18,
            "health_score": 89.5,
            "maintenance_status": 0,
        }
    })


class MachineDetail(BaseModel):
    """Noise-free snapshot of one machine, including cumulative wear."""
    id: str
    name: str
    type: int
    type_name: str
    is_running: bool
    current_speed: float
    target_speed: float
    temperature: float
    load: float
    efficiency: float
    power_consumption: float
    vibration: float
    pressure: float
    flow_rate: float
    health_score: float
    bearing_wear: float
    oil_degradation: float
    operating_hours: float
    maintenance_status: int
    maintenance_label: str
    installed_at: datetime
    last_maintenance: datetime


class EdgeNodeReading(BaseModel):
    """Accessor reading for one edge node (sentinel payload for a bad index)."""
    index: int
    id: str
    name: str
    location: str
    is_online: bool
    cpu_usage: float = Field(..., description="CPU utilisation (%)")
    memory_usage: float = Field(..., description="Memory utilisation (%)")
    network_latency: float = Field(..., description="Latency (ms)")
    processing_time: float = Field(..., description="Processing time (ms)")


class MLModelReading(BaseModel):
    """Accessor reading for one ML model (sentinel payload for a bad index)."""
    index: int
    id: str
    name: str
    accuracy: float = Field(..., description="Accuracy (%)")
    confidence: float = Field(..., description="Confidence (0-1)")
    failure_probability: float = Field(..., description="Failure probability (%)")
    remaining_useful_life: float = Field(..., description="Remaining useful life (hours)")


# =========================================
# Control Models
# =========================================

class TargetSpeedRequest(BaseModel):
    """New speed setpoint for a machine."""
    target_speed: float = Field(
        ...,
        ge=0,
        le=10000,
        description="Target speed (rpm); current speed converges over later ticks"
    )


class ControlResponse(BaseModel):
    """Result of a fire-and-forget control operation."""
    success: bool
    message: str
    index: Optional[int] = None


# =========================================
# Aggregate Motor Models
# =========================================

class AlertModel(BaseModel):
    """Threshold alert raised for a sampled reading."""
    type: str
    severity: str
    message: str
    machine_id: str
    timestamp: Optional[datetime] = None


class MotorReadingResponse(BaseModel):
    """Complete sampled reading of the aggregate motor."""
    timestamp: datetime
    machine_id: str
    title: str
    status: ReadingStatus

    speed: int
    rpm: float
    torque: float
    shaft_position: float
    displacement: float

    temperature: int
    vibration_x: float
    vibration_y: float
    vibration_z: float
    vibration: float

    oil_pressure: float
    air_pressure: float
    hydraulic_pressure: float
    coolant_flow_rate: float
    fuel_flow_rate: float

    voltage: float
    current: float
    power_factor: float
    power_consumption: float
    efficiency: float
    load: float

    humidity: float
    ambient_temperature: float
    ambient_pressure: float

    strain_gauge_1: float
    strain_gauge_2: float
    strain_gauge_3: float
    sound_level: float

    bearing_health: float
    bearing_wear: float
    oil_degradation: float
    operating_hours: int
    operating_minutes: int
    operating_seconds: float
    maintenance_status: int
    system_health: int

    alerts: List[AlertModel] = Field(default_factory=list)


class DailyLifeResponse(BaseModel):
    """Consumer-facing equivalents of the current motor reading."""
    hvac_efficiency: float
    energy_savings: float
    comfort_level: float
    air_quality: float
    smart_devices: int

    fuel_efficiency: float
    engine_health: float
    battery_level: float
    tire_pressure: float
    vehicle_maintenance_due: bool

    boat_engine_efficiency: float
    boat_engine_hours: int
    blade_sharpness: float
    fuel_level: float
    generator_power_output: float
    generator_fuel_efficiency: float
    pool_pump_flow_rate: float
    pool_pump_energy_usage: float

    washing_machine_efficiency: float
    dishwasher_efficiency: float
    refrigerator_efficiency: float
    air_conditioner_efficiency: float


class MetricBreakdown(BaseModel):
    """Health score breakdown for a single component."""
    metric_name: str = Field(..., description="Name of the component")
    raw_value: float = Field(..., description="Underlying state value")
    normalized_score: float = Field(..., description="Score 0-100 for this component")
    weighted_contribution: float = Field(..., description="Points contributed to overall")
    weight: float = Field(..., description="Weight factor used")
    status: str = Field(..., description="excellent/good/fair/poor/critical")


class HealthScoreResponse(BaseModel):
    """Complete motor health score response."""
    machine_id: str = Field(..., description="Motor identifier")
    timestamp: datetime = Field(..., description="Time of assessment")
    overall_score: float = Field(..., description="Overall health score (0-100)")
    category: HealthCategory = Field(..., description="Health category")
    primary_concern: Optional[str] = Field(
        None,
        description="Weakest component when it scores below 75"
    )
    recommendations: List[str] = Field(
        default_factory=list,
        description="Actionable recommendations"
    )
    breakdown: List[MetricBreakdown] = Field(
        default_factory=list,
        description="Per-component breakdown, worst first"
    )


# =========================================
# Analytics Models
# =========================================

class MaintenanceTaskModel(BaseModel):
    """One scheduled maintenance job."""
    task_id: str
    machine_id: str
    machine_name: str
    task_type: str = Field(..., description="Emergency, Preventive or Routine")
    priority: str = Field(..., description="Critical, High or Medium")
    scheduled_date: datetime
    estimated_duration_hours: int
    estimated_cost: float
    required_skills: List[str]
    description: str


class MaintenanceScheduleResponse(BaseModel):
    """Prioritised fleet maintenance schedule."""
    generated_at: datetime
    task_count: int
    total_cost: float
    total_hours: int
    tasks: List[MaintenanceTaskModel] = Field(
        default_factory=list,
        description="Tasks sorted by priority, then scheduled date"
    )


class EnergyAnalysisResponse(BaseModel):
    """Fleet energy use over the analysis period."""
    analysis_period_hours: int
    running_machines: int
    total_power_kw: float = Field(..., description="Current draw of running machines (kW)")
    daily_energy_kwh: float
    average_power_factor: float
    energy_efficiency: float = Field(..., description="Mean efficiency of running machines (%)")
    cost_savings_potential_kwh: float
    recommendations: List[str] = Field(default_factory=list)


class OEEResponse(BaseModel):
    """Overall equipment effectiveness over the recent reading window."""
    machine_id: str
    sample_count: int
    availability: float = Field(..., ge=0, le=100)
    performance: float = Field(..., ge=0, le=100)
    quality: float = Field(..., ge=0, le=100)
    overall_oee: float = Field(..., ge=0, le=100)
    recommendations: List[str] = Field(default_factory=list)


class TrendModel(BaseModel):
    """Least-squares slope per reading for each signal."""
    temperature: float
    vibration: float
    efficiency: float
    power: float


class PredictionModel(BaseModel):
    component: str
    issue: str
    severity: str
    predicted_failure_time: datetime
    confidence: float
    description: str


class AnomalyModel(BaseModel):
    timestamp: datetime
    sensor_type: str
    value: float
    expected_low: float
    expected_high: float
    severity: str


class HealthAnalysisResponse(BaseModel):
    """Window-level health assessment of the aggregate motor."""
    machine_id: str
    analysis_timestamp: datetime
    sample_count: int
    overall_health_score: float
    risk_level: str = Field(..., description="Unknown, Low, Medium, High or Critical")
    trends: TrendModel
    predictions: List[PredictionModel] = Field(default_factory=list)
    anomalies: List[AnomalyModel] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


# =========================================
# System Status Models
# =========================================

class SystemSummary(BaseModel):
    """Fleet-wide aggregates for one reading."""
    timestamp: datetime
    machine_count: int
    running_machines: int
    edge_node_count: int
    online_edge_nodes: int
    ml_model_count: int
    overall_efficiency: float = Field(..., description="Mean efficiency of running machines (%)")
    total_power_consumption: float = Field(..., description="Total power of running machines (kW)")
    system_health_score: int = Field(..., description="Mean machine health (0-100)")
    is_working_hours: bool
    seasonal_factor: float
    fleet_tick: int
    motor_tick: int


class TickResponse(BaseModel):
    """Result of starting a new reading on both engines."""
    fleet_tick: int
    motor_tick: int
    message: str


class SystemHealth(BaseModel):
    """System health check response."""
    status: str = Field(..., description="ok or degraded")
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(..., description="Current server time")
    components: Dict[str, str] = Field(
        default_factory=dict,
        description="Status of system components"
    )


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: bool = True
    message: str
    status_code: int
    timestamp: datetime = Field(default_factory=datetime.utcnow)
