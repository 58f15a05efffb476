"""
Motor Telemetry Twin - FastAPI Application

This is the main entry point for the FastAPI host adapter.
It builds the simulation engines at startup and exposes them over HTTP
for dashboards and other host UIs.

Features:
- Fleet machine, edge node and ML model telemetry
- Aggregate motor readings with status, alerts and daily-life metrics
- Explainable motor health scoring
- Fleet maintenance schedule, energy analysis and motor OEE
- Start/stop/target-speed/reset control
- Interactive API documentation (Swagger/OpenAPI)

Access Points:
- API Root: http://localhost:8000
- Swagger Docs: http://localhost:8000/docs
- ReDoc: http://localhost:8000/redoc
- OpenAPI JSON: http://localhost:8000/openapi.json
"""

import os
import logging
from datetime import datetime
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import __version__
from api.routes import machines_router, edge_router, models_router, motor_router, system_router
from api.models import SystemHealth
from engine import AggregateMotor, EngineConfig, FleetEngine, ReadingSampler

# =========================================
# Logging Configuration
# =========================================

logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# =========================================
# Application Lifespan
# =========================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Builds one fleet engine and one aggregate motor from ENGINE_*
    environment variables and stores them on ``app.state``.
    """
    logger.info("🚀 Starting Motor Telemetry Twin API...")

    config = EngineConfig.from_env()
    fleet = FleetEngine(config)
    fleet.registry.ensure_initialized()
    motor = AggregateMotor(config)

    app.state.config = config
    app.state.fleet = fleet
    app.state.motor = motor
    app.state.sampler = ReadingSampler(motor)

    logger.info(
        f"✅ Engines ready (seed={config.seed}, tick={config.tick_seconds}s, "
        f"noise={config.noise})"
    )
    logger.info("📚 API Documentation: http://localhost:8000/docs")

    yield  # Application runs here

    logger.info("👋 Shutting down Motor Telemetry Twin API...")


# =========================================
# FastAPI Application
# =========================================

app = FastAPI(
    title="Motor Telemetry Twin API",
    description="""
## Synthetic Industrial Motor Telemetry

This API serves plausible, internally consistent telemetry for a simulated
industrial plant: 17 machines, 9 edge-compute nodes, 6 predictive models and
one richly instrumented aggregate motor.

### Core Concepts

#### Readings and ticks
All values read between two calls to `POST /api/v1/system/tick` come from
one physics pass, so derived values (torque, RPM, health) always agree.

#### Sentinels
Index routes never fail: an out-of-range index returns a sentinel payload
(id `UNKNOWN`, zeros, `false`). Lookups by identifier return 404.

#### Motor health (0-100)
- **Efficiency** (40%)
- **Vibration** (25%)
- **Temperature** (20%)
- **Bearing** (10%)
- **Oil** (5%)

### Quick Start

1. **Check API health**: `GET /health`
2. **List machines**: `GET /api/v1/machines`
3. **Sample the motor**: `GET /api/v1/motor/reading`
4. **Advance a tick**: `POST /api/v1/system/tick`
    """,
    version=__version__,
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT"
    },
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


# =========================================
# CORS Middleware
# =========================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("API_CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =========================================
# Exception Handlers
# =========================================

@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "message": exc.detail,
            "status_code": exc.status_code,
            "timestamp": datetime.utcnow().isoformat()
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": True,
            "message": "An unexpected error occurred",
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "timestamp": datetime.utcnow().isoformat()
        }
    )


# =========================================
# Include Routers
# =========================================

# API v1 routes
app.include_router(machines_router, prefix="/api/v1")
app.include_router(edge_router, prefix="/api/v1")
app.include_router(models_router, prefix="/api/v1")
app.include_router(motor_router, prefix="/api/v1")
app.include_router(system_router, prefix="/api/v1")


# =========================================
# Root Endpoints
# =========================================

@app.get(
    "/",
    tags=["System"],
    summary="API Root",
    description="Welcome endpoint with API information"
)
async def root():
    """API root endpoint."""
    return {
        "name": "Motor Telemetry Twin API",
        "version": __version__,
        "description": "Synthetic telemetry for industrial motors, edge nodes and ML models",
        "documentation": "/docs",
        "health_check": "/health",
        "api_base": "/api/v1"
    }


@app.get(
    "/health",
    response_model=SystemHealth,
    tags=["System"],
    summary="System Health Check",
    description="Check that the API and its engines are up"
)
async def health_check(request: Request):
    """System health check endpoint."""
    fleet_ready = getattr(request.app.state, "fleet", None) is not None
    motor_ready = getattr(request.app.state, "motor", None) is not None

    return SystemHealth(
        status="ok" if fleet_ready and motor_ready else "degraded",
        version=__version__,
        timestamp=datetime.utcnow(),
        components={
            "api": "ok",
            "fleet_engine": "ok" if fleet_ready else "not_started",
            "aggregate_motor": "ok" if motor_ready else "not_started",
        }
    )


@app.get(
    "/live",
    tags=["System"],
    summary="Liveness Check",
    description="Check if the API process is alive"
)
async def liveness_check():
    """Kubernetes-style liveness probe."""
    return {"alive": True}


# =========================================
# Run with Uvicorn (for development)
# =========================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", 8000)),
        reload=os.getenv("API_RELOAD", "true").lower() == "true",
        log_level=os.getenv("LOG_LEVEL", "info").lower()
    )
