# HORECA/backend/horeca/main.py

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from horeca.config import ALLOWED_ORIGINS, ENVIRONMENT, LOG_LEVEL, is_production
from horeca.routes import users, admin, cafes, surveys, kpi, salary, deletion_logs, dashboard
from horeca.database import check_connection, create_tables
import logging
import datetime
import sys
import fastapi
import sqlalchemy

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- STARTUP ---
    logger.info("🚀 Starting HoReCa Salary API...")

    if check_connection():
        logger.info("✅ Database connection established")
        # Production schemas are managed separately
        if not is_production():
            create_tables()
    else:
        logger.error("❌ Could not connect to the database")

    yield

    # --- SHUTDOWN ---
    logger.info("👋 HoReCa Salary API stopped")

app = FastAPI(
    title="HoReCa Salary API",
    description="Cafe sales-visit tracking and KPI-based salary computation for HoReCa sales reps",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "auth",
            "description": "Login and current user"
        },
        {
            "name": "admin",
            "description": "User management (admin only)"
        },
        {
            "name": "cafes",
            "description": "Cafe visits, contracts and Excel export"
        },
        {
            "name": "surveys",
            "description": "Weekly tobacco brand sales per cafe"
        },
        {
            "name": "kpi",
            "description": "Targets, thresholds and bonuses"
        },
        {
            "name": "salary",
            "description": "Salary and bonus breakdown"
        },
        {
            "name": "deletion-logs",
            "description": "Audit trail of deleted data"
        },
        {
            "name": "dashboard",
            "description": "Admin overview"
        }
    ]
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users.router)
app.include_router(admin.router)
app.include_router(cafes.router)
app.include_router(surveys.router)
app.include_router(kpi.router)
app.include_router(salary.router)
app.include_router(deletion_logs.router)
app.include_router(dashboard.router)

@app.get("/")
def root():
    """
    API root - general information
    """
    return {
        "success": True,
        "message": "HoReCa Salary backend up 🚀",
        "version": app.version,
        "environment": ENVIRONMENT,
        "documentation": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "endpoints": {
            "auth": "/auth",
            "admin": "/admin/users",
            "cafes": "/cafes",
            "surveys": "/surveys",
            "kpi_settings": "/kpi-settings",
            "salary": "/salary",
            "deletion_logs": "/deletion-logs",
            "dashboard": "/dashboard",
            "docs": "/docs"
        },
        "health_check": "/health"
    }

@app.get("/health")
def health_check():
    """
    Health endpoint for monitoring
    """
    db_status = check_connection()

    return {
        "status": "healthy" if db_status else "unhealthy",
        "database": "connected" if db_status else "disconnected",
        "version": app.version,
        "timestamp": datetime.datetime.now().isoformat()
    }

@app.get("/info")
def info():
    """
    Detailed API information
    """
    return {
        "name": app.title,
        "description": app.description,
        "version": app.version,
        "python_version": sys.version,
        "fastapi_version": fastapi.__version__,
        "sqlalchemy_version": sqlalchemy.__version__,
        "environment": ENVIRONMENT
    }
