"""
CertTrack Backend - Main Application
Multi-tenant certificate tracking for companies and their employees
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from loguru import logger
import os
import sys
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import configuration
from config import settings

# Configure logging
logger.remove()
logger.add(
    sys.stderr,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    level=settings.LOG_LEVEL if settings.ENVIRONMENT == "production" else "DEBUG"
)
if settings.LOG_TO_FILE:
    logger.add(
        os.path.join(settings.LOG_DIR, "certtrack_{time:YYYY-MM-DD}.log"),
        rotation="00:00",
        retention="30 days",
        compression="zip",
        level="INFO"
    )

# Import database
from models.database import engine, init_db

# Import routers
from api import auth, company, certificates, employees, roles, analytics, health
from security.rate_limit import rate_limiter
from services.errors import ServiceError

# Sentry integration for production
if settings.SENTRY_DSN:
    import sentry_sdk
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=1.0 if settings.ENVIRONMENT == "development" else 0.1,
    )
    logger.info("📊 Sentry monitoring initialized")

# Lifespan events
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle manager"""
    # Startup
    logger.info("🚀 CertTrack Backend Starting...")
    logger.info(f"🌍 Environment: {settings.ENVIRONMENT}")

    try:
        await init_db()
        logger.info("✅ Database initialized")
    except Exception as e:
        logger.error(f"❌ Database initialization failed: {e}")
        raise

    await rate_limiter.start_cleanup_task()

    logger.info("🎉 CertTrack Backend Ready!")

    yield

    # Shutdown
    logger.info("👋 CertTrack Backend Shutting Down...")
    await rate_limiter.stop_cleanup_task()
    await engine.dispose()
    logger.info("✅ Shutdown complete")

# Create FastAPI app
app = FastAPI(
    title="CertTrack API",
    description="Company certificate tracking: employees, roles, certificates, analytics",
    version=settings.API_VERSION,
    docs_url="/api/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/api/redoc" if settings.ENVIRONMENT != "production" else None,
    lifespan=lifespan
)

# CORS Configuration
origins = list(dict.fromkeys([*settings.ALLOWED_ORIGINS, settings.FRONTEND_URL]))

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Gzip compression for responses > 1KB
app.add_middleware(GZipMiddleware, minimum_size=1000)

# Service errors carry their own status code and user-facing message
@app.exception_handler(ServiceError)
async def service_exception_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error(f"Service failure on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.debug(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions"""
    logger.opt(exception=exc).error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": str(exc) if settings.ENVIRONMENT != "production" else "An error occurred"
        }
    )

# Include routers
app.include_router(health.router, prefix="/api", tags=["Health"])
app.include_router(auth.router, prefix="/api/Auth", tags=["Authentication"])
app.include_router(company.router, prefix="/api/Company", tags=["Company"])
app.include_router(certificates.router, prefix="/api/Certification", tags=["Certificates"])
app.include_router(employees.router, prefix="/api/Employee", tags=["Employees"])
app.include_router(roles.router, prefix="/api/Role", tags=["Roles"])
app.include_router(analytics.router, prefix="/api/Analytics", tags=["Analytics"])

# Root endpoint
@app.get("/")
async def root():
    """API root - system status"""
    return {
        "app": "CertTrack API",
        "version": settings.API_VERSION,
        "status": "operational",
        "environment": settings.ENVIRONMENT,
        "docs": "/api/docs" if settings.ENVIRONMENT != "production" else None
    }

# API health check
@app.get("/health")
async def health_check():
    """Quick health check"""
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT
    }

# Run server
if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=port,
        reload=settings.ENVIRONMENT == "development",
        log_level="info"
    )
