"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
import logging

from .config import Settings, settings as default_settings
from .database import Base, create_engine_from_settings, create_session_factory
from .exceptions import register_exception_handlers
from .core.middleware import setup_middlewares
from .core.security import TokenService
from .auth.router import router as auth_router
from .patients.router import router as patients_router
from .doctors.router import router as doctors_router
from .mappings.router import router as mappings_router
# Import all models so their tables are registered on Base.metadata
from .auth.models import User  # noqa: F401
from .patients.models import Patient  # noqa: F401
from .doctors.models import Doctor  # noqa: F401
from .mappings.models import PatientDoctorMapping  # noqa: F401

API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application and its process-wide collaborators.
    
    The engine, session factory and token service are created once here and
    shared by every request through ``app.state``.
    
    Args:
        settings: Settings to use, defaults to the environment-loaded settings
        
    Returns:
        FastAPI: Configured application
    """
    settings = settings or default_settings

    engine = create_engine_from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Create database tables if they don't exist
        logger.info("🚀 Starting Clinic Records API...")
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        yield
        await engine.dispose()
        logger.info("Clinic Records API stopped")

    app = FastAPI(
        title="Clinic Records API",
        description="Owner-scoped patient and doctor records with patient-doctor mappings",
        version=API_VERSION,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.token_service = TokenService.from_settings(settings)

    # Register exception handlers
    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup custom middleware
    setup_middlewares(app)

    # Include routers
    app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(patients_router, prefix="/api/patients", tags=["Patients"])
    app.include_router(doctors_router, prefix="/api/doctors", tags=["Doctors"])
    app.include_router(mappings_router, prefix="/api/mappings", tags=["Mappings"])

    @app.get("/")
    async def root():
        """
        Root endpoint for API health check.
        
        Returns:
            dict: Simple welcome message
        """
        return {"message": "Clinic Records API is running", "version": API_VERSION}

    @app.get("/health")
    async def health_check(request: Request):
        """
        Health check endpoint for monitoring.
        
        Returns:
            dict: Health status information
        """
        try:
            async with request.app.state.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Health check failed: {str(e)}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unhealthy", "database": "unreachable"}
            )
        return {"status": "healthy", "database": "connected"}

    return app


# Configure logging
logging.basicConfig(level=default_settings.log_level)

app = create_app()
