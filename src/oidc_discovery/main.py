"""OIDC Discovery Service

Main FastAPI application entry point.
Publishes the OpenID provider metadata, WebFinger and JWKS documents of the
authorization server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from oidc_discovery.config.settings import get_settings
from oidc_discovery.config.registry import (
    build_provider_configuration,
    initialize_provider_configuration,
)
from oidc_discovery.api.routes import discovery
from oidc_discovery.domain.exceptions import ConfigurationError, MissingParameterError

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    settings = get_settings()

    # Startup
    logger.info(f"Starting {settings.service_name} v{settings.service_version}")
    logger.info(f"Environment: {settings.environment}")

    # Build the provider configuration; a bad configuration aborts startup
    try:
        initialize_provider_configuration(build_provider_configuration(settings))
    except ConfigurationError as e:
        logger.error(f"Invalid provider configuration: {e}")
        raise

    yield

    # Shutdown
    logger.info("Shutting down OIDC Discovery Service")


# Create FastAPI application
app = FastAPI(
    title="OIDC Discovery Service",
    version=settings.service_version,
    description="OpenID Connect discovery, WebFinger and JWKS endpoints",
    lifespan=lifespan
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)


# Health check endpoint
@app.get("/health")
async def root_health_check():
    """Root health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.service_name,
        "version": settings.service_version,
        "environment": settings.environment
    }


@app.get("/")
async def root():
    """Root endpoint with service information"""
    return {
        "service": settings.service_name,
        "version": settings.service_version,
        "description": "OpenID Connect Discovery Service",
        "discovery": "/.well-known/openid-configuration",
        "health": "/health"
    }


app.include_router(discovery.router)


@app.exception_handler(MissingParameterError)
async def missing_parameter_handler(request: Request, exc: MissingParameterError):
    """Reject requests that omit a required parameter"""
    logger.warning(f"Rejected {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content={
            "error": "invalid_request",
            "message": str(exc)
        }
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again later."
        }
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "oidc_discovery.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
