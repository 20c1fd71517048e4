"""FastAPI application for the fact-check bot service."""

import contextlib
import logging
from typing import Any, Dict

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from .env file
load_dotenv()

from ..infrastructure.dependencies import get_service_container
from .endpoints import fact_check, health, webhooks

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Open adapter clients on startup and close them on shutdown."""
    container = get_service_container()
    logging.getLogger().setLevel(container.config.log_level)
    await container.initialize()
    logger.info(f"🚀 {container.config.app_name} {container.config.app_version} started ({container.config.environment})")

    yield  # Application runs here

    await container.shutdown()
    logger.info("👋 Service shut down")


# Create FastAPI application
app = FastAPI(
    title="Fact-Check Bot API",
    description="Chat message routing and claim verification for messaging platforms",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(fact_check.router)
app.include_router(webhooks.router)


@app.get("/")
async def root() -> Dict[str, Any]:
    """Describe the service and its endpoints."""
    return {
        "message": "Walansi Kontonbile API",
        "version": app.version,
        "endpoints": {
            "health": "/health",
            "factCheck": "/api/fact-check",
            "webhooks": "/webhooks",
        },
    }
