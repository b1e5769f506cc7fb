"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tourdesk.admin.app import admin_app
from tourdesk.api.routes import groups, health, imports, settings as settings_routes
from tourdesk.config import settings

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="TourDesk API",
    description="Operations backend for tour groups, bookings and guide assignments",
    version="0.1.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:8080",
    ],  # Dashboard development servers
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(imports.router, prefix="/api", tags=["imports"])
app.include_router(groups.router, prefix="/api", tags=["groups"])
app.include_router(settings_routes.router, prefix="/api", tags=["settings"])

# Back-office
app.mount("/backoffice", admin_app)
