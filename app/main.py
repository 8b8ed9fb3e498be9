"""
Main FastAPI application for the Tournament Bracket Builder.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import routes
from app.core.config import CORS_ORIGINS
from app.core.logging_config import setup_logging

setup_logging()

app = FastAPI(
    title="Tournament Bracket Builder API",
    description="API for building weight/age/belt brackets and applying manual overrides",
    version="1.0.0"
)

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(routes.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Tournament Bracket Builder API",
        "version": "1.0.0",
        "endpoints": {
            "brackets": "/api/brackets",
            "move": "/api/brackets/move",
            "settings": "/api/settings",
            "health": "/api/health"
        }
    }
