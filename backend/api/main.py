"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.routes import locations


# Create app
app = FastAPI(
    title="Foresky Locations API",
    description="Place search and reverse geocoding backed by OpenStreetMap Nominatim",
    version="0.1.0",
)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure properly for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(locations.router, prefix="/locations", tags=["locations"])


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "Foresky Locations API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
