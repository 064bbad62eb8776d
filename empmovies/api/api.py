"""
API Router Module - Aggregates all endpoint routers
"""
from fastapi import APIRouter

from empmovies.api.endpoints import employees, health, movies, ui

# JSON API, mounted under /api by the application
api_router = APIRouter()
api_router.include_router(employees.router, prefix="/employees", tags=["Employees"])
api_router.include_router(movies.router, prefix="/movies", tags=["Movies"])

# Routes that live at the site root: HTML pages and the health probe
root_router = APIRouter()
root_router.include_router(ui.router, tags=["UI"])
root_router.include_router(health.router)
