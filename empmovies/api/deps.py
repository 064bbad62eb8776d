# FastAPI dependencies and store lifecycle
# empmovies/api/deps.py

import logging
from typing import Optional

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import ConfigurationError, PyMongoError

from empmovies.core.config import Settings
from empmovies.core.errors import ServiceUnavailableError
from empmovies.data_access.mongo_client import StoreHandle, Stores
from empmovies.services.employee_service import EmployeeService
from empmovies.services.movie_service import MovieService

logger = logging.getLogger(__name__)

MOVIES_NOT_CONFIGURED = "Movies DB not configured. Set MONGODB_URI_MOVIES in your environment."


async def _open_store(name: str, uri: str, db_name: Optional[str], fallback_db: str, timeout_ms: int) -> StoreHandle:
    """
    Creates a Motor client and picks its database. A failed ping is logged but
    not fatal: Motor keeps retrying server selection on every operation.
    """
    logger.info(f"Attempting to connect to MongoDB ({name}): {uri[:15]}...")
    client = AsyncIOMotorClient(uri, serverSelectionTimeoutMS=timeout_ms)

    if db_name is None:
        try:
            default_db = client.get_default_database()
            db_name = default_db.name
        except ConfigurationError:
            db_name = fallback_db
    db = client[db_name]

    try:
        await client.admin.command('ping')
        logger.info(f"MongoDB '{name}' connected. Using database: '{db_name}'")
    except PyMongoError as e:
        logger.error(f"MongoDB '{name}' ping failed during initialization: {e}")
    return StoreHandle(name=name, client=client, db=db)


async def initialize_connections(settings: Settings) -> Stores:
    """
    Opens the employees store and, when configured, the movies store.
    Call this during FastAPI startup using lifespan events.
    """
    logger.info("Initializing store connections...")
    timeout_ms = settings.MONGO_SERVER_SELECTION_TIMEOUT_MS

    employees = await _open_store(
        "employees",
        settings.MONGODB_URI_EMPLOYEES.get_secret_value(),
        settings.EMPLOYEES_DB_NAME,
        "employees",
        timeout_ms,
    )

    movies = None
    if settings.MONGODB_URI_MOVIES is not None:
        movies = await _open_store(
            "movies",
            settings.MONGODB_URI_MOVIES.get_secret_value(),
            settings.MOVIES_DB_NAME,
            "movies",
            timeout_ms,
        )
    else:
        logger.warning("MONGODB_URI_MOVIES is not set. Movie routes & UI will return 503.")

    return Stores(employees=employees, movies=movies)


async def close_connections(stores: Optional[Stores]) -> None:
    """
    Closes the store clients.
    Call this during FastAPI shutdown using lifespan events.
    """
    if stores is None:
        return
    logger.info("Closing store connections...")
    stores.employees.close()
    if stores.movies is not None:
        stores.movies.close()


# --- Request-scoped Dependencies ---

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_stores(request: Request) -> Stores:
    return request.app.state.stores


def get_employee_service(stores: Stores = Depends(get_stores)) -> EmployeeService:
    return EmployeeService(db=stores.employees.db)


def get_movie_service(
    stores: Stores = Depends(get_stores),
    settings: Settings = Depends(get_app_settings),
) -> MovieService:
    """
    Provides a MovieService bound to the movies store.

    Raises:
        ServiceUnavailableError: If the movies store was never configured.
            Raised before any store access.
    """
    if stores.movies is None:
        raise ServiceUnavailableError(MOVIES_NOT_CONFIGURED)
    return MovieService(db=stores.movies.db, collection_name=settings.MOVIES_COLLECTION)
