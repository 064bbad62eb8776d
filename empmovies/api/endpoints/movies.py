# empmovies/api/endpoints/movies.py

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status

from empmovies.api.deps import get_app_settings, get_movie_service
from empmovies.core.config import Settings
from empmovies.models.movie import MovieCreate, MovieUpdate
from empmovies.services.movie_service import MovieService
from empmovies.utils.helpers import serialize_document

logger = logging.getLogger(__name__)
router = APIRouter()

UNAVAILABLE = {503: {"description": "Movies DB not configured"}}


@router.get(
    "",  # GET /api/movies
    response_model=List[Dict[str, Any]],
    summary="List Movies",
    description="Retrieve raw movie documents, capped at a fixed maximum.",
    responses=UNAVAILABLE,
)
async def list_movies(
    movie_service: MovieService = Depends(get_movie_service),
    settings: Settings = Depends(get_app_settings),
):
    docs = await movie_service.list_movies(limit=settings.MOVIES_API_LIST_LIMIT)
    return [serialize_document(doc) for doc in docs]


@router.get(
    "/find",  # GET /api/movies/find?id=|movie_id=|title=
    summary="Find Movie",
    description="Look a movie up by internal id, external movie_id (number or string) or exact title.",
    responses={400: {"description": "No lookup key given"}, 404: {"description": "Movie not found"}, **UNAVAILABLE},
)
async def find_movie(
    id: Optional[str] = Query(None, description="Internal database ID."),
    movie_id: Optional[str] = Query(None, description="External movie identifier."),
    title: Optional[str] = Query(None, description="Exact title (movie_title or title)."),
    movie_service: MovieService = Depends(get_movie_service),
):
    doc = await movie_service.find_movie(id=id, movie_id=movie_id, title=title)
    return serialize_document(doc)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Movie",
    responses={400: {"description": "movie_title missing"}, **UNAVAILABLE},
)
async def create_movie(
    movie_data: MovieCreate,
    movie_service: MovieService = Depends(get_movie_service),
):
    created = await movie_service.create_movie(movie_data)
    return serialize_document(created)


@router.put(
    "",
    summary="Update Movie",
    description="Update movie_title and/or Released of the movie addressed by id or movie_id.",
    responses={400: {"description": "No id or movie_id"}, 404: {"description": "Movie not found"}, **UNAVAILABLE},
)
async def update_movie(
    movie_data: MovieUpdate,
    movie_service: MovieService = Depends(get_movie_service),
):
    updated = await movie_service.update_movie(movie_data)
    return serialize_document(updated)


@router.delete(
    "",
    summary="Delete Movie",
    responses={400: {"description": "No id or movie_id"}, 404: {"description": "Movie not found"}, **UNAVAILABLE},
)
async def delete_movie(
    id: Optional[str] = Query(None),
    movie_id: Optional[str] = Query(None),
    movie_service: MovieService = Depends(get_movie_service),
):
    await movie_service.delete_movie(id=id, movie_id=movie_id)
    return {"ok": True}
