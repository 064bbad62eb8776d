# Server-rendered movie pages
# empmovies/api/endpoints/ui.py

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from empmovies.api.deps import get_app_settings, get_movie_service
from empmovies.core.config import Settings
from empmovies.models.movie import MovieCreate, MovieUpdate
from empmovies.services.movie_service import MovieService
from empmovies.utils.helpers import normalize_movie, serialize_document

logger = logging.getLogger(__name__)
router = APIRouter(default_response_class=HTMLResponse)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent.parent / "templates"))


def _movie_context(doc: Optional[Dict[str, Any]], show_debug: bool) -> Dict[str, Any]:
    raw = serialize_document(doc)
    return {
        "movie": raw,
        "view": normalize_movie(raw) if raw else None,
        "show_debug": show_debug,
    }


# --- List ---

@router.get("/", summary="Movie list page")
async def index(
    request: Request,
    debug: Optional[str] = Query(None),
    movie_service: MovieService = Depends(get_movie_service),
    settings: Settings = Depends(get_app_settings),
):
    page = await movie_service.list_normalized(limit=settings.MOVIES_UI_LIST_LIMIT)
    show_debug = debug == "1"
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "movies": page.movies,
            "show_debug": show_debug,
            "sample": serialize_document(page.sample) if show_debug else None,
        },
    )


# --- Show ---

@router.get("/ui/movie/show", summary="Single movie page")
async def show_movie(
    request: Request,
    id: Optional[str] = Query(None),
    movie_id: Optional[str] = Query(None),
    debug: Optional[str] = Query(None),
    movie_service: MovieService = Depends(get_movie_service),
):
    doc = await movie_service.lookup_movie(id=id, movie_id=movie_id)
    return templates.TemplateResponse(request, "movie_view.html", _movie_context(doc, debug == "1"))


# --- Insert ---

@router.get("/ui/movie/new", summary="Insert form")
async def new_movie_form(request: Request):
    return templates.TemplateResponse(request, "movie_form.html", {})


@router.post("/ui/movie/new", summary="Insert a movie from the form")
async def create_movie_from_form(
    movie_id: Optional[str] = Form(None),
    movie_title: Optional[str] = Form(None),
    Released: Optional[str] = Form(None),
    movie_service: MovieService = Depends(get_movie_service),
):
    await movie_service.create_movie(
        MovieCreate(movie_id=movie_id, movie_title=movie_title, Released=Released)
    )
    # 303 so the browser follows up with a GET
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


# --- Update ---

@router.get("/ui/movie/update", summary="Update form")
async def update_movie_form(request: Request):
    return templates.TemplateResponse(request, "movie_update.html", {})


@router.post("/ui/movie/update", summary="Update a movie from the form")
async def update_movie_from_form(
    request: Request,
    id: Optional[str] = Form(None),
    movie_id: Optional[str] = Form(None),
    movie_title: Optional[str] = Form(None),
    Released: Optional[str] = Form(None),
    movie_service: MovieService = Depends(get_movie_service),
):
    # Blank form inputs mean "leave unchanged"
    updated = await movie_service.update_movie(
        MovieUpdate(
            id=id or None,
            movie_id=movie_id or None,
            movie_title=movie_title or None,
            Released=Released or None,
        )
    )
    # Rendered directly rather than redirecting, so the result shows the record just written
    return templates.TemplateResponse(request, "movie_view.html", _movie_context(updated, False))


# --- Delete ---

@router.get("/ui/movie/delete", summary="Delete form")
async def delete_movie_form(request: Request):
    return templates.TemplateResponse(request, "movie_delete.html", {})


@router.post("/ui/movie/delete", summary="Delete a movie from the form")
async def delete_movie_from_form(
    id: Optional[str] = Form(None),
    movie_id: Optional[str] = Form(None),
    movie_service: MovieService = Depends(get_movie_service),
):
    await movie_service.delete_movie(id=id, movie_id=movie_id)
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
