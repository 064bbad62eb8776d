# empmovies/models/movie.py

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# movie_id is stored as whatever the caller sent: a number or a string
ExternalId = Union[int, float, str]


# --- Models for API Requests ---
class MovieCreate(BaseModel):
    """Request body for POST /api/movies and the UI insert form."""
    movie_id: Optional[ExternalId] = Field(None, description="External identifier, number or string.")
    movie_title: Optional[str] = Field(None, validate_default=True, description="Movie title (required).")
    Released: Optional[str] = Field(None, description="Release information, free text.")

    # Released: 1995 is stored as "1995"
    model_config = ConfigDict(coerce_numbers_to_str=True)

    @field_validator("movie_title")
    @classmethod
    def title_required(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError("movie_title is required")
        return v.strip()


class MovieUpdate(BaseModel):
    """
    Request body for PUT /api/movies and the UI update form.

    Either `id` (internal ObjectId) or `movie_id` (flexible external id) selects
    the target; only the supplied title/release fields are written.
    """
    id: Optional[str] = Field(None, description="Internal database ID.")
    movie_id: Optional[ExternalId] = Field(None, description="External identifier, number or string.")
    movie_title: Optional[str] = None
    Released: Optional[str] = None

    model_config = ConfigDict(coerce_numbers_to_str=True)

    def changes(self) -> Dict[str, Any]:
        """Fields to $set; fields left out of the request are not touched."""
        fields = {"movie_title": self.movie_title, "Released": self.Released}
        return {k: v for k, v in fields.items() if v is not None}


# --- Models for API Responses ---
class NormalizedMovie(BaseModel):
    """Read-only display projection of a raw movie document."""
    id: Optional[str] = Field(None, alias="_id")
    movie_title: Any = "(no title)"
    movie_id: Any = ""
    Released: Any = ""

    model_config = {"populate_by_name": True}


class MovieListPage(BaseModel):
    """What the home page renders."""
    movies: List[NormalizedMovie]
    sample: Optional[Dict[str, Any]] = None
