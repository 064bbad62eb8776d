# empmovies/utils/helpers.py

import logging
import math
from typing import Any, Dict, Optional, Sequence

from bson import ObjectId
from fastapi.encoders import jsonable_encoder

logger = logging.getLogger(__name__)

# --- Field alias tables (checked in order, case-sensitive) ---

TITLE_FIELDS = ("movie_title", "title", "Title", "name", "Name", "MovieTitle")
EXTERNAL_ID_FIELDS = ("movie_id", "movieId", "movieid", "MovieID", "id", "Id", "ID")
RELEASE_FIELDS = (
    "Released", "released", "release_year", "releaseYear",
    "year", "Year", "ReleaseDate", "release_date",
)

NO_TITLE = "(no title)"


# --- Field Normalization ---

def pick_first(record: Optional[Dict[str, Any]], candidates: Sequence[str], default: Any = "") -> Any:
    """
    Returns the value of the first candidate key holding a non-null value.

    Args:
        record: The raw document (or None).
        candidates: Key names to try, in priority order.
        default: Value returned when no candidate is present.

    Returns:
        The first non-null value found, or the default.
    """
    if not record:
        return default
    for key in candidates:
        value = record.get(key)
        if value is not None:
            return value
    return default


def normalize_movie(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Projects a heterogeneous movie document onto the display shape
    {_id, movie_title, movie_id, Released}.

    Legacy records use many spellings for the same attribute (title/Title/name,
    year/release_date, ...); the first alias present wins. Never raises for
    missing fields.
    """
    doc_id = raw.get("_id")
    return {
        "_id": str(doc_id) if doc_id is not None else None,
        "movie_title": pick_first(raw, TITLE_FIELDS, NO_TITLE),
        "movie_id": pick_first(raw, EXTERNAL_ID_FIELDS, ""),
        "Released": pick_first(raw, RELEASE_FIELDS, ""),
    }


# --- Flexible Identifier Matching ---

def coerce_number(value: Any) -> Optional[Any]:
    """
    Parses a number out of a string the way a form field would be read.
    Integral values come back as int so they compare equal to stored ints.
    Returns None for empty, non-numeric or non-finite input.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    else:
        text = str(value).strip()
        # "1_000" is a Python literal, not a number a form would send
        if not text or "_" in text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def build_id_filter(raw_value: Any) -> Dict[str, Any]:
    """
    Builds a filter matching a movie whose movie_id equals raw_value either as
    a number or as a string.

    The movies collection holds records written by different tools, some storing
    movie_id as 42 and some as "42". When raw_value is not numeric the filter
    only carries the string branch.
    """
    branches = []
    number = coerce_number(raw_value)
    if number is not None:
        branches.append({"movie_id": number})
    branches.append({"movie_id": str(raw_value)})
    return {"$or": branches}


# --- Object Id Helpers ---

def to_object_id(id_str: Any) -> Optional[ObjectId]:
    """Validates a string as a MongoDB ObjectId."""
    if isinstance(id_str, ObjectId):
        return id_str
    if isinstance(id_str, str) and ObjectId.is_valid(id_str):
        return ObjectId(id_str)
    logger.warning(f"Invalid ObjectId format: {id_str}")
    return None


def serialize_document(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Makes a raw Mongo document JSON-safe (ObjectId -> str, datetime -> ISO string)."""
    if doc is None:
        return None
    return jsonable_encoder(doc, custom_encoder={ObjectId: str})


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty after stripping."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()
