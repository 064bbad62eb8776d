# empmovies/services/movie_service.py

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from empmovies.core.errors import NotFoundError, ValidationFailed
from empmovies.data_access.mongo_client import MovieRepository
from empmovies.models.movie import MovieCreate, MovieListPage, MovieUpdate, NormalizedMovie
from empmovies.utils.helpers import build_id_filter, is_blank, normalize_movie, to_object_id

logger = logging.getLogger(__name__)

DEFAULT_API_LIST_LIMIT = 200
DEFAULT_UI_LIST_LIMIT = 50


class MovieService:
    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "movies"):
        """
        Initializes the Movie Service.

        Args:
            db: The movies AsyncIOMotorDatabase.
            collection_name: Name of the movies collection in that database.
        """
        self.repository = MovieRepository(db, collection_name=collection_name)

    # --- Helper Methods ---

    def _target_filter(self, id: Optional[str], movie_id: Any) -> Optional[Dict[str, Any]]:
        """
        Filter selecting the record addressed by an internal id or, failing
        that, by a flexible external id. Returns None for a malformed internal id,
        which can never match anything.
        """
        if not is_blank(id):
            obj_id = to_object_id(id)
            return {"_id": obj_id} if obj_id else None
        return build_id_filter(movie_id)

    async def _warn_if_ambiguous(self, query: Dict[str, Any], action: str) -> None:
        # A flexible id may hit both the numeric and string variant of a record.
        # Only the earliest-inserted match is touched.
        if "_id" in query:
            return
        matches = await self.repository.count(query)
        if matches > 1:
            logger.warning(
                f"{action}: {matches} movies match {query}; only the earliest inserted one is affected."
            )

    @staticmethod
    def _require_key(id: Optional[str], movie_id: Any) -> None:
        if is_blank(id) and is_blank(movie_id):
            raise ValidationFailed("Provide id or movie_id")

    # --- Reads ---

    async def list_movies(self, limit: int = DEFAULT_API_LIST_LIMIT) -> List[Dict[str, Any]]:
        """Raw movie documents, at most `limit` of them."""
        docs = await self.repository.find_many({}, limit=limit)
        logger.info(f"Fetched {len(docs)} movies (limit {limit}).")
        return docs

    async def list_normalized(self, limit: int = DEFAULT_UI_LIST_LIMIT) -> MovieListPage:
        """
        Normalized display views for the home page, plus the first raw
        document so the debug view can show what the store actually holds.
        """
        docs = await self.repository.find_many({}, limit=limit)
        movies = [NormalizedMovie.model_validate(normalize_movie(doc)) for doc in docs]
        return MovieListPage(movies=movies, sample=docs[0] if docs else None)

    async def find_movie(
        self,
        id: Optional[str] = None,
        movie_id: Optional[str] = None,
        title: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Looks a movie up by internal id, else external id, else exact title.

        Raises:
            ValidationFailed: If no lookup key was given.
            NotFoundError: If nothing matches.
            PyMongoError: If a database error occurs.
        """
        if not is_blank(id):
            obj_id = to_object_id(id)
            doc = await self.repository.find_by_id(obj_id) if obj_id else None
        elif not is_blank(movie_id):
            doc = await self.repository.find_one(build_id_filter(movie_id))
        elif not is_blank(title):
            # Legacy records carry `title` instead of `movie_title`
            doc = await self.repository.find_one({"$or": [{"movie_title": title}, {"title": title}]})
        else:
            raise ValidationFailed("Provide id or movie_id or title")

        if doc is None:
            logger.warning(f"Movie not found: id={id!r} movie_id={movie_id!r} title={title!r}")
            raise NotFoundError()
        return doc

    async def lookup_movie(self, id: Optional[str] = None, movie_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Like find_movie, but returns None instead of raising. Used by the show page."""
        if is_blank(id) and is_blank(movie_id):
            return None
        try:
            return await self.find_movie(id=id, movie_id=movie_id)
        except NotFoundError:
            return None

    # --- Writes ---

    async def create_movie(self, data: MovieCreate) -> Dict[str, Any]:
        doc = {"movie_title": data.movie_title, "Released": data.Released}
        if not is_blank(data.movie_id):
            doc["movie_id"] = data.movie_id
        created = await self.repository.insert_one(doc)
        logger.info(f"Created movie {created['_id']} ({data.movie_title}).")
        return created

    async def update_movie(self, data: MovieUpdate) -> Dict[str, Any]:
        """
        Updates title/release info of the movie addressed by `id` or `movie_id`.

        When a flexible movie_id matches several records only the earliest
        inserted one is updated; the others are left untouched.

        Raises:
            ValidationFailed: If neither id nor movie_id was given.
            NotFoundError: If nothing matches.
        """
        self._require_key(data.id, data.movie_id)
        query = self._target_filter(data.id, data.movie_id)
        if query is None:
            raise NotFoundError()

        changes = data.changes()
        if changes:
            await self._warn_if_ambiguous(query, "Update")
            updated = await self.repository.update_first(query, changes)
        else:
            updated = await self.repository.find_one(query)

        if updated is None:
            logger.warning(f"Update failed: no movie matches {query}")
            raise NotFoundError()
        logger.info(f"Updated movie {updated['_id']}: {sorted(changes)}")
        return updated

    async def delete_movie(self, id: Optional[str] = None, movie_id: Any = None) -> Dict[str, Any]:
        """
        Deletes the movie addressed by `id` or `movie_id` (earliest match only).

        Raises:
            ValidationFailed: If neither id nor movie_id was given.
            NotFoundError: If nothing was deleted.
        """
        self._require_key(id, movie_id)
        query = self._target_filter(id, movie_id)
        if query is None:
            raise NotFoundError()

        await self._warn_if_ambiguous(query, "Delete")
        deleted = await self.repository.delete_first(query)
        if deleted is None:
            logger.warning(f"Delete failed: no movie matches {query}")
            raise NotFoundError()
        logger.info(f"Deleted movie {deleted['_id']}.")
        return deleted
