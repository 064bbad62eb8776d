# /healthz endpoint
# empmovies/api/endpoints/health.py

from fastapi import APIRouter, status
from pydantic import BaseModel

router = APIRouter()


class HealthResponse(BaseModel):
    ok: bool = True


@router.get(
    "/healthz",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Perform a Health Check",
)
async def health_check():
    """
    Liveness probe. Does not touch either store, so it answers even when
    MongoDB is down or the movies store is not configured.
    """
    return HealthResponse(ok=True)
