from fastapi import APIRouter, status

from posts_api.models.response import HealthResponse

router = APIRouter()


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> HealthResponse:
    return HealthResponse()
