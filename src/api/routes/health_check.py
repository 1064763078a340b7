from fastapi import APIRouter, Depends, status

from src.depends import Container, get_container

router = APIRouter(tags=["Health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health(container: Container = Depends(get_container)):
    return {"status": "healthy", "service": container.config.SERVICE_NAME}
