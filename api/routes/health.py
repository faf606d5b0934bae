from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import get_provider
from api.schemas import HealthResponse
from infrastructure.providers import ConversionProvider

router = APIRouter(tags=['health'])


@router.get('/health', response_model=HealthResponse)
async def health(
	provider: Annotated[ConversionProvider, Depends(get_provider)],
) -> HealthResponse:
	return HealthResponse(status='ok', provider=provider.name)
