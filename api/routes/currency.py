from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from api.dependencies import get_conversion_service
from api.schemas import ConversionResponse, ErrorResponse
from application.services import ConversionService

router = APIRouter(prefix='/api', tags=['currency'])


@router.get(
	'/convert/{from_currency}/{to_currency}/{amount}',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert currency amount',
	responses={
		400: {'model': ErrorResponse},
		429: {'model': ErrorResponse},
		502: {'model': ErrorResponse},
		503: {'model': ErrorResponse},
		504: {'model': ErrorResponse},
	},
)
async def convert_currency(
	from_currency: Annotated[str, Path(min_length=2, max_length=10)],
	to_currency: Annotated[str, Path(min_length=2, max_length=10)],
	amount: Annotated[Decimal, Path(gt=0)],
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> ConversionResponse:
	result = await service.convert(amount, from_currency, to_currency)
	return ConversionResponse.from_result(result)
