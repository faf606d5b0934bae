from .responses import ConversionResponse, ErrorResponse, HealthResponse

__all__ = [
	'ConversionResponse',
	'ErrorResponse',
	'HealthResponse',
]
