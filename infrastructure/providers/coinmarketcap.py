import logging
import time
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from domain.models.currency import ConversionResult, CurrencySymbol
from infrastructure.providers.classifier import (
    classify_http_status,
    classify_provider_code,
    classify_transport_error,
    invalid_response,
)

logger = logging.getLogger(__name__)


class StatusBlock(BaseModel):
    timestamp: datetime | None = None
    error_code: int = 0
    error_message: str | None = None
    elapsed: int | None = None
    credit_count: int | None = None


class QuoteEntry(BaseModel):
    price: Decimal
    last_updated: datetime


class ConversionData(BaseModel):
    id: int | None = None
    symbol: str | None = None
    name: str | None = None
    amount: Decimal
    last_updated: datetime | None = None
    quote: dict[str, QuoteEntry]


class Envelope(BaseModel):
    status: StatusBlock
    data: Any = None


class CoinMarketCapProvider:
    DEFAULT_BASE_URL = "https://sandbox-api.coinmarketcap.com"
    ENDPOINT = "v1/tools/price-conversion"
    API_KEY_HEADER = "X-CMC_PRO_API_KEY"

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def name(self) -> str:
        return "coinmarketcap"

    async def _request(self, params: dict) -> httpx.Response:
        url = f"{self.base_url}/{self.ENDPOINT}"
        headers = {"Accept": "application/json", self.API_KEY_HEADER: self.api_key}
        try:
            return await self._client.get(url, params=params, headers=headers)
        except httpx.RequestError as e:
            raise classify_transport_error(e) from e

    async def fetch_conversion(
        self, amount: Decimal, from_symbol: CurrencySymbol, to_symbol: CurrencySymbol
    ) -> ConversionResult:
        """Perform a single price-conversion round trip.

        Raises ConversionError for every failure; retrying is left to the caller.
        """
        params = {"amount": format(amount, "f"), "symbol": from_symbol.code, "convert": to_symbol.code}
        start_time = time.monotonic()
        response = await self._request(params)
        response_time_ms = int((time.monotonic() - start_time) * 1000)

        if not response.is_success:
            logger.info(
                f"API call to {self.name}/{self.ENDPOINT}: HTTP {response.status_code} ({response_time_ms}ms)"
            )
            raise classify_http_status(response.status_code, response.text)

        envelope = self._decode(response)

        # Business errors can arrive inside a 200 response.
        if envelope.status.error_code != 0:
            logger.info(
                f"API call to {self.name}/{self.ENDPOINT}: error code {envelope.status.error_code}"
            )
            raise classify_provider_code(envelope.status.error_code, envelope.status.error_message)

        data = self._conversion_data(envelope.data)
        quote = data.quote.get(to_symbol.code)
        if quote is None:
            raise invalid_response(f"no quote found for {to_symbol}")

        logger.debug(
            f"API call to {self.name}/{self.ENDPOINT}: SUCCESS {amount} {from_symbol} -> "
            f"{quote.price} {to_symbol} ({response_time_ms}ms)"
        )
        return ConversionResult.from_quote(
            original_amount=amount,
            converted_amount=quote.price,
            from_symbol=from_symbol,
            to_symbol=to_symbol,
            fetched_at=datetime.now(UTC),
            source_updated_at=quote.last_updated,
        )

    @staticmethod
    def _decode(response: httpx.Response) -> Envelope:
        try:
            return Envelope.model_validate(response.json(parse_float=Decimal))
        except ValueError as e:
            raise invalid_response(f"could not decode envelope: {e.__class__.__name__}") from e

    @staticmethod
    def _conversion_data(data: Any) -> ConversionData:
        # Ambiguous symbols come back as a list of candidates; the first is the
        # highest ranked one.
        if isinstance(data, list):
            if not data:
                raise invalid_response("empty conversion data")
            data = data[0]
        try:
            return ConversionData.model_validate(data)
        except ValidationError as e:
            raise invalid_response(f"failed to parse conversion data ({e.error_count()} errors)") from e

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
