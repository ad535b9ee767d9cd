"""
Neshan API Async Client

This module provides the NeshanClient class for the Neshan Maps web service:
route directions and reverse geocoding, with typed responses and typed errors.
"""

import logging
from typing import Any, Dict, Optional, Type, TypeVar

import httpx

from .config import requireApiKey
from .constants import (
    API_BASE_URL,
    API_KEY_HEADER,
    CONTENT_TYPE_JSON,
    ENDPOINT_DIRECTION,
    ENDPOINT_REVERSE,
    USER_AGENT,
)
from .exceptions import ConfigurationError, DecodingError, TransportError, parseServiceError
from .models import BaseNeshanModel, Point, PostalAddress, Routes, VehicleType, formatBool, formatCoordinate

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseNeshanModel)


def validateHeaderValue(value: str) -> None:
    """Check that value can be sent as an HTTP header value.

    Only visible ASCII characters, space and horizontal tab are allowed.
    Space and tab may not lead or trail the value.

    Raises:
        ConfigurationError: If value contains a forbidden character or
            starts or ends with whitespace
    """
    for pos, char in enumerate(value):
        if char != "\t" and not (0x20 <= ord(char) < 0x7F):
            raise ConfigurationError(f"API key contains forbidden character {char!r} at position {pos}")
    if value != value.strip(" \t"):
        raise ConfigurationError("API key cannot start or end with whitespace")


class NeshanClient:
    """Async client for Neshan Maps API, dood!

    Holds one HTTP transport with the ``Api-Key`` header and user-agent set at
    construction. The client keeps no per-call state, so a single instance can
    be shared by concurrent tasks.

    Example:
        >>> from neshan import NeshanClient, Point, VehicleType
        >>>
        >>> async with NeshanClient("your_api_key") as client:
        ...     routes = await client.route(
        ...         VehicleType.CAR,
        ...         Point(longitude=51.3926, latitude=35.7319),
        ...         Point(longitude=50.9531, latitude=35.7236),
        ...     )
        ...     address = await client.reverseGeocode(Point(longitude=51.3926, latitude=35.7319))

    Attributes:
        apiKey: Neshan API key, sent in the ``Api-Key`` header
        baseUrl: Base URL for the API (default: https://api.neshan.org)
        timeout: Request timeout in seconds (default: None, httpx default is used)
        userAgent: User-Agent header value
    """

    __slots__ = (
        "apiKey",
        "baseUrl",
        "timeout",
        "userAgent",
        "_transport",
        "_httpClient",
    )

    def __init__(
        self,
        apiKey: str,
        *,
        baseUrl: str = API_BASE_URL,
        timeout: Optional[float] = None,
        userAgent: str = USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the Neshan client.

        Args:
            apiKey: Neshan API key
            baseUrl: Base URL for the API, override to point at a mock endpoint
            timeout: Request timeout in seconds (default: httpx default)
            userAgent: User-Agent header value (default: neshan-py/<version>)
            transport: Custom httpx transport (used in tests)

        Raises:
            ConfigurationError: If apiKey is empty or is not a valid header value
        """
        if not apiKey:
            raise ConfigurationError("API key cannot be empty")
        validateHeaderValue(apiKey)

        self.apiKey = apiKey
        self.baseUrl = baseUrl.rstrip("/")
        self.timeout = timeout
        self.userAgent = userAgent
        self._transport = transport
        self._httpClient: Optional[httpx.AsyncClient] = None

        logger.debug(f"NeshanClient initialized for {self.baseUrl}")

    @classmethod
    def fromConfig(
        cls, config: Dict[str, Any], transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "NeshanClient":
        """Create client from the [neshan] configuration section.

        Args:
            config: Section dict with ``api-key`` and optional ``base-url``,
                ``timeout`` and ``user-agent`` keys
            transport: Custom httpx transport (used in tests)

        Raises:
            ConfigurationError: If api-key is missing or invalid
        """
        apiKey = requireApiKey(config)
        timeout = config.get("timeout")
        return cls(
            apiKey,
            baseUrl=config.get("base-url", API_BASE_URL),
            timeout=float(timeout) if timeout is not None else None,
            userAgent=config.get("user-agent", USER_AGENT),
            transport=transport,
        )

    async def __aenter__(self) -> "NeshanClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def _getHttpClient(self) -> httpx.AsyncClient:
        """Get or create the HTTP client with default headers."""
        if self._httpClient is None or self._httpClient.is_closed:
            kwargs: Dict[str, Any] = {}
            if self.timeout is not None:
                kwargs["timeout"] = httpx.Timeout(self.timeout)
            if self._transport is not None:
                kwargs["transport"] = self._transport

            self._httpClient = httpx.AsyncClient(
                base_url=self.baseUrl,
                headers={
                    API_KEY_HEADER: self.apiKey,
                    "User-Agent": self.userAgent,
                    "Accept": CONTENT_TYPE_JSON,
                },
                **kwargs,
            )
            logger.debug("Created new HTTP client")

        return self._httpClient

    async def aclose(self) -> None:
        """Close the HTTP client and cleanup resources."""
        if self._httpClient and not self._httpClient.is_closed:
            await self._httpClient.aclose()
            logger.debug("HTTP client closed")

    async def _get(self, endpoint: str, params: Dict[str, str], model: Type[ModelT]) -> ModelT:
        """Send GET request and decode the response, dood!

        Args:
            endpoint: API endpoint path (e.g. "/v2/reverse")
            params: Query parameters, already rendered as strings
            model: Response model for the success body

        Returns:
            Decoded success body

        Raises:
            TransportError: If request could not be completed
            ServiceError: If service answered with non-success status and an error body
            DecodingError: If body is not JSON or does not match expected shape
        """
        client = self._getHttpClient()
        logger.debug(f"Making GET request to {self.baseUrl}{endpoint} with params: {params}")

        try:
            response = await client.get(endpoint, params=params)
        except httpx.RequestError as e:
            logger.warning(f"Network error: {type(e).__name__}#{e}")
            raise TransportError(f"Network error: {type(e).__name__}#{e}") from e

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"Invalid JSON response with status {response.status_code}: {e}")
            raise DecodingError(
                f"Invalid JSON response: {e}", statusCode=response.status_code, response=response.text
            ) from e

        if not response.is_success:
            error = parseServiceError(response.status_code, data)
            logger.warning(f"API error: {error!r}")
            raise error

        try:
            result = model.from_dict(data)
        except DecodingError as e:
            e.statusCode = response.status_code
            logger.warning(f"Unexpected {model.__name__} response: {e}")
            raise

        logger.debug(f"Request successful: GET {endpoint}")
        return result

    async def route(
        self,
        vehicle: VehicleType,
        origin: Point,
        destination: Point,
        avoidTrafficZone: bool = False,
        avoidOddEvenZone: bool = False,
        alternativePaths: bool = False,
    ) -> Routes:
        """Find route(s) from origin to destination, dood!

        Args:
            vehicle: Vehicle type (car or motorcycle)
            origin: Start point
            destination: End point
            avoidTrafficZone: Find route(s) that don't cross the traffic zone
            avoidOddEvenZone: Find route(s) that don't cross the odd-even zone
            alternativePaths: Return alternative routes besides the primary one

        Returns:
            Routes, primary route first

        Raises:
            ValueError: If vehicle is not a known VehicleType
            TransportError: If request could not be completed
            ServiceError: If service rejected the request
            DecodingError: If response does not match the expected shape
        """
        params = {
            "type": VehicleType(vehicle).value,
            "origin": origin.toQueryValue(),
            "destination": destination.toQueryValue(),
            "avoid_traffic_zone": formatBool(avoidTrafficZone),
            "avoid_odd_even_zone": formatBool(avoidOddEvenZone),
            "alternative": formatBool(alternativePaths),
        }
        return await self._get(ENDPOINT_DIRECTION, params, Routes)

    async def reverseGeocode(self, point: Point) -> PostalAddress:
        """Find postal address for the given point.

        See https://platform.neshan.org/api/reverse-geocoding

        Raises:
            TransportError: If request could not be completed
            ServiceError: If service rejected the request
            DecodingError: If response does not match the expected shape
        """
        params = {
            "lat": formatCoordinate(point.latitude),
            "lng": formatCoordinate(point.longitude),
        }
        return await self._get(ENDPOINT_REVERSE, params, PostalAddress)
