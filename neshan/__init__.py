"""
Neshan Maps API Client Library

This module provides a Python async client library for the Neshan Maps web
service (api.neshan.org) with typed responses and typed errors.

Example usage:
    from neshan import NeshanClient, Point, VehicleType

    async with NeshanClient(apiKey="your_api_key") as client:
        # Directions
        routes = await client.route(
            VehicleType.CAR,
            origin=Point(longitude=51.392684661470156, latitude=35.731984409609694),
            destination=Point(longitude=50.953103738230396, latitude=35.723680037006304),
            avoidTrafficZone=True,
        )

        # Reverse geocoding
        address = await client.reverseGeocode(Point(longitude=51.3926, latitude=35.7319))
"""

from neshan.client import NeshanClient
from neshan.config import NeshanConfig
from neshan.constants import API_BASE_URL, USER_AGENT, VERSION
from neshan.exceptions import (
    ConfigurationError,
    DecodingError,
    NeshanError,
    ServiceError,
    TransportError,
)
from neshan.models import (
    Distance,
    Duration,
    Leg,
    Point,
    PostalAddress,
    Route,
    Routes,
    VehicleType,
)

__version__ = VERSION

__all__ = [
    "NeshanClient",
    "NeshanConfig",
    "VERSION",
    "API_BASE_URL",
    "USER_AGENT",
    "NeshanError",
    "ConfigurationError",
    "TransportError",
    "ServiceError",
    "DecodingError",
    "Point",
    "VehicleType",
    "Routes",
    "Route",
    "Leg",
    "Duration",
    "Distance",
    "PostalAddress",
]
