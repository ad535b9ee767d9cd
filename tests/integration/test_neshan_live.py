"""
Live integration tests for NeshanClient

These tests call the real Neshan API and are skipped unless NESHAN_API_KEY
is set.
"""

import pytest

from neshan import NeshanClient, Point, PostalAddress, Routes, ServiceError, VehicleType

ORIGIN = Point(longitude=51.392684661470156, latitude=35.731984409609694)
DESTINATION = Point(longitude=50.953103738230396, latitude=35.723680037006304)


@pytest.mark.asyncio
async def testRoute(liveClient: NeshanClient):
    """Test directions between two points in Tehran province."""
    routes = await liveClient.route(
        VehicleType.CAR,
        ORIGIN,
        DESTINATION,
        avoidTrafficZone=True,
        avoidOddEvenZone=True,
        alternativePaths=False,
    )

    assert isinstance(routes, Routes)
    assert len(routes.routes) >= 1
    leg = routes.routes[0].legs[0]
    assert leg.distance.value > 0
    assert leg.duration.value > 0
    assert leg.duration.text


@pytest.mark.asyncio
async def testReverseGeocode(liveClient: NeshanClient):
    """Test reverse geocoding of a known point."""
    address = await liveClient.reverseGeocode(ORIGIN)

    assert isinstance(address, PostalAddress)
    assert address.city == "تهران"
    assert address.neighbourhood == "قزل قلعه"
    assert address.municipality_zone == "6"


@pytest.mark.asyncio
async def testInvalidApiKey(neshanApiKey: str):
    """Test that the service rejects an unknown key with a structured error."""
    async with NeshanClient("service.invalid-key-for-tests") as client:
        with pytest.raises(ServiceError) as excInfo:
            await client.reverseGeocode(ORIGIN)

    assert excInfo.value.code >= 400
    assert excInfo.value.message
