"""
Tests for Neshan response models decoding.
"""

import pytest

from .exceptions import DecodingError
from .models import (
    Distance,
    Duration,
    Leg,
    Point,
    PostalAddress,
    Route,
    Routes,
    VehicleType,
    formatBool,
    formatCoordinate,
)


class TestRequestTypes:
    """Point and VehicleType rendering."""

    def test_point_query_value_latitude_first(self):
        point = Point(longitude=51.39, latitude=35.73)
        assert point.toQueryValue() == "35.73,51.39"

    def test_point_is_immutable(self):
        point = Point(longitude=1.0, latitude=2.0)
        with pytest.raises(AttributeError):
            point.latitude = 3.0  # type: ignore[misc]

    def test_point_out_of_range_is_not_validated(self):
        assert Point(longitude=500.0, latitude=-91.5).toQueryValue() == "-91.5,500.0"

    def test_point_near_zero_has_no_exponent(self):
        """Small coordinates must render as plain decimals, dood!"""
        assert Point(longitude=0.00001, latitude=35.7).toQueryValue() == "35.7,0.00001"

    def test_point_negative_near_zero(self):
        assert Point(longitude=-0.0000123, latitude=-35.7).toQueryValue() == "-35.7,-0.0000123"

    @pytest.mark.parametrize(
        "value, expected",
        [
            (51.392684661470156, "51.392684661470156"),
            (1e-05, "0.00001"),
            (-1.5e-07, "-0.00000015"),
            (1e16, "10000000000000000"),
            (0.0, "0.0"),
            (35, "35.0"),
        ],
    )
    def test_format_coordinate(self, value, expected):
        assert formatCoordinate(value) == expected

    def test_vehicle_type_values(self):
        assert [v.value for v in VehicleType] == ["car", "motorcycle"]
        assert str(VehicleType.CAR) == "car"
        assert str(VehicleType.MOTORCYCLE) == "motorcycle"

    def test_vehicle_type_unknown(self):
        with pytest.raises(ValueError):
            VehicleType("truck")

    def test_format_bool(self):
        assert formatBool(True) == "true"
        assert formatBool(False) == "false"


class TestRoutesDecoding:
    """Directions response decoding."""

    def test_multiple_routes_keep_order(self):
        data = {
            "routes": [
                {"legs": [{"summary": "A", "duration": {"value": 1, "text": "1"}, "distance": {"value": 2, "text": "2"}}]},
                {
                    "legs": [
                        {"summary": "B", "duration": {"value": 3.5, "text": "3"}, "distance": {"value": 4, "text": "4"}},
                        {"summary": "C", "duration": {"value": 5, "text": "5"}, "distance": {"value": 6, "text": "6"}},
                    ]
                },
            ]
        }
        routes = Routes.from_dict(data)

        assert [len(r.legs) for r in routes.routes] == [1, 2]
        assert [leg.summary for leg in routes.routes[1].legs] == ["B", "C"]
        assert routes.routes[1].legs[0].duration.value == 3.5
        assert isinstance(routes.routes[0].legs[0].distance.value, float)

    def test_empty_routes(self):
        assert Routes.from_dict({"routes": []}).routes == []

    def test_unknown_keys_are_kept(self):
        leg = Leg.from_dict(
            {
                "summary": "Example Rd",
                "duration": {"value": 600, "text": "10 minutes"},
                "distance": {"value": 5000, "text": "5 km"},
                "steps": [],
            }
        )
        assert leg.api_kwargs == {"steps": []}
        assert "steps" not in leg.to_dict()

    def test_to_dict_recursive(self):
        route = Route(
            legs=[Leg(summary="S", duration=Duration(value=1.0, text="d"), distance=Distance(value=2.0, text="m"))]
        )
        assert route.to_dict() == {
            "legs": [{"summary": "S", "duration": {"value": 1.0, "text": "d"}, "distance": {"value": 2.0, "text": "m"}}]
        }

    def test_duration_and_distance_are_not_equal(self):
        assert Duration(value=1.0, text="x") != Distance(value=1.0, text="x")

    @pytest.mark.parametrize(
        "data",
        [
            None,
            [],
            {},
            {"routes": None},
            {"routes": {}},
            {"routes": [{"legs": "none"}]},
            {"routes": [{"legs": [{"summary": 1, "duration": {"value": 1, "text": "1"}, "distance": {}}]}]},
            {"routes": [{"legs": [{"summary": "A", "duration": {"value": "1", "text": "1"}, "distance": {}}]}]},
            {"routes": [{"legs": [{"summary": "A", "duration": {"value": True, "text": "1"}, "distance": {}}]}]},
        ],
    )
    def test_wrong_shape(self, data):
        """Wrong shape must fail instead of producing zero values, dood!"""
        with pytest.raises(DecodingError):
            Routes.from_dict(data)

    @pytest.mark.parametrize("model", [Duration, Distance])
    def test_value_too_large_for_float(self, model):
        """Integer beyond float range is a DecodingError, not OverflowError, dood!"""
        with pytest.raises(DecodingError, match="out of range"):
            model.from_dict({"value": int("1" + "0" * 400), "text": "x"})


class TestPostalAddressDecoding:
    """Reverse geocoding response decoding."""

    REQUIRED = {
        "formatted_address": "addr",
        "route_name": "road",
        "city": "city",
        "state": "state",
        "in_traffic_zone": False,
        "in_odd_even_zone": True,
    }

    def test_optional_fields_absent(self):
        address = PostalAddress.from_dict(dict(self.REQUIRED))
        assert address.neighbourhood is None
        assert address.place is None
        assert address.municipality_zone is None
        assert address.in_odd_even_zone is True

    def test_optional_fields_null(self):
        data = dict(self.REQUIRED, neighbourhood=None, place=None, municipality_zone=None)
        address = PostalAddress.from_dict(data)
        assert address.neighbourhood is None
        assert address.api_kwargs == {}

    def test_optional_fields_present(self):
        data = dict(self.REQUIRED, neighbourhood="n", place="p", municipality_zone="6")
        address = PostalAddress.from_dict(data)
        assert (address.neighbourhood, address.place, address.municipality_zone) == ("n", "p", "6")

    def test_empty_string_is_kept(self):
        address = PostalAddress.from_dict(dict(self.REQUIRED, place=""))
        assert address.place == ""

    @pytest.mark.parametrize("field", sorted(REQUIRED))
    def test_missing_required_field(self, field):
        data = dict(self.REQUIRED)
        del data[field]
        with pytest.raises(DecodingError, match=field):
            PostalAddress.from_dict(data)

    def test_wrong_bool_type(self):
        with pytest.raises(DecodingError):
            PostalAddress.from_dict(dict(self.REQUIRED, in_traffic_zone="yes"))

    def test_repr_skips_none(self):
        address = PostalAddress.from_dict(dict(self.REQUIRED))
        text = repr(address)
        assert text.startswith("PostalAddress(")
        assert "neighbourhood" not in text
        assert "city='city'" in text
