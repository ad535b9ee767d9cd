"""
Neshan API Data Models

This module defines request value types (Point, VehicleType) and the response
models returned by the Neshan client. Response models follow one pattern:
attributes are declared in ``__slots__``, ``from_dict`` builds an instance from
decoded JSON and raises DecodingError for a missing or mistyped field, and any
unknown keys are kept in ``api_kwargs``.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from typing import Any, Dict, Iterator, List, Optional, Self, Tuple, Type, Union

from .exceptions import DecodingError

_JsonType = Union[Type[Any], Tuple[Type[Any], ...]]


class VehicleType(StrEnum):
    """Vehicle type accepted by the directions endpoint"""

    CAR = "car"
    MOTORCYCLE = "motorcycle"


@dataclass(frozen=True)
class Point:
    """Geographic coordinate, dood!

    No range validation is done here: the service is the only validator.
    """

    longitude: float
    latitude: float

    def toQueryValue(self) -> str:
        """Render point as "<latitude>,<longitude>" (latitude first)."""
        return f"{formatCoordinate(self.latitude)},{formatCoordinate(self.longitude)}"


def formatCoordinate(value: float) -> str:
    """Render coordinate as plain decimal string, never in exponent form.

    Example:
        >>> formatCoordinate(0.00001)
        '0.00001'
    """
    return format(Decimal(repr(float(value))), "f")


def formatBool(value: bool) -> str:
    """Render boolean as lowercase "true"/"false" query value."""
    return "true" if value else "false"


def _typeName(expected: _JsonType) -> str:
    if isinstance(expected, tuple):
        return " or ".join(t.__name__ for t in expected)
    return expected.__name__


def _getField(
    cls: type,
    data: Dict[str, Any],
    key: str,
    expected: _JsonType,
    optional: bool = False,
) -> Any:
    """Read single field from decoded JSON object with type check.

    Args:
        cls: Model class being decoded (used in error messages)
        data: Decoded JSON object
        key: Field name
        expected: Expected python type(s) of the JSON value
        optional: If True, absent or null field gives None

    Returns:
        Field value

    Raises:
        DecodingError: If field is missing or has wrong type
    """
    value = data.get(key)
    if value is None:
        if optional:
            return None
        raise DecodingError(f"{cls.__name__}: missing required field '{key}'", response=data)

    # JSON true/false must not pass as a number
    if isinstance(value, bool) and bool not in (expected if isinstance(expected, tuple) else (expected,)):
        raise DecodingError(f"{cls.__name__}: field '{key}' must be {_typeName(expected)}, got bool", response=data)
    if not isinstance(value, expected):
        raise DecodingError(
            f"{cls.__name__}: field '{key}' must be {_typeName(expected)}, got {type(value).__name__}",
            response=data,
        )
    return value


def _ensureObject(cls: type, data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodingError(f"{cls.__name__}: expected JSON object, got {type(data).__name__}", response=data)
    return data


class BaseNeshanModel:
    """
    Base Class for all response models of Neshan API
    """

    __slots__ = ("api_kwargs",)

    api_kwargs: Dict[str, Any]
    """Response keys unknown to the model"""

    def __init__(self, *, api_kwargs: Optional[Dict[str, Any]] = None):
        if api_kwargs is None:
            api_kwargs = {}
        self.api_kwargs = api_kwargs

    def _getAttrsNames(self) -> Iterator[str]:
        """Get public attribute names from __slots__ hierarchy."""
        return (s for c in self.__class__.__mro__[:-1] for s in c.__slots__ if s != "api_kwargs")

    @classmethod
    def _getExtraKwargs(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """Extract keys not defined in class __slots__."""
        knownArgs = {s for c in cls.__mro__[:-1] for s in c.__slots__}
        return {k: v for k, v in data.items() if k not in knownArgs}

    def to_dict(self, recursive: bool = True) -> Dict[str, Any]:
        """Convert model instance to dictionary representation.

        Args:
            recursive: Whether to convert nested models (and lists of them) to dicts

        Returns:
            Dictionary with model attributes; ``api_kwargs`` is not included
        """
        data: Dict[str, Any] = {}
        for key in self._getAttrsNames():
            value = getattr(self, key, None)
            if recursive and isinstance(value, BaseNeshanModel):
                value = value.to_dict(recursive=True)
            elif recursive and isinstance(value, list):
                value = [v.to_dict(recursive=True) if isinstance(v, BaseNeshanModel) else v for v in value]
            data[key] = value
        return data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return NotImplemented
        return self.to_dict(recursive=False) == other.to_dict(recursive=False)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        asDict = self.to_dict(recursive=False)
        contents = ", ".join(f"{k}={v!r}" for k, v in asDict.items() if v is not None)
        return f"{self.__class__.__name__}({contents})"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Self:
        """Create model instance from decoded JSON object.

        Raises:
            DecodingError: If data does not match the model
        """
        raise NotImplementedError


class _Measure(BaseNeshanModel):
    """Numeric value with its human-readable (persian) text"""

    __slots__ = ("value", "text")

    def __init__(self, *, value: float, text: str, api_kwargs: Optional[Dict[str, Any]] = None):
        super().__init__(api_kwargs=api_kwargs)
        self.value: float = value
        self.text: str = text

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Self:
        data = _ensureObject(cls, data)
        try:
            value = float(_getField(cls, data, "value", (int, float)))
        except OverflowError as e:
            raise DecodingError(f"{cls.__name__}: field 'value' out of range", response=data) from e
        return cls(
            value=value,
            text=_getField(cls, data, "text", str),
            api_kwargs=cls._getExtraKwargs(data),
        )


class Duration(_Measure):
    """Travel time from origin to destination: seconds and persian text"""

    __slots__ = ()


class Distance(_Measure):
    """Distance from origin to destination: meters and persian text"""

    __slots__ = ()


class Leg(BaseNeshanModel):
    """Part of the route between two waypoints"""

    __slots__ = ("summary", "duration", "distance")

    def __init__(
        self,
        *,
        summary: str,
        duration: Duration,
        distance: Distance,
        api_kwargs: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(api_kwargs=api_kwargs)
        self.summary: str = summary
        self.duration: Duration = duration
        self.distance: Distance = distance

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Self:
        data = _ensureObject(cls, data)
        return cls(
            summary=_getField(cls, data, "summary", str),
            duration=Duration.from_dict(_getField(cls, data, "duration", dict)),
            distance=Distance.from_dict(_getField(cls, data, "distance", dict)),
            api_kwargs=cls._getExtraKwargs(data),
        )


class Route(BaseNeshanModel):
    """Single route, made of ordered legs"""

    __slots__ = ("legs",)

    def __init__(self, *, legs: List[Leg], api_kwargs: Optional[Dict[str, Any]] = None):
        super().__init__(api_kwargs=api_kwargs)
        self.legs: List[Leg] = legs

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Self:
        data = _ensureObject(cls, data)
        return cls(
            legs=[Leg.from_dict(leg) for leg in _getField(cls, data, "legs", list)],
            api_kwargs=cls._getExtraKwargs(data),
        )


class Routes(BaseNeshanModel):
    """Directions response: primary route first, then alternatives (if requested)"""

    __slots__ = ("routes",)

    def __init__(self, *, routes: List[Route], api_kwargs: Optional[Dict[str, Any]] = None):
        super().__init__(api_kwargs=api_kwargs)
        self.routes: List[Route] = routes

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Self:
        data = _ensureObject(cls, data)
        return cls(
            routes=[Route.from_dict(route) for route in _getField(cls, data, "routes", list)],
            api_kwargs=cls._getExtraKwargs(data),
        )


class PostalAddress(BaseNeshanModel):
    """
    Reverse geocoding result.

    ``neighbourhood``, ``place`` and ``municipality_zone`` are None when the
    service has no data for the point.
    """

    __slots__ = (
        "formatted_address",
        "route_name",
        "neighbourhood",
        "city",
        "state",
        "place",
        "municipality_zone",
        "in_traffic_zone",
        "in_odd_even_zone",
    )

    def __init__(
        self,
        *,
        formatted_address: str,
        route_name: str,
        city: str,
        state: str,
        in_traffic_zone: bool,
        in_odd_even_zone: bool,
        neighbourhood: Optional[str] = None,
        place: Optional[str] = None,
        municipality_zone: Optional[str] = None,
        api_kwargs: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(api_kwargs=api_kwargs)
        self.formatted_address: str = formatted_address
        self.route_name: str = route_name
        self.neighbourhood: Optional[str] = neighbourhood
        self.city: str = city
        self.state: str = state
        self.place: Optional[str] = place
        self.municipality_zone: Optional[str] = municipality_zone
        self.in_traffic_zone: bool = in_traffic_zone
        self.in_odd_even_zone: bool = in_odd_even_zone

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Self:
        data = _ensureObject(cls, data)
        return cls(
            formatted_address=_getField(cls, data, "formatted_address", str),
            route_name=_getField(cls, data, "route_name", str),
            neighbourhood=_getField(cls, data, "neighbourhood", str, optional=True),
            city=_getField(cls, data, "city", str),
            state=_getField(cls, data, "state", str),
            place=_getField(cls, data, "place", str, optional=True),
            municipality_zone=_getField(cls, data, "municipality_zone", str, optional=True),
            in_traffic_zone=_getField(cls, data, "in_traffic_zone", bool),
            in_odd_even_zone=_getField(cls, data, "in_odd_even_zone", bool),
            api_kwargs=cls._getExtraKwargs(data),
        )
