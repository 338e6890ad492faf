import pytest

from masar.domain.coordinates import Coordinate, InvalidCoordinateError
from masar.parsing.coordinates import parse_coordinate_pair


@pytest.mark.parametrize(
    "text",
    [
        "30.0444,31.2357",
        "30.0444, 31.2357",
        "30.0444 31.2357",
        "  30.0444\t31.2357  ",
        "lat: 30.0444, lng: 31.2357",
        "Latitude=30.0444 Longitude=31.2357",
        "30.0444° N, 31.2357° E",
        "30.0444°, 31.2357°",
    ],
)
def test_parse_coordinate_pair_accepts_known_formats(text):
    assert parse_coordinate_pair(text) == Coordinate(30.0444, 31.2357)


def test_hemisphere_letters_set_the_sign():
    assert parse_coordinate_pair("33.8688° S, 151.2093° E") == Coordinate(
        -33.8688, 151.2093
    )
    assert parse_coordinate_pair("40.7128 N 74.0060 W") == Coordinate(40.7128, -74.006)


@pytest.mark.parametrize(
    "text",
    ["200,31", "30,181", "", "   ", "cairo", "3031", "30.0444,", "1,2,3"],
)
def test_parse_coordinate_pair_rejects_invalid_text(text):
    assert parse_coordinate_pair(text) is None


def test_coordinate_construction_validates_range():
    with pytest.raises(InvalidCoordinateError):
        Coordinate(91, 0)
    assert Coordinate.create(0, 181) is None
    assert Coordinate.create(float("nan"), 0) is None
    assert Coordinate.create(-90, -180) == Coordinate(-90.0, -180.0)
