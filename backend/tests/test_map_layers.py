from masar.domain.coordinates import Coordinate
from masar.domain.locations import CurrentPosition, Location
from masar.services.map_layers import build_feature_collection


def test_feature_collection_without_route():
    location = Location.create("Museum", Coordinate(30.0478, 31.2336))

    collection = build_feature_collection([location])

    assert collection["type"] == "FeatureCollection"
    assert len(collection["features"]) == 1
    feature = collection["features"][0]
    assert feature["geometry"]["coordinates"] == [31.2336, 30.0478]
    assert feature["properties"]["name"] == "Museum"
    assert "order" not in feature["properties"]


def test_feature_collection_with_route_adds_path_from_origin():
    origin = CurrentPosition(Coordinate(30.0444, 31.2357), "Home")
    first = Location.create("First", Coordinate(30.05, 31.24))
    second = Location.create("Second", Coordinate(30.1, 31.3))

    collection = build_feature_collection([second, first], origin, [first, second])

    kinds = [feature["properties"]["kind"] for feature in collection["features"]]
    assert kinds == ["origin", "location", "location", "route"]
    orders = {
        feature["properties"]["name"]: feature["properties"]["order"]
        for feature in collection["features"]
        if feature["properties"]["kind"] == "location"
    }
    assert orders == {"First": 1, "Second": 2}
    line = collection["features"][-1]["geometry"]
    assert line["type"] == "LineString"
    assert line["coordinates"] == [[31.2357, 30.0444], [31.24, 30.05], [31.3, 30.1]]
