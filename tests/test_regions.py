import pytest

from swingmarket.config.settings import Settings
from swingmarket.core.geo import GeoPoint
from swingmarket.regions.resolver import nearest_region, region_center, resolve_region
from swingmarket.regions.table import RegionEntry, load_region_table, parse_region_table


TABLE = (
    RegionEntry(name="north", center=GeoPoint(latitude=1.0, longitude=0.0)),
    RegionEntry(name="south", center=GeoPoint(latitude=-1.0, longitude=0.0)),
    RegionEntry(name="east", center=GeoPoint(latitude=0.0, longitude=2.0)),
)


def test_nearest_region_picks_minimum_distance():
    assert nearest_region(GeoPoint(latitude=0.8, longitude=0.1), TABLE) == "north"
    assert nearest_region(GeoPoint(latitude=-3.0, longitude=0.0), TABLE) == "south"
    assert nearest_region(GeoPoint(latitude=0.0, longitude=1.9), TABLE) == "east"


def test_nearest_region_ties_keep_first_entry():
    # The equator is equidistant from "north" and "south".
    assert nearest_region(GeoPoint(latitude=0.0, longitude=0.0), TABLE) == "north"
    assert nearest_region(GeoPoint(latitude=0.0, longitude=0.0), TABLE[::-1][1:]) == "south"


def test_nearest_region_empty_table():
    assert nearest_region(GeoPoint(latitude=0.0, longitude=0.0), ()) is None


def test_packaged_table_is_loaded_once_and_immutable():
    table = load_region_table()
    assert isinstance(table, tuple)
    assert len(table) == 15
    assert table is load_region_table()
    names = [entry.name for entry in table]
    assert names[0] == "강남"
    assert "홍대" in names


def test_resolve_region_with_packaged_table():
    # Right next to Hongik Univ. station.
    assert resolve_region(GeoPoint(latitude=37.5570, longitude=126.9245)) == "홍대"
    assert resolve_region(GeoPoint(latitude=37.5170, longitude=127.0470)) == "강남"


def test_resolve_region_applies_distance_cutoff():
    busan = GeoPoint(latitude=35.1796, longitude=129.0756)
    assert resolve_region(busan) is None

    no_cutoff = Settings.model_validate({"regions": {"max_match_km": None}})
    assert resolve_region(busan, settings=no_cutoff) is not None


def test_resolve_region_invalid_coordinates():
    assert resolve_region(GeoPoint(latitude=120.0, longitude=0.0)) is None


def test_region_center_lookup():
    assert region_center("east", TABLE) == GeoPoint(latitude=0.0, longitude=2.0)
    assert region_center("missing", TABLE) is None
    assert region_center("잠실") == GeoPoint(latitude=37.5133, longitude=127.1028)


def test_parse_region_table_validates_coordinates():
    entries = parse_region_table({"regions": [{"name": "a", "latitude": 1, "longitude": 2}]})
    assert entries == (RegionEntry(name="a", center=GeoPoint(latitude=1.0, longitude=2.0)),)

    with pytest.raises(ValueError):
        parse_region_table({"regions": [{"name": "bad", "latitude": 95, "longitude": 0}]})
