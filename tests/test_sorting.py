from rstable.core.geo import GeoPoint
from rstable.domain.models import Coordinates, RestaurantRecord, SortConfig, SortDirection, SortKey
from rstable.view.sorting import next_sort, sort_records

ASC = SortDirection.ASCENDING
DESC = SortDirection.DESCENDING

VIEWER = GeoPoint(lat=41.3874, lng=2.1686)


def _rec(id_: str, **kwargs) -> RestaurantRecord:
    return RestaurantRecord(id=id_, **kwargs)


def _ids(records):
    return [r.id for r in records]


def test_next_sort_toggles_same_key_and_resets_otherwise():
    cfg = next_sort(SortConfig(), SortKey.NAME)
    assert cfg == SortConfig(key=SortKey.NAME, direction=ASC)

    cfg = next_sort(cfg, SortKey.NAME)
    assert cfg == SortConfig(key=SortKey.NAME, direction=DESC)

    # Descending on the same key goes back to ascending.
    cfg = next_sort(cfg, SortKey.NAME)
    assert cfg.direction is ASC

    cfg = next_sort(SortConfig(key=SortKey.NAME, direction=ASC), SortKey.ADDRESS)
    assert cfg == SortConfig(key=SortKey.ADDRESS, direction=ASC)


def test_sorting_twice_by_the_same_key_reverses_the_order():
    records = [_rec("b", name="Beta"), _rec("a", name="Alpha"), _rec("c", name="Gamma")]
    first = next_sort(SortConfig(), SortKey.NAME)
    second = next_sort(first, SortKey.NAME)

    asc = sort_records(records, first)
    desc = sort_records(records, second)
    assert _ids(asc) == ["a", "b", "c"]
    assert _ids(desc) == list(reversed(_ids(asc)))


def test_text_sort_is_case_sensitive_and_stable():
    records = [
        _rec("1", name="beta"),
        _rec("2", name="Beta"),
        _rec("3", name="alpha"),
        _rec("4", name="Beta"),
    ]
    out = sort_records(records, SortConfig(key=SortKey.NAME, direction=ASC))
    # Upper-case sorts before lower-case; equal names keep their input order.
    assert _ids(out) == ["2", "4", "3", "1"]


def test_sort_never_mutates_input():
    records = [_rec("b", name="B"), _rec("a", name="A")]
    snapshot = list(records)
    out = sort_records(records, SortConfig(key=SortKey.NAME, direction=ASC))
    assert records == snapshot
    assert out is not records


def test_no_sort_key_keeps_input_order():
    records = [_rec("b", name="B"), _rec("a", name="A")]
    assert _ids(sort_records(records, SortConfig())) == ["b", "a"]


def test_missing_comments_sort_as_empty_text():
    records = [_rec("1", comments="zzz"), _rec("2", comments=None), _rec("3", comments="aaa")]
    assert _ids(sort_records(records, SortConfig(key=SortKey.COMMENTS, direction=ASC))) == ["2", "3", "1"]


def test_visited_sorts_false_first_when_ascending():
    records = [_rec("1", visited=True), _rec("2", visited=False), _rec("3", visited=True)]
    assert _ids(sort_records(records, SortConfig(key=SortKey.VISITED, direction=ASC))) == ["2", "1", "3"]
    assert _ids(sort_records(records, SortConfig(key=SortKey.VISITED, direction=DESC))) == ["1", "3", "2"]


def test_last_updated_sorts_chronologically():
    records = [
        _rec("new", lastUpdated="2024-06-01T00:00:00Z"),
        _rec("old", lastUpdated="2024-01-01T00:00:00Z"),
        _rec("mid", lastUpdated="2024-03-01T12:00:00+02:00"),
    ]
    out = sort_records(records, SortConfig(key=SortKey.LAST_UPDATED, direction=ASC))
    assert _ids(out) == ["old", "mid", "new"]


def test_distance_sort_puts_unknown_last_ascending_and_first_descending():
    records = [
        _rec("unknown-1", coordinates=Coordinates(lat=0, lng=0)),
        _rec("far", coordinates=Coordinates(lat=40.4168, lng=-3.7038)),
        _rec("unknown-2"),
        _rec("near", coordinates=Coordinates(lat=41.3851, lng=2.1734)),
    ]
    asc = sort_records(records, SortConfig(key=SortKey.DISTANCE, direction=ASC), VIEWER)
    assert _ids(asc) == ["near", "far", "unknown-1", "unknown-2"]

    desc = sort_records(records, SortConfig(key=SortKey.DISTANCE, direction=DESC), VIEWER)
    assert _ids(desc) == ["unknown-1", "unknown-2", "far", "near"]


def test_distance_sort_without_viewer_location_keeps_input_order():
    records = [_rec("x"), _rec("y"), _rec("z", coordinates=Coordinates(lat=41.0, lng=2.0))]
    out = sort_records(records, SortConfig(key=SortKey.DISTANCE, direction=ASC), None)
    assert _ids(out) == ["x", "y", "z"]


def test_two_records_without_coordinates_keep_relative_order():
    records = [_rec("first"), _rec("second")]
    out = sort_records(records, SortConfig(key=SortKey.DISTANCE, direction=ASC), None)
    assert _ids(out) == ["first", "second"]
