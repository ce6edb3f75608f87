from rstable.domain.models import RestaurantRecord
from rstable.view.filtering import filter_records


def _records():
    return [
        RestaurantRecord(id="1", name="Bar Cañete", address="Carrer de la Unió 17", comments="Great TAPAS"),
        RestaurantRecord(id="2", name="Can Solé", address="Carrer de Sant Carles 4", comments=None),
        RestaurantRecord(id="3", name="Tapas 24", address="Carrer de la Diputació 269", comments="busy"),
        RestaurantRecord(id="4", name="Quimet", address="Poble Sec", comments="vermut"),
    ]


def test_short_search_terms_are_identity():
    records = _records()
    for term in ["", "t", "ta", "xz"]:
        assert filter_records(records, term) == records


def test_filter_returns_a_new_list():
    records = _records()
    out = filter_records(records, "")
    assert out == records
    assert out is not records


def test_matches_name_address_or_comments_case_insensitively():
    ids = [r.id for r in filter_records(_records(), "tapas")]
    # "Great TAPAS" (comments) and "Tapas 24" (name).
    assert ids == ["1", "3"]

    ids = [r.id for r in filter_records(_records(), "SANT CARLES")]
    assert ids == ["2"]


def test_every_kept_record_matches_and_every_dropped_record_does_not():
    records = _records()
    for term in ["carrer", "tapas", "vermut", "nothing-here", "cañ"]:
        kept = filter_records(records, term)
        lowered = term.lower()

        def hit(r: RestaurantRecord) -> bool:
            return any(lowered in (v or "").lower() for v in (r.name, r.address, r.comments))

        assert all(hit(r) for r in kept)
        assert not any(hit(r) for r in records if r not in kept)


def test_threshold_is_configurable():
    records = _records()
    assert [r.id for r in filter_records(records, "qu", min_chars=2)] == ["4"]
    assert filter_records(records, "qu") == records
