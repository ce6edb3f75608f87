from rstable.core.errors import GeolocationDenied, GeolocationUnavailable
from rstable.core.geo import GeoPoint
from rstable.view.location import LocationProvider, LocationState, fixed_locator

HERE = GeoPoint(lat=41.3874, lng=2.1686)


def test_provider_starts_pending_without_coordinates():
    provider = LocationProvider()
    assert provider.state is LocationState.PENDING
    assert provider.coordinates is None


def test_resolve_notifies_listeners_once():
    provider = LocationProvider()
    seen: list[LocationState] = []
    provider.subscribe(lambda p: seen.append(p.state))

    assert provider.resolve(HERE) is True
    assert provider.state is LocationState.AVAILABLE
    assert provider.coordinates == HERE
    assert seen == [LocationState.AVAILABLE]


def test_transitions_are_one_directional():
    provider = LocationProvider()
    provider.fail(GeolocationDenied("user said no"))
    assert provider.state is LocationState.UNAVAILABLE

    # A late position never revives a denied session.
    assert provider.resolve(HERE) is False
    assert provider.state is LocationState.UNAVAILABLE
    assert provider.coordinates is None

    provider = LocationProvider()
    provider.resolve(HERE)
    assert provider.fail(GeolocationUnavailable("lost")) is False
    assert provider.coordinates == HERE


def test_request_runs_locator_only_once():
    provider = LocationProvider()
    calls = {"n": 0}

    def locator():
        calls["n"] += 1
        raise GeolocationDenied("denied")

    provider.request(locator)
    provider.request(locator)
    assert calls["n"] == 1
    assert provider.state is LocationState.UNAVAILABLE
    assert isinstance(provider.error, GeolocationDenied)


def test_fixed_locator_without_coordinates_is_unavailable():
    provider = LocationProvider()
    provider.request(fixed_locator(None, None))
    assert provider.state is LocationState.UNAVAILABLE
    assert isinstance(provider.error, GeolocationUnavailable)


def test_zero_coordinates_settle_as_unavailable():
    provider = LocationProvider()
    provider.request(fixed_locator(0.0, 0.0))
    assert provider.state is LocationState.UNAVAILABLE


def test_unsubscribe_stops_notifications():
    provider = LocationProvider()
    seen: list[LocationState] = []
    unsubscribe = provider.subscribe(lambda p: seen.append(p.state))
    unsubscribe()
    provider.resolve(HERE)
    assert seen == []
