import pytest

from dineradar.core.errors import GooglePlacesError
from dineradar.vendors import distance_matrix, google_places


class DummyResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload or {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise RuntimeError("http error")

    def json(self):
        return self._payload


class DummySession:
    def __init__(self):
        self.calls = []
        self.response = DummyResponse()

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        return self.response

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append((url, json, headers, timeout))
        return self.response


@pytest.fixture
def places_session(monkeypatch):
    session = DummySession()
    monkeypatch.setattr(google_places, "_SESSION", session)
    return session


@pytest.fixture
def matrix_session(monkeypatch):
    session = DummySession()
    monkeypatch.setattr(distance_matrix, "_SESSION", session)
    return session


def test_search_nearby_builds_restaurant_query(places_session):
    places_session.response = DummyResponse(payload={"places": []})

    payload = google_places.search_nearby(
        lat=-33.87, lng=151.21, radius=1000, open_now=True, max_result_count=5, api_key="key"
    )

    assert payload == {"places": []}
    url, body, headers, timeout = places_session.calls[0]
    assert url.endswith("places:searchNearby")
    assert body["includedTypes"] == ["restaurant"]
    assert body["rankPreference"] == "DISTANCE"
    assert body["locationRestriction"]["circle"] == {
        "center": {"latitude": -33.87, "longitude": 151.21},
        "radius": 1000,
    }
    assert body["maxResultCount"] == 5
    assert "pageToken" not in body
    assert headers["X-Goog-Api-Key"] == "key"
    assert "places.priceLevel" in headers["X-Goog-FieldMask"]
    assert timeout is None


def test_search_nearby_passes_page_token(places_session):
    google_places.search_nearby(
        lat=0, lng=0, radius=500, open_now=False, max_result_count=20, api_key="key", page_token="tok"
    )
    _, body, _, _ = places_session.calls[0]
    assert body["pageToken"] == "tok"
    assert body["openNow"] is False


def test_search_nearby_http_error(places_session):
    places_session.response = DummyResponse(
        status_code=403, payload={"error": {"code": 403, "message": "API key not valid", "status": "PERMISSION_DENIED"}}
    )
    with pytest.raises(GooglePlacesError, match="API key not valid"):
        google_places.search_nearby(lat=0, lng=0, radius=500, open_now=True, max_result_count=1, api_key="bad")


def test_search_text_success(places_session):
    places_session.response = DummyResponse(payload={"places": [{"displayName": {"text": "Opera"}}]})
    payload = google_places.search_text("Sydney Opera House", "key", timeout=5)

    assert payload["places"][0]["displayName"]["text"] == "Opera"
    url, body, headers, timeout = places_session.calls[0]
    assert url.endswith("places:searchText")
    assert body["textQuery"] == "Sydney Opera House"
    assert headers["X-Goog-FieldMask"] == "places.displayName,places.location"
    assert timeout == 5


def test_travel_matrix_pipe_joins_destinations(matrix_session):
    matrix_session.response = DummyResponse(payload={"status": "OK", "rows": []})

    distance_matrix.travel_matrix("-33.87,151.21", ["1,2", "3,4"], "walking", "key")

    url, params, timeout = matrix_session.calls[0]
    assert "distancematrix" in url
    assert params["origins"] == "-33.87,151.21"
    assert params["destinations"] == "1,2|3,4"
    assert params["mode"] == "walking"


def test_travel_matrix_error_status_is_returned(matrix_session, caplog):
    matrix_session.response = DummyResponse(payload={"status": "OVER_QUERY_LIMIT", "rows": []})

    with caplog.at_level("WARNING"):
        payload = distance_matrix.travel_matrix("0,0", ["1,1"], "driving", "key")

    assert payload == {"status": "OVER_QUERY_LIMIT", "rows": []}
    assert "OVER_QUERY_LIMIT" in " ".join(caplog.messages)


def test_travel_matrix_http_error(matrix_session):
    matrix_session.response = DummyResponse(status_code=500)
    with pytest.raises(RuntimeError):
        distance_matrix.travel_matrix("0,0", ["1,1"], "driving", "key")
