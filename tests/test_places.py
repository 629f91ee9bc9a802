# tests/test_places.py
import json

import httpx
import pytest

from poi_finder.core.exceptions import PlacesLookupError
from poi_finder.models.location import Place
from poi_finder.services.graph_builder import USER_NODE_ID, build_star_graph
from poi_finder.services.places import (
    PLACES_FIELD_MASK,
    PLACES_TEXT_SEARCH_URL,
    GooglePlacesProvider,
    StaticPlacesProvider,
)

PLACE_PAYLOAD = {
    "places": [
        {
            "id": "ChIJ-1",
            "displayName": {"text": "McDonald's Renascença"},
            "location": {"latitude": -2.5216, "longitude": -44.3028},
            "formattedAddress": "Av. Colares Moreira, 300",
            "types": ["restaurant"],
        },
        {
            "id": "ChIJ-2",
            "location": {"latitude": -2.51, "longitude": -44.30},
        },
        {
            "id": "ChIJ-3",
            "displayName": {"text": "No location"},
        },
        {"displayName": {"text": "No id"}},
    ]
}


def _provider(handler, **kwargs):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return GooglePlacesProvider(api_key="secret", client=client, **kwargs)


def test_text_search_request_and_parsing():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=PLACE_PAYLOAD)

    places = _provider(handler, language="en", max_results=5).search(-2.5297, -44.3028)

    request = seen[0]
    assert str(request.url) == PLACES_TEXT_SEARCH_URL
    assert request.headers["X-Goog-Api-Key"] == "secret"
    assert request.headers["X-Goog-FieldMask"] == PLACES_FIELD_MASK
    body = json.loads(request.content)
    assert body["textQuery"] == "McDonald's"
    assert body["languageCode"] == "en"
    assert body["maxResultCount"] == 5
    assert body["locationBias"]["circle"]["center"] == {"latitude": -2.5297, "longitude": -44.3028}
    assert body["locationBias"]["circle"]["radius"] == 5000.0

    assert [p.id for p in places] == ["ChIJ-1", "ChIJ-2", "ChIJ-3"]
    assert places[0].name == "McDonald's Renascença"
    assert places[0].address == "Av. Colares Moreira, 300"
    # unnamed places fall back to the query text
    assert places[1].name == "McDonald's"
    # missing coordinates are kept for the graph builder to drop
    assert places[2].lat is None and places[2].lng is None


def test_radius_escalates_until_results():
    radii = []

    def handler(request):
        radius = json.loads(request.content)["locationBias"]["circle"]["radius"]
        radii.append(radius)
        if radius < 20_000:
            return httpx.Response(200, json={})
        return httpx.Response(200, json=PLACE_PAYLOAD)

    places = _provider(handler).search(0.0, 0.0)

    assert radii == [5_000.0, 10_000.0, 20_000.0]
    assert len(places) == 3


def test_nothing_at_any_radius_returns_empty_list():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"places": []})

    assert _provider(handler, radii_m=[1_000.0, 2_000.0]).search(0.0, 0.0) == []
    assert len(calls) == 2


def test_http_error_raises_lookup_error():
    def handler(request):
        return httpx.Response(403, json={"error": {"message": "API key invalid"}})

    with pytest.raises(PlacesLookupError):
        _provider(handler).search(0.0, 0.0)


def test_transport_error_raises_lookup_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(PlacesLookupError):
        _provider(handler).search(0.0, 0.0)


def test_invalid_json_raises_lookup_error():
    def handler(request):
        return httpx.Response(200, content=b"<html>oops</html>")

    with pytest.raises(PlacesLookupError):
        _provider(handler).search(0.0, 0.0)


def test_static_provider_from_file(tmp_path):
    path = tmp_path / "places.json"
    path.write_text(
        json.dumps([
            {"id": "a", "name": "A", "lat": 1.0, "lng": 2.0, "address": "Rua A"},
            {"id": "b", "name": "B"},
        ]),
        encoding="utf-8",
    )

    provider = StaticPlacesProvider.from_file(str(path))

    assert provider.search(0.0, 0.0) == [
        Place(id="a", name="A", lat=1.0, lng=2.0, address="Rua A"),
        Place(id="b", name="B"),
    ]


def test_static_provider_defaults_to_empty():
    assert StaticPlacesProvider().search(0.0, 0.0) == []


def test_bad_coordinates_and_shapes_become_unlocated_places():
    payload = {
        "places": [
            {"id": "x", "location": {"latitude": "north", "longitude": 1.0}},
            {"id": "y", "location": "somewhere", "displayName": "plain string"},
            {"id": "z", "location": {"latitude": True, "longitude": 2.0}},
            {"id": "ok", "location": {"latitude": -2.52, "longitude": -44.3}},
        ]
    }

    def handler(request):
        return httpx.Response(200, json=payload)

    places = _provider(handler).search(-2.5297, -44.3028)

    assert [p.id for p in places] == ["x", "y", "z", "ok"]
    assert [(p.lat, p.lng) for p in places[:3]] == [(None, 1.0), (None, None), (None, 2.0)]
    assert places[1].name == "McDonald's"

    graph = build_star_graph(-2.5297, -44.3028, places)
    assert [n.id for n in graph.all_nodes()] == [USER_NODE_ID, "ok"]


def test_radius_escalates_past_results_without_coordinates():
    radii = []

    def handler(request):
        radius = json.loads(request.content)["locationBias"]["circle"]["radius"]
        radii.append(radius)
        if radius < 10_000:
            return httpx.Response(200, json={"places": [{"id": "ghost"}]})
        return httpx.Response(200, json=PLACE_PAYLOAD)

    places = _provider(handler).search(0.0, 0.0)

    assert radii == [5_000.0, 10_000.0]
    assert places[0].id == "ChIJ-1"


def test_only_unlocated_results_at_every_radius_returns_empty_list():
    def handler(request):
        return httpx.Response(200, json={"places": [{"id": "ghost"}]})

    assert _provider(handler).search(0.0, 0.0) == []
