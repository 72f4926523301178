import json

import httpx
import pytest

from closest_aircraft.ingestors.enrichment import AircraftLookupClient, parse_aircraft_lookup

LOOKUP_PAYLOAD = {
    "ac": [
        {
            "hex": "4ca7b5",
            "r": "EI-DCL",
            "t": "B738",
            "ownOp": "Ryanair",
            "flight": "RYR7DX",
        },
        {"hex": "4ca7b5", "r": "EI-XXX", "t": "A320", "ownOp": "Other"},
    ],
    "msg": "No error",
    "total": 2,
}


def test_parse_lookup_uses_first_match():
    metadata = parse_aircraft_lookup(json.dumps(LOOKUP_PAYLOAD))

    assert metadata is not None
    assert metadata.registration == "EI-DCL"
    assert metadata.aircraft_type == "B738"
    assert metadata.operator == "Ryanair"


def test_parse_lookup_defaults_missing_or_non_string_fields():
    metadata = parse_aircraft_lookup(json.dumps({"ac": [{"r": "G-EUPT", "t": 320, "ownOp": None}]}))

    assert metadata is not None
    assert metadata.registration == "G-EUPT"
    assert metadata.aircraft_type == "N/A"
    assert metadata.operator == "N/A"


@pytest.mark.parametrize(
    "raw",
    [
        json.dumps({"ac": [], "msg": "No error", "total": 0}),
        json.dumps({"msg": "No error"}),
        json.dumps({"ac": None}),
        json.dumps({"ac": ["4ca7b5"]}),
        json.dumps([{"r": "EI-DCL"}]),
        "<html>502 Bad Gateway</html>",
    ],
)
def test_parse_lookup_reports_no_match(raw):
    assert parse_aircraft_lookup(raw) is None


def test_lookup_no_match_differs_from_empty_match():
    empty_match = parse_aircraft_lookup(json.dumps({"ac": [{}]}))

    assert empty_match is not None
    assert empty_match.registration == "N/A"
    assert parse_aircraft_lookup(json.dumps({"ac": []})) is None


def test_lookup_url_normalizes_hex():
    client = AircraftLookupClient(base_url="https://lookup.test/")

    assert client.url_for(" 4CA7B5 ") == "https://lookup.test/v2/hex/4ca7b5"


@pytest.mark.anyio
async def test_lookup_client_returns_body():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(200, json=LOOKUP_PAYLOAD)

    client = AircraftLookupClient(
        base_url="https://lookup.test", transport=httpx.MockTransport(handler)
    )

    raw = await client.fetch("4ca7b5")

    assert raw is not None
    assert json.loads(raw)["ac"][0]["r"] == "EI-DCL"
    assert seen[0].url.path == "/v2/hex/4ca7b5"


@pytest.mark.anyio
async def test_lookup_client_handles_not_found():
    transport = httpx.MockTransport(lambda request: httpx.Response(404, text="not found"))
    client = AircraftLookupClient(base_url="https://lookup.test", transport=transport)

    assert await client.fetch("4ca7b5") is None


@pytest.mark.anyio
async def test_lookup_client_handles_timeout():
    def handler(request: httpx.Request):
        raise httpx.ConnectTimeout("timed out", request=request)

    client = AircraftLookupClient(
        base_url="https://lookup.test", transport=httpx.MockTransport(handler)
    )

    assert await client.fetch("4ca7b5") is None


def test_lookup_client_applies_timeout_by_default():
    assert AircraftLookupClient().timeout == 10.0


def test_parse_lookup_reports_no_match_for_deeply_nested_payload():
    raw = '{"ac": ' + "[" * 200000 + "]" * 200000 + "}"

    assert parse_aircraft_lookup(raw) is None


@pytest.mark.parametrize("hex_code", ["abc/../../admin", "abc?x=1", "abc#frag"])
def test_lookup_url_escapes_hex(hex_code):
    client = AircraftLookupClient(base_url="https://lookup.test")

    url = httpx.URL(client.url_for(hex_code))

    assert url.raw_path.startswith(b"/v2/hex/")
    assert url.raw_path.count(b"/") == 3
    assert not url.query
    assert not url.fragment


@pytest.mark.anyio
async def test_lookup_client_keeps_request_inside_hex_path():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(200, json=LOOKUP_PAYLOAD)

    client = AircraftLookupClient(
        base_url="https://lookup.test", transport=httpx.MockTransport(handler)
    )

    await client.fetch("../v1/admin?drop=1")

    assert seen[0].url.raw_path.startswith(b"/v2/hex/..%2Fv1%2Fadmin%3Fdrop%3D1")
    assert not seen[0].url.query
