import httpx
import pytest

from src.clinic_lookup.models.domain import Location
from src.clinic_lookup.services.lookup.distance_matrix_client import DistanceMatrixClient, DistanceMatrixError
from src.clinic_lookup.services.lookup.fetcher import fetch_batch, records_from_matrix
from src.clinic_lookup.services.lookup.models import BatchFailure, BatchSuccess


def _location(lid: int, address: str) -> Location:
    return Location(id=lid, address=address, raw={"clinicAddress": address})


def _element(meters: int, text: str) -> dict:
    return {
        "status": "OK",
        "distance": {"text": text, "value": meters},
        "duration": {"text": "10 mins", "value": 600},
    }


def _payload(elements: list, destinations: list) -> dict:
    return {
        "status": "OK",
        "origin_addresses": ["Butte, MT 59701, USA"],
        "destination_addresses": destinations,
        "rows": [{"elements": elements}],
    }


class DummyProvider:
    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.calls = []

    def matrix(self, origin, destinations):
        self.calls.append((origin, list(destinations)))
        if self.error is not None:
            raise self.error
        return self.payload


def test_records_from_matrix_extracts_fields():
    batch = [_location(0, "1 Main St"), _location(1, "2 Oak Ave")]
    payload = _payload(
        [_element(8047, "5.0 mi"), _element(3219, "2.0 mi")],
        ["1 Main St, Butte, MT", "2 Oak Ave, Butte, MT"],
    )

    result = records_from_matrix(payload, "45.9,-112.5", batch)

    assert result.skipped == 0
    first, second = result.records
    assert first.location_id == 0
    assert first.distance_text == "5.0 mi"
    assert first.distance_value == 8047
    assert first.duration_text == "10 mins"
    assert first.input_address == "1 Main St"
    assert first.resolved_address == "1 Main St, Butte, MT"
    assert second.location_id == 1


def test_records_from_matrix_skips_zero_results():
    batch = [_location(0, "1 Main St"), _location(1, "Nowhere")]
    payload = _payload([_element(100, "0.1 mi"), {"status": "ZERO_RESULTS"}], ["a", "b"])

    result = records_from_matrix(payload, "origin", batch)

    assert [record.location_id for record in result.records] == [0]
    assert result.skipped == 1


def test_records_from_matrix_skips_malformed_elements():
    batch = [_location(0, "a"), _location(1, "b"), _location(2, "c")]
    payload = _payload(
        [
            {"status": "OK", "duration": {"text": "1 min"}},
            {"status": "OK", "distance": {"text": "1 mi", "value": "far"}, "duration": {"text": "1 min"}},
            _element(1609, "1.0 mi"),
        ],
        ["a'", "b'", "c'"],
    )

    result = records_from_matrix(payload, "origin", batch)

    assert [record.location_id for record in result.records] == [2]
    assert result.skipped == 2


def test_records_from_matrix_handles_missing_destination_address():
    batch = [_location(0, "a"), _location(1, "b")]
    payload = _payload([_element(10, "1 ft"), _element(20, "2 ft")], ["a'"])

    result = records_from_matrix(payload, "origin", batch)

    assert [record.location_id for record in result.records] == [0]


def test_records_from_matrix_with_empty_rows_skips_whole_batch():
    batch = [_location(0, "a"), _location(1, "b")]
    payload = {"status": "OK", "origin_addresses": [""], "destination_addresses": [], "rows": []}

    result = records_from_matrix(payload, "origin", batch)

    assert result.records == []
    assert result.skipped == 2


def test_fetch_batch_sends_addresses_for_origin():
    batch = [_location(0, "1 Main St"), _location(1, "2 Oak Ave")]
    provider = DummyProvider(payload=_payload([_element(1, "1 ft"), _element(2, "2 ft")], ["x", "y"]))

    result = fetch_batch(provider, "Cooke City, MT 59020", batch)

    assert isinstance(result, BatchSuccess)
    assert provider.calls == [("Cooke City, MT 59020", ["1 Main St", "2 Oak Ave"])]


@pytest.mark.parametrize(
    "error",
    [
        httpx.ConnectError("connection refused"),
        DistanceMatrixError("OVER_QUERY_LIMIT", "quota"),
        ValueError("not json"),
        RuntimeError("boom"),
    ],
)
def test_fetch_batch_isolates_provider_errors(error):
    provider = DummyProvider(error=error)

    result = fetch_batch(provider, "origin", [_location(0, "a")])

    assert isinstance(result, BatchFailure)
    assert result.reason


def test_fetch_batch_keeps_api_key_out_of_logs(caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, text="forbidden")

    client = DistanceMatrixClient(
        api_key="SECRET-KEY-123",
        base_url="https://maps.example.test/json",
        transport=httpx.MockTransport(handler),
    )

    with caplog.at_level("WARNING"):
        result = fetch_batch(client, "45,-112", [_location(0, "1 Main St")])

    assert isinstance(result, BatchFailure)
    assert "403" in caplog.text
    assert "SECRET-KEY-123" not in caplog.text
    assert "SECRET-KEY-123" not in result.reason


def test_records_from_matrix_rejects_element_count_mismatch():
    # "A | B" was split by the provider into two destinations
    batch = [_location(0, "A | B"), _location(1, "C")]
    payload = _payload(
        [_element(100, "0.1 mi"), _element(200, "0.2 mi"), _element(300, "0.3 mi")],
        ["A", "B", "C"],
    )

    result = records_from_matrix(payload, "origin", batch)

    assert isinstance(result, BatchFailure)
    assert "expected 2" in result.reason
