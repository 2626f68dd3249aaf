import json
from pathlib import Path

import pytest

from src.clinic_lookup import main as entrypoint
from src.clinic_lookup.config import ConfigurationError, Settings
from src.clinic_lookup.models.domain import Location, Region


class DummyClient:
    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.calls = []

    def matrix(self, origin, destinations):
        self.calls.append(origin)
        return {
            "status": "OK",
            "origin_addresses": [origin],
            "destination_addresses": list(destinations),
            "rows": [
                {
                    "elements": [
                        {
                            "status": "OK",
                            "distance": {"text": f"{i + 1} mi", "value": 1609 * (i + 1)},
                            "duration": {"text": "5 mins", "value": 300},
                        }
                        for i, _ in enumerate(destinations)
                    ]
                }
            ],
        }


def _settings(tmp_path: Path, **overrides) -> Settings:
    values = {
        "google_maps_api_key": "test-key",
        "output_root": tmp_path / "output",
        "region_offset": 1,
        "region_limit": 2,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_run_builds_selected_regions(monkeypatch, tmp_path: Path):
    locations = (Location(id=0, address="A", raw={"clinicAddress": "A"}),)
    regions = (
        Region(code="59001", latitude="+45.1", longitude="-109.1"),
        Region(code="59002", latitude="+45.2", longitude="-109.2"),
        Region(code="59003", latitude="+45.3", longitude="-109.3"),
    )
    clients = []

    def make_client(**kwargs):
        clients.append(DummyClient(**kwargs))
        return clients[-1]

    monkeypatch.setattr(entrypoint, "DistanceMatrixClient", make_client)
    monkeypatch.setattr(entrypoint, "load_locations", lambda url, field: locations)
    monkeypatch.setattr(entrypoint, "load_regions", lambda path, prefix: regions)
    monkeypatch.setattr(entrypoint, "load_origin_overrides", lambda path: {})

    processed = entrypoint.run(_settings(tmp_path))

    assert processed == 1
    assert clients[0].kwargs["api_key"] == "test-key"
    assert clients[0].kwargs["units"] == "imperial"
    assert clients[0].calls == ["45.2,-109.2"]
    combined = json.loads((tmp_path / "output" / "clinics-zip-code-lookup" / "all.json").read_text(encoding="utf-8"))
    assert combined == {"59002": [{"id": 0, "distance": "1 mi"}]}


def test_run_requires_api_key(tmp_path: Path):
    with pytest.raises(ConfigurationError):
        entrypoint.run(_settings(tmp_path, google_maps_api_key=None))


def test_main_returns_error_code_on_failure(monkeypatch):
    def failing_run():
        raise OSError("disk full")

    monkeypatch.setattr(entrypoint, "run", failing_run)

    assert entrypoint.main() == 1
