"""Domain models for clinic and zip code records."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Location:
    """A clinic with its assigned id and the address used as a destination."""

    id: int
    address: str
    raw: dict = field(default_factory=dict, compare=False)

    def to_record(self) -> dict:
        """Return the source record with the id injected as the first field."""
        record = {"id": self.id}
        record.update((key, value) for key, value in self.raw.items() if key != "id")
        return record


@dataclass(frozen=True, slots=True)
class Region:
    """A zip code tabulation area represented by its internal point."""

    code: str
    latitude: str
    longitude: str
