from dataclasses import dataclass, field


# Core network types; coordinates are WGS84 degrees
@dataclass(frozen=True)
class Point:
    lon: float
    lat: float


@dataclass
class Vertex:
    id: int
    lon: float
    lat: float
    name: str | None = None
    ways: list[int] = field(default_factory=list)  # way ids, in registration order
    adj: list[int] = field(default_factory=list)

    @property
    def point(self) -> Point:
        return Point(self.lon, self.lat)


@dataclass(frozen=True)
class Way:
    id: int
    nodes: tuple[int, ...]
    name: str | None = None


@dataclass(frozen=True)
class Place:
    """Named location payload returned by the autocomplete index."""

    id: int
    lon: float
    lat: float
    name: str
