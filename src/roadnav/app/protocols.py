from typing import Protocol, runtime_checkable

from roadnav.domain.entities.geography import Vertex


# ------------- Network services --------------------
@runtime_checkable
class SpatialIndex(Protocol):
    """
    Responsibilities:
      • Snap an arbitrary coordinate to the closest network vertex.
    Units: degrees in, great-circle miles for comparisons.
    Must raise EmptyIndex when it holds no points.
    """

    def nearest(self, lon: float, lat: float) -> int: ...
    def nearest_vertex(self, lon: float, lat: float) -> Vertex: ...


@runtime_checkable
class Heuristic(Protocol):
    """
    Estimate of the remaining road distance (miles) from v to dest.
    Must never overestimate, or A* loses optimality.
    """

    def __call__(self, graph, v: int, dest: int) -> float: ...
