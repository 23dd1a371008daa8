# roadnav/services/navigator.py
from dataclasses import dataclass

from roadnav.app.protocols import SpatialIndex
from roadnav.domain.entities.geography import Place
from roadnav.domain.errors import NoSharedWay
from roadnav.domain.graph import RoadGraph
from roadnav.domain.places import PlaceIndex
from roadnav.domain.routing.directions import NavigationDirection, route_directions
from roadnav.domain.routing.hooks import NoopHooks, SearchHooks
from roadnav.domain.routing.pathfinder import Pathfinder, path_distance


@dataclass(frozen=True)
class Route:
    path: list[int]
    distance_mi: float
    directions: list[NavigationDirection]

    def lines(self) -> list[str]:
        return [str(d) for d in self.directions]


class Navigator:
    """
    Read-only façade over a built network. Safe to share between threads:
    every call keeps its search state local.
    """

    def __init__(
        self,
        graph: RoadGraph,
        index: SpatialIndex,
        pathfinder: Pathfinder,
        places: PlaceIndex | None = None,
        hooks: SearchHooks | None = None,
    ):
        self.graph, self.index, self.pathfinder = graph, index, pathfinder
        self.places = places or PlaceIndex(())
        self._hooks = hooks or NoopHooks()

    def closest(self, lon: float, lat: float) -> int:
        return self.index.nearest(lon, lat)

    def shortest_path(
        self, start_lon: float, start_lat: float, dest_lon: float, dest_lat: float
    ) -> list[int]:
        return self.pathfinder.shortest_path(start_lon, start_lat, dest_lon, dest_lat)

    def directions(self, path: list[int]) -> list[NavigationDirection]:
        try:
            return route_directions(self.graph, path)
        except NoSharedWay as e:
            self._hooks.error(reason="no_shared_way", v=e.v, w=e.w)
            raise

    def route(self, start_lon: float, start_lat: float, dest_lon: float, dest_lat: float) -> Route:
        path = self.shortest_path(start_lon, start_lat, dest_lon, dest_lat)
        return Route(path, path_distance(self.graph, path), self.directions(path))

    def complete(self, prefix: str, limit: int | None = None) -> list[str]:
        return self.places.complete(prefix, limit)

    def locations(self, name: str) -> tuple[Place, ...]:
        return self.places.locations(name)
