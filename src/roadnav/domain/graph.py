# roadnav/domain/graph.py
from collections.abc import Iterable

from roadnav.domain.entities.geography import Point, Vertex, Way
from roadnav.domain.errors import VertexNotFound, WayNotFound
from roadnav.domain.geodesy import haversine_mi, initial_bearing_deg

UNKNOWN_ROAD = "unknown road"


class RoadGraph:
    """
    Undirected road network: vertices, symmetric adjacency and named ways.

    Built once (add_vertex / add_way / add_edge), pruned once, then shared
    read-only. Query state never lives here.
    """

    def __init__(self):
        self._vertices: dict[int, Vertex] = {}
        self._ways: dict[int, Way] = {}
        self._pruned = False

    # ---------------- construction ----------------

    def add_vertex(self, vid: int, lon: float, lat: float, name: str | None = None) -> None:
        if self._pruned:
            raise RuntimeError("graph already pruned; no new vertices")
        if vid in self._vertices:
            raise ValueError(f"duplicate vertex id {vid!r}")
        self._vertices[vid] = Vertex(vid, float(lon), float(lat), name)

    def add_edge(self, a: int, b: int) -> None:
        va, vb = self._get(a), self._get(b)
        if a == b:
            return
        if b not in va.adj:
            va.adj.append(b)
        if a not in vb.adj:
            vb.adj.append(a)

    def add_way(self, way: Way) -> None:
        members = [self._get(vid) for vid in way.nodes]
        self._ways[way.id] = way
        for v in members:
            if way.id not in v.ways:
                v.ways.append(way.id)
        for a, b in zip(way.nodes, way.nodes[1:]):
            self.add_edge(a, b)

    def prune(self) -> int:
        """Drop every vertex without neighbours. Returns how many were removed."""
        if self._pruned:
            raise RuntimeError("graph already pruned")
        isolated = [vid for vid, v in self._vertices.items() if not v.adj]
        for vid in isolated:
            del self._vertices[vid]
        self._pruned = True
        return len(isolated)

    # ---------------- read-only accessors ----------------

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vid) -> bool:
        return vid in self._vertices

    def vertices(self) -> list[int]:
        return list(self._vertices)

    def iter_vertices(self) -> Iterable[Vertex]:
        return iter(self._vertices.values())

    def adjacent(self, v: int) -> list[int]:
        return list(self._get(v).adj)

    def lon(self, v: int) -> float:
        return self._get(v).lon

    def lat(self, v: int) -> float:
        return self._get(v).lat

    def name(self, v: int) -> str | None:
        return self._get(v).name

    def point(self, v: int) -> Point:
        return self._get(v).point

    def distance(self, v: int, w: int) -> float:
        """Great-circle distance between two vertices, in miles."""
        a, b = self._get(v), self._get(w)
        return haversine_mi(a.lon, a.lat, b.lon, b.lat)

    def bearing(self, v: int, w: int) -> float:
        """Initial bearing from v towards w, in degrees."""
        a, b = self._get(v), self._get(w)
        return initial_bearing_deg(a.lon, a.lat, b.lon, b.lat)

    def way(self, way_id: int) -> Way:
        try:
            return self._ways[way_id]
        except KeyError:
            raise WayNotFound(way_id) from None

    def way_name(self, v: int, w: int) -> str | None:
        """
        Display name of a way that both v and w belong to, UNKNOWN_ROAD if that
        way is unnamed, or None when they share no way.
        """
        shared = set(self._get(w).ways)
        for way_id in self._get(v).ways:
            if way_id in shared:
                name = self._ways[way_id].name
                return name if name else UNKNOWN_ROAD
        return None

    def _get(self, vid: int) -> Vertex:
        try:
            return self._vertices[vid]
        except KeyError:
            raise VertexNotFound(vid) from None
