# roadnav/domain/routing/pathfinder.py
import heapq
import math
import time
from dataclasses import dataclass, field
from enum import Enum

from roadnav.app.protocols import Heuristic, SpatialIndex
from roadnav.domain.errors import Unreachable
from roadnav.domain.graph import RoadGraph
from roadnav.domain.routing.hooks import NoopHooks, SearchHooks


def great_circle_heuristic(graph: RoadGraph, v: int, dest: int) -> float:
    return graph.distance(v, dest)


def zero_heuristic(graph: RoadGraph, v: int, dest: int) -> float:
    return 0.0


class SearchPhase(str, Enum):
    INIT = "init"
    RELAXING = "relaxing"
    DONE = "done"
    UNREACHABLE = "unreachable"


@dataclass
class SearchState:
    """
    Scratch state for one best-first search, keyed by vertex id.
    Created per query and discarded afterwards; the graph is never written to.
    """

    graph: RoadGraph
    start: int
    dest: int
    heuristic: Heuristic = great_circle_heuristic
    dist_to: dict[int, float] = field(default_factory=dict, init=False)
    edge_to: dict[int, int] = field(default_factory=dict, init=False)
    settled: set[int] = field(default_factory=set, init=False)
    phase: SearchPhase = field(default=SearchPhase.INIT, init=False)
    _pq: list[tuple[float, int, int]] = field(default_factory=list, init=False, repr=False)
    _seq: int = field(default=0, init=False, repr=False)

    @property
    def qsize(self) -> int:
        return len(self._pq)

    def _push(self, priority: float, v: int) -> None:
        self._seq += 1
        heapq.heappush(self._pq, (priority, self._seq, v))

    def step(self) -> int | None:
        """
        Pop and settle one vertex. Returns it, or None when the popped entry
        was stale or the search has finished. Safe to stop calling at any point.
        """
        if self.phase is SearchPhase.INIT:
            self.dist_to[self.start] = 0.0
            self._push(self.heuristic(self.graph, self.start, self.dest), self.start)
            self.phase = SearchPhase.RELAXING
        if self.phase is not SearchPhase.RELAXING:
            return None
        if not self._pq:
            self.phase = SearchPhase.UNREACHABLE
            return None

        _, _, curr = heapq.heappop(self._pq)
        if curr in self.settled:
            return None  # stale entry
        self.settled.add(curr)
        if curr == self.dest:
            self.phase = SearchPhase.DONE
            return curr

        g = self.graph
        base = self.dist_to[curr]
        for nxt in g.adjacent(curr):
            if nxt in self.settled:
                continue
            nd = base + g.distance(curr, nxt)
            if nd < self.dist_to.get(nxt, math.inf):
                self.dist_to[nxt] = nd
                self.edge_to[nxt] = curr
                self._push(nd + self.heuristic(g, nxt, self.dest), nxt)
        return curr

    @property
    def finished(self) -> bool:
        return self.phase in (SearchPhase.DONE, SearchPhase.UNREACHABLE)

    def path(self) -> list[int]:
        if not self.finished:
            raise RuntimeError("search still running")
        if self.phase is SearchPhase.UNREACHABLE:
            raise Unreachable(self.start, self.dest)
        out = [self.dest]
        while out[-1] != self.start:
            out.append(self.edge_to[out[-1]])
        out.reverse()
        return out


class Pathfinder:
    """A* over a RoadGraph, endpoints snapped through a spatial index."""

    def __init__(
        self,
        graph: RoadGraph,
        index: SpatialIndex,
        heuristic: Heuristic = great_circle_heuristic,
        hooks: SearchHooks | None = None,
    ):
        self.G, self.index, self.h = graph, index, heuristic
        self._hooks = hooks or NoopHooks()

    def search(self, start: int, dest: int) -> list[int]:
        t0 = time.perf_counter()
        state = SearchState(self.G, start, dest, self.h)
        while not state.finished:
            v = state.step()
            if v is not None:
                self._hooks.settle(v, settled=len(state.settled), qsize=state.qsize)

        ms = (time.perf_counter() - t0) * 1000
        if state.phase is SearchPhase.UNREACHABLE:
            self._hooks.search_end(
                start=start, dest=dest, status="unreachable", settled=len(state.settled), ms=ms
            )
            raise Unreachable(start, dest)
        self._hooks.search_end(
            start=start,
            dest=dest,
            status="done",
            settled=len(state.settled),
            ms=ms,
            distance_mi=state.dist_to[dest],
        )
        return state.path()

    def shortest_path(
        self, start_lon: float, start_lat: float, dest_lon: float, dest_lat: float
    ) -> list[int]:
        start = self.index.nearest(start_lon, start_lat)
        dest = self.index.nearest(dest_lon, dest_lat)
        self._hooks.search_start(
            start=start,
            dest=dest,
            start_lonlat=(start_lon, start_lat),
            dest_lonlat=(dest_lon, dest_lat),
        )
        return self.search(start, dest)


def shortest_path(
    graph: RoadGraph,
    index: SpatialIndex,
    start_lon: float,
    start_lat: float,
    dest_lon: float,
    dest_lat: float,
) -> list[int]:
    return Pathfinder(graph, index).shortest_path(start_lon, start_lat, dest_lon, dest_lat)


def path_distance(graph: RoadGraph, path: list[int]) -> float:
    return sum(graph.distance(v, w) for v, w in zip(path, path[1:]))
