# roadnav/domain/spatial/kdtree.py
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from roadnav.domain.entities.geography import Vertex
from roadnav.domain.errors import EmptyIndex
from roadnav.domain.geodesy import haversine_mi, meridian_distance_mi, parallel_distance_mi

# (node vertex, query lon, query lat, depth) -> lower bound for the far side
PruneBound = Callable[[Vertex, float, float, int], float]


def haversine_bound(node: Vertex, lon: float, lat: float, depth: int) -> float:
    """Lower bound, in miles, on the distance from the query to the far side of the split."""
    if depth % 2 == 0:
        # far side is a lune between the split meridian and the antimeridian
        return min(
            meridian_distance_mi(lon, lat, node.lon),
            meridian_distance_mi(lon, lat, 180.0),
        )
    return parallel_distance_mi(lat, node.lat)


def degrees_bound(node: Vertex, lon: float, lat: float, depth: int) -> float:
    """Raw axis delta in degrees, compared against miles (legacy behaviour)."""
    if depth % 2 == 0:
        return abs(node.lon - lon)
    return abs(node.lat - lat)


@dataclass
class KdNode:
    point: Vertex
    depth: int
    left: "KdNode | None" = None
    right: "KdNode | None" = None

    def compare(self, lon: float, lat: float) -> float:
        # > 0 sends the query left; ties go right
        if self.depth % 2 == 0:
            return self.point.lon - lon
        return self.point.lat - lat


class KdTree:
    """
    2-d tree over vertex coordinates, longitude at even depths and latitude at
    odd depths. Append-only and unbalanced: shape follows insertion order.
    """

    def __init__(self, prune_bound: PruneBound = haversine_bound):
        self.root: KdNode | None = None
        self._size = 0
        self._bound = prune_bound

    @classmethod
    def build(cls, vertices: Iterable[Vertex], prune_bound: PruneBound = haversine_bound):
        tree = cls(prune_bound)
        for v in vertices:
            tree.insert(v)
        return tree

    def __len__(self) -> int:
        return self._size

    def insert(self, v: Vertex) -> None:
        self._size += 1
        if self.root is None:
            self.root = KdNode(v, 0)
            return
        node = self.root
        while True:
            if node.compare(v.lon, v.lat) > 0:
                if node.left is None:
                    node.left = KdNode(v, node.depth + 1)
                    return
                node = node.left
            else:
                if node.right is None:
                    node.right = KdNode(v, node.depth + 1)
                    return
                node = node.right

    def nearest_vertex(self, lon: float, lat: float) -> Vertex:
        if self.root is None:
            raise EmptyIndex("nearest-neighbour query on an empty index")
        if not -180.0 <= lon <= 180.0:
            lon = (lon + 180.0) % 360.0 - 180.0

        best = self.root.point
        best_d = haversine_mi(best.lon, best.lat, lon, lat)

        # ("visit", node) explores a subtree; ("far", node) revisits the pruning
        # decision for node's far side once its near side is exhausted.
        stack: list[tuple[str, KdNode]] = [("visit", self.root)]
        while stack:
            op, node = stack.pop()
            if op == "far":
                far = node.right if node.compare(lon, lat) > 0 else node.left
                if far is not None and self._bound(node.point, lon, lat, node.depth) < best_d:
                    stack.append(("visit", far))
                continue

            d = haversine_mi(node.point.lon, node.point.lat, lon, lat)
            if d < best_d:
                best, best_d = node.point, d
            near = node.left if node.compare(lon, lat) > 0 else node.right
            stack.append(("far", node))
            if near is not None:
                stack.append(("visit", near))
        return best

    def nearest(self, lon: float, lat: float) -> int:
        return self.nearest_vertex(lon, lat).id
