# roadnav/domain/routing/hooks.py
from typing import Protocol


class SearchHooks(Protocol):
    def build_done(self, *, vertices, pruned, ways, ms): ...
    def search_start(self, *, start, dest, start_lonlat, dest_lonlat): ...
    def settle(self, v: int, *, settled, qsize): ...
    def search_end(self, *, start, dest, status, settled, ms, distance_mi=None): ...
    def error(self, *, reason: str, **kw): ...


class NoopHooks:
    def build_done(self, **_):
        pass

    def search_start(self, **_):
        pass

    def settle(self, *_, **__):
        pass

    def search_end(self, **_):
        pass

    def error(self, **_):
        pass
