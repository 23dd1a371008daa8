# io/query_logging.py
import json
import logging
import sys

from roadnav.domain.routing.hooks import NoopHooks


class JsonFormatter(logging.Formatter):
    """One JSON object per record; fields passed as `extra={"extra": {...}}` are merged in."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {"level": record.levelname, "msg": record.getMessage(), "logger": record.name}
        fields = getattr(record, "extra", None)
        if isinstance(fields, dict):
            payload.update(fields)
        return json.dumps(payload, default=str)


class QueryLogging(NoopHooks):
    """
    Structured logs for network construction and route searches.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1000,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.log = logger or self.stdout_logger(level=level)

    @staticmethod
    def stdout_logger(name: str = "roadnav", level: str = "INFO") -> logging.Logger:
        log = logging.getLogger(name)
        if not any(isinstance(h.formatter, JsonFormatter) for h in log.handlers):
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(JsonFormatter())
            log.addHandler(handler)
        log.setLevel(level)
        return log

    def _emit(self, level: str, msg: str, **extra):
        self.log.log(
            getattr(logging, level), msg, extra={"extra": {"run_id": self.run_id, **extra}}
        )

    # ---------------- construction ----------------

    def build_done(self, *, vertices: int, pruned: int, ways: int, ms: float):
        self._emit("INFO", "network_built", vertices=vertices, pruned=pruned, ways=ways, ms=ms)

    # ---------------- searches ----------------

    def search_start(self, *, start, dest, start_lonlat, dest_lonlat):
        self._emit(
            "INFO",
            "route_start",
            start=start,
            dest=dest,
            start_lonlat=list(start_lonlat),
            dest_lonlat=list(dest_lonlat),
        )

    def settle(self, v: int, *, settled: int, qsize: int):
        if self.debug and (settled % self.sample_every) == 0:
            self._emit("DEBUG", "settle", vertex=v, settled=settled, qsize=qsize)

    def search_end(self, *, start, dest, status, settled, ms, distance_mi=None):
        if status == "unreachable":
            self._emit("WARNING", "route_unreachable", start=start, dest=dest, settled=settled, ms=ms)
            return
        self._emit(
            "INFO",
            "route_done",
            start=start,
            dest=dest,
            settled=settled,
            ms=ms,
            distance_mi=distance_mi,
        )

    def error(self, *, reason: str, **extra):
        self._emit("ERROR", "query_error", reason=reason, **extra)
