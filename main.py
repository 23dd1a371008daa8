# main.py
import argparse
import json
import sys

from roadnav.app.build import build
from roadnav.domain.errors import RoadNavError


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Shortest route with turn-by-turn directions.")
    p.add_argument("config", help="service config (JSON)")
    p.add_argument("start", nargs=2, type=float, metavar=("LON", "LAT"))
    p.add_argument("dest", nargs=2, type=float, metavar=("LON", "LAT"))
    p.add_argument("--quiet", action="store_true", help="disable JSON logs")
    args = p.parse_args(argv)

    with open(args.config, encoding="utf-8") as f:
        cfg = json.load(f)
    app = build(cfg, use_logging=not args.quiet)

    try:
        route = app.navigator.route(*args.start, *args.dest)
    except RoadNavError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    for line in route.lines():
        print(line)
    print(f"Total: {route.distance_mi:.3f} miles over {len(route.path)} vertices.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
