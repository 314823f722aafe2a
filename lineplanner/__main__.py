"""
LinePlanner — entry point.

Usage:
    python -m lineplanner serve                      # start web server on :8000
    python -m lineplanner serve --port 3000
    python -m lineplanner generate ops.json --target 1200 --minutes 480
    python -m lineplanner generate ops.json --target 1200 --minutes 480 --transition-fixtures --verbose
"""

import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

USAGE = (
    "Usage: python -m lineplanner serve [--port PORT] [--host HOST]\n"
    "       python -m lineplanner generate FILE --target N --minutes M "
    "[--transition-fixtures] [--verbose]"
)


def _generate(args: list[str]) -> int:
    from lineplanner.pipeline.balancing import LinePlannerError
    from lineplanner.pipeline.config import FLOOR_RULES
    from lineplanner.pipeline.layout import generate_layout, layout_to_dict
    from lineplanner.pipeline.operations import parse_operations

    if not args or args[0].startswith("--"):
        print(USAGE)
        return 1
    path = Path(args[0])
    target = minutes = None
    transition = False
    try:
        for i, a in enumerate(args):
            if a == "--target" and i + 1 < len(args):
                target = float(args[i + 1])
            elif a == "--minutes" and i + 1 < len(args):
                minutes = float(args[i + 1])
            elif a == "--transition-fixtures":
                transition = True
            elif a == "--verbose":
                logging.basicConfig(level=logging.DEBUG,
                                    format="%(levelname)s %(name)s: %(message)s")
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print(USAGE)
        return 1
    if target is None or minutes is None:
        print(USAGE)
        return 1

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        print(f"Error: cannot read {path}: {exc}", file=sys.stderr)
        return 2
    if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
        print(f"Error: {path} must hold a JSON list of operation objects", file=sys.stderr)
        return 2

    operations = parse_operations(data)
    rules = replace(FLOOR_RULES, transition_fixtures=transition)
    try:
        entities = generate_layout(operations, target, minutes, rules=rules)
    except LinePlannerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    print(json.dumps(layout_to_dict(entities), indent=2))
    return 0


def main():
    args = sys.argv[1:]
    cmd = args[0] if args else "serve"

    if cmd == "serve":
        port = 8000
        host = "127.0.0.1"
        for i, a in enumerate(args):
            if a == "--port" and i + 1 < len(args):
                port = int(args[i + 1])
            elif a == "--host" and i + 1 < len(args):
                host = args[i + 1]

        from lineplanner.web.server import main as serve
        serve(host=host, port=port)
    elif cmd == "generate":
        sys.exit(_generate(args[1:]))
    else:
        print(f"Unknown command: {cmd}")
        print(USAGE)
        sys.exit(1)


if __name__ == "__main__":
    main()
