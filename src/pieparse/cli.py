from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import fields, is_dataclass

from .api import parse_file
from .errors import ParseError


log = logging.getLogger(__name__)


def _to_jsonable(obj):
    if is_dataclass(obj):
        out = {"kind": type(obj).__name__}
        for f in fields(obj):
            out[f.name] = _to_jsonable(getattr(obj, f.name))
        return out
    if isinstance(obj, tuple):
        return [_to_jsonable(x) for x in obj]
    if isinstance(obj, list):
        return [_to_jsonable(x) for x in obj]
    if isinstance(obj, dict):
        return {str(k): _to_jsonable(v) for k, v in obj.items()}
    return obj


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="pie-parse", description="Parse #lang pie source files")
    ap.add_argument("files", nargs="+", help="Pie source files")
    ap.add_argument("--json", action="store_true", help="Print parsed AST as JSON")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    results = {}
    for path in args.files:
        try:
            results[path] = parse_file(path)
        except ParseError as e:
            print(str(e), file=sys.stderr)
            return 1
        log.info("%s: %d forms", path, len(results[path]))

    if args.json:
        payload = {path: _to_jsonable(forms) for path, forms in results.items()}
        print(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))
    else:
        for path, forms in results.items():
            print(f"{path}: {len(forms)} top-level forms")
    return 0
