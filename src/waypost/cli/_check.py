"""``waypost check`` — duplicate route name and path detection.

Route names are derived from paths, so two menu entries whose paths
differ only in slashes collide. Exits with code 1 if problems are found.
"""

import argparse
import sys
from collections import defaultdict

import httpx

from waypost.cli._resolve import flatten, resolve_tree


def find_duplicates(pairs: list[tuple[str, str]]) -> dict[str, list[str]]:
    """Group ``(key, label)`` pairs by key, keeping keys seen more than once."""
    groups: dict[str, list[str]] = defaultdict(list)
    for key, label in pairs:
        groups[key].append(label)
    return {key: labels for key, labels in groups.items() if len(labels) > 1}


def run_check(args: argparse.Namespace) -> None:
    try:
        result = resolve_tree(args.tree)
    except (OSError, ValueError, httpx.HTTPError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    entries = list(flatten(result.routes))
    by_name = find_duplicates([(route.name, path) for path, route in entries])
    by_path = find_duplicates([(path, route.meta.title or route.name) for path, route in entries])

    for name, paths in sorted(by_name.items()):
        print(f"duplicate name {name!r}: {', '.join(paths)}")
    for path, titles in sorted(by_path.items()):
        print(f"duplicate path {path!r}: {', '.join(titles)}")

    if by_name or by_path:
        raise SystemExit(1)
    print(f"OK: {len(entries)} routes, first leaf {result.first_leaf_path or '-'}")
