"""``waypost routes`` — print the compiled route table."""

import argparse
import sys

import httpx

from waypost.cli._resolve import flatten, resolve_tree


def run_routes(args: argparse.Namespace) -> None:
    """Compile ``args.tree`` and print PATH, NAME, REDIRECT and PERMS."""
    try:
        result = resolve_tree(args.tree)
    except (OSError, ValueError, httpx.HTTPError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = [
        (path, route.name, route.redirect or "", route.meta.perms or "")
        for path, route in flatten(result.routes)
    ]
    if not rows:
        print("No routes compiled.")
        return

    headers = ("PATH", "NAME", "REDIRECT", "PERMS")
    widths = [max(len(headers[i]), *(len(row[i]) for row in rows)) for i in range(3)]
    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    print(fmt.format(*headers))
    print("-" * min(sum(widths) + 6 + max(len(row[3]) for row in rows), 80))
    for row in rows:
        print(fmt.format(*row))
    print()
    print(f"First leaf: {result.first_leaf_path or '-'}")
