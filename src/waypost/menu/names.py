"""Route name derivation."""


def normalize_name(path: str | None, fallback_id: str | int) -> str:
    """Derive a route name from a path, or from the node id when pathless.

    Examples::

        "/jobs/edit" -> "jobs-edit"
        "/"          -> "root"
        None, 7      -> "menu-7"
    """
    if path:
        return path.strip("/").replace("/", "-") or "root"
    return f"menu-{fallback_id}"
