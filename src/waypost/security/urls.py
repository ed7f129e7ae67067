"""URL safety validation for redirect targets.

The login screen honours a ``redirect`` query parameter after sign-in.
Only same-origin relative paths are followed.

Usage::

    from waypost.security.urls import is_safe_url

    target = query.get("redirect", "/")
    app.navigate(target if is_safe_url(target) else "/")
"""


def is_safe_url(url: str | None) -> bool:
    """Check whether *url* is safe to redirect to.

    A URL is considered safe if it is a **relative path** on the same
    origin:

    - Must be a non-empty string
    - Must start with ``/``
    - Must **not** start with ``//`` or ``/\\`` (protocol-relative URL)
    - Must **not** contain ``://`` (absolute URL with scheme)

    Examples::

        >>> is_safe_url("/jobs")
        True
        >>> is_safe_url("/login?redirect=/jobs")
        True
        >>> is_safe_url("//evil.com")
        False
        >>> is_safe_url("https://evil.com")
        False
        >>> is_safe_url("")
        False
    """
    if not url or not isinstance(url, str):
        return False
    if not url.startswith("/"):
        return False
    if url.startswith(("//", "/\\")):
        return False
    return "://" not in url
