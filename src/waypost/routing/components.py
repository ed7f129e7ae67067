"""Component registry — maps component references to view loaders.

A *loader* is a zero-argument callable returning the view. The compiler
never imports views itself; it asks the registry, which falls back to a
placeholder loader for unknown references.

Usage::

    from waypost.routing.components import ComponentRegistry, lazy

    registry = ComponentRegistry()
    registry.register("views/jobs/index", lazy("console.views.jobs", "view"))
    registry.discover("console.views")   # every submodule's ``view``
"""

import importlib
import logging
import pkgutil
from collections.abc import Iterator

from waypost.routing.route import Loader

_log = logging.getLogger("waypost.routing")

PLACEHOLDER_VIEW = "placeholder"
PARENT_HOLDER_VIEW = "parent-holder"


def _placeholder() -> str:
    return PLACEHOLDER_VIEW


def _parent_holder() -> str:
    return PARENT_HOLDER_VIEW


def lazy(module: str, attr: str = "view") -> Loader:
    """Return a loader that imports ``module`` and reads ``attr`` on first call."""

    def load() -> object:
        return getattr(importlib.import_module(module), attr)

    load.__qualname__ = f"lazy({module}:{attr})"
    return load


class ComponentRegistry:
    """Mapping from component reference string to loader.

    Thread safety:
        Registration happens during startup, before compilation. After
        that the registry is only read.
    """

    __slots__ = ("_fallback", "_loaders", "_parent_holder")

    def __init__(
        self,
        loaders: dict[str, Loader] | None = None,
        *,
        fallback: Loader = _placeholder,
        parent_holder: Loader = _parent_holder,
    ) -> None:
        self._loaders: dict[str, Loader] = dict(loaders or {})
        self._fallback = fallback
        self._parent_holder = parent_holder

    @property
    def fallback(self) -> Loader:
        """Loader used for absent or unknown references."""
        return self._fallback

    @property
    def parent_holder(self) -> Loader:
        """Loader for composite routes; renders only a nested view region."""
        return self._parent_holder

    def register(self, ref: str, loader: Loader) -> None:
        self._loaders[ref] = loader

    def resolve(self, ref: str | None) -> Loader:
        """Return the loader for ``ref``, or the fallback.

        The returned loader itself falls back when the underlying import
        fails at call time.
        """
        if not ref:
            return self._fallback
        loader = self._loaders.get(ref)
        if loader is None:
            _log.debug("No view registered for %r, using fallback", ref)
            return self._fallback
        return self._guarded(ref, loader)

    def _guarded(self, ref: str, loader: Loader) -> Loader:
        fallback = self._fallback

        def load() -> object:
            try:
                return loader()
            except (ImportError, AttributeError):
                _log.warning("View %r could not be loaded, using fallback", ref, exc_info=True)
                return fallback()

        load.__qualname__ = f"view({ref})"
        load.__wrapped__ = loader  # type: ignore[attr-defined]
        return load

    def discover(self, package: str, *, prefix: str = "views", attr: str = "view") -> int:
        """Register a lazy loader for every submodule of ``package``.

        ``console.views.jobs.index`` is registered as ``views/jobs/index``.
        Modules are not imported until their loader is called. Returns the
        number of references registered.
        """
        count = 0
        for name in _walk_modules(package):
            relative = name[len(package) + 1 :].replace(".", "/")
            self.register(f"{prefix}/{relative}", lazy(name, attr))
            count += 1
        return count

    def __contains__(self, ref: object) -> bool:
        return ref in self._loaders

    def __len__(self) -> int:
        return len(self._loaders)


def _walk_modules(package: str) -> Iterator[str]:
    pkg = importlib.import_module(package)
    search_path = getattr(pkg, "__path__", None)
    if search_path is None:
        return
    for info in pkgutil.walk_packages(search_path, prefix=f"{package}."):
        if not info.ispkg:
            yield info.name
