"""Solver library declarations.

A solver library is a module whose only job is to register a set of
creators.  Nothing else imports such a module, so the host has to ask for it
explicitly.  This module is the single table of known libraries:

- :func:`declare_library` names a library and the module that provides it
  (a ``create_plugin()`` function, or a module-level ``plugin`` object).
- :func:`load_library_plugin` imports a declared library and returns its
  :class:`~optifactory.core.plugin_api.SolverLibraryPlugin`.
- :func:`discover_entry_points` declares libraries advertised by installed
  distributions under the ``optifactory.solver_libraries`` group.

Activation (registering the creators) is done by
:meth:`optifactory.core.plugin_manager.PluginManager.use_library`.
"""
from __future__ import annotations

import importlib
import logging
from importlib.metadata import entry_points

from optifactory.core.plugin_api import SolverLibraryPlugin

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "optifactory.solver_libraries"

BUILTIN_LIBRARIES: dict[str, str] = {
    "dense": "optifactory.plugins.dense.plugin",
    "cholesky": "optifactory.plugins.cholesky.plugin",
}

_declared: dict[str, str] = dict(BUILTIN_LIBRARIES)


def declare_library(name: str, module_path: str) -> None:
    """Declare that library *name* lives in *module_path*.

    Re-declaring a name with the same module is a no-op; declaring it with a
    different module raises :class:`ValueError`.
    """
    current = _declared.get(name)
    if current is not None and current != module_path:
        raise ValueError(
            f"Solver library {name!r} already declared by module {current!r}"
        )
    if current is None:
        _declared[name] = module_path
        logger.debug("Declared solver library %r -> %s", name, module_path)


def declared_libraries() -> dict[str, str]:
    """Return ``{name: module_path}`` in declaration order."""
    return dict(_declared)


def reset_declarations() -> None:
    """Forget every declaration except the built-in libraries."""
    _declared.clear()
    _declared.update(BUILTIN_LIBRARIES)


def load_library_plugin(name: str) -> SolverLibraryPlugin:
    """Import library *name* and return its plugin.

    A module with ``create_plugin()`` yields a new plugin on every call, so
    each host activates its own copy.  A module-level ``plugin`` object is
    shared by every caller and can be active in one factory at a time.
    """
    try:
        module_path = _declared[name]
    except KeyError:
        available = ", ".join(_declared) or "(none)"
        raise KeyError(
            f"No solver library declared with name {name!r}.  "
            f"Declared libraries: {available}"
        ) from None

    module = importlib.import_module(module_path)
    if hasattr(module, "create_plugin"):
        plugin = module.create_plugin()
    else:
        plugin = getattr(module, "plugin", None)
    if not isinstance(plugin, SolverLibraryPlugin):
        raise TypeError(
            f"Module {module_path!r} does not provide a SolverLibraryPlugin "
            f"(expected a 'plugin' attribute or a 'create_plugin' function)"
        )
    return plugin


def discover_entry_points(group: str = ENTRY_POINT_GROUP) -> list[str]:
    """Declare every library published under the entry point *group*."""
    found = []
    for ep in entry_points(group=group):
        try:
            declare_library(ep.name, ep.module)
        except ValueError as exc:
            logger.warning("Ignoring entry point %r: %s", ep.name, exc)
            continue
        found.append(ep.name)
    if found:
        logger.info("Discovered solver libraries from entry points: %s", ", ".join(found))
    return found
