"""Solver registry core.

  - :class:`SolverFactory`           -- name-keyed, ordered creator registry
  - :class:`AbstractAlgorithmCreator` -- builds one kind of algorithm
  - :class:`RegistrationGuard`       -- scoped registration of one creator
  - :func:`declare_library`          -- table of solver library modules
  - :class:`PluginManager`           -- activates libraries in a factory
  - :class:`Engine`                  -- config + logging + factory + libraries
"""

from .creator import AbstractAlgorithmCreator, AlgorithmCreator
from .engine import Engine
from .factory import SolverFactory
from .libraries import (
    BUILTIN_LIBRARIES,
    declare_library,
    declared_libraries,
    discover_entry_points,
    load_library_plugin,
)
from .models import AlgorithmProperty, ConstructResult
from .plugin_api import PluginBase, PluginInfo, SolverLibraryPlugin
from .plugin_manager import PluginManager
from .registration import RegistrationGuard

__all__ = [
    "AbstractAlgorithmCreator",
    "AlgorithmCreator",
    "AlgorithmProperty",
    "ConstructResult",
    "SolverFactory",
    "RegistrationGuard",
    "BUILTIN_LIBRARIES",
    "declare_library",
    "declared_libraries",
    "discover_entry_points",
    "load_library_plugin",
    "PluginBase",
    "PluginInfo",
    "SolverLibraryPlugin",
    "PluginManager",
    "Engine",
]
