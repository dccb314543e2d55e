"""Plugin lifecycle manager for solver libraries."""
from __future__ import annotations

import logging
from typing import Optional

from optifactory.core import event_bus as events
from optifactory.core.config import AppConfig
from optifactory.core.event_bus import EventBus
from optifactory.core.factory import SolverFactory
from optifactory.core.libraries import declared_libraries, load_library_plugin
from optifactory.core.logger import StructuredLogger
from optifactory.core.plugin_api import PluginBase, SolverLibraryPlugin

logger = logging.getLogger(__name__)


class PluginManager:
    def __init__(self, config: AppConfig, event_bus: EventBus, logger: StructuredLogger,
                 solver_factory: Optional[SolverFactory] = None):
        self._config = config
        self._event_bus = event_bus
        self._logger = logger
        self._factory = solver_factory if solver_factory is not None else SolverFactory.instance()
        self._registered: dict[str, PluginBase] = {}
        self._active: list[str] = []

    @property
    def solver_factory(self) -> SolverFactory:
        return self._factory

    def register(self, plugin: PluginBase) -> None:
        info = plugin.get_info()
        self._registered[info.name] = plugin

    def activate(self, name: str) -> None:
        if name in self._active:
            return
        if name not in self._registered:
            raise ValueError(f"Plugin '{name}' not registered")
        plugin = self._registered[name]
        info = plugin.get_info()
        for dep in info.dependencies:
            if dep not in self._active:
                if dep in self._registered:
                    self.activate(dep)
                else:
                    raise ValueError(f"Missing dependency '{dep}' for plugin '{name}'")

        context = {
            "config": self._config,
            "event_bus": self._event_bus,
            "logger": self._logger,
            "solver_factory": self._factory,
        }
        for dep in info.dependencies:
            context[dep] = self._registered[dep]
        plugin.activate(context)
        self._active.append(name)

        data = {"name": name, "version": info.version}
        if isinstance(plugin, SolverLibraryPlugin):
            data["solvers"] = plugin.registered_solvers
        self._event_bus.emit(events.LIBRARY_ACTIVATED, data)
        logger.info("Activated plugin %r (%s)", name, info.version)

    def deactivate(self, name: str) -> None:
        if name in self._active and name in self._registered:
            self._registered[name].deactivate()
            self._active.remove(name)
            self._event_bus.emit(events.LIBRARY_DEACTIVATED, {"name": name})
            logger.info("Deactivated plugin %r", name)

    def is_active(self, name: str) -> bool:
        return name in self._active

    def get_plugin(self, name: str) -> Optional[PluginBase]:
        if name in self._active:
            return self._registered.get(name)
        return None

    def list_plugins(self) -> list:
        result = []
        for name, plugin in self._registered.items():
            info = plugin.get_info()
            entry = {
                "name": info.name,
                "version": info.version,
                "description": info.description,
                "active": name in self._active,
            }
            if isinstance(plugin, SolverLibraryPlugin):
                entry["solvers"] = plugin.provides()
            result.append(entry)
        return result

    def deactivate_all(self) -> None:
        for name in reversed(list(self._active)):
            self.deactivate(name)

    # -- declared libraries --------------------------------------------------

    def use_library(self, name: str) -> SolverLibraryPlugin:
        """Load, register and activate the declared library *name*."""
        plugin = self._registered.get(name)
        if plugin is None:
            plugin = load_library_plugin(name)
            self.register(plugin)
        self.activate(plugin.get_info().name)
        return plugin

    def use_algorithm(self, tag: str) -> bool:
        """Make sure *tag* can be constructed.

        Declared libraries are tried in declaration order; the first one that
        provides *tag* is activated.  Returns ``False`` if none does.
        """
        if tag in self._factory:
            return True
        for name in declared_libraries():
            if name in self._active:
                continue
            plugin = self._registered.get(name)
            if plugin is None:
                try:
                    plugin = load_library_plugin(name)
                except (ImportError, TypeError) as exc:
                    logger.warning("Solver library %r unavailable: %s", name, exc)
                    continue
                self.register(plugin)
            if isinstance(plugin, SolverLibraryPlugin) and tag in plugin.provides():
                self.activate(plugin.get_info().name)
                return tag in self._factory
        return False
