"""Core engine - the microkernel that ties everything together."""
from __future__ import annotations

import logging
import os
from typing import Optional

from optifactory.core.config import AppConfig
from optifactory.core.event_bus import EventBus
from optifactory.core.factory import SolverFactory
from optifactory.core.libraries import discover_entry_points
from optifactory.core.logger import StructuredLogger
from optifactory.core.models import ConstructResult
from optifactory.core.plugin_manager import PluginManager
from optifactory.solvers.base import LeastSquaresProblem, SolveResult

logger = logging.getLogger(__name__)


class Engine:
    """Owns one :class:`SolverFactory` and the libraries registered with it.

    ``initialize()`` activates the libraries listed under ``solvers.libraries``
    in that order; ``shutdown()`` deactivates them in reverse order, which
    unregisters every solver they contributed.
    """

    def __init__(self, config_path: Optional[str] = None, data_dir: str = "data",
                 solver_factory: Optional[SolverFactory] = None):
        self._config_path = config_path
        self._data_dir = data_dir
        self._external_factory = solver_factory
        self.config: Optional[AppConfig] = None
        self.event_bus: Optional[EventBus] = None
        self.logger: Optional[StructuredLogger] = None
        self.solver_factory: Optional[SolverFactory] = None
        self.plugin_manager: Optional[PluginManager] = None

    def initialize(self) -> None:
        self.config = AppConfig(self._config_path)
        log_dir = self.config.get("logging.dir") or os.path.join(self._data_dir, "logs")
        os.makedirs(log_dir, exist_ok=True)

        self.event_bus = EventBus(keep_history=True)
        self.logger = StructuredLogger(log_dir=log_dir,
                                       level=self.config.get("logging.level", "INFO"))
        if self._external_factory is not None:
            self.solver_factory = self._external_factory
            if self.solver_factory.event_bus is None:
                self.solver_factory.event_bus = self.event_bus
        else:
            self.solver_factory = SolverFactory(event_bus=self.event_bus)
        self.plugin_manager = PluginManager(
            config=self.config, event_bus=self.event_bus, logger=self.logger,
            solver_factory=self.solver_factory,
        )

        if self.config.get("solvers.discover_entry_points", False):
            discover_entry_points(self.config.get("solvers.entry_point_group"))

        for name in self.config.solver_libraries:
            try:
                self.plugin_manager.use_library(name)
            except ImportError as exc:
                logger.warning("Skipping solver library %r: %s", name, exc)
                self.logger.app.warning("Skipping solver library %r: %s", name, exc)

        self.logger.log_operation("engine.initialized", data={
            "libraries": [p["name"] for p in self.plugin_manager.list_plugins() if p["active"]],
            "solvers": self.solver_factory.solver_names(),
        })
        self.logger.app.info("Engine initialized with %d solver(s)", len(self.solver_factory))

    def construct(self, tag: str) -> Optional[ConstructResult]:
        """Build solver *tag*, activating a declared library that provides it if needed."""
        if tag not in self.solver_factory:
            self.plugin_manager.use_algorithm(tag)
        return self.solver_factory.construct(tag)

    def solve(self, tag: str, problem: LeastSquaresProblem,
              max_iterations: Optional[int] = None,
              tolerance: Optional[float] = None) -> SolveResult:
        """Construct solver *tag* and run it on *problem*.

        Raises :class:`KeyError` listing the available solvers if *tag* is
        unknown.
        """
        built = self.construct(tag)
        if built is None:
            available = ", ".join(self.solver_factory.solver_names()) or "(none)"
            raise KeyError(
                f"No solver registered with name {tag!r}.  "
                f"Available solvers: {available}"
            )
        algorithm, prop = built
        if max_iterations is None:
            max_iterations = self.config.get("solvers.max_iterations", 100)
        if tolerance is None:
            tolerance = self.config.get("solvers.tolerance", 1e-10)
        algorithm.configure(max_iterations=max_iterations, tolerance=tolerance)
        result = algorithm.solve(problem)
        self.logger.log_solve(
            solver=tag, problem=problem.name,
            outputs=result.to_dict(), solver_property=prop.to_dict(),
        )
        self.logger.app.info("Solved %s with %s: cost=%.3e iterations=%d converged=%s",
                             problem.name, tag, result.cost, result.iterations,
                             result.converged)
        return result

    def shutdown(self) -> None:
        if self.plugin_manager:
            self.plugin_manager.deactivate_all()
        if self.logger:
            self.logger.app.info("Engine shutdown")
            self.logger.close()
