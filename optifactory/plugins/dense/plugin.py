"""Solver library: the three algorithms on the numpy dense linear solver."""
from __future__ import annotations

from optifactory.core.creator import AbstractAlgorithmCreator
from optifactory.core.models import AlgorithmProperty
from optifactory.core.plugin_api import PluginInfo, SolverLibraryPlugin
from optifactory.solvers import Dogleg, DenseLinearSolver, GaussNewton, LevenbergMarquardt


class DenseCreator(AbstractAlgorithmCreator):
    """Builds ``algorithm_cls`` around a fresh :class:`DenseLinearSolver`."""

    def __init__(self, prop: AlgorithmProperty, algorithm_cls):
        super().__init__(prop)
        self._algorithm_cls = algorithm_cls

    def construct(self):
        return self._algorithm_cls(linear_solver=DenseLinearSolver())


class DenseSolversPlugin(SolverLibraryPlugin):
    def get_info(self) -> PluginInfo:
        return PluginInfo(
            name="dense", version="1.0.0",
            description="Gauss-Newton, Levenberg-Marquardt and dog-leg with dense LU solves",
            author="OptiFactory", dependencies=[],
        )

    def create_creators(self) -> list:
        return [
            DenseCreator(AlgorithmProperty(
                name="gn_dense", desc="Gauss-Newton: dense LU linear solver",
                type="Gauss-Newton"), GaussNewton),
            DenseCreator(AlgorithmProperty(
                name="lm_dense", desc="Levenberg-Marquardt: dense LU linear solver",
                type="Levenberg"), LevenbergMarquardt),
            DenseCreator(AlgorithmProperty(
                name="dl_dense", desc="Powell's dog-leg: dense LU linear solver",
                type="Dogleg"), Dogleg),
        ]


def create_plugin() -> DenseSolversPlugin:
    return DenseSolversPlugin()
