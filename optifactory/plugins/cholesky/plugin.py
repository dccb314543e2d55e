"""Solver library: the three algorithms on scipy's Cholesky factorisation."""
from __future__ import annotations

from functools import partial

from optifactory.core.creator import AlgorithmCreator
from optifactory.core.models import AlgorithmProperty
from optifactory.core.plugin_api import PluginInfo, SolverLibraryPlugin
from optifactory.solvers import CholeskyLinearSolver, Dogleg, GaussNewton, LevenbergMarquardt


def _build(algorithm_cls):
    return algorithm_cls(linear_solver=CholeskyLinearSolver())


class CholeskySolversPlugin(SolverLibraryPlugin):
    def get_info(self) -> PluginInfo:
        return PluginInfo(
            name="cholesky", version="1.0.0",
            description="Gauss-Newton, Levenberg-Marquardt and dog-leg with Cholesky solves",
            author="OptiFactory", dependencies=[],
        )

    def create_creators(self) -> list:
        return [
            AlgorithmCreator(AlgorithmProperty(
                name="gn_cholesky", desc="Gauss-Newton: Cholesky linear solver",
                type="Gauss-Newton"), partial(_build, GaussNewton)),
            AlgorithmCreator(AlgorithmProperty(
                name="lm_cholesky", desc="Levenberg-Marquardt: Cholesky linear solver",
                type="Levenberg"), partial(_build, LevenbergMarquardt)),
            AlgorithmCreator(AlgorithmProperty(
                name="dl_cholesky", desc="Powell's dog-leg: Cholesky linear solver",
                type="Dogleg"), partial(_build, Dogleg)),
        ]


def create_plugin() -> CholeskySolversPlugin:
    return CholeskySolversPlugin()
