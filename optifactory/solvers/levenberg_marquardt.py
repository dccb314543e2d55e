"""Levenberg-Marquardt with Nielsen's damping update.

Each iteration solves ``(J^T J + mu I) dx = -J^T r``.  The gain ratio
``rho = (F(x) - F(x + dx)) / (L(0) - L(dx))`` decides whether the step is
accepted; ``mu`` shrinks after good steps and grows geometrically after
rejected ones.
"""
from __future__ import annotations

import logging

import numpy as np

from optifactory.solvers.base import LeastSquaresProblem, OptimizationAlgorithm, SolveResult
from optifactory.solvers.linear import LinearSolveError, LinearSolver

logger = logging.getLogger(__name__)


class LevenbergMarquardt(OptimizationAlgorithm):
    name = "levenberg_marquardt"

    def __init__(self, linear_solver: LinearSolver | None = None,
                 max_iterations: int = 100, tolerance: float = 1e-10,
                 tau: float = 1e-3):
        super().__init__(linear_solver, max_iterations, tolerance)
        self.tau = tau

    def _run(self, problem: LeastSquaresProblem) -> SolveResult:
        x = problem.x0.copy()
        r, cost, J, g, H = self._linearize(problem, x)
        history = [cost]

        if self._gradient_small(g):
            return self._result(x, cost, 0, True, "gradient below tolerance", history)

        identity = np.eye(x.size)
        mu = self.tau * max(float(np.max(np.diag(H), initial=0.0)), 1.0)
        nu = 2.0

        for iteration in range(1, self.max_iterations + 1):
            try:
                dx = self.linear_solver.solve(H + mu * identity, -g)
            except LinearSolveError as exc:
                logger.debug("LM linear solve failed (mu=%g): %s", mu, exc)
                mu *= nu
                nu *= 2.0
                continue

            if self._step_small(dx, x):
                return self._result(x, cost, iteration, True, "step below tolerance", history)

            x_new = x + dx
            r_new = problem.evaluate(x_new)
            cost_new = problem.cost(r_new)
            predicted = 0.5 * float(dx @ (mu * dx - g))
            rho = (cost - cost_new) / predicted if predicted > 0.0 else -1.0

            if rho > 0.0:
                x = x_new
                r, cost, J, g, H = self._linearize(problem, x)
                history.append(cost)
                mu *= max(1.0 / 3.0, 1.0 - (2.0 * rho - 1.0) ** 3)
                nu = 2.0
                if self._gradient_small(g):
                    return self._result(x, cost, iteration, True,
                                        "gradient below tolerance", history)
            else:
                mu *= nu
                nu *= 2.0

        return self._result(x, cost, self.max_iterations, False,
                            "maximum iterations reached", history)
