"""Gauss-Newton iteration."""
from __future__ import annotations

import logging

from optifactory.solvers.base import LeastSquaresProblem, OptimizationAlgorithm, SolveResult
from optifactory.solvers.linear import LinearSolveError

logger = logging.getLogger(__name__)


class GaussNewton(OptimizationAlgorithm):
    """Undamped Gauss-Newton: solve ``J^T J dx = -J^T r`` and take the full step."""

    name = "gauss_newton"

    def _run(self, problem: LeastSquaresProblem) -> SolveResult:
        x = problem.x0.copy()
        r, cost, J, g, H = self._linearize(problem, x)
        history = [cost]

        if self._gradient_small(g):
            return self._result(x, cost, 0, True, "gradient below tolerance", history)

        for iteration in range(1, self.max_iterations + 1):
            try:
                dx = self.linear_solver.solve(H, -g)
            except LinearSolveError as exc:
                logger.debug("Gauss-Newton linear solve failed: %s", exc)
                return self._result(x, cost, iteration - 1, False,
                                    "linear solve failed: %s" % exc, history)

            x = x + dx
            r, cost, J, g, H = self._linearize(problem, x)
            history.append(cost)

            if self._gradient_small(g):
                return self._result(x, cost, iteration, True, "gradient below tolerance", history)
            if self._step_small(dx, x):
                return self._result(x, cost, iteration, True, "step below tolerance", history)

        return self._result(x, cost, self.max_iterations, False,
                            "maximum iterations reached", history)
