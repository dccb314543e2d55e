"""Powell's dog-leg trust-region method."""
from __future__ import annotations

import logging
import math

import numpy as np

from optifactory.solvers.base import LeastSquaresProblem, OptimizationAlgorithm, SolveResult
from optifactory.solvers.linear import LinearSolveError, LinearSolver

logger = logging.getLogger(__name__)


class Dogleg(OptimizationAlgorithm):
    """Blend of the Gauss-Newton and steepest-descent steps inside a trust region."""

    name = "dogleg"

    def __init__(self, linear_solver: LinearSolver | None = None,
                 max_iterations: int = 100, tolerance: float = 1e-10,
                 initial_radius: float = 1.0):
        super().__init__(linear_solver, max_iterations, tolerance)
        self.initial_radius = initial_radius

    def _step(self, J: np.ndarray, g: np.ndarray, H: np.ndarray, radius: float) -> np.ndarray:
        g_norm = float(np.linalg.norm(g))
        Jg = J @ g
        alpha = float(g @ g) / float(Jg @ Jg)
        h_sd = -alpha * g

        try:
            h_gn = self.linear_solver.solve(H, -g)
        except LinearSolveError as exc:
            logger.debug("Dog-leg Gauss-Newton step unavailable: %s", exc)
            h_gn = None

        if h_gn is not None and float(np.linalg.norm(h_gn)) <= radius:
            return h_gn
        if alpha * g_norm >= radius:
            return -(radius / g_norm) * g
        if h_gn is None:
            return h_sd

        # Walk from the Cauchy point towards the Gauss-Newton point until the
        # trust-region boundary is hit.
        d = h_gn - h_sd
        c = float(h_sd @ d)
        dd = float(d @ d)
        beta = (-c + math.sqrt(c * c + dd * (radius ** 2 - float(h_sd @ h_sd)))) / dd
        return h_sd + beta * d

    def _run(self, problem: LeastSquaresProblem) -> SolveResult:
        x = problem.x0.copy()
        r, cost, J, g, H = self._linearize(problem, x)
        history = [cost]
        radius = self.initial_radius

        for iteration in range(1, self.max_iterations + 1):
            if self._gradient_small(g) or float(np.linalg.norm(J @ g)) == 0.0:
                return self._result(x, cost, iteration - 1, True,
                                    "gradient below tolerance", history)

            h = self._step(J, g, H, radius)
            if self._step_small(h, x):
                return self._result(x, cost, iteration, True, "step below tolerance", history)

            x_new = x + h
            r_new = problem.evaluate(x_new)
            cost_new = problem.cost(r_new)
            Jh = J @ h
            predicted = -float(h @ g) - 0.5 * float(Jh @ Jh)
            rho = (cost - cost_new) / predicted if predicted > 0.0 else -1.0

            if rho > 0.0:
                x = x_new
                r, cost, J, g, H = self._linearize(problem, x)
                history.append(cost)

            if rho > 0.75:
                radius = max(radius, 3.0 * float(np.linalg.norm(h)))
            elif rho < 0.25:
                radius *= 0.5
                if radius <= self.tolerance * (float(np.linalg.norm(x)) + self.tolerance):
                    return self._result(x, cost, iteration, False,
                                        "trust region collapsed", history)

        return self._result(x, cost, self.max_iterations, False,
                            "maximum iterations reached", history)
