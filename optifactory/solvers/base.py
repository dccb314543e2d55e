"""Algorithm abstraction for dense nonlinear least squares.

Each algorithm minimises ``F(x) = 0.5 * ||r(x)||^2`` for a
:class:`LeastSquaresProblem` and returns a uniform :class:`SolveResult`.
The linear system of every iteration is delegated to a
:class:`~optifactory.solvers.linear.LinearSolver`, so one algorithm class can
be offered with several linear back-ends.
"""
from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Optional

import numpy as np

from optifactory.solvers.linear import DenseLinearSolver, LinearSolver

ResidualFn = Callable[[np.ndarray], np.ndarray]
JacobianFn = Callable[[np.ndarray], np.ndarray]

_FD_STEP = np.sqrt(np.finfo(float).eps)


# ---------------------------------------------------------------------------
# Problem and result containers
# ---------------------------------------------------------------------------

@dataclass
class LeastSquaresProblem:
    """Residual function, optional analytic Jacobian and start point."""

    residual: ResidualFn
    x0: np.ndarray
    jacobian: Optional[JacobianFn] = None
    name: str = "problem"

    def __post_init__(self) -> None:
        self.x0 = np.asarray(self.x0, dtype=float).ravel()

    @property
    def dimension(self) -> int:
        return self.x0.size

    def evaluate(self, x: np.ndarray) -> np.ndarray:
        return np.asarray(self.residual(x), dtype=float).ravel()

    def evaluate_jacobian(self, x: np.ndarray, r: Optional[np.ndarray] = None) -> np.ndarray:
        if self.jacobian is not None:
            return np.atleast_2d(np.asarray(self.jacobian(x), dtype=float))
        # Forward differences.
        if r is None:
            r = self.evaluate(x)
        J = np.empty((r.size, x.size))
        for j in range(x.size):
            h = _FD_STEP * max(1.0, abs(x[j]))
            xp = x.copy()
            xp[j] += h
            J[:, j] = (self.evaluate(xp) - r) / h
        return J

    @staticmethod
    def cost(r: np.ndarray) -> float:
        return 0.5 * float(r @ r)


@dataclass
class SolveResult:
    x: np.ndarray
    cost: float
    iterations: int
    converged: bool
    message: str
    solver_name: str
    solve_time_s: float = 0.0
    cost_history: list[float] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "x": self.x.tolist(),
            "cost": self.cost,
            "iterations": self.iterations,
            "converged": self.converged,
            "message": self.message,
            "solver_name": self.solver_name,
            "solve_time_s": self.solve_time_s,
        }


# ---------------------------------------------------------------------------
# Algorithm base
# ---------------------------------------------------------------------------

class OptimizationAlgorithm(ABC):
    """Iterative least-squares minimiser."""

    name = "algorithm"

    def __init__(self, linear_solver: Optional[LinearSolver] = None,
                 max_iterations: int = 100, tolerance: float = 1e-10):
        self.linear_solver = linear_solver if linear_solver is not None else DenseLinearSolver()
        self.max_iterations = max_iterations
        self.tolerance = tolerance

    def configure(self, **params) -> "OptimizationAlgorithm":
        for key, value in params.items():
            if key not in ("max_iterations", "tolerance"):
                raise ValueError(f"Unknown parameter {key!r} for {type(self).__name__}")
            setattr(self, key, value)
        return self

    def solve(self, problem: LeastSquaresProblem) -> SolveResult:
        start = time.perf_counter()
        result = self._run(problem)
        result.solve_time_s = time.perf_counter() - start
        return result

    @abstractmethod
    def _run(self, problem: LeastSquaresProblem) -> SolveResult:
        ...

    # -- helpers shared by the concrete algorithms ---------------------------

    def _linearize(self, problem: LeastSquaresProblem, x: np.ndarray):
        """Return ``r, cost, J, g = J^T r, H = J^T J`` at *x*."""
        r = problem.evaluate(x)
        J = problem.evaluate_jacobian(x, r)
        return r, problem.cost(r), J, J.T @ r, J.T @ J

    def _gradient_small(self, g: np.ndarray) -> bool:
        return float(np.max(np.abs(g), initial=0.0)) <= self.tolerance

    def _step_small(self, dx: np.ndarray, x: np.ndarray) -> bool:
        return float(np.linalg.norm(dx)) <= self.tolerance * (float(np.linalg.norm(x)) + self.tolerance)

    def _result(self, x, cost, iterations, converged, message, history) -> SolveResult:
        return SolveResult(
            x=x, cost=cost, iterations=iterations, converged=converged,
            message=message, solver_name="%s/%s" % (self.name, self.linear_solver.name),
            cost_history=history,
        )

    def __repr__(self) -> str:
        return "<%s linear=%s>" % (type(self).__name__, self.linear_solver.name)
