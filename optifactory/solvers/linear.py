"""Linear solvers for the normal equations ``A dx = b``."""
from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np
from scipy.linalg import LinAlgError, cho_factor, cho_solve


class LinearSolveError(RuntimeError):
    """The linear system could not be solved (singular or not positive definite)."""


class LinearSolver(ABC):
    name = "linear"

    @abstractmethod
    def solve(self, A: np.ndarray, b: np.ndarray) -> np.ndarray:
        ...


class DenseLinearSolver(LinearSolver):
    """LU-based dense solve via :func:`numpy.linalg.solve`."""

    name = "dense"

    def solve(self, A: np.ndarray, b: np.ndarray) -> np.ndarray:
        try:
            x = np.linalg.solve(A, b)
        except np.linalg.LinAlgError as exc:
            raise LinearSolveError(str(exc)) from exc
        if not np.all(np.isfinite(x)):
            raise LinearSolveError("non-finite solution")
        return x


class CholeskyLinearSolver(LinearSolver):
    """Cholesky factorisation via :mod:`scipy.linalg`; needs ``A`` positive definite."""

    name = "cholesky"

    def solve(self, A: np.ndarray, b: np.ndarray) -> np.ndarray:
        try:
            factor = cho_factor(A, lower=True, check_finite=True)
            return cho_solve(factor, b, check_finite=False)
        except (LinAlgError, ValueError) as exc:
            raise LinearSolveError(str(exc)) from exc
