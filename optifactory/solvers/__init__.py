"""Reference least-squares algorithms built by the solver factory.

  - :class:`GaussNewton`
  - :class:`LevenbergMarquardt`
  - :class:`Dogleg`

Linear back-ends:
  - :class:`DenseLinearSolver`    -- numpy LU
  - :class:`CholeskyLinearSolver` -- scipy Cholesky
"""

from .base import LeastSquaresProblem, OptimizationAlgorithm, SolveResult
from .dogleg import Dogleg
from .gauss_newton import GaussNewton
from .levenberg_marquardt import LevenbergMarquardt
from .linear import (
    CholeskyLinearSolver,
    DenseLinearSolver,
    LinearSolveError,
    LinearSolver,
)

__all__ = [
    "LeastSquaresProblem",
    "OptimizationAlgorithm",
    "SolveResult",
    "GaussNewton",
    "LevenbergMarquardt",
    "Dogleg",
    "LinearSolver",
    "DenseLinearSolver",
    "CholeskyLinearSolver",
    "LinearSolveError",
]
