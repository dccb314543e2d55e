"""Sample least-squares problems used by the CLI and the tests."""
from __future__ import annotations

import math
from typing import Callable

import numpy as np

from optifactory.solvers.base import LeastSquaresProblem


def rosenbrock() -> LeastSquaresProblem:
    """Rosenbrock valley as two residuals; minimum at ``(1, 1)``."""

    def residual(x):
        return np.array([10.0 * (x[1] - x[0] ** 2), 1.0 - x[0]])

    def jacobian(x):
        return np.array([[-20.0 * x[0], 10.0], [-1.0, 0.0]])

    return LeastSquaresProblem(residual=residual, jacobian=jacobian,
                               x0=[-1.2, 1.0], name="rosenbrock")


def exp_fit(a: float = 2.0, b: float = -0.5, n_samples: int = 20) -> LeastSquaresProblem:
    """Fit ``a * exp(b * t)`` to noise-free samples; Jacobian by finite differences."""
    t = np.linspace(0.0, 4.0, n_samples)
    y = a * np.exp(b * t)

    def residual(x):
        return x[0] * np.exp(x[1] * t) - y

    return LeastSquaresProblem(residual=residual, x0=[1.0, 0.0], name="exp_fit")


def powell() -> LeastSquaresProblem:
    """Powell's singular function; the Jacobian is singular at the minimum ``0``."""
    s5 = math.sqrt(5.0)
    s10 = math.sqrt(10.0)

    def residual(x):
        return np.array([
            x[0] + 10.0 * x[1],
            s5 * (x[2] - x[3]),
            (x[1] - 2.0 * x[2]) ** 2,
            s10 * (x[0] - x[3]) ** 2,
        ])

    def jacobian(x):
        d3 = 2.0 * (x[1] - 2.0 * x[2])
        d4 = 2.0 * s10 * (x[0] - x[3])
        return np.array([
            [1.0, 10.0, 0.0, 0.0],
            [0.0, 0.0, s5, -s5],
            [0.0, d3, -2.0 * d3, 0.0],
            [d4, 0.0, 0.0, -d4],
        ])

    return LeastSquaresProblem(residual=residual, jacobian=jacobian,
                               x0=[3.0, -1.0, 0.0, 1.0], name="powell")


PROBLEMS: dict[str, Callable[[], LeastSquaresProblem]] = {
    "rosenbrock": rosenbrock,
    "exp_fit": exp_fit,
    "powell": powell,
}


def get_problem(name: str) -> LeastSquaresProblem:
    try:
        return PROBLEMS[name]()
    except KeyError:
        available = ", ".join(sorted(PROBLEMS))
        raise KeyError(f"Unknown problem {name!r}.  Available problems: {available}") from None
