"""OptiFactory: create optimization algorithms from their short name."""

__version__ = "0.1.0"
