"""Cholesky solver library."""
