"""Dense LU solver library."""
