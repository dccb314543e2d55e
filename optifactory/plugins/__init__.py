"""Built-in solver libraries."""
