"""Infrastructure - logging and HTTP."""
