"""I/O: backend transport."""
